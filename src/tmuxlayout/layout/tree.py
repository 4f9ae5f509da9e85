"""Building layout trees from declarative config and assigning cell extents."""

import math
from collections.abc import Mapping, Sequence
from dataclasses import replace
from fractions import Fraction
from typing import Any

from tmuxlayout.errors import ConflictingAxesError, InvalidSizeError, OverAllocatedSizeError, ZeroSizeError

from .types import Leaf, LayoutNode, Orientation, Split, iter_leaves

_HORIZONTAL_KEYS = ("left", "right")
_VERTICAL_KEYS = ("top", "bottom")


def from_declarative(node: Mapping[str, Any]) -> LayoutNode:
    """Build a layout tree from the nested left/right/top/bottom form.

    Args:
        node: Parsed config mapping. A node with ``left``/``right`` is a
            horizontal split, ``top``/``bottom`` a vertical one, anything
            else a pane.

    Returns:
        Tree with requested shares set and no cell geometry yet.

    Raises:
        ConflictingAxesError: A node mixes both axes.
        OverAllocatedSizeError: Sibling percentages exceed 100.
        ZeroSizeError: A sibling would get no space.
        InvalidSizeError: A percentage is malformed or out of range.
    """
    tree = build_tree(node)
    resolve_active(tree)
    return tree


def resolve_active(tree: LayoutNode) -> int:
    """Keep only the last active pane active.

    Returns:
        Number of panes that were marked active before.
    """
    active = [leaf for leaf in iter_leaves(tree) if leaf.active]
    for leaf in active[:-1]:
        leaf.active = False
    return len(active)


def build_tree(node: Mapping[str, Any]) -> LayoutNode:
    """Like ``from_declarative`` but leaves every ``active`` flag as declared."""
    horizontal = [k for k in _HORIZONTAL_KEYS if node.get(k) is not None]
    vertical = [k for k in _VERTICAL_KEYS if node.get(k) is not None]

    if horizontal and vertical:
        raise ConflictingAxesError(horizontal + vertical)

    if not horizontal and not vertical:
        return Leaf(
            active=bool(node.get("active", False)),
            cwd=node.get("cwd") or None,
            shell_command=node.get("shell_command") or None,
            send_keys=list(node.get("send_keys") or []),
        )

    orientation = Orientation.HORIZONTAL if horizontal else Orientation.VERTICAL
    parts = [node.get(key) or {} for key in orientation.keys]
    declared = [parse_percent(part.get(orientation.size_key)) for part in parts]

    return Split(
        orientation=orientation,
        children=[build_tree(part) for part in parts],
        shares=resolve_shares(declared),
    )


def parse_percent(value: Any) -> int | None:
    """Parse ``60``, ``"60"`` or ``"60%"`` into an int; None stays None."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidSizeError(value)
    if isinstance(value, int):
        percent = value
    elif isinstance(value, str):
        text = value.strip().removesuffix("%").strip()
        if not text.isdigit():
            raise InvalidSizeError(value)
        percent = int(text)
    else:
        raise InvalidSizeError(value)

    if not 0 <= percent <= 100:
        raise InvalidSizeError(value)
    return percent


def resolve_shares(declared: Sequence[int | None]) -> list[Fraction]:
    """Turn optional sibling percentages into relative weights.

    Unspecified siblings split whatever the specified ones leave over.
    When every sibling is specified, the values are used as weights even
    if they sum to less than 100. All zeros is an even split; otherwise a
    sibling left with a zero share is an error.
    """
    total = sum(p for p in declared if p is not None)
    if total > 100:
        raise OverAllocatedSizeError(list(declared), total)

    missing = [p for p in declared if p is None]
    if not missing:
        if total == 0:
            return [Fraction(1)] * len(declared)
        shares = [Fraction(p) for p in declared]
    else:
        each = Fraction(100 - total, len(missing))
        shares = [Fraction(p) if p is not None else each for p in declared]

    for index, share in enumerate(shares):
        if share == 0:
            raise ZeroSizeError(list(declared), index)
    return shares


def largest_remainder(total: int, weights: Sequence[Fraction | int]) -> list[int]:
    """Split ``total`` integer units proportionally to ``weights``.

    Every part gets the floor of its exact share; the units left over go to
    the parts with the largest fractional remainders, earliest first on ties.
    The parts always sum to ``total``.
    """
    if not weights:
        return []
    weight_sum = sum(weights)
    if weight_sum == 0:
        weights = [1] * len(weights)
        weight_sum = len(weights)

    exact = [Fraction(total) * Fraction(w) / weight_sum for w in weights]
    parts = [math.floor(e) for e in exact]
    leftover = total - sum(parts)

    by_remainder = sorted(range(len(exact)), key=lambda i: (-(exact[i] - parts[i]), i))
    for i in by_remainder[:leftover]:
        parts[i] += 1
    return parts


def normalize_cells(
    node: LayoutNode,
    width: int,
    height: int,
    x: int = 0,
    y: int = 0,
    border: int = 0,
) -> LayoutNode:
    """Assign integer cell geometry top-down.

    Args:
        node: Tree from ``from_declarative`` (or any tree; shares are reused,
            falling back to current extents, then to an even split).
        width: Width of the region the node occupies
        height: Height of the region
        x: Left offset of the region
        y: Top offset of the region
        border: Cells between siblings (tmux uses 1)

    Returns:
        A new tree; ``node`` is left untouched.
    """
    if isinstance(node, Leaf):
        return replace(node, width=width, height=height, x=x, y=y, send_keys=list(node.send_keys))

    count = len(node.children)
    horizontal = node.orientation is Orientation.HORIZONTAL
    available = max((width if horizontal else height) - border * (count - 1), 0)
    weights = node.shares if len(node.shares) == count else node.size_fractions()
    extents = largest_remainder(available, weights)

    children = []
    cursor = x if horizontal else y
    for child, size in zip(node.children, extents):
        if horizontal:
            children.append(normalize_cells(child, size, height, cursor, y, border))
        else:
            children.append(normalize_cells(child, width, size, x, cursor, border))
        cursor += size + border

    return replace(
        node,
        children=children,
        shares=list(node.shares),
        width=width,
        height=height,
        x=x,
        y=y,
    )
