"""Export projector: decoded layout tree -> declarative split tree."""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any

from tmuxlayout import config
from tmuxlayout.cwd import relative_cwd
from tmuxlayout.errors import UnknownPaneError

from .tree import largest_remainder
from .types import Leaf, LayoutNode, Orientation, Split, extent, iter_leaves, offset


@dataclass(frozen=True)
class PaneMeta:
    """Live pane details reported by tmux.

    Attributes:
        cwd: Current working directory
        active: Pane is the window's active pane
        command: Best-effort command the pane runs (None if unknown)
    """

    cwd: str | None = None
    active: bool = False
    command: str | None = None


def child_percentages(split: Split) -> list[int]:
    """Whole-number percentages of a split's children, summing to 100."""
    extents = [extent(child, split.orientation) for child in split.children]
    return largest_remainder(100, extents)


def attributable_command(command: str | None) -> str | None:
    """Drop commands that are just the user's shell."""
    if not command or not command.strip():
        return None
    program = PurePosixPath(command.split()[0]).name.lstrip("-")
    if program in config.SHELL_COMMANDS:
        return None
    return command.strip()


def project_window(
    tree: LayoutNode,
    panes: Mapping[int, PaneMeta],
    parent_cwd: str | None = None,
) -> dict[str, Any]:
    """Project a decoded window layout into the declarative form.

    Args:
        tree: Tree from ``parse_layout``; leaves carry tmux pane ids
        panes: Metadata keyed by numeric pane id (``%3`` -> 3)
        parent_cwd: Directory the window inherits; pane directories are
            only emitted where they differ from it

    Returns:
        Mapping with left/right/top/bottom keys and width/height percentages

    Raises:
        UnknownPaneError: ``panes`` names a pane missing from ``tree``.
    """
    known = {leaf.pane_id for leaf in iter_leaves(tree)}
    for pane_id in panes:
        if pane_id not in known:
            raise UnknownPaneError(pane_id)

    multi_pane = isinstance(tree, Split)
    return _project(tree, panes, parent_cwd, multi_pane)


def _project(
    node: LayoutNode,
    panes: Mapping[int, PaneMeta],
    parent_cwd: str | None,
    mark_active: bool,
) -> dict[str, Any]:
    if isinstance(node, Leaf):
        return _project_leaf(node, panes.get(node.pane_id, PaneMeta()), parent_cwd, mark_active)

    children = node.children
    if len(children) == 1:
        return _project(children[0], panes, parent_cwd, mark_active)

    # The schema is binary: fold N children into right-nested pairs
    first_key, second_key = node.orientation.keys
    size_key = node.orientation.size_key
    head, rest = children[0], _merge(node.orientation, children[1:])
    first_pct, second_pct = child_percentages(Split(orientation=node.orientation, children=[head, rest]))
    second = _project(rest, panes, parent_cwd, mark_active)

    return {
        first_key: {size_key: first_pct, **_project(head, panes, parent_cwd, mark_active)},
        second_key: {size_key: second_pct, **second},
    }


def _project_leaf(leaf: Leaf, meta: PaneMeta, parent_cwd: str | None, mark_active: bool) -> dict[str, Any]:
    out: dict[str, Any] = {}
    cwd = relative_cwd(meta.cwd, parent_cwd)
    if cwd:
        out["cwd"] = cwd
    if mark_active and meta.active:
        out["active"] = True
    command = attributable_command(meta.command)
    if command:
        out["shell_command"] = command
    return out


def _merge(orientation: Orientation, nodes: list[LayoutNode]) -> LayoutNode:
    """Group consecutive siblings into one split spanning their region."""
    if len(nodes) == 1:
        return nodes[0]
    first, last = nodes[0], nodes[-1]
    span = offset(last, orientation) + extent(last, orientation) - offset(first, orientation)
    if orientation is Orientation.HORIZONTAL:
        width, height = span, first.height
    else:
        width, height = first.width, span
    return Split(orientation=orientation, children=list(nodes), width=width, height=height, x=first.x, y=first.y)
