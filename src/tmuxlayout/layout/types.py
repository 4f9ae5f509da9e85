"""Layout tree data types

A window's pane arrangement is a tree of ``Split`` nodes with ``Leaf`` panes
at the bottom. Geometry is in terminal cells; ``x``/``y`` are offsets from
the window's top-left corner.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction


class Orientation(Enum):
    """Direction in which a split lays out its children.

    - HORIZONTAL: left-to-right (``{}`` in descriptors, ``-h`` for tmux)
    - VERTICAL: top-to-bottom (``[]`` in descriptors, ``-v`` for tmux)
    """

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def opener(self) -> str:
        return "{" if self is Orientation.HORIZONTAL else "["

    @property
    def closer(self) -> str:
        return "}" if self is Orientation.HORIZONTAL else "]"

    @property
    def tmux_flag(self) -> str:
        return "-h" if self is Orientation.HORIZONTAL else "-v"

    @property
    def keys(self) -> tuple[str, str]:
        """Declarative keys for the first and second child."""
        return ("left", "right") if self is Orientation.HORIZONTAL else ("top", "bottom")

    @property
    def size_key(self) -> str:
        """Declarative key holding a child's percentage."""
        return "width" if self is Orientation.HORIZONTAL else "height"


@dataclass
class Leaf:
    """A single pane."""

    width: int = 0
    height: int = 0
    x: int = 0
    y: int = 0
    pane_id: int | None = None  # tmux %N, None until realized
    active: bool = False
    cwd: str | None = None
    shell_command: str | None = None
    send_keys: list[str] = field(default_factory=list)


@dataclass
class Split:
    """A pane region divided among children along one axis.

    ``shares`` holds the requested relative weights of the children, used
    only when assigning cell extents. Once extents are assigned the actual
    fractions come from ``size_fractions()``.
    """

    orientation: Orientation
    children: list["LayoutNode"] = field(default_factory=list)
    shares: list[Fraction] = field(default_factory=list)
    width: int = 0
    height: int = 0
    x: int = 0
    y: int = 0

    def size_fractions(self) -> list[Fraction]:
        """Each child's share of the children's combined extent."""
        extents = [extent(child, self.orientation) for child in self.children]
        total = sum(extents)
        if total == 0:
            return [Fraction(1, len(extents)) for _ in extents]
        return [Fraction(e, total) for e in extents]


LayoutNode = Leaf | Split


def extent(node: LayoutNode, orientation: Orientation) -> int:
    """Cell extent of ``node`` along the axis ``orientation`` divides."""
    return node.width if orientation is Orientation.HORIZONTAL else node.height


def offset(node: LayoutNode, orientation: Orientation) -> int:
    return node.x if orientation is Orientation.HORIZONTAL else node.y


def iter_leaves(node: LayoutNode) -> Iterator[Leaf]:
    """Yield leaves in pre-order, which is tmux's pane index order."""
    if isinstance(node, Leaf):
        yield node
        return
    for child in node.children:
        yield from iter_leaves(child)

