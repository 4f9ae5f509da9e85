"""Split plan compiler.

Turns a normalized layout tree into the ordered binary splits that carve it
out of a window's single initial pane.

For a split with children ``c0 .. cN-1`` the first child keeps the original
pane (the "remainder"). Each operation splits the remainder and hands the new
pane to the last child not created yet, so ``cN-1`` comes first and ``c1``
last. The new pane always appears after the remainder (right of it or below
it), which keeps the children in declaration order. All of a level's splits
are emitted before descending into its children.
"""

from dataclasses import dataclass, field
from fractions import Fraction

from tmuxlayout.errors import AlreadyRealizedError

from .types import Leaf, LayoutNode, Orientation, Split, extent, iter_leaves, offset


@dataclass(frozen=True)
class PaneRef:
    """Symbolic pane handle within one window.

    ``PaneRef(0)`` is the window's initial pane; ``PaneRef(n)`` is the pane
    created by the n-th split. tmux assigns the real ``%id`` on execution.
    """

    index: int

    def __str__(self) -> str:
        return f"{{pane:{self.index}}}"


INITIAL_PANE = PaneRef(0)


@dataclass(frozen=True)
class SplitOperation:
    """Split ``target`` in two, giving ``size_fraction`` of it to ``new_pane``."""

    target: PaneRef
    orientation: Orientation
    size_fraction: Fraction
    size_cells: int
    new_pane: PaneRef

    @property
    def percent(self) -> int:
        """Size for tmux ``-l NN%``; tmux needs both halves non-empty."""
        return min(max(round(self.size_fraction * 100), 1), 99)


@dataclass(frozen=True)
class PlannedPane:
    leaf: Leaf
    ref: PaneRef


@dataclass
class SplitPlan:
    """Compiler output.

    Attributes:
        operations: Splits in execution order
        panes: Every leaf with the pane it ends up in, in pre-order
    """

    operations: list[SplitOperation] = field(default_factory=list)
    panes: list[PlannedPane] = field(default_factory=list)

    @property
    def active_pane(self) -> PlannedPane | None:
        active = [p for p in self.panes if p.leaf.active]
        return active[-1] if active else None


def compile_splits(tree: LayoutNode) -> SplitPlan:
    """Compile a normalized, unrealized tree into a split plan.

    Raises:
        AlreadyRealizedError: A leaf already has a tmux pane id.
    """
    for leaf in iter_leaves(tree):
        if leaf.pane_id is not None:
            raise AlreadyRealizedError(leaf.pane_id)

    plan = SplitPlan()
    next_index = 1

    def visit(node: LayoutNode, ref: PaneRef) -> None:
        if isinstance(node, Leaf):
            plan.panes.append(PlannedPane(leaf=node, ref=ref))
            return

        refs = split_level(node, ref)
        for child, child_ref in zip(node.children, refs):
            visit(child, child_ref)

    def split_level(node: Split, remainder: PaneRef) -> list[PaneRef]:
        nonlocal next_index
        children = node.children
        refs = [remainder] + [INITIAL_PANE] * (len(children) - 1)
        start = offset(children[0], node.orientation)

        for k in range(len(children) - 1, 0, -1):
            child = children[k]
            size = extent(child, node.orientation)
            # Region still held by the remainder: from the first child's edge
            # to the far edge of child k, separators included
            region = offset(child, node.orientation) + size - start
            new_pane = PaneRef(next_index)
            next_index += 1
            plan.operations.append(
                SplitOperation(
                    target=remainder,
                    orientation=node.orientation,
                    size_fraction=Fraction(size, region) if region else Fraction(0),
                    size_cells=size,
                    new_pane=new_pane,
                )
            )
            refs[k] = new_pane
        return refs

    visit(tree, INITIAL_PANE)
    return plan
