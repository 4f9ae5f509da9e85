"""Layout engine: split trees, tmux layout descriptors, split plans."""

from .codec import DecodedLayout, format_checksum, layout_checksum, parse_layout, serialize_layout
from .emitter import CommandKind, PaneCommand, WindowScript, WindowTarget, emit_window
from .planner import INITIAL_PANE, PaneRef, PlannedPane, SplitOperation, SplitPlan, compile_splits
from .projector import PaneMeta, child_percentages, project_window
from .tree import build_tree, from_declarative, largest_remainder, normalize_cells, resolve_active
from .types import Leaf, LayoutNode, Orientation, Split, iter_leaves

__all__ = [
    "CommandKind",
    "DecodedLayout",
    "INITIAL_PANE",
    "Leaf",
    "LayoutNode",
    "Orientation",
    "PaneCommand",
    "PaneMeta",
    "PaneRef",
    "PlannedPane",
    "Split",
    "SplitOperation",
    "SplitPlan",
    "WindowScript",
    "WindowTarget",
    "build_tree",
    "child_percentages",
    "compile_splits",
    "emit_window",
    "format_checksum",
    "from_declarative",
    "iter_leaves",
    "largest_remainder",
    "layout_checksum",
    "normalize_cells",
    "parse_layout",
    "project_window",
    "resolve_active",
    "serialize_layout",
]
