"""From config to window scripts.

Joins the declarative schema to the layout engine: builds each window's tree,
sizes it on a nominal canvas, compiles the split plan and emits the script.
"""

from collections.abc import Iterable

from tmuxlayout import config
from tmuxlayout.cwd import join_cwd
from tmuxlayout.layout.codec import serialize_layout
from tmuxlayout.layout.emitter import WindowScript, WindowTarget, emit_window
from tmuxlayout.layout.planner import compile_splits
from tmuxlayout.layout.tree import build_tree, normalize_cells, resolve_active
from tmuxlayout.layout.types import LayoutNode
from tmuxlayout.schema.models import ConfigFile, WindowConfig
from tmuxlayout.telemetry import get_logger

logger = get_logger(__name__)


def window_tree(window: WindowConfig) -> LayoutNode:
    """Layout tree of a window, without geometry."""
    tree = build_tree(window.split_tree())
    if resolve_active(tree) > 1:
        logger.warning(f"multiple active panes in window {window.name or '(unnamed)'!r}; using the last one")
    return tree


def build_window_script(
    window: WindowConfig,
    session: str | None,
    parent_cwd: str | None = None,
    create_session: bool = False,
) -> WindowScript:
    """Plan and emit the commands for one window.

    Split sizes are computed on a nominal canvas; tmux applies them as
    percentages of the actual panes.
    """
    tree = normalize_cells(window_tree(window), config.PLAN_CANVAS_CELLS, config.PLAN_CANVAS_CELLS)
    plan = compile_splits(tree)
    target = WindowTarget(
        session=session,
        window_name=window.name,
        cwd=join_cwd(parent_cwd, window.cwd),
        create_session=create_session,
        active=window.active,
    )
    return emit_window(plan, target)


def build_scripts(config_file: ConfigFile, skip_sessions: Iterable[str] = ()) -> list[WindowScript]:
    """Scripts for every window in the config, in creation order.

    Standalone windows go into the current session first, then each session
    is created with its first window and extended with the rest.

    Args:
        config_file: Loaded config
        skip_sessions: Session names not to create (already running)
    """
    skip = set(skip_sessions)
    scripts = [build_window_script(window, None) for window in config_file.windows]

    for session in config_file.sessions:
        if session.name in skip:
            logger.info(f"session {session.name!r} already exists, skipping")
            continue
        if not session.windows:
            continue
        if sum(1 for w in session.windows if w.active) > 1:
            logger.warning(f"multiple active windows in session {session.name!r}; using the last one")
        for position, window in enumerate(session.windows):
            scripts.append(
                build_window_script(window, session.name, session.cwd, create_session=position == 0)
            )
    return scripts


def created_sessions(config_file: ConfigFile, skip_sessions: Iterable[str] = ()) -> list[str]:
    skip = set(skip_sessions)
    return [s.name for s in config_file.sessions if s.windows and s.name not in skip]


def layout_descriptors(
    config_file: ConfigFile,
    width: int = config.DEFAULT_WINDOW_WIDTH,
    height: int = config.DEFAULT_WINDOW_HEIGHT,
) -> list[tuple[str, str]]:
    """tmux layout descriptors for every window, sized to ``width`` x ``height``.

    Returns:
        (label, descriptor) pairs; labels are ``session:window``.
    """
    labelled = [(None, window) for window in config_file.windows]
    labelled += [(s.name, w) for s in config_file.sessions for w in s.windows]

    result = []
    for position, (session, window) in enumerate(labelled):
        tree = normalize_cells(window_tree(window), width, height, border=config.SEPARATOR_CELLS)
        label = f"{session or ''}:{window.name or position}"
        result.append((label, serialize_layout(tree)))
    return result

