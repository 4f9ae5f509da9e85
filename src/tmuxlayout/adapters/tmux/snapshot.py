"""Tmux session snapshots and their export into config form.

Pane rows from ``TmuxClient.list_panes()`` are grouped into
session -> window -> pane snapshots, then each window's layout descriptor is
decoded and projected back into the declarative schema.
"""

from dataclasses import dataclass, field

from tmuxlayout.errors import LayoutError
from tmuxlayout.layout.codec import parse_layout
from tmuxlayout.layout.projector import PaneMeta, project_window
from tmuxlayout.schema.models import ConfigFile, SessionConfig, WindowConfig
from tmuxlayout.telemetry import get_logger, metrics

logger = get_logger(__name__)


@dataclass
class PaneSnapshot:
    pane_id: str  # "%3"
    index: int
    active: bool
    path: str
    current_command: str = ""
    start_command: str = ""

    @property
    def number(self) -> int:
        """Numeric id as used in layout descriptors."""
        return int(self.pane_id.lstrip("%"))

    @property
    def command(self) -> str | None:
        """Command the pane was started with, else the one running now."""
        start = self.start_command.strip()
        if len(start) >= 2 and start[0] == start[-1] == '"':
            start = start[1:-1]
        return start or self.current_command or None


@dataclass
class WindowSnapshot:
    window_id: str
    index: int
    name: str
    active: bool
    layout: str
    panes: list[PaneSnapshot] = field(default_factory=list)


@dataclass
class SessionSnapshot:
    session_id: str
    name: str
    path: str
    windows: list[WindowSnapshot] = field(default_factory=list)


class SnapshotBuilder:
    """Builds session snapshots from tmux pane rows.

    Sessions are ordered by id, windows and panes by index.
    """

    def build(self, panes: list[dict]) -> list[SessionSnapshot]:
        """Group pane rows.

        Args:
            panes: Pane dicts from TmuxClient.list_panes()

        Returns:
            Sessions with their windows and panes.
        """
        sessions: dict[str, SessionSnapshot] = {}
        windows: dict[tuple[str, str], WindowSnapshot] = {}

        for pane in panes:
            session_id = pane["session_id"]
            if session_id not in sessions:
                sessions[session_id] = SessionSnapshot(
                    session_id=session_id,
                    name=pane["session_name"],
                    path=pane.get("session_path", ""),
                )

            key = (session_id, pane["window_id"])
            if key not in windows:
                window = WindowSnapshot(
                    window_id=pane["window_id"],
                    index=pane["window_index"],
                    name=pane["window_name"],
                    active=pane["window_active"],
                    layout=pane["window_layout"],
                )
                windows[key] = window
                sessions[session_id].windows.append(window)

            windows[key].panes.append(
                PaneSnapshot(
                    pane_id=pane["pane_id"],
                    index=pane["pane_index"],
                    active=pane["pane_active"],
                    path=pane.get("path", ""),
                    current_command=pane.get("current_command", ""),
                    start_command=pane.get("start_command", ""),
                )
            )

        ordered = sorted(sessions.values(), key=lambda s: _numeric_id(s.session_id))
        for session in ordered:
            session.windows.sort(key=lambda w: w.index)
            for window in session.windows:
                window.panes.sort(key=lambda p: p.index)
        return ordered


def export_window(window: WindowSnapshot, parent_cwd: str | None = None) -> WindowConfig:
    """Project one window into config form.

    Raises:
        GrammarError: The layout descriptor is malformed.
        ProjectionError: Panes and layout disagree.
    """
    decoded = parse_layout(window.layout)
    if decoded.checksum_mismatch is not None:
        metrics.inc("export.checksum_mismatch")
        logger.warning(f"window {window.name!r}: {decoded.checksum_mismatch}")

    panes = {
        pane.number: PaneMeta(cwd=pane.path, active=pane.active, command=pane.command)
        for pane in window.panes
    }
    tree = project_window(decoded.tree, panes, parent_cwd)
    return WindowConfig.model_validate({**tree, "name": window.name, "active": window.active})


def export_sessions(sessions: list[SessionSnapshot]) -> ConfigFile:
    """Export sessions, skipping windows that cannot be projected.

    A broken window is logged and left out; the rest of its session and the
    other sessions are still exported.
    """
    exported = []
    for session in sessions:
        session_cwd = session.path or None
        windows = []
        for window in session.windows:
            try:
                windows.append(export_window(window, session_cwd))
            except LayoutError as e:
                metrics.inc("export.window_failed")
                logger.error(f"skipping window {session.name}:{window.name}: {e}")
        exported.append(SessionConfig(name=session.name, cwd=session_cwd, windows=windows))
    return ConfigFile(sessions=exported)


def export_active_window(sessions: list[SessionSnapshot]) -> ConfigFile:
    """Export only the active window of the first session, as a standalone window."""
    for session in sessions:
        for window in session.windows:
            if window.active:
                exported = export_window(window)
                return ConfigFile(windows=[exported.model_copy(update={"active": False})])
    return ConfigFile()


def _numeric_id(value: str) -> int:
    digits = value.lstrip("$@%")
    return int(digits) if digits.isdigit() else 0
