"""Tmux adapter: creates workspaces from config and exports running ones."""

import logging
from collections.abc import Sequence

from tmuxlayout.schema.models import ConfigFile
from tmuxlayout.workspace import build_scripts, created_sessions

from .client import TmuxClient
from .commands import select_session_args
from .runner import ScriptRunner
from .snapshot import SnapshotBuilder, export_active_window, export_sessions

logger = logging.getLogger(__name__)

SELECT_MODES = ("auto", "attach", "switch", "detached")


def resolve_select_mode(
    mode: str, has_clients: bool, is_terminal: bool, allow_downgrade: bool = True
) -> str:
    """Turn the requested session select mode into attach/switch/detached.

    ``auto`` switches an existing client when there is one, attaches when
    running from a TTY, and stays detached otherwise. ``attach`` without a
    TTY falls back to detached unless ``allow_downgrade`` is False (when the
    commands are only printed).
    """
    if mode not in SELECT_MODES:
        raise ValueError(f"Unknown select mode: {mode}")
    if mode == "auto":
        if has_clients:
            return "switch"
        return "attach" if is_terminal else "detached"
    if mode == "attach" and not is_terminal and allow_downgrade:
        logger.warning("ignoring 'attach' mode because we are not running from a TTY")
        return "detached"
    return mode


class TmuxAdapter:
    """Workspace operations on a tmux server.

    Wraps TmuxClient, ScriptRunner and SnapshotBuilder.
    """

    name: str = "tmux"

    def __init__(
        self,
        socket_path: str | None = None,
        tmux_path: str | None = None,
        tmux_args: Sequence[str] = (),
    ):
        """Initialize TmuxAdapter.

        Args:
            socket_path: Optional tmux socket path.
            tmux_path: Optional tmux executable.
            tmux_args: Extra tmux arguments passed to every invocation.
        """
        self._client = TmuxClient(socket_path=socket_path, tmux_path=tmux_path, tmux_args=tmux_args)
        self._runner = ScriptRunner(self._client)
        self._snapshot_builder = SnapshotBuilder()

    @property
    def client(self) -> TmuxClient:
        """Access underlying TmuxClient."""
        return self._client

    async def existing_sessions(self) -> set[str]:
        return set(await self._client.list_session_names())

    async def has_clients(self) -> bool:
        return bool(await self._client.list_clients())

    async def create(self, config_file: ConfigFile, ignore_existing: bool = False) -> list[str]:
        """Create every window and session in the config.

        Args:
            config_file: Loaded config
            ignore_existing: Skip sessions that are already running

        Returns:
            Names of the sessions created.

        Raises:
            TmuxCommandError: tmux rejected a command; creation stops there.
        """
        skip = await self.existing_sessions() if ignore_existing else set()
        scripts = build_scripts(config_file, skip_sessions=skip)
        await self._runner.run_windows(scripts)

        sessions = created_sessions(config_file, skip)
        logger.info(f"created {len(scripts)} windows in {len(sessions)} sessions")
        return sessions

    async def select_session(self, session: str | None, mode: str) -> int:
        """Switch or attach to ``session`` (already resolved mode).

        Returns:
            tmux exit code (0 when detached).
        """
        args = select_session_args(session, mode)
        if args is None:
            return 0
        if mode == "attach":
            return await self._client.run_interactive(*args)
        await self._client.run_checked(*args)
        return 0

    async def export(self, scope: str = "all") -> ConfigFile:
        """Export running sessions into config form.

        Args:
            scope: "all", "session" (current) or "window" (current)
        """
        panes = await self._client.list_panes(scope)
        sessions = self._snapshot_builder.build(panes)
        if scope == "window":
            return export_active_window(sessions)
        return export_sessions(sessions)
