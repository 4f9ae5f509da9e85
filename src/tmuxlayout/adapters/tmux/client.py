"""Tmux client for subprocess-based tmux interaction."""

import asyncio
import logging
from collections.abc import Sequence

from tmuxlayout import config
from tmuxlayout.errors import TmuxCommandError

logger = logging.getLogger(__name__)

# Use tab as delimiter to avoid conflicts with colons in data (paths, names)
_FIELD_SEP = "\t"

_PANE_FIELDS = [
    "session_id", "session_name", "session_path",
    "window_id", "window_index", "window_name", "window_active", "window_layout",
    "pane_id", "pane_index", "pane_active", "pane_current_path",
    "pane_current_command", "pane_start_command",
]

# list-panes flag per export scope
_SCOPE_FLAGS = {
    "all": ["-a"],
    "session": ["-s"],
    "window": [],
}


class TmuxClient:
    """Client for interacting with tmux via subprocess commands.

    Provides async methods for:
    - Running commands (checked or best-effort)
    - Listing sessions, clients and panes
    - Attaching a terminal to a session
    """

    def __init__(
        self,
        socket_path: str | None = None,
        tmux_path: str | None = None,
        tmux_args: Sequence[str] = (),
    ):
        """Initialize TmuxClient.

        Args:
            socket_path: Optional tmux socket path. If None, uses default socket.
            tmux_path: tmux executable, defaults to config.TMUX_PATH
            tmux_args: Extra arguments placed before every subcommand (e.g. ["-L", "work"])
        """
        self._socket_path = socket_path
        self._tmux_path = tmux_path or config.TMUX_PATH
        self._tmux_args = list(tmux_args)

    def command(self, *args: str) -> list[str]:
        """Full argv for a tmux command."""
        cmd = [self._tmux_path]
        if self._socket_path:
            cmd.extend(["-S", self._socket_path])
        cmd.extend(self._tmux_args)
        cmd.extend(args)
        return cmd

    async def run_checked(self, *args: str) -> str:
        """Execute a tmux command, raising when it fails.

        Args:
            *args: Command arguments (e.g., "split-window", "-h", "-t", "%0")

        Returns:
            Command stdout.

        Raises:
            TmuxCommandError: tmux could not be started or exited non-zero.
        """
        cmd = self.command(*args)
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await proc.communicate()
        except OSError as e:
            raise TmuxCommandError(cmd, str(e)) from e

        if proc.returncode != 0:
            raise TmuxCommandError(cmd, stderr.decode(errors="replace"))
        return stdout.decode(errors="replace")

    async def run(self, *args: str) -> str | None:
        """Execute a tmux command.

        Args:
            *args: Command arguments (e.g., "list-sessions", "-F", "...")

        Returns:
            Command stdout on success, None on failure.
        """
        try:
            return await self.run_checked(*args)
        except TmuxCommandError as e:
            logger.warning(str(e))
            return None

    async def run_interactive(self, *args: str) -> int:
        """Run a tmux command attached to this process's terminal.

        Returns:
            tmux exit code.
        """
        cmd = self.command(*args)
        proc = await asyncio.create_subprocess_exec(*cmd)
        return await proc.wait()

    async def list_session_names(self) -> list[str]:
        """Names of all running sessions (empty when no server runs)."""
        output = await self.run("list-sessions", "-F", "#{session_name}")
        if not output:
            return []
        return [line for line in output.splitlines() if line]

    async def list_clients(self) -> list[dict]:
        """Terminals attached to the server.

        Returns:
            Dicts with client_tty and client_session; empty when no server
            is running.
        """
        fmt = _FIELD_SEP.join(["#{client_tty}", "#{client_session}"])
        output = await self.run("list-clients", "-F", fmt)

        if not output:
            return []

        clients = []
        for line in output.splitlines():
            tty, _, session = line.partition(_FIELD_SEP)
            if tty:
                clients.append({"client_tty": tty, "client_session": session})
        return clients

    async def list_panes(self, scope: str = "all") -> list[dict]:
        """List panes with the window and session details needed for export.

        Args:
            scope: "all" sessions, the current "session" or the current "window"

        Returns:
            List of pane dicts with keys:
            - session_id, session_name, session_path: str
            - window_id, window_name, window_layout: str
            - window_index: int
            - window_active: bool
            - pane_id: str (e.g., "%0")
            - pane_index: int
            - pane_active: bool
            - path: str
            - current_command, start_command: str
        """
        if scope not in _SCOPE_FLAGS:
            raise ValueError(f"Unknown scope: {scope}")

        fmt = _FIELD_SEP.join(f"#{{{name}}}" for name in _PANE_FIELDS)
        output = await self.run("list-panes", *_SCOPE_FLAGS[scope], "-F", fmt)

        if not output:
            return []

        panes = []
        for line in output.strip("\n").split("\n"):
            if not line:
                continue
            parts = line.split(_FIELD_SEP, len(_PANE_FIELDS) - 1)
            if len(parts) < 12:
                logger.warning(f"Failed to parse pane line: {line!r}")
                continue
            parts += [""] * (len(_PANE_FIELDS) - len(parts))
            try:
                panes.append(
                    {
                        "session_id": parts[0],
                        "session_name": parts[1],
                        "session_path": parts[2],
                        "window_id": parts[3],
                        "window_index": int(parts[4]),
                        "window_name": parts[5],
                        "window_active": parts[6] == "1",
                        "window_layout": parts[7],
                        "pane_id": parts[8],
                        "pane_index": int(parts[9]),
                        "pane_active": parts[10] == "1",
                        "path": parts[11],
                        "current_command": parts[12],
                        "start_command": parts[13],
                    }
                )
            except ValueError as e:
                logger.warning(f"Failed to parse pane line: {line!r}: {e}")

        return panes
