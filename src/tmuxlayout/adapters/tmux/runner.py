"""Executes window scripts against tmux, strictly in order."""

from collections.abc import Sequence

from tmuxlayout.errors import TmuxCommandError
from tmuxlayout.layout.emitter import WindowScript
from tmuxlayout.layout.planner import PaneRef
from tmuxlayout.telemetry import get_logger, metrics

from .client import TmuxClient
from .commands import render

logger = get_logger(__name__)


class ScriptRunner:
    """Runs window scripts, binding pane refs to the ids tmux assigns.

    A failing command stops the script: later commands may target the pane
    it should have created. Nothing is retried or rolled back.
    """

    def __init__(self, client: TmuxClient):
        self._client = client

    async def run_window(self, script: WindowScript) -> dict[PaneRef, str]:
        """Run one window's script.

        Returns:
            tmux pane id for every pane ref the script created.

        Raises:
            DanglingPaneRefError: The script targets a pane before creating it.
            TmuxCommandError: tmux rejected a command.
        """
        script.check_references()
        pane_ids: dict[PaneRef, str] = {}

        for command in script.commands:
            argv = render(command, pane_ids)
            logger.debug(f"tmux {' '.join(argv)}")
            try:
                output = await self._client.run_checked(*argv)
            except TmuxCommandError:
                metrics.inc("commands.failed", {"kind": command.kind.value})
                raise
            metrics.inc("commands.run", {"kind": command.kind.value})

            if command.creates is not None:
                pane_id = output.strip()
                if not pane_id:
                    raise TmuxCommandError(self._client.command(*argv), "no pane id printed")
                pane_ids[command.creates] = pane_id

        return pane_ids

    async def run_windows(self, scripts: Sequence[WindowScript]) -> list[dict[PaneRef, str]]:
        """Run several window scripts one after another."""
        results = []
        for script in scripts:
            results.append(await self.run_window(script))
        return results
