"""Rendering pane commands as tmux argv."""

import shlex
from collections.abc import Iterable, Mapping, Sequence

from tmuxlayout import config
from tmuxlayout.layout.emitter import CommandKind, PaneCommand
from tmuxlayout.layout.planner import PaneRef

# Creation commands print the new pane's id so later commands can target it
_PRINT_PANE_ID = ["-P", "-F", config.PANE_ID_FORMAT]


def render(command: PaneCommand, pane_ids: Mapping[PaneRef, str] | None = None) -> list[str]:
    """Translate a command into tmux arguments.

    Args:
        command: Command to render
        pane_ids: tmux ids of panes created so far; unknown refs render as
            ``{pane:N}`` placeholders

    Returns:
        Arguments after the tmux executable.
    """
    pane_ids = pane_ids or {}

    def target() -> str:
        ref = command.target
        return pane_ids.get(ref, str(ref))

    kind = command.kind
    if kind is CommandKind.NEW_SESSION:
        args = ["new-session", "-d", *_PRINT_PANE_ID]
        args += _opt("-s", command.session)
        args += _opt("-n", command.window)
        args += _opt("-c", command.cwd)
        return args

    if kind is CommandKind.NEW_WINDOW:
        args = ["new-window", "-d", *_PRINT_PANE_ID]
        args += _opt("-n", command.window)
        args += _opt("-c", command.cwd)
        if command.session is not None:
            args += ["-t", f"{command.session}:"]
        return args

    if kind is CommandKind.SPLIT:
        args = ["split-window", "-d", *_PRINT_PANE_ID, "-t", target(), command.orientation.tmux_flag]
        args += ["-l", f"{command.size_percent}%"]
        args += _opt("-c", command.cwd)
        return args

    if kind is CommandKind.SET_CWD:
        return ["respawn-pane", "-k", "-t", target(), "-c", command.cwd]

    if kind is CommandKind.RUN_COMMAND:
        return ["respawn-pane", "-k", "-t", target(), command.text]

    if kind is CommandKind.SEND_KEYS:
        return ["send-keys", "-t", target(), *command.keys]

    if kind is CommandKind.SELECT_PANE:
        return ["select-pane", "-t", target()]

    if kind is CommandKind.SELECT_WINDOW:
        return ["select-window", "-t", target()]

    raise ValueError(f"Unknown command kind: {kind}")


def format_args(args: Sequence[str], tmux_path: str | None = None, tmux_args: Sequence[str] = ()) -> str:
    """Shell-quoted tmux invocation."""
    tmux = tmux_path or config.TMUX_PATH
    return shlex.join([tmux, *tmux_args, *args])


def format_script(
    commands: Iterable[PaneCommand],
    tmux_path: str | None = None,
    tmux_args: Sequence[str] = (),
) -> str:
    """Shell-quoted listing of commands, one tmux invocation per line."""
    return "\n".join(format_args(render(command), tmux_path, tmux_args) for command in commands)


def select_session_args(session: str | None, mode: str) -> list[str] | None:
    """tmux arguments that bring ``session`` to the user, None when detached.

    Args:
        session: Session name; None targets tmux's default
        mode: Resolved select mode ("switch", "attach" or "detached")
    """
    target = ["-t", session] if session else []
    if mode == "switch":
        return ["switch-client", *target]
    if mode == "attach":
        return ["attach-session", *target]
    return None


def _opt(flag: str, value: str | None) -> list[str]:
    return [flag, value] if value else []
