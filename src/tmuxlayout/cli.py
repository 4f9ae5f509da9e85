"""Command-line interface for tmux-layout.

Usage:
    tmux-layout create [-c FILE] [-m MODE] [-i] [-- TMUX_ARGS...]
    tmux-layout export [-s all|session|window] [-f yaml|toml] [-- TMUX_ARGS...]
    tmux-layout dump-command [-c FILE] [-m MODE] [-i] [-- TMUX_ARGS...]
    tmux-layout dump-config [-c FILE] [-f yaml|toml]
    tmux-layout dump-layout [-c FILE] [--width W] [--height H]

Without ``-c`` the config is looked up as ``.tmux-layout.{yaml,yml,toml}``
in the current directory, then in the home directory. ``-c -`` reads stdin.
Arguments after ``--`` are passed to every tmux invocation (e.g. ``-- -L work``).
"""

import asyncio
import sys
from enum import Enum
from typing import Annotated

import typer
from rich.console import Console

from tmuxlayout import __version__, config
from tmuxlayout.adapters.tmux import TmuxAdapter, resolve_select_mode
from tmuxlayout.adapters.tmux.commands import format_args, format_script, select_session_args
from tmuxlayout.errors import ConfigError, LayoutError, TmuxCommandError
from tmuxlayout.schema import ConfigFile, dump_config, load_config
from tmuxlayout.telemetry import setup_logging
from tmuxlayout.workspace import build_scripts, created_sessions, layout_descriptors

app = typer.Typer(
    name="tmux-layout",
    help="Create tmux sessions and windows from layout configs, and export them back.",
    no_args_is_help=True,
    add_completion=False,
)

# Results go to stdout, diagnostics to stderr
console = Console()
err_console = Console(stderr=True)


class SelectMode(str, Enum):
    """How to bring the created session to the foreground."""

    AUTO = "auto"
    ATTACH = "attach"
    SWITCH = "switch"
    DETACHED = "detached"


class ExportScope(str, Enum):
    """What to export from the running tmux server."""

    ALL = "all"
    SESSION = "session"
    WINDOW = "window"


class ConfigFormat(str, Enum):
    """Output format for printed configs."""

    YAML = "yaml"
    TOML = "toml"


ConfigOption = Annotated[
    str | None,
    typer.Option(
        "--config",
        "-c",
        help="Config file (YAML or TOML), '-' for stdin",
        show_default=False,
    ),
]

IgnoreExistingOption = Annotated[
    bool,
    typer.Option(
        "--ignore-existing-sessions",
        "-i",
        help="Skip sessions that already exist instead of failing",
    ),
]

SelectModeOption = Annotated[
    SelectMode,
    typer.Option("--select-mode", "-m", help="Attach to, switch to, or stay detached from the session"),
]

FormatOption = Annotated[
    ConfigFormat,
    typer.Option("--format", "-f", help="Output format"),
]

TmuxArgs = Annotated[
    list[str] | None,
    typer.Argument(help="Extra tmux arguments, given after '--'", show_default=False),
]


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        console.print(f"tmux-layout version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log progress to stderr")] = False,
) -> None:
    """tmux-layout - declarative tmux workspaces."""
    setup_logging("INFO" if verbose else config.LOG_LEVEL)


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]error:[/red] {message}", markup=True, highlight=False)
    return typer.Exit(1)


def _load(path: str | None) -> ConfigFile:
    try:
        return load_config(path)
    except ConfigError as e:
        raise _fail(str(e)) from e


@app.command("create")
def create_command(
    config_path: ConfigOption = None,
    select_mode: SelectModeOption = SelectMode.AUTO,
    ignore_existing: IgnoreExistingOption = False,
    tmux_args: TmuxArgs = None,
) -> None:
    """Create the sessions and windows described by the config."""
    config_file = _load(config_path)
    adapter = TmuxAdapter(tmux_args=tmux_args or [])

    async def run() -> int:
        mode = resolve_select_mode(select_mode.value, await adapter.has_clients(), sys.stdin.isatty())
        created = await adapter.create(config_file, ignore_existing=ignore_existing)

        session = config_file.selected_session or (created[-1] if created else None)
        if session is None:
            return 0
        return await adapter.select_session(session, mode)

    try:
        code = asyncio.run(run())
    except (LayoutError, TmuxCommandError) as e:
        raise _fail(str(e)) from e
    if code:
        raise typer.Exit(code)


@app.command("export")
def export_command(
    scope: Annotated[
        ExportScope,
        typer.Option("--scope", "-s", help="Export all sessions, the current session or the current window"),
    ] = ExportScope.ALL,
    fmt: FormatOption = ConfigFormat.YAML,
    tmux_args: TmuxArgs = None,
) -> None:
    """Print the running tmux layout as a config."""
    adapter = TmuxAdapter(tmux_args=tmux_args or [])
    try:
        config_file = asyncio.run(adapter.export(scope.value))
    except (LayoutError, TmuxCommandError) as e:
        raise _fail(str(e)) from e
    typer.echo(dump_config(config_file, fmt.value), nl=False)


@app.command("dump-command")
def dump_script_command(
    config_path: ConfigOption = None,
    select_mode: SelectModeOption = SelectMode.AUTO,
    ignore_existing: IgnoreExistingOption = False,
    tmux_args: TmuxArgs = None,
) -> None:
    """Print the tmux commands 'create' would run, without running them."""
    config_file = _load(config_path)
    tmux_args = tmux_args or []
    adapter = TmuxAdapter(tmux_args=tmux_args)

    async def inspect() -> tuple[set[str], str]:
        skip = await adapter.existing_sessions() if ignore_existing else set()
        has_clients = await adapter.has_clients() if select_mode is SelectMode.AUTO else False
        # The listing is not run here, so 'attach' is printed even without a TTY
        mode = resolve_select_mode(select_mode.value, has_clients, sys.stdin.isatty(), allow_downgrade=False)
        return skip, mode

    if ignore_existing or select_mode is SelectMode.AUTO:
        skip, mode = asyncio.run(inspect())
    else:
        skip, mode = set(), select_mode.value

    try:
        scripts = build_scripts(config_file, skip_sessions=skip)
    except LayoutError as e:
        raise _fail(str(e)) from e

    commands = [command for script in scripts for command in script.commands]
    if commands:
        typer.echo(format_script(commands, tmux_args=tmux_args))

    created = created_sessions(config_file, skip)
    session = config_file.selected_session or (created[-1] if created else None)
    select_args = select_session_args(session, mode) if session else None
    if select_args:
        typer.echo(format_args(select_args, tmux_args=tmux_args))


@app.command("dump-config")
def dump_config_command(config_path: ConfigOption = None, fmt: FormatOption = ConfigFormat.YAML) -> None:
    """Print the config after includes are merged."""
    typer.echo(dump_config(_load(config_path), fmt.value), nl=False)


@app.command("dump-layout")
def dump_layout_command(
    config_path: ConfigOption = None,
    width: Annotated[int, typer.Option("--width", min=1, help="Window width in cells")] = config.DEFAULT_WINDOW_WIDTH,
    height: Annotated[int, typer.Option("--height", min=1, help="Window height in cells")] = config.DEFAULT_WINDOW_HEIGHT,
) -> None:
    """Print each window's tmux layout descriptor (for select-layout)."""
    config_file = _load(config_path)
    try:
        descriptors = layout_descriptors(config_file, width, height)
    except LayoutError as e:
        raise _fail(str(e)) from e
    for label, descriptor in descriptors:
        typer.echo(f"{label}\t{descriptor}")


if __name__ == "__main__":
    app()
