"""Command emitter.

Expands split plans into ordered, backend-neutral pane commands. Pane
targets are ``PaneRef`` handles; whoever executes the script maps them to the
ids tmux hands back for each creating command.
"""

from dataclasses import dataclass, field
from enum import Enum

from tmuxlayout.cwd import join_cwd
from tmuxlayout.errors import DanglingPaneRefError

from .planner import INITIAL_PANE, PaneRef, SplitPlan
from .types import Orientation


class CommandKind(Enum):
    NEW_SESSION = "new-session"
    NEW_WINDOW = "new-window"
    SPLIT = "split"
    SET_CWD = "set-cwd"
    RUN_COMMAND = "run-command"
    SEND_KEYS = "send-keys"
    SELECT_PANE = "select-pane"
    SELECT_WINDOW = "select-window"


@dataclass(frozen=True)
class PaneCommand:
    """One imperative step.

    Attributes:
        kind: What to do
        target: Pane acted on (split, cwd, command, keys, select)
        creates: Pane this command brings into existence
        orientation: Split direction
        size_percent: Share of ``target`` given to the new pane
        cwd: Start directory
        text: Shell command to run
        keys: Keys for SEND_KEYS
        session: Session name (creation/selection)
        window: Window name
    """

    kind: CommandKind
    target: PaneRef | None = None
    creates: PaneRef | None = None
    orientation: Orientation | None = None
    size_percent: int | None = None
    cwd: str | None = None
    text: str | None = None
    keys: tuple[str, ...] = ()
    session: str | None = None
    window: str | None = None


@dataclass(frozen=True)
class WindowTarget:
    """Where a window's script creates its window.

    Attributes:
        session: Session name; None means the current session
        window_name: Name for the new window
        cwd: Window start directory (already joined with the session's)
        create_session: Create the session with this window as its first
        active: Make this the session's current window
    """

    session: str | None = None
    window_name: str | None = None
    cwd: str | None = None
    create_session: bool = False
    active: bool = False


@dataclass
class WindowScript:
    """Ordered commands that build one window."""

    commands: list[PaneCommand] = field(default_factory=list)

    def check_references(self) -> None:
        """Verify every target exists by the time it is used.

        Raises:
            DanglingPaneRefError: A command targets a pane not yet created.
        """
        created: set[PaneRef] = set()
        for index, command in enumerate(self.commands):
            if command.target is not None and command.target not in created:
                raise DanglingPaneRefError(index, command.target)
            if command.creates is not None:
                created.add(command.creates)


def emit_window(plan: SplitPlan, target: WindowTarget) -> WindowScript:
    """Emit the commands building one window from its split plan.

    Order: window (or session) creation, one split per plan operation, then
    per pane in pre-order its cwd, command and keys, then the active pane
    selection and, for the active window, the window selection.
    """
    script = WindowScript()
    kind = CommandKind.NEW_SESSION if target.create_session else CommandKind.NEW_WINDOW
    script.commands.append(
        PaneCommand(
            kind=kind,
            creates=INITIAL_PANE,
            cwd=target.cwd,
            session=target.session,
            window=target.window_name,
        )
    )

    for op in plan.operations:
        script.commands.append(
            PaneCommand(
                kind=CommandKind.SPLIT,
                target=op.target,
                creates=op.new_pane,
                orientation=op.orientation,
                size_percent=op.percent,
                cwd=target.cwd,
            )
        )

    for pane in plan.panes:
        leaf = pane.leaf
        if leaf.cwd:
            script.commands.append(
                PaneCommand(
                    kind=CommandKind.SET_CWD,
                    target=pane.ref,
                    cwd=join_cwd(target.cwd, leaf.cwd),
                )
            )
        if leaf.shell_command:
            script.commands.append(
                PaneCommand(kind=CommandKind.RUN_COMMAND, target=pane.ref, text=leaf.shell_command)
            )
        for key in leaf.send_keys:
            script.commands.append(
                PaneCommand(kind=CommandKind.SEND_KEYS, target=pane.ref, keys=(key,))
            )

    active = plan.active_pane
    if active is not None:
        script.commands.append(PaneCommand(kind=CommandKind.SELECT_PANE, target=active.ref))

    if target.active:
        script.commands.append(PaneCommand(kind=CommandKind.SELECT_WINDOW, target=INITIAL_PANE))

    return script

