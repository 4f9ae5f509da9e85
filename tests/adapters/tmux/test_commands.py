"""Tests for rendering pane commands as tmux arguments."""

import pytest

from tmuxlayout.adapters.tmux.commands import format_args, format_script, render, select_session_args
from tmuxlayout.layout.emitter import CommandKind, PaneCommand
from tmuxlayout.layout.planner import INITIAL_PANE, PaneRef
from tmuxlayout.layout.types import Orientation

PRINT_ID = ["-P", "-F", "#{pane_id}"]


class TestRender:
    """Tests for render."""

    def test_new_session(self):
        command = PaneCommand(
            kind=CommandKind.NEW_SESSION, creates=INITIAL_PANE, cwd="/srv", session="dev", window="code"
        )
        assert render(command) == ["new-session", "-d", *PRINT_ID, "-s", "dev", "-n", "code", "-c", "/srv"]

    def test_new_window_in_current_session(self):
        command = PaneCommand(kind=CommandKind.NEW_WINDOW, creates=INITIAL_PANE)
        assert render(command) == ["new-window", "-d", *PRINT_ID]

    def test_new_window_in_named_session(self):
        command = PaneCommand(kind=CommandKind.NEW_WINDOW, creates=INITIAL_PANE, session="dev", window="logs")
        assert render(command) == ["new-window", "-d", *PRINT_ID, "-n", "logs", "-t", "dev:"]

    def test_split_with_known_target(self):
        command = PaneCommand(
            kind=CommandKind.SPLIT,
            target=PaneRef(0),
            creates=PaneRef(1),
            orientation=Orientation.HORIZONTAL,
            size_percent=40,
            cwd="/srv",
        )
        assert render(command, {PaneRef(0): "%3"}) == [
            "split-window", "-d", *PRINT_ID, "-t", "%3", "-h", "-l", "40%", "-c", "/srv",
        ]

    def test_unknown_target_renders_placeholder(self):
        command = PaneCommand(
            kind=CommandKind.SPLIT,
            target=PaneRef(2),
            creates=PaneRef(3),
            orientation=Orientation.VERTICAL,
            size_percent=50,
        )
        assert render(command)[5:9] == ["-t", "{pane:2}", "-v", "-l"]

    @pytest.mark.parametrize(
        "command,expected",
        [
            (
                PaneCommand(kind=CommandKind.SET_CWD, target=PaneRef(1), cwd="/tmp"),
                ["respawn-pane", "-k", "-t", "%7", "-c", "/tmp"],
            ),
            (
                PaneCommand(kind=CommandKind.RUN_COMMAND, target=PaneRef(1), text="htop -d 5"),
                ["respawn-pane", "-k", "-t", "%7", "htop -d 5"],
            ),
            (
                PaneCommand(kind=CommandKind.SEND_KEYS, target=PaneRef(1), keys=("make",)),
                ["send-keys", "-t", "%7", "make"],
            ),
            (
                PaneCommand(kind=CommandKind.SELECT_PANE, target=PaneRef(1)),
                ["select-pane", "-t", "%7"],
            ),
            (
                PaneCommand(kind=CommandKind.SELECT_WINDOW, target=PaneRef(1)),
                ["select-window", "-t", "%7"],
            ),
        ],
    )
    def test_pane_commands(self, command, expected):
        assert render(command, {PaneRef(1): "%7"}) == expected


class TestFormatScript:
    def test_one_line_per_command(self):
        commands = [
            PaneCommand(kind=CommandKind.NEW_WINDOW, creates=INITIAL_PANE, window="my code"),
            PaneCommand(kind=CommandKind.SEND_KEYS, target=INITIAL_PANE, keys=("ls -la",)),
        ]
        lines = format_script(commands, tmux_path="tmux").splitlines()
        assert lines == [
            "tmux new-window -d -P -F '#{pane_id}' -n 'my code'",
            "tmux send-keys -t '{pane:0}' 'ls -la'",
        ]

    def test_tmux_args_follow_executable(self):
        commands = [PaneCommand(kind=CommandKind.SELECT_PANE, target=INITIAL_PANE)]
        assert format_script(commands, tmux_path="tmux", tmux_args=["-L", "work"]) == "tmux -L work select-pane -t '{pane:0}'"

    def test_format_args(self):
        assert format_args(["switch-client", "-t", "my dev"], tmux_path="tmux") == "tmux switch-client -t 'my dev'"


class TestSelectSessionArgs:
    """Tests for the final switch/attach step."""

    @pytest.mark.parametrize(
        "mode,expected",
        [
            ("switch", ["switch-client", "-t", "dev"]),
            ("attach", ["attach-session", "-t", "dev"]),
            ("detached", None),
        ],
    )
    def test_modes(self, mode, expected):
        assert select_session_args("dev", mode) == expected

    def test_without_session(self):
        assert select_session_args(None, "attach") == ["attach-session"]
