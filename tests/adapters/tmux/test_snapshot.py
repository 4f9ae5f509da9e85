"""Tests for tmux snapshots and their export."""

from tmuxlayout.adapters.tmux.snapshot import (
    PaneSnapshot,
    SnapshotBuilder,
    WindowSnapshot,
    export_active_window,
    export_sessions,
    export_window,
)
from tmuxlayout.layout.codec import format_checksum
from tmuxlayout.telemetry import metrics

SPLIT_BODY = "80x24,0,0{40x24,0,0,1,39x24,41,0,2}"
SPLIT_LAYOUT = f"{format_checksum(SPLIT_BODY)},{SPLIT_BODY}"


def pane_row(session_id, session_name, window_id, window_index, pane_id, pane_index, **overrides):
    row = {
        "session_id": session_id,
        "session_name": session_name,
        "session_path": "/srv",
        "window_id": window_id,
        "window_index": window_index,
        "window_name": f"win{window_index}",
        "window_active": False,
        "window_layout": "",
        "pane_id": pane_id,
        "pane_index": pane_index,
        "pane_active": False,
        "path": "/srv",
        "current_command": "zsh",
        "start_command": "",
    }
    row.update(overrides)
    return row


def split_window(**kwargs) -> WindowSnapshot:
    window = WindowSnapshot(window_id="@1", index=0, name="code", active=True, layout=SPLIT_LAYOUT)
    window.panes = [
        PaneSnapshot(pane_id="%1", index=0, active=True, path="/srv", start_command='"vim"'),
        PaneSnapshot(pane_id="%2", index=1, active=False, path="/srv/api", current_command="bash"),
    ]
    for key, value in kwargs.items():
        setattr(window, key, value)
    return window


class TestPaneSnapshot:
    def test_number(self):
        assert PaneSnapshot(pane_id="%12", index=0, active=False, path="").number == 12

    def test_command_prefers_start_command(self):
        pane = PaneSnapshot(pane_id="%1", index=0, active=False, path="", current_command="node",
                            start_command='"npm run dev"')
        assert pane.command == "npm run dev"

    def test_command_falls_back_to_current(self):
        pane = PaneSnapshot(pane_id="%1", index=0, active=False, path="", current_command="node")
        assert pane.command == "node"

    def test_no_command(self):
        assert PaneSnapshot(pane_id="%1", index=0, active=False, path="").command is None


class TestSnapshotBuilder:
    """Tests for SnapshotBuilder.build."""

    def test_groups_and_orders(self):
        rows = [
            pane_row("$10", "work", "@5", 1, "%9", 0),
            pane_row("$2", "dev", "@3", 1, "%4", 1),
            pane_row("$2", "dev", "@3", 1, "%3", 0),
            pane_row("$2", "dev", "@1", 0, "%1", 0),
        ]
        sessions = SnapshotBuilder().build(rows)

        assert [s.name for s in sessions] == ["dev", "work"]
        dev = sessions[0]
        assert [w.window_id for w in dev.windows] == ["@1", "@3"]
        assert [p.pane_id for p in dev.windows[1].panes] == ["%3", "%4"]

    def test_empty(self):
        assert SnapshotBuilder().build([]) == []


class TestExportWindow:
    """Tests for export_window."""

    def test_split_window(self):
        window = export_window(split_window(), parent_cwd="/srv")

        assert window.name == "code"
        assert window.active is True
        assert window.left.width == 51
        assert window.left.active is True
        assert window.left.shell_command == "vim"
        assert window.right.cwd == "api"
        assert window.right.shell_command is None

    def test_checksum_mismatch_still_exported(self):
        window = export_window(split_window(layout=f"0000,{SPLIT_BODY}"))
        assert window.left is not None
        assert metrics.get_counter("export.checksum_mismatch") == 1


class TestExportSessions:
    """Tests for export_sessions and export_active_window."""

    def test_broken_window_skipped(self):
        sessions = SnapshotBuilder().build(
            [
                pane_row("$1", "dev", "@1", 0, "%1", 0, window_layout=SPLIT_LAYOUT),
                pane_row("$1", "dev", "@1", 0, "%2", 1, window_layout=SPLIT_LAYOUT),
                pane_row("$1", "dev", "@2", 1, "%5", 0, window_layout="not a layout"),
            ]
        )
        config_file = export_sessions(sessions)

        session = config_file.sessions[0]
        assert session.name == "dev"
        assert session.cwd == "/srv"
        assert [w.name for w in session.windows] == ["win0"]
        assert metrics.get_counter("export.window_failed") == 1

    def test_active_window_only(self):
        sessions = SnapshotBuilder().build(
            [
                pane_row("$1", "dev", "@1", 0, "%1", 0, window_layout=SPLIT_LAYOUT),
                pane_row("$1", "dev", "@1", 0, "%2", 1, window_layout=SPLIT_LAYOUT),
                pane_row("$1", "dev", "@2", 1, "%5", 0, window_active=True,
                         window_layout="b262,80x24,0,0,5", current_command="htop"),
            ]
        )
        config_file = export_active_window(sessions)

        assert config_file.sessions == []
        assert len(config_file.windows) == 1
        window = config_file.windows[0]
        assert window.name == "win1"
        assert window.active is False
        assert window.shell_command == "htop"
        assert window.cwd == "/srv"

    def test_no_active_window(self):
        assert export_active_window([]).windows == []
