"""Tests for working directory inheritance."""

from tmuxlayout.cwd import expand_cwd, join_cwd, relative_cwd


class TestJoinCwd:
    def test_relative_child(self):
        assert join_cwd("/srv", "app/web") == "/srv/app/web"

    def test_absolute_child(self):
        assert join_cwd("/srv", "/tmp") == "/tmp"

    def test_inherits_parent(self):
        assert join_cwd("/srv", None) == "/srv"
        assert join_cwd("/srv", "") == "/srv"

    def test_no_parent(self):
        assert join_cwd(None, "app") == "app"
        assert join_cwd(None, None) is None


class TestRelativeCwd:
    def test_same_as_root(self):
        assert relative_cwd("/srv/app", "/srv/app") is None

    def test_below_root(self):
        assert relative_cwd("/srv/app/web", "/srv/app") == "web"

    def test_outside_root(self):
        assert relative_cwd("/tmp", "/srv") == "/tmp"

    def test_no_root(self):
        assert relative_cwd("/tmp", None) == "/tmp"

    def test_no_path(self):
        assert relative_cwd("", "/srv") is None


class TestExpandCwd:
    def test_home(self, monkeypatch):
        monkeypatch.setenv("HOME", "/home/dev")
        assert expand_cwd("~/src") == "/home/dev/src"

    def test_env_var(self, monkeypatch):
        monkeypatch.setenv("PROJECT_ROOT", "/work")
        assert expand_cwd("$PROJECT_ROOT/api") == "/work/api"

    def test_empty(self):
        assert expand_cwd("") is None
        assert expand_cwd(None) is None
