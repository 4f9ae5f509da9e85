"""Tmux adapter for tmux-layout."""

from .adapter import TmuxAdapter, resolve_select_mode
from .client import TmuxClient
from .runner import ScriptRunner
from .snapshot import SnapshotBuilder

__all__ = ["ScriptRunner", "SnapshotBuilder", "TmuxAdapter", "TmuxClient", "resolve_select_mode"]
