"""Allow running as ``python -m tmuxlayout``."""

from tmuxlayout.cli import app

app()
