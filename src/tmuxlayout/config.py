"""tmux-layout runtime settings

Groups:
- tmux invocation
- config file discovery
- layout geometry
- export heuristics
- logging
"""

import os

# === tmux ===
TMUX_PATH = os.environ.get("TMUX_PATH", "tmux")  # tmux executable
PANE_ID_FORMAT = "#{pane_id}"  # printed by creation commands (-P -F)

# === Config discovery ===
CONFIG_BASENAME = ".tmux-layout"
CONFIG_EXTENSIONS = ("yaml", "yml", "toml")  # search order

# === Layout geometry ===
SEPARATOR_CELLS = 1  # tmux draws a one-cell border between sibling panes
PLAN_CANVAS_CELLS = 1000  # nominal window size for computing split percentages
DEFAULT_WINDOW_WIDTH = 80  # dump-layout size when none is given
DEFAULT_WINDOW_HEIGHT = 24

# === Export ===
# Commands reported for a pane that are interactive shells, not user commands
SHELL_COMMANDS = frozenset({
    "sh", "bash", "zsh", "fish", "dash", "ksh", "mksh", "tcsh", "csh",
    "nu", "xonsh", "elvish", "login",
})

# === Logging ===
LOG_LEVEL = os.environ.get("TMUX_LAYOUT_LOG_LEVEL", "WARNING")
