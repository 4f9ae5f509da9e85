"""Telemetry - logging factory and metrics facade.

Log format: [module] msg
Metrics: commands.run, commands.failed, export.checksum_mismatch, export.window_failed
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

_LOG_FORMAT = "[%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Get a module logger.

    Args:
        name: Module name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def setup_logging(level: str = "WARNING") -> None:
    """Install a rich stderr handler on the package logger.

    Args:
        level: Level name, e.g. "INFO" or "DEBUG"
    """
    logger = logging.getLogger("tmuxlayout")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level.upper())


class Metrics:
    """In-memory counter facade.

    Counters are keyed by name plus optional labels, e.g.
    ``commands.failed{kind=split}``.
    """

    def __init__(self):
        self._counters: dict[str, int] = {}

    def inc(self, name: str, labels: dict[str, str] | None = None, value: int = 1) -> None:
        """Increment a counter.

        Args:
            name: Metric name (e.g. "commands.run")
            labels: Optional labels (e.g. {"kind": "split"})
            value: Increment, default 1
        """
        key = self._make_key(name, labels)
        self._counters[key] = self._counters.get(key, 0) + value

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> int:
        """Read a counter (for tests)."""
        return self._counters.get(self._make_key(name, labels), 0)

    def reset(self) -> None:
        """Clear all counters (for tests)."""
        self._counters.clear()

    def get_all_counters(self) -> dict[str, int]:
        return dict(self._counters)

    def _make_key(self, name: str, labels: dict[str, str] | None) -> str:
        if not labels:
            return name
        label_str = ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
        return f"{name}{{{label_str}}}"


# Process-wide metrics instance
metrics = Metrics()
