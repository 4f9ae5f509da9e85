"""Declarative config schema and loading."""

from .loader import dump_config, find_default_config_file, load_config, load_config_at, load_config_text
from .models import ConfigFile, PaneNode, SessionConfig, WindowConfig

__all__ = [
    "ConfigFile",
    "PaneNode",
    "SessionConfig",
    "WindowConfig",
    "dump_config",
    "find_default_config_file",
    "load_config",
    "load_config_at",
    "load_config_text",
]
