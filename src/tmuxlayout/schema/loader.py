"""Config file loading.

- YAML (``.yaml``/``.yml``) and TOML (``.toml``) files
- ``-`` reads stdin and guesses the format
- ``includes`` are resolved relative to the including file and merged
- ``dump_config`` writes YAML (default) or TOML
- default discovery: ``./.tmux-layout.*`` then ``~/.tmux-layout.*``
"""

import os
import sys
import tomllib
from pathlib import Path
from typing import Any, TextIO

import tomli_w
import yaml
from pydantic import ValidationError

from tmuxlayout import config
from tmuxlayout.errors import ConfigError
from tmuxlayout.telemetry import get_logger

from .models import ConfigFile

logger = get_logger(__name__)


def find_default_config_file(search_dirs: list[Path] | None = None) -> Path | None:
    """Find the first existing default config file.

    Args:
        search_dirs: Directories to search; defaults to cwd then home.

    Returns:
        Path of the config file, or None.
    """
    if search_dirs is None:
        search_dirs = [Path.cwd(), Path.home()]

    for directory in search_dirs:
        for ext in config.CONFIG_EXTENSIONS:
            candidate = directory / f"{config.CONFIG_BASENAME}.{ext}"
            if candidate.exists():
                return candidate
    return None


def load_config(path: str | None, stdin: TextIO | None = None) -> ConfigFile:
    """Load a config from a path, ``-`` (stdin) or the default location.

    Raises:
        ConfigError: Nothing found, unreadable, unparsable or invalid.
    """
    if path == "-":
        return load_config_text((stdin or sys.stdin).read(), source="(stdin)")

    if path is None:
        found = find_default_config_file()
        if found is None:
            raise ConfigError("no config file found")
        logger.info(f"using config file at {found}")
        return load_config_at(found)

    return load_config_at(Path(path))


def load_config_at(path: Path, _seen: frozenset[Path] = frozenset()) -> ConfigFile:
    """Load a config file and everything it includes.

    Sessions and windows of included files are appended in include order.
    The first ``selected_session`` wins.
    """
    resolved = path.resolve()
    if resolved in _seen:
        raise ConfigError("include cycle", file_path=str(path))

    config_file = _validate(_read_file(path), str(path))

    merged = config_file.model_copy(update={"includes": []})
    for include in config_file.includes:
        included_path = path.parent / os.path.expanduser(os.path.expandvars(include))
        included = load_config_at(included_path, _seen | {resolved})

        merged.sessions.extend(included.sessions)
        merged.windows.extend(included.windows)

        if included.selected_session is not None:
            if merged.selected_session is None:
                merged.selected_session = included.selected_session
            else:
                logger.warning(
                    f"ignoring selected session {included.selected_session!r} from {included_path}"
                )

    return merged


def load_config_text(text: str, source: str = "(stdin)") -> ConfigFile:
    """Parse config text of unknown format (stdin). Includes are not allowed."""
    if text.lstrip().startswith("[["):
        data = _parse_toml(text, source)
    else:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as yaml_error:
            try:
                data = tomllib.loads(text)
            except tomllib.TOMLDecodeError:
                raise ConfigError(f"invalid YAML: {yaml_error}", file_path=source) from yaml_error

    config_file = _validate(data, source)
    if config_file.includes:
        raise ConfigError("config given on stdin can't have includes", file_path=source)
    return config_file


def dump_config(config_file: ConfigFile, fmt: str = "yaml") -> str:
    """Render a config as YAML or TOML.

    Args:
        config_file: Config to render
        fmt: "yaml" or "toml"
    """
    data = config_file.to_mapping()
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    if fmt == "toml":
        return tomli_w.dumps(data)
    raise ValueError(f"Unknown config format: {fmt}")


def _read_file(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"failed to read: {e}", file_path=str(path)) from e

    suffix = path.suffix.lower()
    if suffix == ".toml":
        return _parse_toml(text, str(path))
    if suffix in (".yaml", ".yml"):
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML: {e}", file_path=str(path)) from e
    raise ConfigError("unsupported config format (supported: YAML, TOML)", file_path=str(path))


def _parse_toml(text: str, source: str) -> dict[str, Any]:
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"invalid TOML: {e}", file_path=source) from e


def _validate(data: Any, source: str) -> ConfigFile:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("top level must be a mapping", file_path=source)
    try:
        return ConfigFile.model_validate(data)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigError(details, file_path=source) from e
