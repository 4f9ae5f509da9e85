"""Config file schema.

A config holds sessions (each with windows) and standalone windows added to
the current session. A window's split tree is written inline::

    windows:
      - name: code
        cwd: ~/src/app
        left:
          width: 60%
          shell_command: vim
        right:
          top: {}
          bottom:
            send_keys: ["make test", "Enter"]

``cwd`` and ``active`` on a window belong to the window; every other key
describes its root split (or its single pane).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tmuxlayout.cwd import expand_cwd

_SPLIT_KEYS = ("left", "right", "top", "bottom")


class PaneNode(BaseModel):
    """A split or a pane in the declarative tree."""

    model_config = ConfigDict(extra="forbid")

    left: "PaneNode | None" = None
    right: "PaneNode | None" = None
    top: "PaneNode | None" = None
    bottom: "PaneNode | None" = None
    width: int | str | None = None
    height: int | str | None = None
    cwd: str | None = None
    active: bool = False
    shell_command: str | None = None
    send_keys: list[str] | None = None

    @field_validator("cwd")
    @classmethod
    def _expand_cwd(cls, value: str | None) -> str | None:
        return expand_cwd(value)


PaneNode.model_rebuild()


class WindowConfig(BaseModel):
    """A window and its root split."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    cwd: str | None = None
    active: bool = False
    left: PaneNode | None = None
    right: PaneNode | None = None
    top: PaneNode | None = None
    bottom: PaneNode | None = None
    shell_command: str | None = None
    send_keys: list[str] | None = None

    @field_validator("cwd")
    @classmethod
    def _expand_cwd(cls, value: str | None) -> str | None:
        return expand_cwd(value)

    def split_tree(self) -> dict[str, Any]:
        """The root split as a mapping, without the window's own fields."""
        return self.model_dump(
            include={*_SPLIT_KEYS, "shell_command", "send_keys"},
            exclude_none=True,
            exclude_defaults=True,
        )


class SessionConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    cwd: str | None = None
    windows: list[WindowConfig] = Field(default_factory=list)

    @field_validator("cwd")
    @classmethod
    def _expand_cwd(cls, value: str | None) -> str | None:
        return expand_cwd(value)


class ConfigFile(BaseModel):
    """Top-level config document."""

    model_config = ConfigDict(extra="forbid")

    includes: list[str] = Field(default_factory=list)
    selected_session: str | None = None
    sessions: list[SessionConfig] = Field(default_factory=list)
    windows: list[WindowConfig] = Field(default_factory=list)

    def to_mapping(self) -> dict[str, Any]:
        """Mapping suitable for YAML output, empty fields dropped."""
        return self.model_dump(exclude_none=True, exclude_defaults=True)
