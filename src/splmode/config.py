"""Configuration: defaults, TOML loading, and validation."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from splmode.errors import ConfigError
from splmode.indent import DEFAULT_INDENT_WIDTH
from splmode.render import Theme
from splmode.rules import RuleTable, rule_table
from splmode.tokens import Category

CONFIG_FILENAME = "splmode.toml"

# Source files this mode is meant for; the core accepts any text.
FILE_EXTENSIONS: tuple[str, ...] = (".spl", ".splunk")


@dataclass(frozen=True, slots=True)
class SplConfig:
    """Settings shared by the CLI and the language server."""

    indent_width: int = DEFAULT_INDENT_WIDTH
    alternate_comments: bool = True
    theme: Theme = field(default_factory=Theme)

    @property
    def rules(self) -> RuleTable:
        return rule_table(self.alternate_comments)


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_FILENAME

    if not path.is_file():
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML: {exc}", path) from exc


def config_from_mapping(data: dict[str, Any], path: Path | None = None) -> SplConfig:
    """Validate a loaded config table and build an :class:`SplConfig`."""
    indent_width = DEFAULT_INDENT_WIDTH
    cfg_indent = data.get("indent")
    if isinstance(cfg_indent, dict) and "width" in cfg_indent:
        indent_width = check_indent_width(cfg_indent["width"], path)

    alternate_comments = True
    cfg_comments = data.get("comments")
    if isinstance(cfg_comments, dict) and "alternate" in cfg_comments:
        value = cfg_comments["alternate"]
        if not isinstance(value, bool):
            raise ConfigError("comments.alternate must be true or false", path)
        alternate_comments = value

    theme = Theme()
    cfg_theme = data.get("theme")
    if isinstance(cfg_theme, dict):
        overrides: dict[Category, str] = {}
        for key, style in cfg_theme.items():
            overrides[_theme_category(str(key), path)] = str(style)
        theme = theme.with_styles(overrides)

    return SplConfig(indent_width=indent_width, alternate_comments=alternate_comments, theme=theme)


def check_indent_width(value: object, path: Path | None = None) -> int:
    """Return *value* if it is a usable indent width, else raise ConfigError."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"indent width must be a positive integer, got {value!r}", path)
    return value


def _theme_category(key: str, path: Path | None) -> Category:
    name = key.upper().replace("-", "_")
    try:
        return Category[name]
    except KeyError:
        raise ConfigError(f"unknown theme category: {key}", path) from None
