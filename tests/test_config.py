"""Tests for TOML config loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from splmode.config import SplConfig, config_from_mapping, load_config
from splmode.errors import ConfigError
from splmode.render import DEFAULT_STYLES
from splmode.rules import DEFAULT_RULES
from splmode.tokens import Category


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text("[indent]\nwidth = 2\n")
        assert load_config(cfg, tmp_path) == {"indent": {"width": 2}}

    def test_auto_discover_splmode_toml(self, tmp_path: Path) -> None:
        (tmp_path / "splmode.toml").write_text("[comments]\nalternate = false\n")
        assert load_config(None, tmp_path) == {"comments": {"alternate": False}}

    def test_invalid_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "splmode.toml"
        cfg.write_text("[indent\n")
        with pytest.raises(ConfigError) as exc_info:
            load_config(None, tmp_path)
        assert exc_info.value.path == cfg
        assert f"--> {cfg}" in str(exc_info.value)


class TestConfigFromMapping:
    def test_defaults(self) -> None:
        config = config_from_mapping({})
        assert config == SplConfig()
        assert config.indent_width == 4
        assert config.alternate_comments is True
        assert config.rules is DEFAULT_RULES

    def test_indent_width(self) -> None:
        assert config_from_mapping({"indent": {"width": 2}}).indent_width == 2

    @pytest.mark.parametrize("width", [0, -1, "4", 2.5, True])
    def test_bad_indent_width(self, width: object) -> None:
        with pytest.raises(ConfigError, match="indent width"):
            config_from_mapping({"indent": {"width": width}})

    def test_alternate_comments_off(self) -> None:
        config = config_from_mapping({"comments": {"alternate": False}})
        assert config.alternate_comments is False
        assert config.rules.get("comment-macro") is None

    def test_alternate_comments_not_bool(self) -> None:
        with pytest.raises(ConfigError, match="comments.alternate"):
            config_from_mapping({"comments": {"alternate": "no"}})

    def test_theme_override(self) -> None:
        config = config_from_mapping({"theme": {"comment": "color: red", "builtin-command": ""}})
        assert config.theme.style(Category.COMMENT) == "color: red"
        assert config.theme.style(Category.BUILTIN_COMMAND) == ""
        assert config.theme.style(Category.DIGIT) == DEFAULT_STYLES[Category.DIGIT]

    def test_unknown_theme_category(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="unknown theme category: keyword") as exc_info:
            config_from_mapping({"theme": {"keyword": "x"}}, tmp_path / "splmode.toml")
        assert exc_info.value.path == tmp_path / "splmode.toml"
