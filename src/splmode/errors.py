"""Error types for rule construction and configuration loading."""

from __future__ import annotations

from pathlib import Path


class RuleError(Exception):
    """Raised when a classification rule cannot be built.

    This signals a broken rule definition, never bad input text.
    """

    def __init__(self, rule_name: str, message: str) -> None:
        self.rule_name = rule_name
        self.message = message
        super().__init__(self.format())

    def format(self) -> str:
        return f"error: rule {self.rule_name!r}: {self.message}"


class ConfigError(Exception):
    """Raised on an invalid configuration value, with its source file."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(self.format())

    def format(self) -> str:
        result = f"error: {self.message}"
        if self.path is not None:
            result += f"\n  --> {self.path}"
        return result
