"""Splunk SPL highlighting and indentation."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from splmode.config import SplConfig
    from splmode.tokens import Span

__version__ = "0.1.0"


def highlight(source: str, config: SplConfig | None = None) -> list[Span]:
    """Classify the whole of *source* into ordered, non-overlapping spans."""
    from splmode.classifier import Classifier
    from splmode.config import SplConfig

    if config is None:
        config = SplConfig()
    return list(Classifier(config.rules).classify(source))


def reindent_source(source: str, config: SplConfig | None = None) -> str:
    """Re-indent every line of *source*."""
    from splmode.config import SplConfig
    from splmode.indent import reindent

    if config is None:
        config = SplConfig()
    return reindent(source, config.indent_width)
