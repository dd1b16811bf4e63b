"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from splmode.classifier import classify
from splmode.tokens import Category, Span


@pytest.fixture
def spans():
    """Return a helper that classifies the whole source into a span list."""

    def _spans(source: str, **kwargs) -> list[Span]:
        return list(classify(source, **kwargs))

    return _spans


def category_at(source: str, spans: list[Span], word: str, nth: int = 0) -> Category | None:
    """Category of the span covering the *nth* occurrence of *word*, if any."""
    start = -1
    for _ in range(nth + 1):
        start = source.index(word, start + 1)
    for span in spans:
        if span.start <= start < span.end:
            return span.category
    return None


def assert_spans(spans: list[Span], source: str, expected: list[tuple[str, Category]]) -> None:
    """Assert the (text, category) pairs of *spans* match the expected list."""
    actual = [(s.text(source), s.category) for s in spans]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_well_formed(spans: list[Span]) -> None:
    """Assert spans are non-empty, ordered, and non-overlapping."""
    prev_end = 0
    for span in spans:
        assert span.start < span.end, f"empty span {span}"
        assert span.start >= prev_end, f"overlap at {span}"
        prev_end = span.end
