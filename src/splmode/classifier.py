"""Classifier: applies a rule table to SPL text and yields categorised spans."""

from __future__ import annotations

from collections.abc import Iterator

from splmode.rules import DEFAULT_RULES, RuleTable
from splmode.tokens import Category, Span


class SpanSequence:
    """Restartable view over the spans of one classification request.

    Spans are computed when iterated; iterating again recomputes them from the
    same text and yields an identical sequence.
    """

    def __init__(self, classifier: Classifier, text: str, start: int, end: int) -> None:
        self._classifier = classifier
        self._text = text
        self._start = start
        self._end = end

    def __iter__(self) -> Iterator[Span]:
        return self._classifier._iter_range(self._text, self._start, self._end)

    def __repr__(self) -> str:
        return f"SpanSequence(start={self._start}, end={self._end})"


class Classifier:
    """Classify SPL source text using an immutable :class:`RuleTable`."""

    def __init__(self, rules: RuleTable = DEFAULT_RULES) -> None:
        self._rules = rules

    @property
    def rules(self) -> RuleTable:
        return self._rules

    def classify(self, text: str, start: int = 0, end: int | None = None) -> SpanSequence:
        """Return the spans intersecting ``text[start:end]``, clipped to it.

        Matching always sees the whole text, so classifying a sub-range gives
        exactly the full-buffer spans restricted to that range.
        """
        if end is None or end > len(text):
            end = len(text)
        start = max(0, start)
        return SpanSequence(self, text, start, end)

    def _iter_range(self, text: str, start: int, end: int) -> Iterator[Span]:
        if start >= end:
            return
        for span in self.spans(text):
            if span.end <= start:
                continue
            if span.start >= end:
                break
            if span.start < start or span.end > end:
                span = Span(max(span.start, start), min(span.end, end), span.category)
            yield span

    def spans(self, text: str) -> list[Span]:
        """Classify all of *text*, returning ordered non-overlapping spans."""
        if not text:
            return []

        claimed = bytearray(len(text))
        found: list[Span] = []
        overriding: list[tuple[int, int, Category]] = []

        for rule in self._rules:
            for s, e in rule.matches(text):
                if rule.overrides:
                    overriding.append((s, e, rule.category))
                    continue
                # First rule to touch any character of a match keeps it.
                if claimed.find(1, s, e) != -1:
                    continue
                claimed[s:e] = b"\x01" * (e - s)
                found.append(Span(s, e, rule.category))

        found.sort(key=lambda sp: sp.start)
        if overriding:
            found = _apply_overrides(found, _merge(overriding))
        return found


def _merge(ranges: list[tuple[int, int, Category]]) -> list[Span]:
    """Union of override ranges, sorted by start; a merged range keeps its first category."""
    merged: list[Span] = []
    for s, e, cat in sorted(ranges, key=lambda r: (r[0], r[1])):
        if merged and s <= merged[-1].end:
            last = merged[-1]
            if e > last.end:
                merged[-1] = Span(last.start, e, last.category)
        else:
            merged.append(Span(s, e, cat))
    return merged


def _apply_overrides(spans: list[Span], overrides: list[Span]) -> list[Span]:
    """Carve *overrides* out of *spans* and interleave them, keeping order."""
    result: list[Span] = []
    for span in spans:
        pieces = [(span.start, span.end)]
        for ov in overrides:
            if ov.start >= span.end:
                break
            if ov.end <= span.start:
                continue
            next_pieces = []
            for s, e in pieces:
                if ov.end <= s or ov.start >= e:
                    next_pieces.append((s, e))
                    continue
                if ov.start > s:
                    next_pieces.append((s, min(e, ov.start)))
                if ov.end < e:
                    next_pieces.append((max(s, ov.end), e))
            pieces = next_pieces
        result.extend(Span(s, e, span.category) for s, e in pieces if s < e)
    result.extend(overrides)
    result.sort(key=lambda sp: sp.start)
    return result


def classify(
    text: str,
    start: int = 0,
    end: int | None = None,
    rules: RuleTable = DEFAULT_RULES,
) -> SpanSequence:
    """Classify ``text[start:end]`` with *rules* (the default SPL table)."""
    return Classifier(rules).classify(text, start, end)
