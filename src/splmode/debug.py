"""--debug span dump to stderr."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from splmode.tokens import LineIndex, Span


def dump_spans(text: str, spans: Iterable[Span], *, file: TextIO | None = None) -> None:
    """Print one ``line:col-line:col CATEGORY 'text'`` row per span to *file*.

    *file* defaults to the current ``sys.stderr``.
    """
    if file is None:
        file = sys.stderr
    index = LineIndex(text)
    for span in spans:
        start = index.position(span.start)
        end = index.position(span.end)
        file.write(
            f"{start.line}:{start.column}-{end.line}:{end.column} "
            f"{span.category.name} {span.text(text)!r}\n"
        )
