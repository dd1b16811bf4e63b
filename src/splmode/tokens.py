"""Span categories, bracket contexts, and source position helpers."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from enum import Enum, auto


class Category(Enum):
    BUILTIN_COMMAND = auto()  # search, stats, eval ...
    EVAL_FUNCTION = auto()  # if, len, mvindex ... inside eval/where/fieldformat
    TRANSFORMING_FUNCTION = auto()  # count, avg, values ...
    LANGUAGE_CONSTANT = auto()  # AND, OR, NOT, as, by ...
    MACRO = auto()  # `name` or `name(args)`
    DIGIT = auto()
    ESCAPE_CHAR = auto()  # \\ \* \| \= and bare ( ) [ ]
    OPERATOR = auto()  # reserved, never produced
    KEYWORD_ASSIGNMENT = auto()  # field in field=value
    COMMENT = auto()

    @property
    def slug(self) -> str:
        """Lower-case, dash-separated name used in CSS classes and dumps."""
        return self.name.lower().replace("_", "-")


class BracketKind(Enum):
    PAREN = auto()
    SQUARE = auto()


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """A classified range of source text, ``start`` inclusive, ``end`` exclusive."""

    start: int
    end: int
    category: Category

    def text(self, source: str) -> str:
        return source[self.start : self.end]


@dataclass(frozen=True, slots=True)
class BracketContext:
    """An open bracket enclosing a query position."""

    open_offset: int
    close_offset: int | None  # None while the bracket is never closed
    kind: BracketKind
    open_line: int


class LineIndex:
    """Map offsets to 1-based lines and columns for a fixed text."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._starts = [0]
        pos = source.find("\n")
        while pos != -1:
            self._starts.append(pos + 1)
            pos = source.find("\n", pos + 1)

    @property
    def line_starts(self) -> list[int]:
        return list(self._starts)

    def line_of(self, offset: int) -> int:
        return bisect_right(self._starts, offset)

    def line_start(self, line: int) -> int:
        return self._starts[line - 1]

    def line_end(self, line: int) -> int:
        """Offset of the newline ending *line* (or end of text)."""
        if line < len(self._starts):
            return self._starts[line] - 1
        return len(self._source)

    def position(self, offset: int) -> Position:
        line = self.line_of(offset)
        return Position(line, offset - self._starts[line - 1] + 1, offset)

    def offset(self, line: int, column: int) -> int:
        """Offset of a 1-based (line, column), clamped to the line's extent."""
        if line < 1:
            return 0
        if line > len(self._starts):
            return len(self._source)
        start = self._starts[line - 1]
        return min(start + max(column, 1) - 1, self.line_end(line))

