"""Indentation engine: target indent columns from bracket nesting."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from splmode.brackets import bracket_events, bracket_kind, enclosing_brackets
from splmode.rules import COMMENT_BLOCK_PATTERN
from splmode.tokens import BracketKind, LineIndex

DEFAULT_INDENT_WIDTH = 4


@dataclass(frozen=True, slots=True)
class IndentChange:
    """Leading whitespace ``[start, end)`` of *line* should become *column* spaces."""

    line: int
    start: int
    end: int
    column: int


def _depth(contexts: Iterable[tuple[BracketKind, int]], line: int, line_text: str) -> int:
    """Paren depth for *line* given its enclosing brackets, innermost first.

    Only parens count, and parens opened on the same line as the last counted
    one collapse into a single level. A line starting with ``]`` dedents once.
    """
    depth = 0
    last_counted = line
    for kind, open_line in contexts:
        if kind is BracketKind.PAREN and open_line != last_counted:
            depth += 1
            last_counted = open_line
    if line_text.lstrip().startswith("]"):
        depth -= 1
    return max(depth, 0)


def indent_depth(text: str, line_start: int) -> int:
    """Indent level of the line containing offset *line_start*."""
    line_start = max(0, min(line_start, len(text)))
    line_start = text.rfind("\n", 0, line_start) + 1
    line = text.count("\n", 0, line_start) + 1
    line_end = text.find("\n", line_start)
    if line_end == -1:
        line_end = len(text)
    contexts = ((c.kind, c.open_line) for c in enclosing_brackets(text, line_start))
    return _depth(contexts, line, text[line_start:line_end])


def indent_column(text: str, line_start: int, width: int = DEFAULT_INDENT_WIDTH) -> int:
    """Target column of the line containing offset *line_start*."""
    return indent_depth(text, line_start) * width


def indent_lines(text: str, width: int = DEFAULT_INDENT_WIDTH) -> list[int]:
    """Target column for every line of *text*, in a single forward pass."""
    index = LineIndex(text)
    events = bracket_events(text)
    pending = next(events, None)
    stack: list[tuple[int, int]] = []
    columns: list[int] = []

    for line, start in enumerate(index.line_starts, 1):
        while pending is not None and pending[0] < start:
            offset, ch, open_line = pending
            if ch in "([":
                stack.append((offset, open_line))
            elif stack:
                stack.pop()
            pending = next(events, None)
        contexts = [(bracket_kind(text, off), ln) for off, ln in reversed(stack)]
        columns.append(_depth(contexts, line, text[start : index.line_end(line)]) * width)

    return columns


def indent_changes(text: str, width: int = DEFAULT_INDENT_WIDTH) -> list[IndentChange]:
    """Lines whose leading whitespace differs from their target indentation.

    Blank lines are normalised to empty. Lines that start inside a ```...```
    block are left alone.
    """
    index = LineIndex(text)
    comments = [m.span() for m in COMMENT_BLOCK_PATTERN.finditer(text)]
    changes: list[IndentChange] = []

    for line, column in enumerate(indent_lines(text, width), 1):
        start = index.line_start(line)
        if any(s < start < e for s, e in comments):
            continue
        end = index.line_end(line)
        content = text[start:end]
        body = content.lstrip(" \t")
        ws_end = start + len(content) - len(body)
        if body in ("", "\r"):
            column = 0
        if content[: ws_end - start] != " " * column:
            changes.append(IndentChange(line, start, ws_end, column))

    return changes


def reindent(text: str, width: int = DEFAULT_INDENT_WIDTH) -> str:
    """Return *text* with every line re-indented to its target column."""
    parts: list[str] = []
    pos = 0
    for change in indent_changes(text, width):
        parts.append(text[pos : change.start])
        parts.append(" " * change.column)
        pos = change.end
    parts.append(text[pos:])
    return "".join(parts)
