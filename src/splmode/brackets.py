"""Bracket scanner: finds the brackets enclosing a position in SPL text."""

from __future__ import annotations

from collections.abc import Iterator
from itertools import chain

from splmode.tokens import BracketContext, BracketKind

_OPENERS = "(["
_CLOSERS = ")]"


def bracket_events(text: str, start: int = 0, line: int = 1) -> Iterator[tuple[int, str, int]]:
    """Yield ``(offset, char, line)`` for every structural bracket in *text*.

    Brackets inside double-quoted strings, inside terminated ```...``` blocks,
    or right after a backslash are skipped. An unterminated string or comment
    opener is treated as plain text. *line* is the 1-based line of *start*.
    """
    n = len(text)
    i = start
    while i < n:
        ch = text[i]
        if ch == "\n":
            line += 1
            i += 1
        elif ch == "\\":
            if i + 1 < n and text[i + 1] == "\n":
                line += 1
            i += 2
        elif ch == '"':
            close = _string_end(text, i + 1)
            if close == -1:
                i += 1
                continue
            line += text.count("\n", i, close)
            i = close + 1
        elif ch == "`" and text.startswith("```", i):
            close = text.find("```", i + 3)
            if close == -1:
                i += 3
                continue
            line += text.count("\n", i, close)
            i = close + 3
        else:
            if ch in _OPENERS or ch in _CLOSERS:
                yield i, ch, line
            i += 1


def _string_end(text: str, i: int) -> int:
    """Offset of the quote closing a string whose content starts at *i*, or -1."""
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == '"':
            return i
        i += 1
    return -1


def bracket_kind(text: str, open_offset: int) -> BracketKind:
    """Square iff the character opening the bracket's content is ``[``."""
    return BracketKind.SQUARE if text[open_offset] == "[" else BracketKind.PAREN


def enclosing_brackets(text: str, pos: int) -> list[BracketContext]:
    """Return the brackets open at *pos*, innermost first.

    A closer pops the innermost open bracket whatever its kind; a closer with
    nothing open is ignored. The scan never runs past either end of the text,
    so unbalanced input always terminates.
    """
    pos = max(0, min(pos, len(text)))
    stack: list[tuple[int, int]] = []  # (open offset, open line)
    events = bracket_events(text)
    pending: tuple[int, str, int] | None = None

    for event in events:
        if event[0] >= pos:
            pending = event
            break
        offset, ch, line = event
        if ch in _OPENERS:
            stack.append((offset, line))
        elif stack:
            stack.pop()

    enclosing = list(stack)
    closes: dict[int, int] = {}
    if enclosing and pending is not None:
        remaining = len(enclosing)
        for offset, ch, _line in chain([pending], events):
            if ch in _OPENERS:
                stack.append((offset, 0))
                continue
            if not stack:
                continue
            opened, _ = stack.pop()
            if len(stack) < remaining:
                closes[opened] = offset
                remaining = len(stack)
                if remaining == 0:
                    break

    return [
        BracketContext(
            open_offset=offset,
            close_offset=closes.get(offset),
            kind=bracket_kind(text, offset),
            open_line=line,
        )
        for offset, line in reversed(enclosing)
    ]
