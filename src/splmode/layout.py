"""Layout advisor: editor actions triggered by typing a single character."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from splmode.indent import DEFAULT_INDENT_WIDTH, indent_column


class EditorAction(Enum):
    INSERT_NEWLINE_BEFORE = auto()
    INSERT_NEWLINE_AFTER = auto()  # no character requests this yet
    REINDENT_CURRENT_LINE = auto()


# Pipes and subsearch openers start a fresh line; a subsearch closer changes
# the depth of its own line.
_ACTIONS: dict[str, tuple[EditorAction, ...]] = {
    "|": (EditorAction.INSERT_NEWLINE_BEFORE,),
    "[": (EditorAction.INSERT_NEWLINE_BEFORE,),
    "]": (EditorAction.REINDENT_CURRENT_LINE,),
}

TRIGGER_CHARACTERS: tuple[str, ...] = tuple(_ACTIONS)


def on_character_typed(ch: str) -> list[EditorAction]:
    """Return the layout actions requested by typing *ch*."""
    return list(_ACTIONS.get(ch, ()))


@dataclass(frozen=True, slots=True)
class Edit:
    """Replace ``text[start:end]`` with *new_text*."""

    start: int
    end: int
    new_text: str


def layout_edits(
    text: str, offset: int, ch: str, width: int = DEFAULT_INDENT_WIDTH
) -> list[Edit]:
    """Edits carrying out the actions for *ch*, already inserted at *offset*.

    All edits refer to offsets in *text* as given.
    """
    if not 0 <= offset < len(text) or text[offset] != ch:
        return []

    line_start = text.rfind("\n", 0, offset) + 1
    before = text[line_start:offset]
    ws_start = offset - (len(before) - len(before.rstrip(" \t")))
    at_line_start = ws_start == line_start

    edits: list[Edit] = []
    newline_inserted = False
    for action in on_character_typed(ch):
        if action is EditorAction.INSERT_NEWLINE_BEFORE:
            if at_line_start:
                continue
            moved = text[:ws_start] + "\n" + text[offset:]
            column = indent_column(moved, ws_start + 1, width)
            edits.append(Edit(ws_start, offset, "\n" + " " * column))
            newline_inserted = True
        elif action is EditorAction.REINDENT_CURRENT_LINE and not newline_inserted:
            column = indent_column(text, line_start, width)
            indent_end = line_start + len(text[line_start:]) - len(text[line_start:].lstrip(" \t"))
            if text[line_start:indent_end] != " " * column:
                edits.append(Edit(line_start, indent_end, " " * column))

    return edits
