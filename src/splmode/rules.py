"""The ordered rule table that drives span classification.

Rules are tried in table order. A non-overriding rule only claims text that no
earlier rule has claimed; an overriding rule (comments) claims its whole match
regardless and is applied after all others.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from splmode.errors import RuleError
from splmode.keywords import (
    BUILTIN_COMMANDS,
    EVAL_FUNCTIONS,
    LANGUAGE_CONSTANTS,
    TRANSFORMING_FUNCTIONS,
)
from splmode.tokens import Category

# ```...``` may span lines; shared with the bracket scanner.
COMMENT_BLOCK_PATTERN = re.compile(r"```.*?```", re.DOTALL)

_COMMENT_MACRO = r'`comment\(".*?"\)`'

# An eval, where or fieldformat command followed by the rest of its pipeline
# stage. Group 1 is the region searched for eval function names.
_EVAL_CONTEXT = r"\b(?:eval|where|fieldformat)(?:\s+|$)([^|\[]*)"

_MACRO = r"`(\w+)(?:\(|`)"
_DIGIT = r"\b(\d+)\b"
_ESCAPE_CHAR = r"(\\\\|\\\*|\\\||\\=|[()\[\]])"
_KEYWORD_ASSIGNMENT = r'(\w+) *= *(?:\d+|"?[\w*]+"?)'
_NEVER = r"(?!)"


def _words(names: Iterable[str]) -> str:
    """Whole-identifier alternation, longest names first, as capture group 1."""
    ordered = sorted(set(names), key=lambda n: (-len(n), n))
    return r"\b(" + "|".join(re.escape(n) for n in ordered) + r")\b"


@dataclass(frozen=True, slots=True)
class Rule:
    """A single classification rule.

    ``group`` selects the capture group whose extent becomes the span. When
    ``context`` is set, ``pattern`` is only searched inside group 1 of each
    ``context`` match.
    """

    name: str
    pattern: re.Pattern[str]
    group: int
    category: Category
    overrides: bool = False
    context: re.Pattern[str] | None = None

    def matches(self, text: str) -> Iterator[tuple[int, int]]:
        """Yield the (start, end) extents this rule matches in *text*."""
        if self.context is None:
            yield from self._search(text, 0, len(text))
            return
        for region in self.context.finditer(text):
            start, end = region.span(1)
            if start < end:
                yield from self._search(text, start, end)

    def _search(self, text: str, start: int, end: int) -> Iterator[tuple[int, int]]:
        for m in self.pattern.finditer(text, start, end):
            s, e = m.span(self.group)
            if s < e:
                yield s, e


@dataclass(frozen=True, slots=True)
class RuleTable:
    """Immutable, ordered collection of rules."""

    rules: tuple[Rule, ...]

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def names(self) -> list[str]:
        return [r.name for r in self.rules]

    def get(self, name: str) -> Rule | None:
        for rule in self.rules:
            if rule.name == name:
                return rule
        return None


def _compile(name: str, source: str, flags: int = 0) -> re.Pattern[str]:
    try:
        return re.compile(source, flags)
    except re.error as exc:
        raise RuleError(name, f"invalid pattern: {exc}") from exc


def make_rule(
    name: str,
    pattern: str | re.Pattern[str],
    group: int,
    category: Category,
    *,
    overrides: bool = False,
    context: str | None = None,
    flags: int = 0,
) -> Rule:
    """Compile and validate one rule."""
    compiled = pattern if isinstance(pattern, re.Pattern) else _compile(name, pattern, flags)
    if group > compiled.groups:
        raise RuleError(name, f"pattern has no capture group {group}")
    context_re = None
    if context is not None:
        context_re = _compile(name, context, flags)
        if context_re.groups < 1:
            raise RuleError(name, "context pattern needs a capture group for its region")
    return Rule(name, compiled, group, category, overrides, context_re)


def build_rule_table(alternate_comments: bool = True) -> RuleTable:
    """Build the SPL rule table.

    With ``alternate_comments`` off, only ```...``` blocks are comments and
    ```comment("...")``` is left to the macro rule.
    """
    rules = [
        make_rule("builtin-commands", _words(BUILTIN_COMMANDS), 1, Category.BUILTIN_COMMAND),
        make_rule(
            "eval-functions",
            _words(EVAL_FUNCTIONS),
            1,
            Category.EVAL_FUNCTION,
            context=_EVAL_CONTEXT,
        ),
        make_rule(
            "transforming-functions",
            _words(TRANSFORMING_FUNCTIONS),
            1,
            Category.TRANSFORMING_FUNCTION,
        ),
        make_rule("language-constants", _words(LANGUAGE_CONSTANTS), 1, Category.LANGUAGE_CONSTANT),
        make_rule("macro", _MACRO, 1, Category.MACRO),
        make_rule("digit", _DIGIT, 1, Category.DIGIT),
        # Bare brackets count as escapes too; kept for compatibility with
        # existing highlighting.
        make_rule("escape-char", _ESCAPE_CHAR, 1, Category.ESCAPE_CHAR),
        # Reserved: matches nothing until operators get a definition.
        make_rule("operator", _NEVER, 0, Category.OPERATOR),
        make_rule("keyword-assignment", _KEYWORD_ASSIGNMENT, 1, Category.KEYWORD_ASSIGNMENT),
        make_rule("comment", COMMENT_BLOCK_PATTERN, 0, Category.COMMENT, overrides=True),
    ]
    if alternate_comments:
        rules.append(
            make_rule("comment-macro", _COMMENT_MACRO, 0, Category.COMMENT, overrides=True)
        )
    return RuleTable(tuple(rules))


DEFAULT_RULES = build_rule_table()
_BLOCK_COMMENT_RULES = build_rule_table(alternate_comments=False)


def rule_table(alternate_comments: bool = True) -> RuleTable:
    """The shared, prebuilt rule table for the given comment setting."""
    return DEFAULT_RULES if alternate_comments else _BLOCK_COMMENT_RULES
