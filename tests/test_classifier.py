"""Classifier: keyword precedence, contextual eval functions, comments, ranges."""

from __future__ import annotations

from splmode.classifier import Classifier, classify
from splmode.rules import build_rule_table
from splmode.tokens import Category, Span
from tests.conftest import assert_spans, assert_well_formed, category_at

C = Category


class TestEmptyAndMalformed:
    def test_empty_input(self, spans) -> None:
        assert spans("") == []

    def test_lone_backtick(self, spans) -> None:
        source = "search `"
        assert_spans(spans(source), source, [("search", C.BUILTIN_COMMAND)])

    def test_lone_quote(self, spans) -> None:
        source = 'search "foo'
        assert_spans(spans(source), source, [("search", C.BUILTIN_COMMAND)])

    def test_unterminated_comment_block(self, spans) -> None:
        source = "```search"
        assert_spans(spans(source), source, [("search", C.BUILTIN_COMMAND)])


class TestKeywords:
    def test_builtin_command(self, spans) -> None:
        source = "search index=main"
        result = spans(source)
        assert category_at(source, result, "search") == C.BUILTIN_COMMAND

    def test_whole_identifiers_only(self, spans) -> None:
        source = "researcher statsd"
        assert spans(source) == []

    def test_transforming_function(self, spans) -> None:
        source = "stats count by host"
        assert_spans(
            spans(source),
            source,
            [
                ("stats", C.BUILTIN_COMMAND),
                ("count", C.TRANSFORMING_FUNCTION),
                ("by", C.LANGUAGE_CONSTANT),
            ],
        )

    def test_language_constants(self, spans) -> None:
        source = "a OR b NOT c"
        result = spans(source)
        assert category_at(source, result, "OR") == C.LANGUAGE_CONSTANT
        assert category_at(source, result, "NOT") == C.LANGUAGE_CONSTANT

    def test_first_rule_wins_for_shared_identifier(self, spans) -> None:
        # "eval" is both a command and a transforming function.
        source = "stats count(eval(status=404))"
        result = spans(source)
        assert category_at(source, result, "eval") == C.BUILTIN_COMMAND
        assert category_at(source, result, "count") == C.TRANSFORMING_FUNCTION


class TestEvalFunctions:
    def test_after_eval(self, spans) -> None:
        source = "eval isAdmin=if(x,1,0)"
        assert_spans(
            spans(source),
            source,
            [
                ("eval", C.BUILTIN_COMMAND),
                ("isAdmin", C.KEYWORD_ASSIGNMENT),
                ("if", C.EVAL_FUNCTION),
                ("(", C.ESCAPE_CHAR),
                ("1", C.DIGIT),
                ("0", C.DIGIT),
                (")", C.ESCAPE_CHAR),
            ],
        )

    def test_without_eval_context(self, spans) -> None:
        source = "stats if(x,1,0) as y"
        result = spans(source)
        assert category_at(source, result, "if") is None
        assert category_at(source, result, "as") == C.LANGUAGE_CONSTANT

    def test_every_function_in_stage(self, spans) -> None:
        source = "eval n=len(lower(name))"
        result = spans(source)
        assert category_at(source, result, "len") == C.EVAL_FUNCTION
        assert category_at(source, result, "lower") == C.EVAL_FUNCTION

    def test_where_and_fieldformat(self, spans) -> None:
        for command in ("where", "fieldformat"):
            source = f"{command} isnull(x)"
            assert category_at(source, spans(source), "isnull") == C.EVAL_FUNCTION

    def test_bounded_by_pipe(self, spans) -> None:
        source = "eval a=1 | stats if(x) by b"
        assert category_at(source, spans(source), "if") is None

    def test_bounded_by_subsearch(self, spans) -> None:
        source = "eval a=1 [search if(x)]"
        assert category_at(source, spans(source), "if") is None

    def test_eval_needs_whitespace(self, spans) -> None:
        source = "stats count(eval(if(x)))"
        assert category_at(source, spans(source), "if") is None

    def test_continues_across_lines(self, spans) -> None:
        source = "eval a=1,\n  b=round(x)"
        assert category_at(source, spans(source), "round") == C.EVAL_FUNCTION


class TestStructural:
    def test_macro_with_args(self, spans) -> None:
        source = "`my_macro(1)`"
        result = spans(source)
        assert category_at(source, result, "my_macro") == C.MACRO
        assert result[0] == Span(1, 9, C.MACRO)

    def test_macro_without_args(self, spans) -> None:
        source = "`get_hosts` | head 5"
        assert spans(source)[0] == Span(1, 10, C.MACRO)

    def test_digits_need_word_boundaries(self, spans) -> None:
        source = "x1 42 host=web01"
        result = spans(source)
        assert category_at(source, result, "42") == C.DIGIT
        assert category_at(source, result, "1") is None
        assert category_at(source, result, "01") is None

    def test_backslash_escapes(self, spans) -> None:
        source = r"a\|b\=c\\d\*"
        texts = [s.text(source) for s in spans(source) if s.category is C.ESCAPE_CHAR]
        assert texts == [r"\|", r"\=", "\\\\", r"\*"]

    def test_bare_bracket_is_escape(self, spans) -> None:
        source = "search [search foo]"
        result = spans(source)
        assert category_at(source, result, "[") == C.ESCAPE_CHAR
        assert category_at(source, result, "]") == C.ESCAPE_CHAR

    def test_keyword_assignment_variants(self, spans) -> None:
        source = 'index="main" sourcetype = access_* src=* port=8080'
        result = spans(source)
        for field in ("index", "sourcetype", "src", "port"):
            assert category_at(source, result, field) == C.KEYWORD_ASSIGNMENT
        assert category_at(source, result, "8080") == C.DIGIT

    def test_operator_never_produced(self, spans) -> None:
        source = "eval a = b + c * 2 | where x != y"
        assert all(s.category is not C.OPERATOR for s in spans(source))


class TestComments:
    def test_block_overrides_everything(self, spans) -> None:
        source = "```search foo||here 42```"
        assert spans(source) == [Span(0, len(source), C.COMMENT)]

    def test_block_spans_lines(self, spans) -> None:
        source = "search a\n```\nstats\n```\n| head 1"
        result = spans(source)
        start = source.index("```")
        end = source.rindex("```") + 3
        assert Span(start, end, C.COMMENT) in result
        assert category_at(source, result, "stats") == C.COMMENT
        assert category_at(source, result, "head") == C.BUILTIN_COMMAND

    def test_comment_macro(self, spans) -> None:
        source = '`comment("x|y")`'
        assert spans(source) == [Span(0, len(source), C.COMMENT)]

    def test_comment_macro_is_not_greedy(self, spans) -> None:
        source = '`comment("a")` search `comment("b")`'
        result = spans(source)
        assert category_at(source, result, "search") == C.BUILTIN_COMMAND
        assert [s.category for s in result].count(C.COMMENT) == 2

    def test_comment_macro_disabled(self) -> None:
        source = '`comment("x")`'
        result = list(classify(source, rules=build_rule_table(alternate_comments=False)))
        assert category_at(source, result, "comment") == C.MACRO

    def test_overlapping_comments_merge(self, spans) -> None:
        source = '`comment("```")` foo```'
        result = spans(source)
        assert_well_formed(result)
        assert result == [Span(0, len(source), C.COMMENT)]


class TestSequence:
    SOURCE = (
        "index=web sourcetype=access_* status>=500\n"
        "| eval slow=if(duration>1000, 1, 0)\n"
        "| stats count(eval(slow=1)) as slow_count by host\n"
        "```tidy up```\n"
        "| `format_output(host)` | where isnotnull(host)\n"
        "| join host [search index=inventory | fields host owner]\n"
    )

    def test_well_formed(self, spans) -> None:
        assert_well_formed(spans(self.SOURCE))

    def test_idempotent(self) -> None:
        seq = classify(self.SOURCE)
        first = list(seq)
        assert list(seq) == first
        assert list(classify(self.SOURCE)) == first

    def test_sub_range_matches_full_pass(self) -> None:
        full = list(classify(self.SOURCE))
        start, end = 40, 120
        clipped = [
            Span(max(s.start, start), min(s.end, end), s.category)
            for s in full
            if s.end > start and s.start < end
        ]
        assert list(classify(self.SOURCE, start, end)) == clipped

    def test_range_clips_spans(self) -> None:
        source = "search foo | stats count"
        assert list(classify(source, 13, 16)) == [Span(13, 16, C.BUILTIN_COMMAND)]
        assert list(classify(source, 19, 24)) == [Span(19, 24, C.TRANSFORMING_FUNCTION)]

    def test_empty_range(self) -> None:
        assert list(classify("search foo", 5, 5)) == []

    def test_classifier_reuses_rules(self) -> None:
        rules = build_rule_table()
        classifier = Classifier(rules)
        assert classifier.rules is rules
        assert classifier.spans("head 10") == [
            Span(0, 4, C.BUILTIN_COMMAND),
            Span(5, 7, C.DIGIT),
        ]
