"""HTML renderer: wraps classified spans in styled ``<span>`` elements."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from splmode.tokens import Category, Span

DEFAULT_STYLES: dict[Category, str] = {
    Category.BUILTIN_COMMAND: "color: #1f4e9e; font-weight: bold",
    Category.EVAL_FUNCTION: "color: #7a3e9d",
    Category.TRANSFORMING_FUNCTION: "color: #b3541e",
    Category.LANGUAGE_CONSTANT: "color: #c2185b; font-weight: bold",
    Category.MACRO: "color: #00796b",
    Category.DIGIT: "color: #2e7d32",
    Category.ESCAPE_CHAR: "color: #6d4c41",
    Category.OPERATOR: "color: #37474f",
    Category.KEYWORD_ASSIGNMENT: "color: #0277bd",
    Category.COMMENT: "color: #808080; font-style: italic",
}


@dataclass(frozen=True, slots=True)
class Theme:
    """Per-category inline CSS, consulted only when rendering."""

    styles: Mapping[Category, str] = field(default_factory=lambda: dict(DEFAULT_STYLES))

    def style(self, category: Category) -> str:
        return self.styles.get(category, "")

    def with_styles(self, overrides: Mapping[Category, str]) -> Theme:
        merged = dict(self.styles)
        merged.update(overrides)
        return Theme(merged)


def render_html(text: str, spans: Iterable[Span], theme: Theme | None = None) -> str:
    """Render *text* as a ``<pre>`` block with one element per span."""
    if theme is None:
        theme = Theme()

    parts: list[str] = ['<pre class="spl">']
    pos = 0
    for span in spans:
        if span.start > pos:
            parts.append(_escape_html(text[pos : span.start]))
        parts.append(_open_tag(span.category, theme))
        parts.append(_escape_html(text[span.start : span.end]))
        parts.append("</span>")
        pos = span.end
    parts.append(_escape_html(text[pos:]))
    parts.append("</pre>\n")
    return "".join(parts)


def render_document(text: str, spans: Iterable[Span], theme: Theme | None = None, title: str = "") -> str:
    """Render a complete HTML document around :func:`render_html`."""
    parts = ["<!DOCTYPE html>\n", "<html>\n", "<head>\n", '<meta charset="utf-8">\n']
    if title:
        parts.append(f"<title>{_escape_html(title)}</title>\n")
    parts.append("</head>\n<body>\n")
    parts.append(render_html(text, spans, theme))
    parts.append("</body>\n</html>\n")
    return "".join(parts)


def _open_tag(category: Category, theme: Theme) -> str:
    style = theme.style(category)
    if style:
        return f'<span class="spl-{category.slug}" style="{_escape_attr(style)}">'
    return f'<span class="spl-{category.slug}">'


def _escape_html(text: str) -> str:
    """Escape text for HTML body content."""
    result: list[str] = []
    for ch in text:
        if ch == "&":
            result.append("&amp;")
        elif ch == "<":
            result.append("&lt;")
        elif ch == ">":
            result.append("&gt;")
        else:
            result.append(ch)
    return "".join(result)


def _escape_attr(text: str) -> str:
    """Escape text for HTML attribute values."""
    return _escape_html(text).replace('"', "&quot;")
