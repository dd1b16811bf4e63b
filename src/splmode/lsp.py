"""Language server for SPL: semantic highlighting and indentation."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import unquote

from lsprotocol.types import (
    INITIALIZE,
    TEXT_DOCUMENT_FORMATTING,
    TEXT_DOCUMENT_ON_TYPE_FORMATTING,
    TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL,
    DocumentFormattingParams,
    DocumentOnTypeFormattingOptions,
    DocumentOnTypeFormattingParams,
    InitializeParams,
    Position,
    Range,
    SemanticTokens,
    SemanticTokensLegend,
    SemanticTokensParams,
    TextDocumentSyncKind,
    TextEdit,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import TextDocument

from splmode import __version__
from splmode.classifier import Classifier
from splmode.config import SplConfig, check_indent_width
from splmode.errors import ConfigError
from splmode.indent import indent_changes
from splmode.layout import TRIGGER_CHARACTERS, layout_edits
from splmode.tokens import Category, LineIndex

logger = logging.getLogger(__name__)

# Categories mapped onto standard semantic token types so that stock themes
# colour them without extra client configuration.
TOKEN_TYPES: dict[Category, str] = {
    Category.BUILTIN_COMMAND: "keyword",
    Category.EVAL_FUNCTION: "function",
    Category.TRANSFORMING_FUNCTION: "method",
    Category.LANGUAGE_CONSTANT: "enumMember",
    Category.MACRO: "macro",
    Category.DIGIT: "number",
    Category.ESCAPE_CHAR: "regexp",
    Category.OPERATOR: "operator",
    Category.KEYWORD_ASSIGNMENT: "property",
    Category.COMMENT: "comment",
}
LEGEND = SemanticTokensLegend(token_types=list(TOKEN_TYPES.values()), token_modifiers=[])
_TYPE_INDEX = {category: i for i, category in enumerate(TOKEN_TYPES)}


class SplLanguageServer(LanguageServer):
    """LanguageServer carrying the session's splmode settings."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.config = SplConfig()


server = SplLanguageServer("splmode-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _configure(ls: SplLanguageServer, options: Any) -> None:
    """Apply ``initializationOptions`` (``indentWidth``, ``alternateComments``)."""
    if not isinstance(options, dict):
        return
    indent_width = ls.config.indent_width
    alternate_comments = ls.config.alternate_comments
    try:
        if "indentWidth" in options:
            indent_width = check_indent_width(options["indentWidth"])
        if "alternateComments" in options:
            if not isinstance(options["alternateComments"], bool):
                raise ConfigError("alternateComments must be a boolean")
            alternate_comments = options["alternateComments"]
    except ConfigError as exc:
        logger.warning("ignoring initialization options: %s", exc.message)
        return
    ls.config = SplConfig(
        indent_width=indent_width,
        alternate_comments=alternate_comments,
        theme=ls.config.theme,
    )


def _document(ls: SplLanguageServer, uri: str) -> TextDocument | None:
    """The open document at *uri*, or None; files on disk are never read."""
    return ls.workspace.text_documents.get(unquote(uri))


def _client_position(doc: TextDocument, index: LineIndex, offset: int) -> Position:
    """LSP position of *offset*, with the character in the client's code units."""
    pos = index.position(offset)
    start = index.line_start(pos.line)
    units = doc.position_codec.client_num_units(doc.source[start:offset])
    return Position(line=pos.line - 1, character=units)


def _offset(doc: TextDocument, index: LineIndex, position: Position) -> int:
    """Offset of an LSP *position*, clamped to the extent of its line."""
    line = position.line + 1
    if line > len(index.line_starts):
        return len(doc.source)
    codec = doc.position_codec
    units = 0
    for offset in range(index.line_start(line), index.line_end(line)):
        if units >= position.character:
            return offset
        units += codec.client_num_units(doc.source[offset])
    return index.line_end(line)


def _semantic_tokens(ls: SplLanguageServer, uri: str) -> SemanticTokens:
    """Encode the document's spans as LSP relative semantic token data."""
    doc = _document(ls, uri)
    if doc is None:
        return SemanticTokens(data=[])
    source = doc.source
    units = doc.position_codec.client_num_units
    index = LineIndex(source)
    data: list[int] = []
    prev_line = 0
    prev_char = 0

    for span in Classifier(ls.config.rules).classify(source):
        token_type = _TYPE_INDEX[span.category]
        first = index.line_of(span.start)
        last = index.line_of(span.end - 1)
        # Multi-line spans are sent one piece per line.
        for line in range(first, last + 1):
            line_start = index.line_start(line)
            start = max(span.start, line_start)
            end = min(span.end, index.line_end(line))
            if start >= end:
                continue
            line0 = line - 1
            char = units(source[line_start:start])
            delta_line = line0 - prev_line
            delta_char = char - prev_char if delta_line == 0 else char
            data.extend((delta_line, delta_char, units(source[start:end]), token_type, 0))
            prev_line = line0
            prev_char = char

    logger.debug("semantic tokens for %s: %d", uri, len(data) // 5)
    return SemanticTokens(data=data)


def _format(ls: SplLanguageServer, uri: str) -> list[TextEdit]:
    """Re-indentation edits for the whole document."""
    doc = _document(ls, uri)
    if doc is None:
        return []
    index = LineIndex(doc.source)
    edits = [
        TextEdit(
            range=Range(
                start=_client_position(doc, index, change.start),
                end=_client_position(doc, index, change.end),
            ),
            new_text=" " * change.column,
        )
        for change in indent_changes(doc.source, ls.config.indent_width)
    ]
    logger.debug("formatting %s: %d edits", uri, len(edits))
    return edits


def _on_type(ls: SplLanguageServer, uri: str, position: Position, ch: str) -> list[TextEdit]:
    """Layout edits after *ch* was typed just before *position*."""
    doc = _document(ls, uri)
    if doc is None:
        return []
    index = LineIndex(doc.source)
    offset = _offset(doc, index, position) - 1
    edits = layout_edits(doc.source, offset, ch, ls.config.indent_width)
    return [
        TextEdit(
            range=Range(
                start=_client_position(doc, index, e.start),
                end=_client_position(doc, index, e.end),
            ),
            new_text=e.new_text,
        )
        for e in edits
    ]


@server.feature(INITIALIZE)
def initialize(ls: SplLanguageServer, params: InitializeParams) -> None:
    _configure(ls, params.initialization_options)


@server.feature(TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL, LEGEND)
def semantic_tokens_full(ls: SplLanguageServer, params: SemanticTokensParams) -> SemanticTokens:
    return _semantic_tokens(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_FORMATTING)
def formatting(ls: SplLanguageServer, params: DocumentFormattingParams) -> list[TextEdit]:
    return _format(ls, params.text_document.uri)


@server.feature(
    TEXT_DOCUMENT_ON_TYPE_FORMATTING,
    DocumentOnTypeFormattingOptions(
        first_trigger_character=TRIGGER_CHARACTERS[0],
        more_trigger_character=list(TRIGGER_CHARACTERS[1:]),
    ),
)
def on_type_formatting(
    ls: SplLanguageServer, params: DocumentOnTypeFormattingParams
) -> list[TextEdit]:
    return _on_type(ls, params.text_document.uri, params.position, params.ch)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    server.start_io()
