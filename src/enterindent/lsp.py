"""Minimal LSP server — Enter handling via on-type formatting."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from lsprotocol.types import (
    TEXT_DOCUMENT_ON_TYPE_FORMATTING,
    DocumentOnTypeFormattingOptions,
    DocumentOnTypeFormattingParams,
    FormattingOptions,
    Position,
    Range,
    TextDocumentSyncKind,
    TextEdit,
)
from pygls.lsp.server import LanguageServer

from enterindent import __version__
from enterindent.document import Document
from enterindent.engine import Editor, EditorSession, IndentEnterHandler, Outcome
from enterindent.languages import FormatterRegistry, LanguageSupport, default_registry
from enterindent.settings import StyleSettings, load_config

logger = logging.getLogger(__name__)


class EnterIndentServer(LanguageServer):
    """Language server carrying the style settings and language registries."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.settings = StyleSettings()
        self.languages = default_registry()
        self.formatters = FormatterRegistry()

    def use_settings(self, settings: StyleSettings) -> None:
        self.settings = settings
        self.formatters = FormatterRegistry()
        for language_id in settings.formatter_languages:
            self.formatters.register(language_id)


server = EnterIndentServer(
    "enterindent-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _language_for(
    ls: EnterIndentServer, language_id: str | None, uri: str
) -> LanguageSupport | None:
    if language_id:
        language = ls.languages.get(language_id)
        if language is not None:
            return language
    return ls.languages.for_filename(uri.rsplit("/", 1)[-1])


def enter_edits(
    ls: EnterIndentServer,
    uri: str,
    position: Position,
    options: FormattingOptions,
) -> list[TextEdit] | None:
    """Replace the line break the client just typed with the handler's insertion.

    The client has already inserted its line break (plus any auto-indent)
    before *position*. That text is cut out again to recover the buffer as it
    was before Enter, with the caret at the end of the previous line.
    """
    doc = ls.workspace.get_text_document(uri)
    language = _language_for(ls, doc.language_id, uri)
    if language is None or position.line == 0:
        return None

    source = doc.source
    typed = Document(source)
    if position.line >= typed.line_count:
        return None

    # Client columns are in the negotiated encoding (UTF-16 by default)
    codec = doc.position_codec
    new_line_start = typed.line_start_offset(position.line)
    column = 0
    if position.line < len(doc.lines):
        column = codec.position_from_client_units(doc.lines, position).character
    cursor = min(new_line_start + column, typed.line_end_offset(position.line))
    if source[new_line_start:cursor].strip(" \t"):
        logger.debug("text before the cursor on %s:%d, not a fresh Enter", uri, position.line)
        return None

    break_start = typed.line_end_offset(position.line - 1)
    line_break = source[break_start:new_line_start]
    document = Document(source[:break_start] + source[cursor:])

    handler = IndentEnterHandler(language, ls.formatters)
    session = EditorSession(languages=frozenset({language.id}), tab_width=options.tab_size)
    result = handler.preprocess_enter(
        Editor(document, break_start, session),
        ls.settings.indent_options(language.id),
    )
    if result.outcome is Outcome.CONTINUE or result.insertion is None:
        return None

    # The caret move of a STOP result has no on-type-formatting equivalent
    start_char = codec.client_num_units(
        source[typed.line_start_offset(position.line - 1) : break_start]
    )
    end_char = codec.client_num_units(source[new_line_start:cursor])
    return [
        TextEdit(
            range=Range(
                start=Position(line=position.line - 1, character=start_char),
                end=Position(line=position.line, character=end_char),
            ),
            new_text=line_break + result.insertion.text[1:],
        )
    ]


@server.feature(
    TEXT_DOCUMENT_ON_TYPE_FORMATTING,
    DocumentOnTypeFormattingOptions(first_trigger_character="\n"),
)
def on_type_formatting(
    ls: EnterIndentServer, params: DocumentOnTypeFormattingParams
) -> list[TextEdit] | None:
    if params.ch != "\n":
        return None
    return enter_edits(ls, params.text_document.uri, params.position, params.options)


def main(argv: list[str] | None = None) -> None:
    p = argparse.ArgumentParser(prog="enterindent-lsp")
    p.add_argument("--config", metavar="FILE", help="Config file (default: ./enterindent.toml)")
    args = p.parse_args(argv)

    config_path = Path(args.config) if args.config else None
    server.use_settings(StyleSettings.from_config(load_config(config_path, Path("."))))
    server.start_io()
