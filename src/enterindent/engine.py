"""Enter key decision engine.

Decides, before the host's generic line break runs, whether a keystroke should
continue a line comment, open a deeper indent, copy the current indent, or be
left to a structural formatter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto

from enterindent.document import Document
from enterindent.indent import IndentOptions, logical_column, next_indent
from enterindent.languages import FormatterRegistry, LanguageSupport
from enterindent.scanner import nearest_non_whitespace_token, token_index_at

logger = logging.getLogger(__name__)


class Outcome(Enum):
    CONTINUE = auto()  # defer to the next handler, nothing changed
    STOP = auto()  # keystroke fully handled


@dataclass(frozen=True, slots=True)
class Insertion:
    """Text inserted at an offset of the pre-Enter buffer."""

    offset: int
    text: str


@dataclass(frozen=True, slots=True)
class LogicalPosition:
    """Caret position as a 0-based line and a display column."""

    line: int
    column: int


@dataclass(frozen=True, slots=True)
class EnterResult:
    outcome: Outcome
    insertion: Insertion | None = None
    caret: LogicalPosition | None = None


CONTINUE = EnterResult(Outcome.CONTINUE)


@dataclass(frozen=True, slots=True)
class EditorSession:
    """Host state around one buffer."""

    languages: frozenset[str]
    viewer: bool = False
    tab_width: int = 4


@dataclass(frozen=True, slots=True)
class Editor:
    document: Document
    caret: int
    session: EditorSession


class IndentEnterHandler:
    """Naive, token-driven Enter handling for one registered language."""

    def __init__(self, language: LanguageSupport, formatters: FormatterRegistry) -> None:
        self._language = language
        self._formatters = formatters

    def preprocess_enter(self, editor: Editor | None, options: IndentOptions) -> EnterResult:
        """Decide what pressing Enter at ``editor.caret`` does.

        Returns CONTINUE without touching anything when this handler is not
        responsible, otherwise STOP with the single insertion to perform and,
        for some branches, where the caret goes afterwards.
        """
        if editor is None:
            logger.debug("no editing context, deferring")
            return CONTINUE
        if self._language.id not in editor.session.languages:
            logger.debug(
                "buffer languages %s exclude %r",
                sorted(editor.session.languages),
                self._language.id,
            )
            return CONTINUE
        if editor.session.viewer:
            logger.debug("editor is a viewer, deferring")
            return CONTINUE

        document = editor.document
        if not document.writable:
            logger.debug("document is read-only, deferring")
            return CONTINUE

        caret = editor.caret
        if caret <= 0:
            logger.debug("caret at start of buffer, deferring")
            return CONTINUE

        # Re-lex on every call; token state never outlives one keystroke
        tokens = self._language.tokenize(document.text)

        line_number = document.line_number(caret)
        line_start = document.line_start_offset(line_number)
        previous_line_start = (
            document.line_start_offset(line_number - 1) if line_number > 0 else line_start
        )
        token = nearest_non_whitespace_token(
            tokens,
            token_index_at(tokens, caret - 1),
            previous_line_start,
            self._language.whitespace_tokens,
        )
        token_type = token.type if token is not None else None

        text = document.text
        line_indent = text[line_start : document.first_non_space_offset(line_number)]

        if token is not None and token_type == self._language.line_comment_token:
            rest = text[caret : document.line_end_offset(line_number)]
            if rest.strip(" \t"):
                logger.debug("splitting line comment at %d", caret)
                return EnterResult(
                    Outcome.STOP,
                    Insertion(caret, "\n" + line_indent + self._language.line_comment_prefix),
                    LogicalPosition(line_number + 1, 1),
                )
            if token.start < line_start:
                logger.debug("caret follows a comment from the previous line")
                return EnterResult(Outcome.STOP, Insertion(caret, "\n" + line_indent))

        if self._formatters.has_formatter(self._language.id):
            logger.debug("%r has a structural formatter, deferring", self._language.id)
            return CONTINUE

        if token_type in self._language.indent_tokens:
            indent = self.new_indent(document, line_indent, options)
            logger.debug("indenting after %s: %r", token_type, indent)
            return EnterResult(Outcome.STOP, Insertion(caret, "\n" + indent))

        logger.debug("copying indent %r", line_indent)
        return EnterResult(
            Outcome.STOP,
            Insertion(caret, "\n" + line_indent),
            LogicalPosition(line_number + 1, logical_column(line_indent, editor.session.tab_width)),
        )

    def new_indent(self, document: Document, old_indent: str, options: IndentOptions) -> str:
        """Indent for the line after an indent-trigger token."""
        return next_indent(old_indent, document, options)


def apply_result(document: Document, result: EnterResult) -> Document:
    """Perform the insertion of a STOP result; CONTINUE leaves *document* as is."""
    if result.outcome is Outcome.CONTINUE or result.insertion is None:
        return document
    return document.insert(result.insertion.offset, result.insertion.text)


def caret_after(document: Document, result: EnterResult, tab_width: int) -> LogicalPosition:
    """Caret position after *result* was applied to produce *document*.

    Without an explicit caret move the caret stays at the end of the inserted
    text.
    """
    if result.caret is not None:
        return result.caret
    if result.insertion is None:
        raise ValueError("result has no insertion")
    end = result.insertion.offset + len(result.insertion.text)
    line = document.line_number(end)
    before = document.text[document.line_start_offset(line) : end]
    return LogicalPosition(line, logical_column(before, tab_width))
