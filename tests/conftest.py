"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from enterindent.document import Document
from enterindent.engine import (
    Editor,
    EditorSession,
    EnterResult,
    IndentEnterHandler,
    apply_result,
)
from enterindent.indent import IndentOptions
from enterindent.languages import FormatterRegistry, default_registry
from enterindent.tokens import Token, TokenType

CARET = "<|>"


@pytest.fixture
def lex():
    """Return a helper that tokenizes source as C and returns tokens (excluding EOF)."""

    def _lex(source: str, language: str = "c") -> list[Token]:
        tokens = default_registry().get(language).tokenize(source)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.type != TokenType.EOF]

    return _lex


@pytest.fixture
def enter():
    """Return a helper that presses Enter at the ``<|>`` marker.

    The helper returns ``(result, text_after)``.
    """

    def _enter(
        marked: str,
        language: str = "c",
        options: IndentOptions | None = None,
        tab_width: int = 4,
        formatters: tuple[str, ...] = (),
        writable: bool = True,
        viewer: bool = False,
        languages: frozenset[str] | None = None,
    ) -> tuple[EnterResult, str]:
        caret = marked.index(CARET)
        document = Document(marked.replace(CARET, "", 1), writable=writable)
        registry = FormatterRegistry()
        for language_id in formatters:
            registry.register(language_id)
        handler = IndentEnterHandler(default_registry().get(language), registry)
        session = EditorSession(
            languages=languages if languages is not None else frozenset({language}),
            viewer=viewer,
            tab_width=tab_width,
        )
        result = handler.preprocess_enter(
            Editor(document, caret, session),
            options if options is not None else IndentOptions(),
        )
        return result, apply_result(document, result).text

    return _enter


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
