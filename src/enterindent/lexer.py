"""Highlighter lexer: converts buffer text into a flat token stream.

The lexer never fails. Editors re-lex half-typed code on every keystroke, so
an unterminated string ends at the end of its line and an unterminated block
comment runs to the end of the buffer.
"""

from __future__ import annotations

from dataclasses import dataclass

from enterindent.tokens import (
    SINGLE_CHAR_TOKENS,
    Position,
    Span,
    Token,
    TokenType,
    is_ident_char,
    is_ident_start,
    is_operator_char,
)


@dataclass(frozen=True, slots=True)
class LexerSyntax:
    """Lexical shape of a language: comment markers and string quotes."""

    line_comments: tuple[str, ...] = ("//",)
    block_comment: tuple[str, str] | None = ("/*", "*/")
    quotes: str = "\"'"


class Lexer:
    """Tokenize buffer text into a stream of Token objects."""

    def __init__(self, source: str, syntax: LexerSyntax | None = None) -> None:
        self._source = source
        self._syntax = syntax if syntax is not None else LexerSyntax()
        self._pos = 0
        self._line = 1
        self._col = 1
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Tokenize the full source and return the token list."""
        while self._pos < len(self._source):
            self._lex_one()
        self._emit(TokenType.EOF, self._current_pos())
        return self._tokens

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _at(self, marker: str) -> bool:
        return self._source.startswith(marker, self._pos)

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _emit(self, tt: TokenType, start: Position) -> Token:
        end = self._current_pos()
        tok = Token(tt, self._source[start.offset : end.offset], Span(start, end))
        self._tokens.append(tok)
        return tok

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _lex_one(self) -> None:
        ch = self._peek()
        start = self._current_pos()

        if ch == "\n":
            self._advance()
            self._emit(TokenType.NEWLINE, start)
            return

        if ch == "\r" and self._peek(1) == "\n":
            self._advance()
            self._advance()
            self._emit(TokenType.NEWLINE, start)
            return

        if ch in " \t":
            while self._pos < len(self._source) and self._peek() in " \t":
                self._advance()
            self._emit(TokenType.WS, start)
            return

        # Comments win over operators: "//" would otherwise lex as "/" "/"
        for marker in self._syntax.line_comments:
            if self._at(marker):
                self._lex_line_comment(start)
                return

        block = self._syntax.block_comment
        if block is not None and self._at(block[0]):
            self._lex_block_comment(start, block)
            return

        if ch in self._syntax.quotes:
            self._lex_string(start, ch)
            return

        if ch in SINGLE_CHAR_TOKENS:
            self._advance()
            self._emit(SINGLE_CHAR_TOKENS[ch], start)
            return

        if is_ident_start(ch):
            while self._pos < len(self._source) and is_ident_char(self._peek()):
                self._advance()
            self._emit(TokenType.IDENTIFIER, start)
            return

        if ch.isdigit():
            self._lex_number(start)
            return

        if is_operator_char(ch):
            while self._pos < len(self._source) and is_operator_char(self._peek()):
                if self._starts_comment():
                    break
                self._advance()
            self._emit(TokenType.OPERATOR, start)
            return

        # Anything else is TEXT, one character at a time
        self._advance()
        self._emit(TokenType.TEXT, start)

    def _starts_comment(self) -> bool:
        if any(self._at(marker) for marker in self._syntax.line_comments):
            return True
        block = self._syntax.block_comment
        return block is not None and self._at(block[0])

    # ------------------------------------------------------------------
    # Multi-character tokens
    # ------------------------------------------------------------------

    def _lex_line_comment(self, start: Position) -> None:
        while self._pos < len(self._source):
            ch = self._peek()
            if ch == "\n" or (ch == "\r" and self._peek(1) == "\n"):
                break
            self._advance()
        self._emit(TokenType.LINE_COMMENT, start)

    def _lex_block_comment(self, start: Position, block: tuple[str, str]) -> None:
        opener, closer = block
        for _ in opener:
            self._advance()
        while self._pos < len(self._source):
            if self._at(closer):
                for _ in closer:
                    self._advance()
                break
            self._advance()
        self._emit(TokenType.BLOCK_COMMENT, start)

    def _lex_string(self, start: Position, quote: str) -> None:
        self._advance()  # opening quote
        while self._pos < len(self._source):
            ch = self._peek()
            if ch == "\n" or (ch == "\r" and self._peek(1) == "\n"):
                break
            self._advance()
            if ch == "\\" and self._pos < len(self._source) and self._peek() != "\n":
                self._advance()
            elif ch == quote:
                break
        self._emit(TokenType.STRING, start)

    def _lex_number(self, start: Position) -> None:
        while self._pos < len(self._source):
            ch = self._peek()
            if ch.isalnum() or ch == "_" or (ch == "." and self._peek(1).isdigit()):
                self._advance()
            else:
                break
        self._emit(TokenType.NUMBER, start)


def tokenize(source: str, syntax: LexerSyntax | None = None) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source, syntax).tokenize()
