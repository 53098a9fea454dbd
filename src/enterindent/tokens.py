"""Token types and data structures for the bundled highlighter lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    # Layout
    WS = auto()  # horizontal whitespace (spaces/tabs)
    NEWLINE = auto()  # \n or \r\n

    # Comments
    LINE_COMMENT = auto()  # marker up to (not including) the line break
    BLOCK_COMMENT = auto()  # /* ... */, may span lines

    # Content
    STRING = auto()  # quoted literal, ends at its quote or end of line
    IDENTIFIER = auto()  # letters, digits, underscore
    NUMBER = auto()

    # Delimiters
    LBRACE = auto()  # {
    RBRACE = auto()  # }
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    LBRACKET = auto()  # [
    RBRACKET = auto()  # ]
    COLON = auto()  # :
    SEMICOLON = auto()  # ;
    COMMA = auto()  # ,

    OPERATOR = auto()  # runs of operator characters
    TEXT = auto()  # anything else

    EOF = auto()


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token with its source text."""

    type: TokenType
    text: str
    span: Span

    @property
    def start(self) -> int:
        return self.span.start.offset

    @property
    def end(self) -> int:
        return self.span.end.offset


SINGLE_CHAR_TOKENS = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
}

_OPERATOR_CHARS = frozenset("+-*/%=<>!&|^~?.@$\\")


def is_ident_start(ch: str) -> bool:
    """Return True if ch can start an identifier."""
    return ch.isalpha() or ch == "_"


def is_ident_char(ch: str) -> bool:
    """Return True if ch is a valid identifier character."""
    return ch.isalnum() or ch == "_"


def is_operator_char(ch: str) -> bool:
    return ch in _OPERATOR_CHARS
