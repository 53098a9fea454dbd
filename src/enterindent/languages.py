"""Per-language token registration and the structural formatter registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePath

from enterindent.lexer import LexerSyntax, tokenize
from enterindent.tokens import Token, TokenType

WHITESPACE_TOKENS = frozenset({TokenType.WS, TokenType.NEWLINE})


@dataclass(frozen=True, slots=True)
class LanguageSupport:
    """Token sets the Enter handler needs for one language."""

    id: str
    syntax: LexerSyntax
    line_comment_prefix: str
    indent_tokens: frozenset[TokenType]
    whitespace_tokens: frozenset[TokenType] = WHITESPACE_TOKENS
    line_comment_token: TokenType = TokenType.LINE_COMMENT
    extensions: tuple[str, ...] = ()

    def tokenize(self, text: str) -> list[Token]:
        return tokenize(text, self.syntax)


@dataclass
class LanguageRegistry:
    """Language lookup by id and by file extension."""

    _languages: dict[str, LanguageSupport] = field(default_factory=dict)

    def register(self, language: LanguageSupport) -> None:
        self._languages[language.id] = language

    def get(self, language_id: str) -> LanguageSupport | None:
        return self._languages.get(language_id)

    def ids(self) -> list[str]:
        return sorted(self._languages)

    def for_filename(self, name: str) -> LanguageSupport | None:
        suffix = PurePath(name).suffix.lower()
        if not suffix:
            return None
        for language in self._languages.values():
            if suffix in language.extensions:
                return language
        return None


@dataclass
class FormatterRegistry:
    """Languages that have a structural formatter handling Enter themselves."""

    _languages: set[str] = field(default_factory=set)

    def register(self, language_id: str) -> None:
        self._languages.add(language_id)

    def has_formatter(self, language_id: str) -> bool:
        return language_id in self._languages


C = LanguageSupport(
    id="c",
    syntax=LexerSyntax(line_comments=("//",), block_comment=("/*", "*/"), quotes="\"'`"),
    line_comment_prefix="// ",
    indent_tokens=frozenset({TokenType.LBRACE, TokenType.LPAREN, TokenType.LBRACKET}),
    extensions=(".c", ".h", ".cc", ".cpp", ".hpp", ".java", ".js", ".ts", ".go", ".rs", ".cs"),
)

PYTHON = LanguageSupport(
    id="python",
    syntax=LexerSyntax(line_comments=("#",), block_comment=None, quotes="\"'"),
    line_comment_prefix="# ",
    indent_tokens=frozenset(
        {TokenType.COLON, TokenType.LPAREN, TokenType.LBRACKET, TokenType.LBRACE}
    ),
    extensions=(".py", ".pyi"),
)

SHELL = LanguageSupport(
    id="shell",
    syntax=LexerSyntax(line_comments=("#",), block_comment=None, quotes="\"'"),
    line_comment_prefix="# ",
    indent_tokens=frozenset({TokenType.LBRACE, TokenType.LPAREN}),
    extensions=(".sh", ".bash", ".zsh"),
)

BUILTIN_LANGUAGES = (C, PYTHON, SHELL)


def default_registry() -> LanguageRegistry:
    """Return a fresh registry holding the built-in languages."""
    registry = LanguageRegistry()
    for language in BUILTIN_LANGUAGES:
        registry.register(language)
    return registry
