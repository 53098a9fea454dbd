"""Backward token classification across a line boundary."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Collection, Sequence

from enterindent.tokens import Token, TokenType


def token_index_at(tokens: Sequence[Token], offset: int) -> int:
    """Return the index of the token covering *offset*, or -1 if none does.

    *tokens* must be ordered by start offset, as the lexer produces them.
    """
    starts = [tok.start for tok in tokens]
    return bisect_right(starts, offset) - 1


def nearest_non_whitespace_token(
    tokens: Sequence[Token],
    index: int,
    bound: int,
    whitespace: Collection[TokenType],
) -> Token | None:
    """Walk backward from ``tokens[index]`` to the first non-whitespace token.

    Stops and returns None as soon as a token starts before *bound* or the
    stream is exhausted.
    """
    while 0 <= index < len(tokens) and tokens[index].start >= bound:
        tok = tokens[index]
        if tok.type not in whitespace:
            return tok
        index -= 1
    return None
