"""Read-mostly text buffer with line/offset bookkeeping."""

from __future__ import annotations

from bisect import bisect_right

from enterindent.errors import PositionError


class Document:
    """Immutable buffer text plus a line-start index.

    Lines are split on ``\\n``; a preceding ``\\r`` belongs to the line break,
    not to the line content.
    """

    def __init__(self, text: str, writable: bool = True) -> None:
        self._text = text
        self.writable = writable
        self._line_starts = [0]
        for i, ch in enumerate(text):
            if ch == "\n":
                self._line_starts.append(i + 1)

    def __repr__(self) -> str:
        return f"Document(lines={self.line_count}, writable={self.writable})"

    @property
    def text(self) -> str:
        return self._text

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def line_number(self, offset: int) -> int:
        """Return the 0-based line containing *offset* (clamped to the buffer)."""
        offset = max(0, min(offset, len(self._text)))
        return bisect_right(self._line_starts, offset) - 1

    def line_start_offset(self, line: int) -> int:
        return self._line_starts[line]

    def line_end_offset(self, line: int) -> int:
        if line + 1 < len(self._line_starts):
            end = self._line_starts[line + 1] - 1
            if end > self._line_starts[line] and self._text[end - 1] == "\r":
                end -= 1
            return end
        return len(self._text)

    def first_non_space_offset(self, line: int) -> int:
        """Offset of the first character on *line* that is not a space or tab.

        A blank line yields its end offset.
        """
        pos = self.line_start_offset(line)
        end = self.line_end_offset(line)
        while pos < end and self._text[pos] in " \t":
            pos += 1
        return pos

    def line_indent(self, line: int) -> str:
        return self._text[self.line_start_offset(line) : self.first_non_space_offset(line)]

    def line_text(self, line: int) -> str:
        return self._text[self.line_start_offset(line) : self.line_end_offset(line)]

    def offset_at(self, line: int, column: int) -> int:
        """Convert a 0-based line and character column to an offset."""
        if not 0 <= line < self.line_count:
            raise PositionError(
                f"line {line + 1} is outside the buffer ({self.line_count} lines)",
                line + 1,
                column + 1,
                self._text,
            )
        length = self.line_end_offset(line) - self.line_start_offset(line)
        if not 0 <= column <= length:
            raise PositionError(
                f"column {column + 1} is outside line {line + 1} ({length} characters)",
                line + 1,
                column + 1,
                self._text,
            )
        return self.line_start_offset(line) + column

    def insert(self, offset: int, text: str) -> Document:
        """Return a new document with *text* inserted at *offset*."""
        return Document(self._text[:offset] + text + self._text[offset:], self.writable)
