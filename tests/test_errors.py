"""Test error messages, position accuracy, and context snippets."""

import pytest

from enterindent.document import Document
from enterindent.errors import PositionError


class TestErrorPositions:
    def test_line_past_end(self):
        with pytest.raises(PositionError) as exc_info:
            Document("one\ntwo").offset_at(5, 0)
        err = exc_info.value
        assert err.line == 6
        assert err.column == 1

    def test_column_past_end(self):
        with pytest.raises(PositionError) as exc_info:
            Document("one\ntwo").offset_at(1, 9)
        err = exc_info.value
        assert err.line == 2
        assert err.column == 10


class TestErrorFormatting:
    def _error(self, source: str, line: int, column: int) -> PositionError:
        with pytest.raises(PositionError) as exc_info:
            Document(source).offset_at(line, column)
        return exc_info.value

    def test_format_contains_line(self):
        formatted = self._error("some text here", 0, 40).format()
        assert "some text here" in formatted

    def test_format_contains_caret(self):
        formatted = self._error("abc", 0, 9).format()
        assert formatted.splitlines()[-1].endswith("^")

    def test_caret_clamped_to_line_end(self):
        formatted = self._error("abc", 0, 9).format()
        assert formatted.splitlines()[-1] == "  |    ^"

    def test_format_contains_error_prefix(self):
        formatted = self._error("abc", 0, 9).format()
        assert formatted.startswith("error:")

    def test_format_with_custom_filename(self):
        formatted = self._error("abc", 0, 9).format("main.c")
        assert "--> main.c:1:10" in formatted

    def test_line_outside_buffer_has_empty_context(self):
        formatted = self._error("abc", 3, 0).format()
        assert "4 | \n" in formatted
