"""Test indent style inference, next-indent computation and logical columns."""

from __future__ import annotations

from enterindent.document import Document
from enterindent.indent import (
    IndentOptions,
    infer_non_empty_indent,
    logical_column,
    next_indent,
    tab_count,
)


class TestTabCount:
    def test_exact_division(self) -> None:
        assert tab_count(8, 4) == 2

    def test_remainder_rounds_up(self) -> None:
        assert tab_count(4, 3) == 2
        assert tab_count(2, 4) == 1

    def test_covers_indent_size(self) -> None:
        for indent_size in range(1, 17):
            for tab_size in range(1, 9):
                count = tab_count(indent_size, tab_size)
                assert count >= 1
                assert count * tab_size >= indent_size
                assert (count - 1) * tab_size < indent_size


class TestInferNonEmptyIndent:
    def test_no_indented_line(self) -> None:
        assert infer_non_empty_indent(Document("a\nb\n")) == ""

    def test_empty_document(self) -> None:
        assert infer_non_empty_indent(Document("")) == ""

    def test_first_indented_line_wins(self) -> None:
        doc = Document("a\n\tb\n    c")
        assert infer_non_empty_indent(doc) == "\t"

    def test_whitespace_only_line_counts(self) -> None:
        assert infer_non_empty_indent(Document("a\n  \nb")) == "  "

    def test_mixed_indent_returned_verbatim(self) -> None:
        assert infer_non_empty_indent(Document("x\n \t y")) == " \t "

    def test_repeatable(self) -> None:
        doc = Document("a\n  b\n\tc")
        assert infer_non_empty_indent(doc) == infer_non_empty_indent(doc)


class TestNextIndent:
    def test_first_indent_spaces(self) -> None:
        doc = Document("if (x) {")
        options = IndentOptions(use_tab_char=False, indent_size=4, tab_size=4)
        assert next_indent("", doc, options) == "    "

    def test_first_indent_tabs(self) -> None:
        doc = Document("if (x) {")
        options = IndentOptions(use_tab_char=True, indent_size=4, tab_size=2)
        assert next_indent("", doc, options) == "\t\t"

    def test_existing_space_indent_overrides_tab_preference(self) -> None:
        options = IndentOptions(use_tab_char=True, indent_size=2, tab_size=4)
        assert next_indent("    ", Document("    x {"), options) == "      "

    def test_existing_tab_indent_overrides_space_preference(self) -> None:
        options = IndentOptions(use_tab_char=False, indent_size=4, tab_size=4)
        assert next_indent("\t", Document("\tx {"), options) == "\t\t"

    def test_style_inferred_from_other_lines(self) -> None:
        doc = Document("int a;\n\tint b;\nvoid f() {")
        options = IndentOptions(use_tab_char=False, indent_size=8, tab_size=4)
        assert next_indent("", doc, options) == "\t\t"

    def test_space_style_inferred_from_other_lines(self) -> None:
        doc = Document("x\n  y\nf() {")
        options = IndentOptions(use_tab_char=True, indent_size=2, tab_size=4)
        assert next_indent("", doc, options) == "  "

    def test_trailing_character_decides_style(self) -> None:
        options = IndentOptions(indent_size=4, tab_size=4)
        assert next_indent(" \t", Document(" \tx"), options) == " \t\t"
        assert next_indent("\t ", Document("\t x"), options) == "\t     "


class TestLogicalColumn:
    def test_spaces(self) -> None:
        assert logical_column("    ", 8) == 4

    def test_tab_counts_tab_width(self) -> None:
        assert logical_column("\t", 4) == 4
        assert logical_column("\t", 8) == 8

    def test_mixed(self) -> None:
        assert logical_column("\t  \t", 4) == 10

    def test_empty(self) -> None:
        assert logical_column("", 4) == 0

    def test_additive(self) -> None:
        pieces = ["", " ", "\t", "  \t", "\t\t ", "    "]
        for a in pieces:
            for b in pieces:
                for width in (1, 2, 4, 8):
                    assert logical_column(a + b, width) == (
                        logical_column(a, width) + logical_column(b, width)
                    )
