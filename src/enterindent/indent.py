"""Indent style inference, next-indent computation and logical columns."""

from __future__ import annotations

from dataclasses import dataclass

from enterindent.document import Document


@dataclass(frozen=True, slots=True)
class IndentOptions:
    """Indentation width, tab width and tabs-vs-spaces preference."""

    use_tab_char: bool = False
    indent_size: int = 4
    tab_size: int = 4


def infer_non_empty_indent(document: Document) -> str:
    """Return the indent of the first indented line, or "" if none is."""
    text = document.text
    for line in range(document.line_count):
        start = document.line_start_offset(line)
        indent_end = document.first_non_space_offset(line)
        if start < indent_end:
            return text[start:indent_end]
    return ""


def tab_count(indent_size: int, tab_size: int) -> int:
    """Number of tabs covering *indent_size* columns: ceil(indent/tab), at least 1."""
    count, remainder = divmod(indent_size, tab_size)
    if remainder:
        count += 1
    return max(1, count)


def next_indent(old_indent: str, document: Document, options: IndentOptions) -> str:
    """Return *old_indent* extended by one indentation level.

    The style follows the existing indent: *old_indent* itself when it is
    non-empty, otherwise the first indented line of the buffer. Only a buffer
    without any indentation falls back to ``options.use_tab_char``.
    """
    effective = old_indent or infer_non_empty_indent(document)
    uses_spaces = bool(effective) and effective[-1] == " "
    first_indent = not effective

    if (first_indent and options.use_tab_char) or (not first_indent and not uses_spaces):
        return old_indent + "\t" * tab_count(options.indent_size, options.tab_size)
    return old_indent + " " * options.indent_size


def logical_column(indent: str, tab_width: int) -> int:
    """Display width of *indent*, counting each tab as *tab_width* columns."""
    column = 0
    for ch in indent:
        if ch == "\t":
            column += tab_width
        else:
            column += 1
    return column
