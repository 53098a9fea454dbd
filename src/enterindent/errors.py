"""Error types with formatted source context."""

from __future__ import annotations


class PositionError(Exception):
    """Raised when a requested caret position lies outside the buffer."""

    def __init__(self, message: str, line: int, column: int, source: str) -> None:
        self.message = message
        self.line = line
        self.column = column
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "<buffer>") -> str:
        """Render the error with the offending line, 1-based, like a compiler."""
        lines = self.source.splitlines()
        line_idx = self.line - 1

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx]
        else:
            source_line = ""

        col = max(1, min(self.column, len(source_line) + 1))
        pad = " " * (col - 1)

        line_num = str(self.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.line}:{self.column}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}^"
        )


class ConfigError(Exception):
    """Raised on an invalid configuration value."""

    def __init__(self, message: str, key: str) -> None:
        self.message = message
        self.key = key
        super().__init__(self.format())

    def format(self, filename: str = "enterindent.toml") -> str:
        return f"error: {filename}: {self.key}: {self.message}"
