"""Command-line interface: press Enter at a position in a file."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from enterindent.document import Document
from enterindent.engine import (
    Editor,
    EditorSession,
    EnterResult,
    IndentEnterHandler,
    Insertion,
    LogicalPosition,
    Outcome,
    apply_result,
    caret_after,
)
from enterindent.errors import ConfigError, PositionError
from enterindent.indent import logical_column
from enterindent.languages import FormatterRegistry, LanguageSupport, default_registry
from enterindent.settings import StyleSettings, load_config

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    line: int
    column: int
    language: LanguageSupport
    settings: StyleSettings
    read_only: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="enterindent",
        description="Apply smart Enter handling at a position in a source file",
    )
    p.add_argument("input", help="Input source file")
    p.add_argument(
        "--at",
        required=True,
        metavar="LINE:COL",
        help="Caret position, 1-based line and character column",
    )
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover enterindent.toml)",
    )
    p.add_argument(
        "--language",
        metavar="ID",
        help="Language id (default: guessed from the file extension)",
    )
    p.add_argument(
        "--tab-width",
        type=int,
        default=None,
        metavar="N",
        help="Tab display width in columns (default: 4)",
    )
    p.add_argument("--read-only", action="store_true", help="Treat the buffer as not writable")
    p.add_argument(
        "--log-level",
        default=None,
        metavar="LEVEL",
        help="Logging level (default: $ENTERINDENT_LOG_LEVEL or WARNING)",
    )
    return p


def parse_position_arg(s: str) -> tuple[int, int]:
    """Parse a LINE:COL string into 1-based (line, column)."""
    line, sep, column = s.partition(":")
    if not sep or not line.isdigit() or not column.isdigit():
        raise argparse.ArgumentTypeError(f"invalid position (expected LINE:COL): {s}")
    if int(line) < 1 or int(column) < 1:
        raise argparse.ArgumentTypeError(f"position is 1-based: {s}")
    return int(line), int(column)


def resolve_log_level(arg: str | None) -> int:
    """Return the level named by *arg*, then $ENTERINDENT_LOG_LEVEL, else WARNING."""
    value = arg or os.environ.get("ENTERINDENT_LOG_LEVEL")
    if not value:
        return logging.WARNING
    value = value.strip().upper()
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value)
    if not isinstance(level, int):
        raise argparse.ArgumentTypeError(f"unknown log level: {value}")
    return level


def setup_logging(level: int) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    settings = StyleSettings.from_config(load_config(config_path, input_dir))

    if args.tab_width is not None:
        if args.tab_width <= 0:
            raise argparse.ArgumentTypeError(f"tab width must be positive: {args.tab_width}")
        settings.tab_width = args.tab_width

    registry = default_registry()
    if args.language:
        language = registry.get(args.language)
        if language is None:
            known = ", ".join(registry.ids())
            raise argparse.ArgumentTypeError(
                f"unknown language {args.language!r} (known: {known})"
            )
    else:
        language = registry.for_filename(input_file.name)
        if language is None:
            raise argparse.ArgumentTypeError(
                f"cannot guess the language of {input_file.name}; pass --language"
            )

    line, column = parse_position_arg(args.at)
    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        line=line,
        column=column,
        language=language,
        settings=settings,
        read_only=args.read_only,
    )


def press_enter(options: CliOptions, source: str) -> tuple[Document, EnterResult, LogicalPosition]:
    """Run the Enter handler on *source*, falling back to a plain line break."""
    document = Document(source, writable=not options.read_only)
    caret = document.offset_at(options.line - 1, options.column - 1)

    formatters = FormatterRegistry()
    for language_id in options.settings.formatter_languages:
        formatters.register(language_id)

    handler = IndentEnterHandler(options.language, formatters)
    session = EditorSession(
        languages=frozenset({options.language.id}),
        tab_width=options.settings.tab_width,
    )
    result = handler.preprocess_enter(
        Editor(document, caret, session),
        options.settings.indent_options(options.language.id),
    )

    if result.outcome is Outcome.STOP:
        edited = apply_result(document, result)
        return edited, result, caret_after(edited, result, session.tab_width)

    if not document.writable:
        logger.warning("%s is read-only, nothing inserted", options.input_file)
        line = document.line_number(caret)
        before = document.text[document.line_start_offset(line) : caret]
        return document, result, LogicalPosition(line, logical_column(before, session.tab_width))

    logger.info("handler deferred, inserting a plain line break")
    fallback = EnterResult(Outcome.CONTINUE, Insertion(caret, "\n"))
    edited = document.insert(caret, "\n")
    return edited, fallback, caret_after(edited, fallback, session.tab_width)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        setup_logging(resolve_log_level(args.log_level))
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except ConfigError as exc:
        print(exc.format(), file=sys.stderr)
        return 2

    try:
        # Bytes, so \r\n survives
        source = options.input_file.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        edited, result, caret = press_enter(options, source)
    except PositionError as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1

    if options.output_file:
        options.output_file.write_bytes(edited.text.encode("utf-8"))
    else:
        sys.stdout.write(edited.text)

    print(
        f"{result.outcome.name.lower()}: caret at {caret.line + 1}:{caret.column + 1}",
        file=sys.stderr,
    )
    return 0
