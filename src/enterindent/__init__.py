"""Smart Enter handling for source-code buffers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from enterindent.engine import EnterResult
    from enterindent.indent import IndentOptions

__version__ = "0.1.0"


def press_enter(
    source: str,
    caret: int,
    language_id: str,
    options: IndentOptions | None = None,
    tab_width: int = 4,
) -> tuple[str, EnterResult]:
    """Press Enter at *caret* in *source* and return the new text and the decision.

    A deferred (CONTINUE) decision leaves *source* unchanged.
    """
    from enterindent.document import Document
    from enterindent.engine import Editor, EditorSession, IndentEnterHandler, apply_result
    from enterindent.indent import IndentOptions
    from enterindent.languages import FormatterRegistry, default_registry

    language = default_registry().get(language_id)
    if language is None:
        raise ValueError(f"unknown language: {language_id}")

    document = Document(source)
    handler = IndentEnterHandler(language, FormatterRegistry())
    session = EditorSession(languages=frozenset({language_id}), tab_width=tab_width)
    result = handler.preprocess_enter(
        Editor(document, caret, session),
        options if options is not None else IndentOptions(),
    )
    return apply_result(document, result).text, result
