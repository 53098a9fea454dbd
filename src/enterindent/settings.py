"""Style settings loaded from enterindent.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from enterindent.errors import ConfigError
from enterindent.indent import IndentOptions

CONFIG_FILENAME = "enterindent.toml"


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / CONFIG_FILENAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


@dataclass
class StyleSettings:
    """Indent options per language plus editor-wide display settings."""

    defaults: IndentOptions = field(default_factory=IndentOptions)
    overrides: dict[str, IndentOptions] = field(default_factory=dict)
    tab_width: int = 4
    formatter_languages: list[str] = field(default_factory=list)

    def indent_options(self, language_id: str) -> IndentOptions:
        return self.overrides.get(language_id, self.defaults)

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> StyleSettings:
        """Build settings from a parsed config mapping.

        ``[indent]`` scalar keys are the defaults; ``[indent.<language>]``
        tables override them per language.
        """
        settings = cls()

        cfg_indent = config.get("indent")
        if isinstance(cfg_indent, dict):
            settings.defaults = _apply_indent_keys(settings.defaults, cfg_indent, "indent")
            for key, value in cfg_indent.items():
                if isinstance(value, dict):
                    settings.overrides[key] = _apply_indent_keys(
                        settings.defaults, value, f"indent.{key}"
                    )

        cfg_editor = config.get("editor")
        if isinstance(cfg_editor, dict) and "tab_width" in cfg_editor:
            settings.tab_width = _positive_int(cfg_editor["tab_width"], "editor.tab_width")

        cfg_formatters = config.get("formatters")
        if isinstance(cfg_formatters, dict):
            languages = cfg_formatters.get("languages")
            if isinstance(languages, list):
                for lang in languages:
                    if not isinstance(lang, str):
                        raise ConfigError(
                            f"expected a language id string, got {lang!r}",
                            "formatters.languages",
                        )
                settings.formatter_languages = list(languages)
            elif languages is not None:
                raise ConfigError("expected a list of language ids", "formatters.languages")

        return settings


def _apply_indent_keys(base: IndentOptions, table: dict[str, Any], prefix: str) -> IndentOptions:
    options = base
    if "use_tab_char" in table:
        value = table["use_tab_char"]
        if not isinstance(value, bool):
            raise ConfigError("expected true or false", f"{prefix}.use_tab_char")
        options = replace(options, use_tab_char=value)
    if "indent_size" in table:
        options = replace(
            options, indent_size=_positive_int(table["indent_size"], f"{prefix}.indent_size")
        )
    if "tab_size" in table:
        options = replace(options, tab_size=_positive_int(table["tab_size"], f"{prefix}.tab_size"))
    return options


def _positive_int(value: Any, key: str) -> int:
    # bool is an int subclass; "true" is not a width
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"expected a positive integer, got {value!r}", key)
    return value
