"""Language configurations: the single source of truth for extension mapping.

Adding a new language:
  1. Add a Language member and a LanguageConfig entry to LANGUAGES below.
  2. Give it a ``grammar`` if tree-sitter should parse it; otherwise it is
     only classified (counted, never deeply analyzed).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath, PurePosixPath
from typing import Optional, Union


class Language(str, Enum):
    """Semantic language tag derived from a file extension."""

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    JSX = "jsx"
    TSX = "tsx"
    PYTHON = "python"
    GO = "go"
    RUST = "rust"
    JAVA = "java"
    RUBY = "ruby"
    PHP = "php"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class LanguageConfig:
    """Everything the pipeline needs to know about a language."""

    language: Language
    extensions: tuple[str, ...]
    # tree-sitter grammar name, or None for classify-only languages
    grammar: Optional[str] = None
    display_name: str = ""


# ── Language definitions ───────────────────────────────────────────

LANGUAGES: dict[Language, LanguageConfig] = {
    Language.JAVASCRIPT: LanguageConfig(
        language=Language.JAVASCRIPT,
        # .mjs/.cjs (and .mts/.cts below) are module-format variants, same grammar
        extensions=(".js", ".mjs", ".cjs"),
        grammar="javascript",
        display_name="JavaScript",
    ),
    Language.JSX: LanguageConfig(
        language=Language.JSX,
        extensions=(".jsx",),
        grammar="javascript",
        display_name="JavaScript",
    ),
    Language.TYPESCRIPT: LanguageConfig(
        language=Language.TYPESCRIPT,
        extensions=(".ts", ".mts", ".cts"),
        grammar="typescript",
        display_name="TypeScript",
    ),
    Language.TSX: LanguageConfig(
        language=Language.TSX,
        extensions=(".tsx",),
        grammar="tsx",
        display_name="TypeScript",
    ),
    Language.PYTHON: LanguageConfig(
        language=Language.PYTHON, extensions=(".py",), display_name="Python"
    ),
    Language.GO: LanguageConfig(language=Language.GO, extensions=(".go",), display_name="Go"),
    Language.RUST: LanguageConfig(
        language=Language.RUST, extensions=(".rs",), display_name="Rust"
    ),
    Language.JAVA: LanguageConfig(
        language=Language.JAVA, extensions=(".java",), display_name="Java"
    ),
    Language.RUBY: LanguageConfig(
        language=Language.RUBY, extensions=(".rb",), display_name="Ruby"
    ),
    Language.PHP: LanguageConfig(language=Language.PHP, extensions=(".php",), display_name="PHP"),
}


# Extension to language mapping (built from LANGUAGES)
_EXTENSION_TO_LANGUAGE: dict[str, Language] = {}
for _lang, _cfg in LANGUAGES.items():
    for _ext in _cfg.extensions:
        _EXTENSION_TO_LANGUAGE[_ext] = _lang


def detect_language(filepath: Union[str, PurePath, None]) -> Language:
    """Detect language from file extension.

    Total: every input maps to a Language, with ``Language.UNKNOWN`` for
    empty strings, extension-less names and unrecognized extensions.

    Args:
        filepath: Path object or string

    Returns:
        Language tag
    """
    if filepath is None:
        return Language.UNKNOWN
    name = str(filepath).replace("\\", "/")
    ext = PurePosixPath(name).suffix.lower()
    return _EXTENSION_TO_LANGUAGE.get(ext, Language.UNKNOWN)


def get_language_config(language: Language) -> Optional[LanguageConfig]:
    """Look up the configuration for a language tag (None for unknown)."""
    return LANGUAGES.get(language)


def grammar_for(language: Language) -> Optional[str]:
    """Name of the tree-sitter grammar that parses ``language``, if any."""
    cfg = LANGUAGES.get(language)
    return cfg.grammar if cfg is not None else None


def is_parseable(language: Language) -> bool:
    """True for the JavaScript/TypeScript family the extractor understands."""
    return grammar_for(language) is not None


def is_typescript(language: Language) -> bool:
    """True for languages reported as TypeScript in the technology list."""
    return language in (Language.TYPESCRIPT, Language.TSX)


def get_all_known_extensions() -> set[str]:
    """Return the set of all file extensions with a language tag."""
    return set(_EXTENSION_TO_LANGUAGE)
