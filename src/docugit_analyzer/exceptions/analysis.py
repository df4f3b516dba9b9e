"""Errors raised while reading or parsing repository files.

Inside a batch these never escape: the extractor turns every per-file
problem into a ParseFailure. They surface only from single-file entry
points such as ``parse_file`` and from the local scanner.
"""

from pathlib import Path
from typing import Sequence, Union

from .base import DocugitAnalyzerError

PathLike = Union[str, Path]


class AnalysisError(DocugitAnalyzerError):
    """A file could not be turned into a ParsedFile."""


class FileAccessError(AnalysisError):
    """A source file or manifest exists but cannot be read."""

    def __init__(self, filepath: PathLike, reason: str):
        super().__init__(
            f"Cannot read {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Source text has syntax errors (or cannot be encoded) for its grammar."""

    def __init__(self, filepath: PathLike, language: str, reason: str):
        super().__init__(
            f"Failed to parse {language} file: {filepath}",
            details={"filepath": str(filepath), "language": language, "reason": reason},
        )
        self.filepath = filepath
        self.language = language
        self.reason = reason


class UnsupportedLanguageError(AnalysisError):
    """No bundled tree-sitter grammar handles the requested language."""

    def __init__(self, language: str, supported_languages: Sequence[str]):
        self.language = language
        self.supported_languages = list(supported_languages)
        super().__init__(
            f"No grammar for language '{language}'",
            details={"language": language, "supported": ", ".join(self.supported_languages)},
        )
