"""Exception hierarchy for docugit-analyzer.

    DocugitAnalyzerError
    ├── AnalysisError
    │   ├── FileAccessError
    │   ├── ParsingError
    │   └── UnsupportedLanguageError
    └── ConfigurationError
        ├── InvalidPathError
        └── InvalidConfigError
"""

from .analysis import AnalysisError, FileAccessError, ParsingError, UnsupportedLanguageError
from .base import DocugitAnalyzerError
from .config import ConfigurationError, InvalidConfigError, InvalidPathError

__all__ = [
    "DocugitAnalyzerError",
    # per-file problems
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
    "UnsupportedLanguageError",
    # caller input
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
