"""Language classification, parsing and per-file syntax extraction."""

from .complexity import BRANCH_NODE_TYPES, cyclomatic_complexity
from .languages import (
    LANGUAGES,
    Language,
    LanguageConfig,
    detect_language,
    get_all_known_extensions,
    get_language_config,
    is_parseable,
)
from .normalizer import ExtractedSyntax, TreeSitterNormalizer
from .scanner import LocalRepositoryScanner, ScanResult
from .syntax import (
    ClassRecord,
    ExportKind,
    ExportRecord,
    FunctionRecord,
    ImportRecord,
    ParsedFile,
    ParseFailure,
    SourceFile,
)
from .syntax_extractor import SyntaxExtractor
from .treesitter_parser import TreeSitterParser

__all__ = [
    # Language config
    "Language",
    "LanguageConfig",
    "LANGUAGES",
    "detect_language",
    "get_language_config",
    "get_all_known_extensions",
    "is_parseable",
    # Syntax models
    "SourceFile",
    "FunctionRecord",
    "ClassRecord",
    "ImportRecord",
    "ExportKind",
    "ExportRecord",
    "ParsedFile",
    "ParseFailure",
    # Components
    "TreeSitterParser",
    "TreeSitterNormalizer",
    "ExtractedSyntax",
    "SyntaxExtractor",
    "LocalRepositoryScanner",
    "ScanResult",
    "BRANCH_NODE_TYPES",
    "cyclomatic_complexity",
]
