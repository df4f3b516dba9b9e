"""
docugit-analyzer - Static structure analysis for JavaScript/TypeScript repositories

Parses every JS/TS/JSX/TSX file with tree-sitter and reports functions,
classes, imports, exports and cyclomatic complexity, detects React
components and Next.js API routes, and categorizes package.json
dependencies. The JSON result feeds documentation generators.
"""

__version__ = "0.3.0"

from .api import analyze, analyze_path, parse_file
from .analysis.models import AnalysisResult
from .config import AnalysisConfig, CategoryPatterns, load_config
from .scanning.syntax import ParsedFile, ParseFailure, SourceFile

__all__ = [
    "analyze",  # Main entry point
    "analyze_path",
    "parse_file",
    "AnalysisResult",
    "AnalysisConfig",
    "CategoryPatterns",
    "load_config",
    "ParsedFile",
    "ParseFailure",
    "SourceFile",
]
