"""Public API for docugit-analyzer.

Example:
    >>> from docugit_analyzer import analyze
    >>>
    >>> result = analyze(
    ...     [("src/lib/users.ts", "export async function getUser(id) { return id }")],
    ...     manifest={"dependencies": {"next": "14.0.0"}},
    ... )
    >>> result.metrics.total_functions
    1
    >>> result.to_dict()["dependencies"]["frameworks"]
    ['next']
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from .analysis.engine import AnalysisEngine
from .analysis.models import AnalysisResult
from .config import DEFAULT_CONFIG, AnalysisConfig
from .exceptions import ParsingError, UnsupportedLanguageError
from .logging_config import get_logger
from .scanning.languages import LANGUAGES, detect_language, is_parseable
from .scanning.normalizer import TreeSitterNormalizer
from .scanning.scanner import LocalRepositoryScanner
from .scanning.syntax import ParsedFile, ParseFailure, SourceFile

logger = get_logger(__name__)

FileInput = Union[SourceFile, Tuple[str, str], Mapping[str, Any]]


def _as_source_file(item: FileInput) -> SourceFile:
    if isinstance(item, SourceFile):
        return item
    if isinstance(item, Mapping):
        try:
            return SourceFile(str(item["path"]), str(item["content"]))
        except KeyError as e:
            raise TypeError(f"file mapping is missing {e}") from None
    if isinstance(item, (tuple, list)) and len(item) == 2:
        path, content = item
        if isinstance(path, str) and isinstance(content, str):
            return SourceFile(path, content)
    raise TypeError(
        f"expected SourceFile, (path, content) pair or mapping, got {type(item).__name__}"
    )


def analyze(
    files: Iterable[FileInput],
    manifest: Optional[Mapping[str, Any]] = None,
    config: Optional[AnalysisConfig] = None,
) -> AnalysisResult:
    """Analyze an in-memory file set.

    Args:
        files: SourceFile records, ``(path, content)`` pairs or
            ``{"path": ..., "content": ...}`` mappings
        manifest: ``package.json``-shaped mapping (``dependencies``,
            ``devDependencies``), or None
        config: Analysis configuration (default: built-in defaults)

    Returns:
        AnalysisResult; per-file problems are reported in ``failed_files``

    Raises:
        TypeError: If ``files`` is None or holds something that is not a file
    """
    if files is None:
        raise TypeError("files must be an iterable of source files, not None")
    if manifest is not None and not isinstance(manifest, Mapping):
        raise TypeError(f"manifest must be a mapping, got {type(manifest).__name__}")

    source_files = [_as_source_file(item) for item in files]
    return AnalysisEngine(config or DEFAULT_CONFIG).run(source_files, manifest)


def analyze_path(
    path: Union[str, Path] = ".", config: Optional[AnalysisConfig] = None
) -> AnalysisResult:
    """Analyze a local checkout.

    Walks ``path`` (skipping dependency, build and hidden directories),
    keeps the ``max_files`` most relevant source files, reads
    ``package.json`` if present and runs the pipeline.

    Raises:
        InvalidPathError: If ``path`` does not exist or is not a directory
    """
    config = config or DEFAULT_CONFIG
    logger.info(f"Starting analysis of {path}")
    scan = LocalRepositoryScanner(path, config).scan()
    return AnalysisEngine(config).run(scan.files, scan.manifest)


def parse_file(
    path: str, content: str, normalizer: Optional[TreeSitterNormalizer] = None
) -> ParsedFile:
    """Parse one file, raising instead of returning a failure marker.

    Raises:
        UnsupportedLanguageError: If the path is not JavaScript/TypeScript
        ParsingError: If the content does not parse cleanly
    """
    language = detect_language(path)
    if not is_parseable(language):
        supported = [lang.value for lang in LANGUAGES if is_parseable(lang)]
        raise UnsupportedLanguageError(language.value, supported)

    result = (normalizer or TreeSitterNormalizer()).parse_file(SourceFile(path, content))
    if isinstance(result, ParseFailure):
        raise ParsingError(path, language.value, result.reason)
    return result
