"""Local repository scanner: the file source for ``analyze_path``.

Walks a checkout on disk, ranks source files by how much they tell about
the project (app routes, components and libraries before everything else)
and reads ``package.json`` when the root has one.
"""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from ..config import DEFAULT_CONFIG, AnalysisConfig
from ..exceptions import FileAccessError, InvalidPathError
from ..logging_config import get_logger
from .languages import get_all_known_extensions
from .syntax import SourceFile

logger = get_logger(__name__)

MANIFEST_NAME = "package.json"

_JS_TS = r"\.(tsx?|jsx?|mts|cts|mjs|cjs)$"

# Earlier entries rank higher; files matching none rank last
PRIORITY_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern)
    for pattern in (
        r"^(src/)?(app|pages)/api/.*" + _JS_TS,
        r"^src/app/.*" + _JS_TS,
        r"^src/components/.*" + _JS_TS,
        r"^src/lib/.*" + _JS_TS,
        r"^src/pages/.*" + _JS_TS,
        r"^app/.*" + _JS_TS,
        r"^components/.*" + _JS_TS,
        r"^lib/.*" + _JS_TS,
        r"^pages/.*" + _JS_TS,
        _JS_TS,
    )
)


def file_priority(rel_path: str) -> int:
    """Rank of a repository-relative path; higher is more important."""
    for index, pattern in enumerate(PRIORITY_PATTERNS):
        if pattern.search(rel_path):
            return len(PRIORITY_PATTERNS) - index
    return 0


@dataclass
class ScanResult:
    """Files and manifest collected from one local checkout."""

    root: Path
    files: list[SourceFile] = field(default_factory=list)
    manifest: Optional[dict[str, Any]] = None
    candidates_found: int = 0


class LocalRepositoryScanner:
    """Collects SourceFile records from a directory tree.

    Usage:
        scanner = LocalRepositoryScanner("/path/to/repo", config)
        scan = scanner.scan()
        result = analyze(scan.files, scan.manifest, config)
    """

    def __init__(
        self, root_dir: Union[str, Path], config: Optional[AnalysisConfig] = None
    ) -> None:
        self.root_dir = Path(root_dir)
        self.config = config or DEFAULT_CONFIG
        if not self.root_dir.exists():
            raise InvalidPathError(self.root_dir, "does not exist")
        if not self.root_dir.is_dir():
            raise InvalidPathError(self.root_dir, "not a directory")
        logger.debug(f"Initialized {self.__class__.__name__} for {self.root_dir}")

    def _candidate_paths(self) -> list[str]:
        """Repository-relative paths of every file with a known extension."""
        excluded = set(self.config.exclude_dirs)
        extensions = get_all_known_extensions()
        found: list[str] = []

        for dirpath, dirnames, filenames in os.walk(self.root_dir):
            # Prune in place so os.walk never descends into excluded dirs
            dirnames[:] = sorted(
                d for d in dirnames if d not in excluded and not d.startswith(".")
            )
            rel_dir = Path(dirpath).relative_to(self.root_dir)
            for filename in sorted(filenames):
                if Path(filename).suffix.lower() not in extensions:
                    continue
                found.append((rel_dir / filename).as_posix())
        return found

    def select_files(self, rel_paths: list[str]) -> list[str]:
        """Highest-priority paths first (path order breaks ties), capped at max_files."""
        ranked = sorted(rel_paths, key=lambda p: (-file_priority(p), p))
        return ranked[: self.config.max_files]

    def _read_source(self, rel_path: str) -> SourceFile:
        filepath = self.root_dir / rel_path
        try:
            size = filepath.stat().st_size
            if size > self.config.max_file_size_bytes:
                # Not read; the extractor reports it as too large
                return SourceFile(rel_path, "", size_bytes=size)
            content = filepath.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise FileAccessError(filepath, str(e))
        return SourceFile(rel_path, content)

    def read_manifest(self) -> Optional[dict[str, Any]]:
        """Parsed package.json at the root, or None if absent or unreadable."""
        manifest_path = self.root_dir / MANIFEST_NAME
        if not manifest_path.is_file():
            logger.debug(f"No {MANIFEST_NAME} in {self.root_dir}")
            return None
        try:
            data = json.loads(manifest_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read {manifest_path}: {e}")
            return None
        if not isinstance(data, dict):
            logger.warning(f"Ignoring {manifest_path}: top level is not an object")
            return None
        return data

    def scan(self) -> ScanResult:
        """Collect source files and the manifest.

        Returns:
            ScanResult with files in priority order
        """
        candidates = self._candidate_paths()
        selected = self.select_files(candidates)
        if len(candidates) > len(selected):
            logger.warning(
                f"Reached max files limit ({self.config.max_files}); "
                f"{len(candidates) - len(selected)} lower-priority files not analyzed"
            )

        files: list[SourceFile] = []
        files_errored = 0
        for rel_path in selected:
            try:
                files.append(self._read_source(rel_path))
            except FileAccessError as e:
                files_errored += 1
                logger.warning(f"Access error for {rel_path}: {e.reason}")

        logger.info(
            f"Scan complete: {len(files)} files collected from {len(candidates)} candidates, "
            f"{files_errored} errors"
        )
        return ScanResult(
            root=self.root_dir,
            files=files,
            manifest=self.read_manifest(),
            candidates_found=len(candidates),
        )
