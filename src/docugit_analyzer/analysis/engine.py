"""AnalysisEngine: runs the full per-file and repository-level pipeline.

    source files ─► SyntaxExtractor ─► ParsedFile[] ─┬─► ComponentDetector
                                                     ├─► APIRouteDetector
                                                     └─► RepositoryAggregator ─► AnalysisResult
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..config import DEFAULT_CONFIG, AnalysisConfig
from ..logging_config import get_logger
from ..scanning.syntax import SourceFile
from ..scanning.syntax_extractor import SyntaxExtractor
from .aggregator import RepositoryAggregator
from .detectors import APIRouteDetector, ComponentDetector
from .models import AnalysisResult, APIEndpointRecord, ComponentRecord

logger = get_logger(__name__)


class AnalysisEngine:
    """Orchestrates extraction, detection and aggregation for one file set.

    The engine holds no per-run state, so one instance can analyze any
    number of repositories.
    """

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        extractor: Optional[SyntaxExtractor] = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        patterns = self.config.patterns
        self.extractor = extractor or SyntaxExtractor(self.config)
        self.component_detector = ComponentDetector(patterns.base_component_names)
        self.route_detector = APIRouteDetector(patterns.route_entry_names, patterns.api_segment)
        self.aggregator = RepositoryAggregator(patterns)

    def run(
        self,
        source_files: Sequence[SourceFile],
        manifest: Optional[Mapping[str, Any]] = None,
    ) -> AnalysisResult:
        """Analyze a file set.

        Args:
            source_files: Files to analyze; other languages are counted out silently
            manifest: ``package.json`` contents, or None

        Returns:
            AnalysisResult; unparseable files are listed in ``failed_files``
        """
        logger.info(f"Analyzing {len(source_files)} source files")
        parsed, failures = self.extractor.extract_all(source_files)

        components: list[ComponentRecord] = []
        endpoints: list[APIEndpointRecord] = []
        for parsed_file in parsed:
            components.extend(self.component_detector.detect(parsed_file))
            endpoints.extend(self.route_detector.detect(parsed_file))

        report = self.aggregator.aggregate(parsed, manifest, components, endpoints)

        logger.info(
            f"Analysis complete: {len(parsed)} files, {len(components)} components, "
            f"{len(endpoints)} API endpoints, {len(failures)} failures"
        )
        return AnalysisResult(
            metrics=report.metrics,
            dependencies=report.dependencies,
            technologies=report.technologies,
            architecture=report.architecture,
            api_endpoints=tuple(endpoints),
            components=tuple(components),
            source_files=tuple(parsed),
            failed_files=tuple(failures),
        )
