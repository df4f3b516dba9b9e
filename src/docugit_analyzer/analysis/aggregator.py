"""Repository-level aggregation: metrics, dependencies, technologies, architecture.

All pattern data comes from an injected CategoryPatterns instance, so the
same aggregator can be run with project-specific lists from configuration.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..config import DEFAULT_PATTERNS, CategoryPatterns
from ..logging_config import get_logger
from ..scanning.languages import Language, is_typescript
from ..scanning.syntax import ParsedFile
from .models import (
    AggregateReport,
    APIEndpointRecord,
    ArchitectureInfo,
    ComponentRecord,
    DependencyCategorization,
    DependencyReport,
    RepositoryMetrics,
)

logger = get_logger(__name__)

_JAVASCRIPT_LANGUAGES = (Language.JAVASCRIPT, Language.JSX)

# (dependency name, label); the last present entry wins
_AUTH_PROVIDERS = (
    ("next-auth", "NextAuth"),
    ("@supabase/auth-helpers-nextjs", "Supabase Auth"),
)
_TEST_RUNNERS = (
    ("jest", "Jest"),
    ("vitest", "Vitest"),
)


def _dependency_map(manifest: Optional[Mapping[str, Any]], key: str) -> dict[str, str]:
    if not manifest:
        return {}
    section = manifest.get(key)
    if not isinstance(section, Mapping):
        return {}
    return {str(name): str(version) for name, version in section.items()}


def _matches_any(name: str, patterns: Iterable[str]) -> bool:
    lowered = name.lower()
    return any(pattern.lower() in lowered for pattern in patterns)


class RepositoryAggregator:
    """Combines per-file results and the package manifest into repository facts.

    Usage:
        aggregator = RepositoryAggregator(config.patterns)
        report = aggregator.aggregate(parsed_files, manifest, components, endpoints)
    """

    def __init__(self, patterns: Optional[CategoryPatterns] = None) -> None:
        self.patterns = patterns or DEFAULT_PATTERNS

    # ── Dependencies ───────────────────────────────────────────────

    def categorize(self, dependency_names: Sequence[str]) -> DependencyCategorization:
        """Bucket names by case-insensitive substring match.

        A name can land in several buckets; ``next-auth`` is a framework by
        pattern even though it is not one.
        """
        frameworks: dict[str, None] = {}
        ui_libraries: dict[str, None] = {}
        databases: dict[str, None] = {}

        for name in dependency_names:
            if _matches_any(name, self.patterns.framework_patterns):
                frameworks[name] = None
            if _matches_any(name, self.patterns.ui_patterns):
                ui_libraries[name] = None
            if _matches_any(name, self.patterns.database_patterns):
                databases[name] = None

        return DependencyCategorization(
            frameworks=tuple(frameworks),
            ui_libraries=tuple(ui_libraries),
            databases=tuple(databases),
        )

    def dependency_report(self, manifest: Optional[Mapping[str, Any]]) -> DependencyReport:
        production = _dependency_map(manifest, "dependencies")
        development = _dependency_map(manifest, "devDependencies")
        # Production first; dict keys keep order and drop duplicates
        merged = tuple(dict.fromkeys([*production, *development]))
        return DependencyReport(
            categorization=self.categorize(merged),
            production=production,
            development=development,
            all=merged,
        )

    # ── Technologies & architecture ────────────────────────────────

    def technologies(
        self, files: Sequence[ParsedFile], dependency_names: Sequence[str]
    ) -> tuple[str, ...]:
        found: list[str] = []
        if any(is_typescript(f.language) for f in files):
            found.append("TypeScript")
        if any(f.language in _JAVASCRIPT_LANGUAGES for f in files):
            found.append("JavaScript")
        for pattern, label in self.patterns.technology_patterns:
            if label not in found and any(pattern in name for name in dependency_names):
                found.append(label)
        return tuple(found)

    def architecture(
        self, files: Sequence[ParsedFile], dependencies: DependencyReport
    ) -> ArchitectureInfo:
        names = dependencies.all

        def has(fragment: str) -> bool:
            return any(fragment in name for name in names)

        if "next" in names:
            framework = "Next.js"
        elif "react" in names:
            framework = "React"
        elif "express" in names:
            framework = "Express"
        else:
            framework = "Unknown"

        authentication = None
        for dep, label in _AUTH_PROVIDERS:
            if dep in dependencies.production:
                authentication = label

        testing = None
        for dep, label in _TEST_RUNNERS:
            if dep in dependencies.development:
                testing = label

        uses_typescript = any(is_typescript(f.language) for f in files)
        databases = dependencies.categorization.databases
        styling = (
            "Tailwind CSS"
            if any("tailwind" in name for name in dependencies.categorization.ui_libraries)
            else None
        )

        return ArchitectureInfo(
            type="Next.js App" if has("next") else "Web Application",
            framework=framework,
            language="TypeScript" if uses_typescript else "JavaScript",
            database=databases[0] if databases else None,
            authentication=authentication,
            styling=styling,
            testing=testing,
        )

    # ── Metrics ────────────────────────────────────────────────────

    @staticmethod
    def metrics(
        files: Sequence[ParsedFile], component_count: int, endpoint_count: int
    ) -> RepositoryMetrics:
        total_complexity = sum(f.total_complexity for f in files)
        breakdown = Counter(f.language.value for f in files)
        return RepositoryMetrics(
            total_files=len(files),
            total_functions=sum(f.function_count for f in files),
            total_classes=sum(f.class_count for f in files),
            total_components=component_count,
            total_api_endpoints=endpoint_count,
            total_lines=sum(f.lines_of_code for f in files),
            average_complexity=round(total_complexity / max(len(files), 1), 2),
            language_breakdown=dict(breakdown),
        )

    def aggregate(
        self,
        files: Sequence[ParsedFile],
        manifest: Optional[Mapping[str, Any]] = None,
        components: Sequence[ComponentRecord] = (),
        endpoints: Sequence[APIEndpointRecord] = (),
    ) -> AggregateReport:
        """Compute every repository-level value in one pass over the inputs.

        Args:
            files: Successfully parsed files
            manifest: ``package.json`` contents, or None
            components: Components found by ComponentDetector
            endpoints: Endpoints found by APIRouteDetector

        Returns:
            AggregateReport; a missing manifest yields empty dependency data
        """
        if manifest is None:
            logger.debug("No package manifest; dependency categorization is empty")

        dependencies = self.dependency_report(manifest)
        return AggregateReport(
            metrics=self.metrics(files, len(components), len(endpoints)),
            dependencies=dependencies,
            technologies=self.technologies(files, dependencies.all),
            architecture=self.architecture(files, dependencies),
        )
