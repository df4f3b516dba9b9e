"""Repository-level result models.

Everything here is derived from the per-file ParsedFile records plus the
package manifest. ``AnalysisResult.to_dict()`` is the camelCase JSON
contract consumed downstream; nothing in the result references anything
outside the result, so it serializes without cycles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ..scanning.syntax import ParsedFile, ParseFailure


class ComponentKind(str, Enum):
    FUNCTIONAL = "functional"
    CLASS = "class"


@dataclass(frozen=True)
class ComponentRecord:
    """A React component found by naming or inheritance convention."""

    name: str
    kind: ComponentKind
    source_file: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "kind": self.kind.value, "sourceFile": self.source_file}


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


@dataclass(frozen=True)
class APIEndpointRecord:
    """One HTTP handler exported from an App Router ``route`` file.

    Attributes:
        http_method: Verb named by the export
        route_path: URL path, e.g. ``/api/users/:id``
        source_file: Path of the route file
        line_number: 1-indexed line of the export, 0 if unknown
    """

    http_method: HttpMethod
    route_path: str
    source_file: str
    line_number: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "httpMethod": self.http_method.value,
            "routePath": self.route_path,
            "sourceFile": self.source_file,
            "lineNumber": self.line_number,
        }


@dataclass(frozen=True)
class DependencyCategorization:
    """Dependency names bucketed by pattern match.

    Each bucket is de-duplicated and keeps manifest order; a name may sit
    in more than one bucket.
    """

    frameworks: tuple[str, ...] = ()
    ui_libraries: tuple[str, ...] = ()
    databases: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "frameworks": list(self.frameworks),
            "uiLibraries": list(self.ui_libraries),
            "databases": list(self.databases),
        }


@dataclass(frozen=True)
class DependencyReport:
    """Manifest dependencies plus their categorization."""

    categorization: DependencyCategorization = field(default_factory=DependencyCategorization)
    production: dict[str, str] = field(default_factory=dict)
    development: dict[str, str] = field(default_factory=dict)
    all: tuple[str, ...] = ()

    @property
    def total_count(self) -> int:
        return len(self.all)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.categorization.to_dict(),
            "production": dict(self.production),
            "development": dict(self.development),
            "all": list(self.all),
            "totalCount": self.total_count,
        }


@dataclass(frozen=True)
class RepositoryMetrics:
    total_files: int = 0
    total_functions: int = 0
    total_classes: int = 0
    total_components: int = 0
    total_api_endpoints: int = 0
    total_lines: int = 0
    average_complexity: float = 0.0
    language_breakdown: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalFiles": self.total_files,
            "totalFunctions": self.total_functions,
            "totalClasses": self.total_classes,
            "totalComponents": self.total_components,
            "totalAPIEndpoints": self.total_api_endpoints,
            "totalLines": self.total_lines,
            "averageComplexity": self.average_complexity,
            "languageBreakdown": dict(self.language_breakdown),
        }


@dataclass(frozen=True)
class ArchitectureInfo:
    """Best-guess project architecture. Optional fields are None when undetected."""

    type: str = "Web Application"
    framework: str = "Unknown"
    language: str = "JavaScript"
    database: Optional[str] = None
    authentication: Optional[str] = None
    styling: Optional[str] = None
    testing: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "framework": self.framework,
            "language": self.language,
            "database": self.database,
            "authentication": self.authentication,
            "styling": self.styling,
            "testing": self.testing,
        }


@dataclass(frozen=True)
class AggregateReport:
    """Repository-wide values computed by the aggregator."""

    metrics: RepositoryMetrics
    dependencies: DependencyReport
    technologies: tuple[str, ...]
    architecture: ArchitectureInfo


@dataclass(frozen=True)
class AnalysisResult:
    """Complete output of one analysis run.

    Attributes:
        metrics: Repository totals
        dependencies: Manifest dependencies and categories
        technologies: Human-readable technology names, in detection order
        architecture: Framework / language / database guess
        api_endpoints: Detected route handlers
        components: Detected React components
        source_files: One ParsedFile per successfully parsed file
        failed_files: Files that were attempted but could not be parsed
    """

    metrics: RepositoryMetrics
    dependencies: DependencyReport
    technologies: tuple[str, ...]
    architecture: ArchitectureInfo
    api_endpoints: tuple[APIEndpointRecord, ...] = ()
    components: tuple[ComponentRecord, ...] = ()
    source_files: tuple[ParsedFile, ...] = ()
    failed_files: tuple[ParseFailure, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "metrics": self.metrics.to_dict(),
            "dependencies": self.dependencies.to_dict(),
            "technologies": list(self.technologies),
            "architecture": self.architecture.to_dict(),
            "apiEndpoints": [ep.to_dict() for ep in self.api_endpoints],
            "components": [c.to_dict() for c in self.components],
            "sourceFiles": [f.to_dict() for f in self.source_files],
            "failedFiles": [f.to_dict() for f in self.failed_files],
        }
