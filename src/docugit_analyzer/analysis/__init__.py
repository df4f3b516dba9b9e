"""Repository-level analysis: detectors, aggregation and result models."""

from .aggregator import RepositoryAggregator
from .detectors import APIRouteDetector, ComponentDetector
from .engine import AnalysisEngine
from .models import (
    AggregateReport,
    AnalysisResult,
    APIEndpointRecord,
    ArchitectureInfo,
    ComponentKind,
    ComponentRecord,
    DependencyCategorization,
    DependencyReport,
    HttpMethod,
    RepositoryMetrics,
)

__all__ = [
    "AnalysisEngine",
    "RepositoryAggregator",
    "ComponentDetector",
    "APIRouteDetector",
    "AnalysisResult",
    "AggregateReport",
    "RepositoryMetrics",
    "DependencyCategorization",
    "DependencyReport",
    "ArchitectureInfo",
    "ComponentKind",
    "ComponentRecord",
    "HttpMethod",
    "APIEndpointRecord",
]
