"""Convention-based detectors for React components and Next.js API routes.

Both detectors work purely from naming conventions on already-extracted
records and never look at the syntax tree again. They are heuristics:
any capitalized function counts as a component, including plain helpers.
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import Iterable, Optional

from ..config import DEFAULT_PATTERNS
from ..scanning.languages import detect_language, is_parseable
from ..scanning.syntax import ExportKind, ParsedFile
from .models import APIEndpointRecord, ComponentKind, ComponentRecord, HttpMethod

_HTTP_METHODS = {method.value: method for method in HttpMethod}

# [[...slug]] is an optional catch-all; it is rewritten like [...slug]
_OPTIONAL_CATCH_ALL = re.compile(r"^\[(\[\.\.\.[^\]]+\])\]$")
_DYNAMIC_SEGMENT = re.compile(r"^\[([^\]]+)\]$")


class ComponentDetector:
    """Finds functional and class React components in a ParsedFile."""

    def __init__(self, base_component_names: Optional[Iterable[str]] = None) -> None:
        if base_component_names is None:
            base_component_names = DEFAULT_PATTERNS.base_component_names
        self.base_component_names = frozenset(base_component_names)

    def is_component_class(
        self, superclass_name: Optional[str], method_names: Iterable[str]
    ) -> bool:
        return superclass_name in self.base_component_names or "render" in method_names

    def detect(self, parsed_file: ParsedFile) -> list[ComponentRecord]:
        """Functional components first (source order), then class components."""
        components = [
            ComponentRecord(fn.name, ComponentKind.FUNCTIONAL, parsed_file.path)
            for fn in parsed_file.functions
            if fn.name[:1].isupper()
        ]
        components.extend(
            ComponentRecord(cls.name, ComponentKind.CLASS, parsed_file.path)
            for cls in parsed_file.classes
            if self.is_component_class(cls.superclass_name, cls.method_names)
        )
        return components


def rewrite_route_segment(segment: str) -> str:
    """``[id]`` -> ``:id``; catch-alls keep their dots: ``[...slug]`` -> ``:...slug``."""
    match = _OPTIONAL_CATCH_ALL.match(segment)
    if match:
        segment = match.group(1)
    match = _DYNAMIC_SEGMENT.match(segment)
    if match:
        return f":{match.group(1)}"
    return segment


class APIRouteDetector:
    """Finds App Router API handlers: ``export function GET`` in ``.../api/.../route.ts``.

    Args:
        route_entry_names: File stems that mark a route file (default: ``route``)
        api_segment: Path segment every route file contains (default: ``/api/``)
    """

    def __init__(
        self,
        route_entry_names: Optional[Iterable[str]] = None,
        api_segment: Optional[str] = None,
    ) -> None:
        if route_entry_names is None:
            route_entry_names = DEFAULT_PATTERNS.route_entry_names
        self.route_entry_names = frozenset(route_entry_names)
        self.api_segment = api_segment or DEFAULT_PATTERNS.api_segment

    @staticmethod
    def _normalize(path: str) -> str:
        return "/" + path.replace("\\", "/").lstrip("/")

    def is_route_file(self, path: str) -> bool:
        normalized = self._normalize(path)
        if self.api_segment not in normalized:
            return False
        name = PurePosixPath(normalized).name
        stem = name.split(".", 1)[0]
        return stem in self.route_entry_names and is_parseable(detect_language(name))

    def route_path(self, path: str) -> str:
        """URL path served by a route file, from the last API segment onwards."""
        normalized = self._normalize(path)
        start = normalized.rfind(self.api_segment)
        directory = normalized[start:].rsplit("/", 1)[0]
        segments = [rewrite_route_segment(s) for s in directory.split("/") if s]
        route = "/" + "/".join(segments)
        return route if route != "/" else self.api_segment.rstrip("/")

    def detect(self, parsed_file: ParsedFile) -> list[APIEndpointRecord]:
        if not self.is_route_file(parsed_file.path):
            return []

        route = self.route_path(parsed_file.path)
        return [
            APIEndpointRecord(
                http_method=_HTTP_METHODS[export.name],
                route_path=route,
                source_file=parsed_file.path,
                line_number=export.line,
            )
            for export in parsed_file.exports
            if export.kind is not ExportKind.WILDCARD and export.name in _HTTP_METHODS
        ]
