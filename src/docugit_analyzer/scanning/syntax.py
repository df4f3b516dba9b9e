"""Syntax models for parsed source files.

ParsedFile provides structured AST facts for each JavaScript/TypeScript file:
    - Per-function: parameters, async/export flags, line span, complexity, doc comment
    - Per-class: methods, properties, superclass, implemented interfaces
    - Per-import: source module and bound names
    - Per-export: public name and kind

Records are frozen: they are created once during a single extraction pass
and never mutated afterwards. ``to_dict()`` produces the camelCase JSON
contract consumed by prompt builders and the web UI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .languages import Language


@dataclass(frozen=True)
class SourceFile:
    """Raw input handed to the analyzer by a file source.

    Attributes:
        path: Repository-relative path using forward slashes
        content: Full, untruncated file text
        size_bytes: Size of the file; defaults to the UTF-8 length of content
    """

    path: str
    content: str
    size_bytes: int = -1

    def __post_init__(self) -> None:
        if self.size_bytes < 0:
            object.__setattr__(
                self, "size_bytes", len(self.content.encode("utf-8", errors="replace"))
            )


@dataclass(frozen=True)
class FunctionRecord:
    """A function declaration, function expression or arrow function.

    Attributes:
        name: Own identifier, bound variable name, or "anonymous"
        parameters: Bound parameter names ("...rest" for rest parameters)
        line_start: Starting line number (1-indexed)
        line_end: Ending line number (1-indexed)
        complexity: Cyclomatic complexity, always >= 1
        is_async: True if declared async
        is_exported: True if directly exported
        doc_comment: Leading ``/** */`` comment body, if any
    """

    name: str
    parameters: tuple[str, ...]
    line_start: int
    line_end: int
    complexity: int = 1
    is_async: bool = False
    is_exported: bool = False
    doc_comment: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "parameters": list(self.parameters),
            "lineStart": self.line_start,
            "lineEnd": self.line_end,
            "complexity": self.complexity,
            "isAsync": self.is_async,
            "isExported": self.is_exported,
            "docComment": self.doc_comment,
        }


@dataclass(frozen=True)
class ClassRecord:
    """A class declaration.

    ``implemented_interface_names`` is None when the class has no
    ``implements`` clause, as opposed to an empty tuple.
    """

    name: str
    method_names: tuple[str, ...]
    property_names: tuple[str, ...]
    line_start: int
    line_end: int
    superclass_name: Optional[str] = None
    implemented_interface_names: Optional[tuple[str, ...]] = None
    is_exported: bool = False
    doc_comment: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "methodNames": list(self.method_names),
            "propertyNames": list(self.property_names),
            "superclassName": self.superclass_name,
            "implementedInterfaceNames": (
                list(self.implemented_interface_names)
                if self.implemented_interface_names is not None
                else None
            ),
            "lineStart": self.line_start,
            "lineEnd": self.line_end,
            "isExported": self.is_exported,
            "docComment": self.doc_comment,
        }


@dataclass(frozen=True)
class ImportRecord:
    """An import declaration: ``import a, { b as c } from "mod"`` binds a, c."""

    source_module: str
    bound_names: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"sourceModule": self.source_module, "boundNames": list(self.bound_names)}


class ExportKind(str, Enum):
    NAMED = "named"
    DEFAULT = "default"
    WILDCARD = "wildcard"


@dataclass(frozen=True)
class ExportRecord:
    """One exported name. ``line`` is the 1-indexed line of the export statement."""

    name: str
    kind: ExportKind
    line: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "kind": self.kind.value, "line": self.line}


@dataclass(frozen=True)
class ParseFailure:
    """Marker for a file that could not be parsed.

    Returned instead of raising so one bad file never aborts a batch.
    """

    path: str
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "reason": self.reason}


@dataclass(frozen=True)
class ParsedFile:
    """Complete syntax extraction for one file.

    Attributes:
        path: File path as supplied by the caller
        language: Language tag from the classifier
        lines_of_code: Physical line count (newline count + 1)
        functions: Function-like nodes in source order
        classes: Class declarations in source order
        imports: Import declarations in source order
        exports: Export records in source order
    """

    path: str
    language: Language
    lines_of_code: int
    functions: tuple[FunctionRecord, ...] = field(default_factory=tuple)
    classes: tuple[ClassRecord, ...] = field(default_factory=tuple)
    imports: tuple[ImportRecord, ...] = field(default_factory=tuple)
    exports: tuple[ExportRecord, ...] = field(default_factory=tuple)

    @property
    def total_complexity(self) -> int:
        """Sum of function complexities."""
        return sum(fn.complexity for fn in self.functions)

    @property
    def function_count(self) -> int:
        """Number of functions in this file."""
        return len(self.functions)

    @property
    def class_count(self) -> int:
        """Number of classes in this file."""
        return len(self.classes)

    @property
    def import_sources(self) -> list[str]:
        """List of import source strings."""
        return [imp.source_module for imp in self.imports]

    @property
    def export_names(self) -> list[str]:
        return [exp.name for exp in self.exports]

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "language": self.language.value,
            "linesOfCode": self.lines_of_code,
            "functions": [fn.to_dict() for fn in self.functions],
            "classes": [cls.to_dict() for cls in self.classes],
            "imports": [imp.to_dict() for imp in self.imports],
            "exports": [exp.to_dict() for exp in self.exports],
            "totalComplexity": self.total_complexity,
        }
