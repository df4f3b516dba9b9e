"""Normalizer: converts tree-sitter parse trees into ParsedFile records.

One pre-order walk over the tree dispatches each node on its type to a
handler (functions, classes, imports, exports); every other node kind is
ignored and only descended into. The walk uses an explicit stack, so
records come out in source order and deep trees cannot hit the recursion
limit.

Node kinds that superficially match a rule but lack an expected child (a
class without a body, an import without a source string) are skipped for
that record type; siblings are still extracted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from ..logging_config import get_logger
from .complexity import cyclomatic_complexity
from .languages import detect_language, is_parseable
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
from .treesitter_parser import TreeSitterParser

logger = get_logger(__name__)

ANONYMOUS = "anonymous"
UNKNOWN_PARAM = "unknown"

# "function" and "generator_function" are the expression names used by
# older tree-sitter-javascript releases
FUNCTION_NODE_TYPES = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "function_expression",
        "function",
        "generator_function",
        "arrow_function",
    }
)

CLASS_NODE_TYPES = frozenset({"class_declaration", "abstract_class_declaration"})

_VARIABLE_DECLARATION_TYPES = ("lexical_declaration", "variable_declaration")
_FIELD_DEFINITION_TYPES = ("field_definition", "public_field_definition")
_PARAMETER_PROPERTY_MARKERS = ("accessibility_modifier", "override_modifier", "readonly")


@dataclass(frozen=True)
class ExtractedSyntax:
    """Everything one extraction pass yields for a tree."""

    functions: tuple[FunctionRecord, ...]
    classes: tuple[ClassRecord, ...]
    imports: tuple[ImportRecord, ...]
    exports: tuple[ExportRecord, ...]


class _SyntaxWalker:
    """Single-use walker holding the per-tree state of one extraction."""

    def __init__(self, source_bytes: bytes) -> None:
        self._source = source_bytes
        self.functions: list[FunctionRecord] = []
        self.classes: list[ClassRecord] = []
        self.imports: list[ImportRecord] = []
        self.exports: list[ExportRecord] = []

        handlers: dict[str, Callable[[Any], None]] = {
            "import_statement": self._on_import,
            "export_statement": self._on_export,
            "class": self._on_class_expression,
        }
        for node_type in FUNCTION_NODE_TYPES:
            handlers[node_type] = self._on_function
        for node_type in CLASS_NODE_TYPES:
            handlers[node_type] = self._on_class
        self._handlers = handlers

    def run(self, root: Any) -> ExtractedSyntax:
        stack = [root]
        while stack:
            node = stack.pop()
            handler = self._handlers.get(node.type)
            if handler is not None:
                handler(node)
            stack.extend(reversed(node.named_children))

        return ExtractedSyntax(
            functions=tuple(self.functions),
            classes=tuple(self.classes),
            imports=tuple(self.imports),
            exports=tuple(self.exports),
        )

    # ── Helpers ────────────────────────────────────────────────────

    def _text(self, node: Any) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    @staticmethod
    def _line_span(node: Any) -> tuple[int, int]:
        return node.start_point[0] + 1, node.end_point[0] + 1

    @staticmethod
    def _is_export(node: Optional[Any]) -> bool:
        return node is not None and node.type == "export_statement"

    def _doc_comment(self, node: Any) -> Optional[str]:
        """Body of the ``/** ... */`` comment right before ``node``, if any.

        For exported declarations the comment sits before the export
        statement, so that statement is used as the anchor.
        """
        anchor = node.parent if self._is_export(node.parent) else node
        previous = anchor.prev_sibling
        if previous is None or previous.type != "comment":
            return None
        text = self._text(previous)
        if not (text.startswith("/*") and text.endswith("*/")) or len(text) < 4:
            return None
        body = text[2:-2]
        if not body.startswith("*"):
            return None
        return body.strip()

    def _string_value(self, node: Any) -> str:
        text = self._text(node)
        if len(text) >= 2 and text[0] in "'\"`" and text[-1] == text[0]:
            return text[1:-1]
        return text

    # ── Functions ──────────────────────────────────────────────────

    def _binding_declaration(self, node: Any) -> Optional[Any]:
        """Declaration statement binding ``node`` (``const f = () => {}``), if any."""
        declarator = node.parent
        if declarator is None or declarator.type != "variable_declarator":
            return None
        if declarator.child_by_field_name("value") != node:
            return None
        declaration = declarator.parent
        if declaration is None or declaration.type not in _VARIABLE_DECLARATION_TYPES:
            return None
        return declaration

    def _function_name(self, node: Any) -> str:
        name_node = node.child_by_field_name("name")
        if name_node is not None:
            return self._text(name_node)
        declarator = node.parent
        if declarator is not None and declarator.type == "variable_declarator":
            bound = declarator.child_by_field_name("name")
            if bound is not None and bound.type == "identifier":
                return self._text(bound)
        return ANONYMOUS

    def _pattern_name(self, pattern: Optional[Any]) -> str:
        if pattern is None:
            return UNKNOWN_PARAM
        if pattern.type in ("identifier", "this"):
            return self._text(pattern)
        if pattern.type == "assignment_pattern":
            left = pattern.child_by_field_name("left")
            if left is not None and left.type == "identifier":
                return self._text(left)
            return UNKNOWN_PARAM
        if pattern.type == "rest_pattern":
            inner = next((c for c in pattern.named_children if c.type == "identifier"), None)
            if inner is not None:
                return f"...{self._text(inner)}"
            return UNKNOWN_PARAM
        return UNKNOWN_PARAM

    def _parameter_name(self, param: Any) -> str:
        if param.type in ("required_parameter", "optional_parameter"):
            # constructor(private x) is a parameter property, not a plain binding
            if any(child.type in _PARAMETER_PROPERTY_MARKERS for child in param.children):
                return UNKNOWN_PARAM
            return self._pattern_name(param.child_by_field_name("pattern"))
        return self._pattern_name(param)

    def _parameters(self, node: Any) -> tuple[str, ...]:
        single = node.child_by_field_name("parameter")
        if single is not None:
            return (self._pattern_name(single),)
        params = node.child_by_field_name("parameters")
        if params is None:
            return ()
        return tuple(
            self._parameter_name(param)
            for param in params.named_children
            if param.type not in ("comment", "decorator")
        )

    def _on_function(self, node: Any) -> None:
        declaration = self._binding_declaration(node)
        anchor = declaration if declaration is not None else node
        line_start, line_end = self._line_span(node)

        self.functions.append(
            FunctionRecord(
                name=self._function_name(node),
                parameters=self._parameters(node),
                line_start=line_start,
                line_end=line_end,
                complexity=cyclomatic_complexity(node),
                is_async=any(child.type == "async" for child in node.children),
                is_exported=self._is_export(anchor.parent),
                doc_comment=self._doc_comment(anchor),
            )
        )

    # ── Classes ────────────────────────────────────────────────────

    def _heritage_name(self, node: Optional[Any]) -> Optional[str]:
        if node is None:
            return None
        if node.type in ("identifier", "type_identifier"):
            return self._text(node)
        if node.type in ("member_expression", "nested_identifier", "nested_type_identifier"):
            return "".join(self._text(node).split())
        if node.type == "generic_type":
            return self._heritage_name(node.child_by_field_name("name"))
        return None

    def _heritage(self, node: Any) -> tuple[Optional[str], Optional[tuple[str, ...]]]:
        heritage = next((c for c in node.children if c.type == "class_heritage"), None)
        if heritage is None:
            return None, None

        superclass: Optional[str] = None
        interfaces: Optional[tuple[str, ...]] = None
        for child in heritage.named_children:
            if child.type == "extends_clause":
                superclass = self._heritage_name(child.child_by_field_name("value"))
            elif child.type == "implements_clause":
                names = (self._heritage_name(t) for t in child.named_children)
                interfaces = tuple(name for name in names if name)
            elif child.type != "comment" and superclass is None:
                # JavaScript grammar: the superclass expression sits directly here
                superclass = self._heritage_name(child)
        return superclass, interfaces

    def _on_class(self, node: Any) -> None:
        body = node.child_by_field_name("body")
        if body is None:
            return

        methods: list[str] = []
        properties: list[str] = []
        for member in body.named_children:
            if member.type == "method_definition":
                key = member.child_by_field_name("name")
                if key is not None and key.type == "property_identifier":
                    methods.append(self._text(key))
            elif member.type in _FIELD_DEFINITION_TYPES:
                key = member.child_by_field_name("property") or member.child_by_field_name("name")
                if key is not None and key.type == "property_identifier":
                    properties.append(self._text(key))

        name_node = node.child_by_field_name("name")
        superclass, interfaces = self._heritage(node)
        line_start, line_end = self._line_span(node)

        self.classes.append(
            ClassRecord(
                name=self._text(name_node) if name_node is not None else ANONYMOUS,
                method_names=tuple(methods),
                property_names=tuple(properties),
                line_start=line_start,
                line_end=line_end,
                superclass_name=superclass,
                implemented_interface_names=interfaces,
                is_exported=self._is_export(node.parent),
                doc_comment=self._doc_comment(node),
            )
        )

    def _on_class_expression(self, node: Any) -> None:
        # `export default class {}` is a declaration in all but grammar name
        if self._is_export(node.parent):
            self._on_class(node)

    # ── Imports ────────────────────────────────────────────────────

    def _on_import(self, node: Any) -> None:
        source = node.child_by_field_name("source")
        if source is None:
            return

        names: list[str] = []
        clause = next((c for c in node.named_children if c.type == "import_clause"), None)
        if clause is not None:
            for child in clause.named_children:
                if child.type == "identifier":
                    names.append(self._text(child))
                elif child.type == "namespace_import":
                    local = next(
                        (c for c in child.named_children if c.type == "identifier"), None
                    )
                    if local is not None:
                        names.append(f"* as {self._text(local)}")
                elif child.type == "named_imports":
                    for spec in child.named_children:
                        if spec.type != "import_specifier":
                            continue
                        bound = spec.child_by_field_name("alias") or spec.child_by_field_name(
                            "name"
                        )
                        if bound is not None:
                            names.append(self._string_value(bound))

        self.imports.append(
            ImportRecord(source_module=self._string_value(source), bound_names=tuple(names))
        )

    # ── Exports ────────────────────────────────────────────────────

    def _bound_identifiers(self, pattern: Optional[Any]) -> list[str]:
        """Identifiers bound by a declarator name, including destructuring."""
        if pattern is None:
            return []
        if pattern.type in ("identifier", "shorthand_property_identifier_pattern"):
            return [self._text(pattern)]
        if pattern.type == "pair_pattern":
            return self._bound_identifiers(pattern.child_by_field_name("value"))
        if pattern.type in ("assignment_pattern", "object_assignment_pattern"):
            return self._bound_identifiers(pattern.child_by_field_name("left"))
        if pattern.type in ("object_pattern", "array_pattern", "rest_pattern"):
            names: list[str] = []
            for child in pattern.named_children:
                names.extend(self._bound_identifiers(child))
            return names
        return []

    def _default_export_name(self, target: Optional[Any]) -> str:
        if target is None:
            return "default"
        if target.type == "identifier":
            return self._text(target)
        name_node = target.child_by_field_name("name")
        if name_node is not None and name_node.type in ("identifier", "type_identifier"):
            return self._text(name_node)
        return "default"

    def _on_export(self, node: Any) -> None:
        line = node.start_point[0] + 1

        def emit(name: str, kind: ExportKind) -> None:
            self.exports.append(ExportRecord(name=name, kind=kind, line=line))

        declaration = node.child_by_field_name("declaration")
        if any(child.type == "default" for child in node.children):
            target = declaration or node.child_by_field_name("value")
            emit(self._default_export_name(target), ExportKind.DEFAULT)
            return

        if declaration is not None:
            if declaration.type in _VARIABLE_DECLARATION_TYPES:
                for declarator in declaration.named_children:
                    if declarator.type != "variable_declarator":
                        continue
                    for name in self._bound_identifiers(declarator.child_by_field_name("name")):
                        emit(name, ExportKind.NAMED)
            else:
                name_node = declaration.child_by_field_name("name")
                if name_node is not None:
                    emit(self._text(name_node), ExportKind.NAMED)
            return

        for child in node.named_children:
            if child.type == "namespace_export":
                # export * as ns from "mod"
                local = next(
                    (c for c in reversed(child.named_children) if c.type in ("identifier", "string")),
                    None,
                )
                if local is not None:
                    emit(self._string_value(local), ExportKind.NAMED)
                return
            if child.type == "export_clause":
                for spec in child.named_children:
                    if spec.type != "export_specifier":
                        continue
                    public = spec.child_by_field_name("alias") or spec.child_by_field_name("name")
                    if public is not None:
                        emit(self._string_value(public), ExportKind.NAMED)
                return

        if any(child.type == "*" for child in node.children):
            emit("*", ExportKind.WILDCARD)


class TreeSitterNormalizer:
    """Converts source files into ParsedFile records via tree-sitter.

    Usage:
        normalizer = TreeSitterNormalizer()
        result = normalizer.parse_file(SourceFile("src/a.ts", code))
        if isinstance(result, ParseFailure):
            # log and skip
    """

    def __init__(self, parser: Optional[TreeSitterParser] = None) -> None:
        """Initialize normalizer with a (possibly shared) tree-sitter parser."""
        self._parser = parser or TreeSitterParser()

    @property
    def parser(self) -> TreeSitterParser:
        return self._parser

    def extract(self, tree: Any, source_text: str) -> ExtractedSyntax:
        """Extract functions, classes, imports and exports from a parsed tree.

        Args:
            tree: Tree returned by TreeSitterParser.parse() for source_text
            source_text: The exact text the tree was parsed from

        Returns:
            ExtractedSyntax with records in source order
        """
        walker = _SyntaxWalker(source_text.encode("utf-8"))
        return walker.run(tree.root_node)

    def parse_file(self, source_file: SourceFile) -> Union[ParsedFile, ParseFailure]:
        """Parse and extract one file.

        Returns:
            ParsedFile, or ParseFailure when the file is not JavaScript/TypeScript
            or does not parse cleanly
        """
        language = detect_language(source_file.path)
        if not is_parseable(language):
            return ParseFailure(source_file.path, f"unsupported language '{language.value}'")

        tree = self._parser.parse(source_file.content, source_file.path)
        if isinstance(tree, ParseFailure):
            return tree

        extracted = self.extract(tree, source_file.content)
        return ParsedFile(
            path=source_file.path,
            language=language,
            lines_of_code=len(source_file.content.split("\n")),
            functions=extracted.functions,
            classes=extracted.classes,
            imports=extracted.imports,
            exports=extracted.exports,
        )
