"""Tree-sitter parser wrapper.

Provides a single ``parse(source_text, path)`` entry point over the
JavaScript, TypeScript and TSX grammars. The grammar is chosen from the
path: TypeScript type syntax only for ``.ts``-family files, TypeScript plus
JSX for ``.tsx``, and the JavaScript grammar (which accepts JSX) for
``.js``/``.jsx``. All three accept decorators, class fields, dynamic
``import()``, async generators, optional chaining and nullish coalescing.

Failures never raise: they come back as a ParseFailure marker.

Usage:
    parser = TreeSitterParser()
    result = parser.parse(code, "src/app/page.tsx")
    if isinstance(result, ParseFailure):
        ...
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Optional, Union

import tree_sitter
import tree_sitter_javascript
import tree_sitter_typescript

from ..exceptions import UnsupportedLanguageError
from ..logging_config import get_logger
from .languages import detect_language, grammar_for
from .syntax import ParseFailure

logger = get_logger(__name__)

Tree = tree_sitter.Tree
Node = tree_sitter.Node

# grammar name -> zero-argument function returning the raw language pointer
_GRAMMAR_LOADERS: dict[str, Callable[[], Any]] = {
    "javascript": tree_sitter_javascript.language,
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}


def get_supported_grammars() -> list[str]:
    """Get list of grammars this parser can load."""
    return list(_GRAMMAR_LOADERS.keys())


def _first_error_node(root: Node) -> Optional[Node]:
    """Return the first ERROR or MISSING node in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            return node
        # Only subtrees that contain an error are worth descending into
        stack.extend(
            child for child in reversed(node.children) if child.has_error or child.is_missing
        )
    return None


class TreeSitterParser:
    """Wrapper around tree-sitter for JavaScript/TypeScript parsing.

    Language objects are built once per instance; ``Parser`` objects are kept
    per thread because a tree-sitter parser must not be shared between
    threads while parsing.
    """

    def __init__(self) -> None:
        """Initialize language objects for every bundled grammar."""
        self._languages: dict[str, tree_sitter.Language] = {}
        self._local = threading.local()

        for grammar, loader in _GRAMMAR_LOADERS.items():
            # tree-sitter >= 0.22 takes the grammar's PyCapsule directly
            self._languages[grammar] = tree_sitter.Language(loader())

    def is_grammar_supported(self, grammar: str) -> bool:
        """Check if a grammar is loaded."""
        return grammar in self._languages

    def _parser_for(self, grammar: str) -> tree_sitter.Parser:
        parsers: Optional[dict[str, tree_sitter.Parser]] = getattr(self._local, "parsers", None)
        if parsers is None:
            parsers = {}
            self._local.parsers = parsers

        parser = parsers.get(grammar)
        if parser is None:
            language = self._languages.get(grammar)
            if language is None:
                raise UnsupportedLanguageError(grammar, get_supported_grammars())
            parser = tree_sitter.Parser(language)
            parsers[grammar] = parser
        return parser

    def parse(self, source_text: str, path: str) -> Union[Tree, ParseFailure]:
        """Parse source text into a syntax tree.

        Args:
            source_text: Full file content
            path: File path; only its extension is used, to pick a grammar

        Returns:
            Tree on success; ParseFailure if the language has no grammar, the
            text cannot be encoded, or the tree contains syntax errors
        """
        language = detect_language(path)
        grammar = grammar_for(language)
        if grammar is None or not self.is_grammar_supported(grammar):
            return ParseFailure(path, f"no parser for language '{language.value}'")

        try:
            code_bytes = source_text.encode("utf-8")
        except UnicodeEncodeError as e:
            return ParseFailure(path, f"encoding error: {e.reason}")

        try:
            tree = self._parser_for(grammar).parse(code_bytes)
        except Exception as e:
            logger.debug(f"tree-sitter raised for {path}: {e}")
            return ParseFailure(path, f"parser error: {e}")

        if tree is None or tree.root_node is None:
            return ParseFailure(path, "parser returned no tree")

        root = tree.root_node
        if root.has_error:
            error_node = _first_error_node(root)
            if error_node is None:
                return ParseFailure(path, "syntax error")
            line, column = error_node.start_point
            kind = "missing token" if error_node.is_missing else "syntax error"
            return ParseFailure(path, f"{kind} at line {line + 1}, column {column + 1}")

        return tree
