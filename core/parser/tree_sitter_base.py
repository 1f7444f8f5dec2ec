"""
Base Tree-sitter functionality for the component source parser.

Provides grammar loading, parsing with syntax error collection, and the
small set of AST traversal utilities the extraction engine relies on.
"""

import logging
import time
from typing import Any, Dict, Iterator, List, Optional, Union
from pathlib import Path

try:
    import tree_sitter
except ImportError:
    tree_sitter = None

from .base import ParsedSource, ParseFailure, SyntaxErrorReport, TreeSitterError

logger = logging.getLogger(__name__)


class TreeSitterBase:
    """
    Base class for Tree-sitter parsers with common functionality.

    Loads a grammar once per instance and reuses the same
    ``tree_sitter.Parser`` for every file.
    """

    # Grammar name -> (python module, language function)
    LANGUAGE_MODULES = {
        "tsx": ("tree_sitter_typescript", "language_tsx"),
    }

    MAX_SYNTAX_ERRORS = 50

    def __init__(self, language: str):
        self.language = language

        if tree_sitter is None:
            raise TreeSitterError("tree-sitter package not installed")

        self.parser = tree_sitter.Parser()
        try:
            self._setup_language()
        except TreeSitterError:
            raise
        except Exception as e:
            logger.error(f"Failed to setup {language} parser: {e}")
            raise TreeSitterError(f"Cannot initialize {language} parser: {e}") from e

    def _setup_language(self) -> None:
        """Initialize Tree-sitter language for this parser"""
        if self.language not in self.LANGUAGE_MODULES:
            raise TreeSitterError(f"Unsupported language: {self.language}")

        module_name, function_name = self.LANGUAGE_MODULES[self.language]

        try:
            language_module = __import__(module_name)
        except ImportError as e:
            raise TreeSitterError(
                f"Tree-sitter language module '{module_name}' not installed. "
                f"Install with: pip install {module_name.replace('_', '-')}"
            ) from e

        language_function = getattr(language_module, function_name, None)
        if language_function is None:
            raise TreeSitterError(f"No {function_name} function found in {module_name}")

        self.tree_sitter_language = tree_sitter.Language(language_function())
        self.parser.language = self.tree_sitter_language
        logger.debug(f"Successfully loaded {self.language} Tree-sitter language")

    def parse_source(self, source_text: str, file_path: Union[str, Path] = "") -> ParsedSource:
        """
        Parse source text into a tree.

        Args:
            source_text: Source code content
            file_path: Path used in error messages only

        Returns:
            ParsedSource holding the tree and its source bytes

        Raises:
            ParseFailure: If the parser raises or the tree contains syntax errors
        """
        path_label = str(file_path)
        start = time.perf_counter()

        try:
            source_bytes = source_text.encode('utf-8')
            tree = self.parser.parse(source_bytes)
        except Exception as e:
            raise ParseFailure(path_label, f"{path_label or '<source>'}: parser error: {e}") from e

        if tree is None:
            raise ParseFailure(path_label, f"{path_label or '<source>'}: parser returned no tree")

        report = SyntaxErrorReport(self._extract_syntax_errors(tree, source_bytes))
        if report.has_errors:
            raise ParseFailure(path_label, report.describe(path_label), report.errors)

        parsed = ParsedSource(
            tree=tree,
            source_bytes=source_bytes,
            file_path=path_label,
            parse_time=time.perf_counter() - start
        )
        logger.debug(f"Parsed {path_label or '<source>'} in {parsed.parse_time * 1000:.1f}ms")
        return parsed

    def _extract_syntax_errors(self, tree: Any, source_bytes: bytes) -> List[Dict[str, Any]]:
        """
        Collect ERROR and missing nodes from a tree.

        Args:
            tree: Tree-sitter AST
            source_bytes: Bytes the tree was parsed from

        Returns:
            List of syntax error dictionaries
        """
        errors: List[Dict[str, Any]] = []
        root = tree.root_node
        if root is None or not root.has_error:
            return errors

        for node in self.walk_node(root):
            if len(errors) >= self.MAX_SYNTAX_ERRORS:
                break
            if node.type != "ERROR" and not node.is_missing:
                continue

            text = source_bytes[node.start_byte:node.end_byte].decode('utf-8', errors='replace')
            errors.append({
                "type": "SYNTAX_ERROR" if node.type == "ERROR" else "MISSING_NODE",
                "message": self._generate_error_message(node, text),
                "line": node.start_point[0] + 1,
                "column": node.start_point[1],
                "start_byte": node.start_byte,
                "end_byte": node.end_byte,
                "text": text[:100],
                "parent_type": node.parent.type if node.parent else None,
            })

        return errors

    @staticmethod
    def _generate_error_message(node: Any, text: str) -> str:
        if node.is_missing:
            return f"Missing {node.type}"
        snippet = " ".join(text.split())
        if len(snippet) > 40:
            snippet = snippet[:37] + "..."
        return f"Unexpected token '{snippet}'" if snippet else "Unexpected token"

    @staticmethod
    def walk_node(node: Any) -> Iterator[Any]:
        """
        Walk a subtree depth-first in document order.

        Uses an explicit stack so deeply nested markup cannot exhaust the
        interpreter's recursion limit.
        """
        stack = [node]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))

    @staticmethod
    def find_child_by_type(node: Any, child_type: str) -> Optional[Any]:
        for child in node.children:
            if child.type == child_type:
                return child
        return None

    @staticmethod
    def named_children(node: Any) -> List[Any]:
        """Named children of a node, comments excluded"""
        return [child for child in node.named_children if child.type != "comment"]
