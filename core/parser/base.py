"""
Error taxonomy and shared result types for the component source parser.

A ParseFailure is fatal for one file only; a NodeProcessingFailure is
recovered by the visitor that raised it and never reaches the caller.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


@dataclass
class ParsedSource:
    """
    A successfully parsed source file.

    Holds the tree-sitter tree together with the exact bytes it was built
    from, since node offsets are byte offsets into that buffer.
    """
    tree: Any  # tree_sitter.Tree
    source_bytes: bytes
    file_path: str = ""
    parse_time: float = 0.0  # Seconds

    @property
    def root_node(self) -> Any:
        return self.tree.root_node

    def node_text(self, node: Any) -> str:
        """Return the source text covered by a node"""
        return self.source_bytes[node.start_byte:node.end_byte].decode('utf-8', errors='replace')


class ParseError(Exception):
    """Base class for parsing errors"""
    pass


class TreeSitterError(ParseError):
    """Raised when the tree-sitter grammar cannot be loaded"""
    pass


class ParseFailure(ParseError):
    """
    Raised when a source file cannot be parsed as TSX.

    Carries the syntax errors reported by the parser; when the parser
    itself raised, the original exception is chained as ``__cause__``.
    """

    def __init__(
        self,
        file_path: Union[str, Path],
        message: str,
        syntax_errors: Optional[List[Dict[str, Any]]] = None
    ):
        self.file_path = str(file_path)
        self.syntax_errors: List[Dict[str, Any]] = list(syntax_errors or [])
        super().__init__(message)

    @property
    def first_error(self) -> Optional[Dict[str, Any]]:
        return self.syntax_errors[0] if self.syntax_errors else None

    @property
    def line(self) -> Optional[int]:
        error = self.first_error
        return error.get("line") if error else None

    @property
    def column(self) -> Optional[int]:
        error = self.first_error
        return error.get("column") if error else None


class NodeProcessingFailure(ParseError):
    """Raised while extracting one declaration or attribute from a malformed node"""

    def __init__(self, message: str, node_type: Optional[str] = None, line: Optional[int] = None):
        self.node_type = node_type
        self.line = line
        super().__init__(message)


@dataclass
class SyntaxErrorReport:
    """Summary of the syntax errors found in one tree"""
    errors: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def describe(self, file_path: str) -> str:
        if not self.errors:
            return f"{file_path or '<source>'}: no syntax errors"
        first = self.errors[0]
        suffix = f" (+{len(self.errors) - 1} more)" if len(self.errors) > 1 else ""
        return (
            f"{file_path or '<source>'}: {first['message']} "
            f"at line {first['line']}, column {first['column']}{suffix}"
        )
