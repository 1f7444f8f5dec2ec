"""
Tree-sitter parsing for React component files.

All supported extensions (.jsx, .tsx, .js, .ts) are parsed with the TSX
grammar, which accepts markup embedded in both plain and typed sources.

Example:
    from core.parser import get_tsx_parser

    parsed = get_tsx_parser().parse(source, "src/App.jsx")
    print(parsed.root_node.type)
"""

from .base import (
    ParsedSource, ParseError, ParseFailure, NodeProcessingFailure,
    TreeSitterError, SyntaxErrorReport
)
from .tree_sitter_base import TreeSitterBase
from .tsx_parser import TSXParser, get_tsx_parser
from .source_reader import SourceReader, SourceReadError

__all__ = [
    "ParsedSource",
    "ParseError",
    "ParseFailure",
    "NodeProcessingFailure",
    "TreeSitterError",
    "SyntaxErrorReport",
    "TreeSitterBase",
    "TSXParser",
    "get_tsx_parser",
    "SourceReader",
    "SourceReadError"
]
