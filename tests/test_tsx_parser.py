"""
Tests for the TSX parser and its Tree-sitter base.

Covers grammar loading, successful parses of JSX and TypeScript sources,
syntax error reporting through ParseFailure, and the tree helpers.
"""

import pytest
from pathlib import Path
from unittest.mock import patch

from core.parser.base import ParseFailure, ParsedSource
from core.parser.tree_sitter_base import TreeSitterBase
from core.parser.tsx_parser import TSXParser, get_tsx_parser

from tests.fixtures.component_samples import BROKEN_SOURCE, HERO_COMPONENT, TYPED_COMPONENT


@pytest.fixture
def tsx_parser():
    """Create a TSX parser instance for testing"""
    return TSXParser()


class TestTSXParser:
    """Test parsing of component sources"""

    def test_supported_extensions(self, tsx_parser):
        assert tsx_parser.get_supported_extensions() == [".jsx", ".tsx", ".js", ".ts"]
        assert tsx_parser.can_parse(Path("App.JSX"))
        assert tsx_parser.can_parse(Path("src/index.ts"))
        assert not tsx_parser.can_parse(Path("styles.css"))

    def test_parse_jsx_component(self, tsx_parser):
        parsed = tsx_parser.parse(HERO_COMPONENT, "Hero.jsx")

        assert isinstance(parsed, ParsedSource)
        assert parsed.root_node.type == "program"
        assert parsed.file_path == "Hero.jsx"
        assert not parsed.root_node.has_error

    def test_parse_typescript_component(self, tsx_parser):
        parsed = tsx_parser.parse(TYPED_COMPONENT, "Banner.tsx")

        types = {node.type for node in TreeSitterBase.walk_node(parsed.root_node)}
        assert "interface_declaration" in types
        assert "jsx_element" in types

    def test_node_text_uses_byte_offsets(self, tsx_parser):
        """Text after multi-byte characters is sliced correctly"""
        source = 'const greeting = <p>Grüße aus Köln</p>;'
        parsed = tsx_parser.parse(source)

        texts = [
            parsed.node_text(node)
            for node in TreeSitterBase.walk_node(parsed.root_node)
            if node.type == "jsx_text"
        ]
        assert texts == ["Grüße aus Köln"]

    def test_syntax_error_raises_parse_failure(self, tsx_parser):
        with pytest.raises(ParseFailure) as exc_info:
            tsx_parser.parse(BROKEN_SOURCE, "Broken.jsx")

        error = exc_info.value
        assert error.file_path == "Broken.jsx"
        assert error.syntax_errors
        assert error.line is not None and error.line >= 1
        assert "Broken.jsx" in str(error)

    def test_parser_exception_is_chained(self, tsx_parser):
        with patch.object(tsx_parser, "parser") as mock_parser:
            mock_parser.parse.side_effect = ValueError("boom")
            with pytest.raises(ParseFailure) as exc_info:
                tsx_parser.parse("const a = 1;", "a.js")

        assert isinstance(exc_info.value.__cause__, ValueError)
        assert exc_info.value.syntax_errors == []

    def test_empty_source_parses(self, tsx_parser):
        parsed = tsx_parser.parse("")
        assert parsed.root_node.type == "program"

    def test_shared_parser_is_reused(self):
        assert get_tsx_parser() is get_tsx_parser()


class TestTreeHelpers:
    """Test the static tree helpers"""

    def setup_method(self):
        self.parser = TSXParser()

    def test_walk_is_document_order(self):
        parsed = self.parser.parse('const a = "first"; const b = "second";')

        strings = [
            parsed.node_text(node)
            for node in TreeSitterBase.walk_node(parsed.root_node)
            if node.type == "string"
        ]
        assert strings == ['"first"', '"second"']

    def test_named_children_skip_comments(self):
        parsed = self.parser.parse('const list = [/* lead */ "One", // trailing\n "Two"];')

        arrays = [n for n in TreeSitterBase.walk_node(parsed.root_node) if n.type == "array"]
        children = TreeSitterBase.named_children(arrays[0])
        assert [child.type for child in children] == ["string", "string"]

    def test_find_child_by_type(self):
        parsed = self.parser.parse('export const x = ["One"];')
        export = parsed.root_node.named_children[0]
        declaration = export.child_by_field_name("declaration")

        declarator = TreeSitterBase.find_child_by_type(declaration, "variable_declarator")
        assert declarator is not None
        assert TreeSitterBase.find_child_by_type(declaration, "class_declaration") is None
