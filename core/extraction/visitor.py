"""
Tree walker that pulls candidate content strings out of a TSX syntax tree.

The walk is a depth-first pass over the tree, dispatching on node
kind to a fixed set of extraction rules:

- named exports of arrays of objects (name/price/title/description keys and
  a features list)
- any declaration initialized with an array of objects (every string
  property except icon, plus string lists)
- string arrays declared inside function and arrow-function bodies
- markup text between tags
- markup attribute values, resolving bare identifiers and member accesses
  through the file's BindingTable

Bindings are collected in a pass of their own before the walk, so an
attribute may reference a constant declared further down the file.
Every candidate is trimmed and classified before it is kept.
"""

import html
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..models.diagnostics import DiagnosticKind, DiagnosticLog
from ..parser.base import NodeProcessingFailure, ParsedSource
from ..parser.tree_sitter_base import TreeSitterBase
from .bindings import BindingTable
from .classifier import is_meaningful_content, is_svg_attribute, is_svg_element

logger = logging.getLogger(__name__)

DECLARATION_TYPES = frozenset({"lexical_declaration", "variable_declaration"})
FUNCTION_VALUE_TYPES = frozenset({"arrow_function", "function_expression", "function", "generator_function"})
EXPORTED_CONTENT_KEYS = frozenset({"name", "price", "title", "description"})
EXPORTED_LIST_KEY = "features"
SKIPPED_PROPERTY_KEY = "icon"

_SIMPLE_ESCAPES = {
    'n': '\n', 't': '\t', 'r': '\r', 'b': '\b', 'f': '\f', 'v': '\v', '0': '\0',
}
_LINE_CONTINUATIONS = frozenset({'\n', '\r', '\u2028', '\u2029'})

Handler = Callable[[Any], None]


def decode_escape_sequence(sequence: str) -> str:
    """Decode one JavaScript string escape such as \\n, \\x41, \\u00e9 or \\u{1F600}"""
    body = sequence[1:] if sequence.startswith('\\') else sequence
    if not body:
        return ''
    head = body[0]
    if head in _LINE_CONTINUATIONS:
        return ''
    if head in _SIMPLE_ESCAPES and len(body) == 1:
        return _SIMPLE_ESCAPES[head]
    if head == 'x' and len(body) == 3:
        return chr(int(body[1:], 16))
    if head == 'u' and len(body) > 1:
        return chr(int(body[1:].strip('{}'), 16))
    return body


def combine_surrogates(text: str) -> str:
    """Join UTF-16 surrogate pairs (\\uD83D\\uDE00) into one code point; lone halves become U+FFFD"""
    return text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")


class ContentVisitor:
    """
    Walks one parsed file and accumulates candidate content strings.

    A visitor is single use: create one per file. Failures while handling a
    single node are logged, recorded as diagnostics and skipped; the walk
    continues over the rest of the tree.
    """

    def __init__(
        self,
        parsed: ParsedSource,
        diagnostics: Optional[DiagnosticLog] = None,
        bindings: Optional[BindingTable] = None
    ):
        self.parsed = parsed
        self.diagnostics = diagnostics
        self.bindings = bindings if bindings is not None else BindingTable()
        self.candidates: List[str] = []
        self.failures = 0

        self._handlers: Dict[str, Tuple[Handler, ...]] = {
            "export_statement": (self._visit_exported_array, self._visit_exported_function),
            "variable_declarator": (self._visit_object_array, self._visit_function_value),
            "function_declaration": (self._visit_function_body,),
            "generator_function_declaration": (self._visit_function_body,),
            "jsx_element": (self._visit_markup_text,),
            "jsx_fragment": (self._visit_markup_text,),
            "jsx_attribute": (self._visit_attribute,),
        }

    def visit(self) -> List[str]:
        """
        Walk the whole tree.

        Returns:
            Accepted candidate strings in traversal order, duplicates included
        """
        root = self.parsed.root_node

        for node in TreeSitterBase.walk_node(root):
            if node.type == "variable_declarator":
                self._dispatch(self._bind_declarator, node)

        for node in TreeSitterBase.walk_node(root):
            for handler in self._handlers.get(node.type, ()):
                self._dispatch(handler, node)

        logger.debug(
            f"Collected {len(self.candidates)} candidates from "
            f"{self.parsed.file_path or '<source>'} ({len(self.bindings)} bindings)"
        )
        return self.candidates

    def _dispatch(self, handler: Handler, node: Any) -> None:
        try:
            handler(node)
        except Exception as e:
            self._record_failure(node, e)

    def _record_failure(self, node: Any, error: Exception) -> None:
        self.failures += 1
        line = node.start_point[0] + 1
        file_label = self.parsed.file_path or '<source>'
        logger.warning(f"Skipped {node.type} at {file_label}:{line}: {error}")
        if self.diagnostics is not None:
            self.diagnostics.record(
                DiagnosticKind.NODE_PROCESSING_FAILURE,
                f"{type(error).__name__}: {error}",
                file_path=self.parsed.file_path,
                line=line,
                column=node.start_point[1],
                node_type=node.type
            )

    # Candidates

    def _add_candidate(self, text: str) -> None:
        text = text.strip()
        if is_meaningful_content(text):
            self.candidates.append(text)

    def _add_string_elements(self, array_node: Any) -> None:
        for text in self._string_elements(array_node):
            self._add_candidate(text)

    # Bindings

    def _bind_declarator(self, node: Any) -> None:
        name = node.child_by_field_name("name")
        value = node.child_by_field_name("value")
        if name is None or value is None:
            return
        if name.type != "identifier" or value.type != "array":
            return
        strings = self._string_elements(value)
        if strings:
            self.bindings.bind(self._text(name), strings)

    # Declarations

    def _visit_exported_array(self, node: Any) -> None:
        """export const plans = [{ name: "Pro", features: ["Fast"] }]"""
        declaration = node.child_by_field_name("declaration")
        if declaration is None or declaration.type not in DECLARATION_TYPES:
            return

        declarator = TreeSitterBase.find_child_by_type(declaration, "variable_declarator")
        if declarator is None:
            return
        value = declarator.child_by_field_name("value")
        if value is None or value.type != "array":
            return

        for element in TreeSitterBase.named_children(value):
            if element.type != "object":
                continue
            for key, prop_value in self._object_pairs(element):
                if key in EXPORTED_CONTENT_KEYS:
                    if prop_value.type == "string":
                        self._add_candidate(self._string_value(prop_value))
                elif key == EXPORTED_LIST_KEY and prop_value.type == "array":
                    self._add_string_elements(prop_value)

    def _visit_object_array(self, node: Any) -> None:
        """const links = [{ label: "About", icon: <Info /> }]"""
        value = node.child_by_field_name("value")
        if value is None or value.type != "array":
            return

        for element in TreeSitterBase.named_children(value):
            if element.type != "object":
                continue
            for key, prop_value in self._object_pairs(element):
                # icon values are component or asset references
                if key == SKIPPED_PROPERTY_KEY:
                    continue
                if prop_value.type == "string":
                    self._add_candidate(self._string_value(prop_value))
                elif prop_value.type == "array":
                    self._add_string_elements(prop_value)

    def _visit_exported_function(self, node: Any) -> None:
        """export default function () { ... }"""
        value = node.child_by_field_name("value")
        if value is not None and value.type in FUNCTION_VALUE_TYPES:
            self._visit_nested_arrays(value)

    def _visit_function_value(self, node: Any) -> None:
        """const Hero = () => { const lines = ["..."]; ... }"""
        value = node.child_by_field_name("value")
        if value is not None and value.type in FUNCTION_VALUE_TYPES:
            self._visit_nested_arrays(value)

    def _visit_function_body(self, node: Any) -> None:
        body = node.child_by_field_name("body")
        if body is not None:
            self._visit_nested_arrays(body)

    def _visit_nested_arrays(self, subtree: Any) -> None:
        for inner in TreeSitterBase.walk_node(subtree):
            if inner.type != "variable_declarator":
                continue
            value = inner.child_by_field_name("value")
            if value is not None and value.type == "array":
                self._add_string_elements(value)

    # Markup

    def _visit_markup_text(self, node: Any) -> None:
        """Text between tags; entity references join the surrounding text"""
        run: List[str] = []
        for child in node.children:
            if child.type in ("jsx_text", "html_character_reference"):
                run.append(self._text(child))
                continue
            self._flush_text_run(run)
            run = []
        self._flush_text_run(run)

    def _flush_text_run(self, run: List[str]) -> None:
        if run:
            self._add_candidate(html.unescape("".join(run)))

    def _visit_attribute(self, node: Any) -> None:
        parts = TreeSitterBase.named_children(node)
        if not parts:
            raise NodeProcessingFailure("attribute without a name", node.type, node.start_point[0] + 1)

        attribute_name = self._text(parts[0])
        if is_svg_element(attribute_name) or is_svg_attribute(attribute_name):
            return
        if len(parts) < 2:
            return  # boolean attribute, e.g. <input disabled />

        for text in self._attribute_texts(parts[-1]):
            if text:
                self._add_candidate(text)

    def _attribute_texts(self, value: Any) -> List[str]:
        if value.type == "string":
            return [self._string_value(value).strip()]
        if value.type != "jsx_expression":
            return []

        expressions = TreeSitterBase.named_children(value)
        if not expressions:
            return []
        expression = self._unwrap_parentheses(expressions[0])

        if expression.type == "identifier":
            return self.bindings.resolve(self._text(expression))
        if expression.type == "member_expression":
            # Resolves the base object only: config.title and config.price
            # both yield everything bound to config
            base = expression.child_by_field_name("object")
            if base is not None and base.type == "identifier":
                return self.bindings.resolve_member(self._text(base))
            return []
        if expression.type == "string":
            return [self._string_value(expression).strip()]
        return []

    # Node helpers

    def _text(self, node: Any) -> str:
        return self.parsed.node_text(node)

    def _object_pairs(self, object_node: Any) -> List[Tuple[Optional[str], Any]]:
        """(key name, value node) for each key: value member of an object literal"""
        pairs = []
        for member in TreeSitterBase.named_children(object_node):
            if member.type != "pair":
                continue
            key = member.child_by_field_name("key")
            value = member.child_by_field_name("value")
            if key is None or value is None:
                raise NodeProcessingFailure(
                    "object property without key or value", member.type, member.start_point[0] + 1
                )
            key_name = self._text(key) if key.type == "property_identifier" else None
            pairs.append((key_name, value))
        return pairs

    def _string_elements(self, array_node: Any) -> List[str]:
        """Trimmed values of the string literal elements of an array literal"""
        return [
            self._string_value(element).strip()
            for element in TreeSitterBase.named_children(array_node)
            if element.type == "string"
        ]

    def _string_value(self, node: Any) -> str:
        """Cooked value of a string literal node"""
        pieces = []
        for child in node.named_children:
            if child.type == "string_fragment":
                pieces.append(self._text(child))
            elif child.type == "escape_sequence":
                pieces.append(decode_escape_sequence(self._text(child)))
            elif child.type == "html_character_reference":
                pieces.append(html.unescape(self._text(child)))
        return combine_surrogates("".join(pieces))

    @staticmethod
    def _unwrap_parentheses(node: Any) -> Any:
        while node.type == "parenthesized_expression":
            inner = TreeSitterBase.named_children(node)
            if not inner:
                break
            node = inner[0]
        return node
