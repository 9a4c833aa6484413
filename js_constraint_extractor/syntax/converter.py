"""Parse JavaScript with tree-sitter and convert it into syntax nodes.

tree-sitter produces a concrete syntax tree; the extractor works on the
smaller ESTree-like node family in ``nodes.py``. Conversion happens once per
source file, after which the tree-sitter tree is discarded.

Usage::

    parser = JavaScriptParser()
    parsed = parser.parse("function f(a) { return a > 1; }")
    parsed.text(parsed.root.body[0])
"""

import logging

import tree_sitter as ts
import tree_sitter_javascript as ts_js

from js_constraint_extractor.syntax.nodes import (
    BinaryExpression,
    CallExpression,
    FunctionDeclaration,
    GenericNode,
    Identifier,
    Literal,
    MemberExpression,
    Node,
    Program,
    UnaryExpression,
)

logger = logging.getLogger(__name__)

IDENTIFIER_TYPES = frozenset(
    {
        "identifier",
        "property_identifier",
        "private_property_identifier",
        "shorthand_property_identifier",
        "undefined",
    }
)

FUNCTION_DECLARATION_TYPES = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
    }
)

# Function expressions that `export default` turns into declarations
DEFAULT_EXPORT_FUNCTION_TYPES = frozenset(
    {
        "function_expression",
        "function",
        "generator_function",
    }
)

# Node types dropped during conversion
SKIPPED_TYPES = frozenset({"comment", "hash_bang_line"})


class ParsedSource:
    """A converted syntax tree together with the text it was parsed from.

    Attributes:
        root: The converted Program node
        source: The original source text
        error_count: Number of ERROR / missing nodes tree-sitter recovered from
        first_error: (line, column) of the first error, 1-based, or None
    """

    __slots__ = ("root", "source", "error_count", "first_error", "_source_bytes")

    def __init__(
        self,
        root: Program,
        source: str,
        error_count: int = 0,
        first_error: tuple[int, int] | None = None,
    ):
        self.root = root
        self.source = source
        self.error_count = error_count
        self.first_error = first_error
        self._source_bytes = source.encode("utf-8")

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0

    def text(self, node: Node) -> str:
        """Return the verbatim source text spanned by a node."""
        start, end = node.range
        return self._source_bytes[start:end].decode("utf-8", errors="replace")


class JavaScriptParser:
    """tree-sitter backed JavaScript parser producing ``ParsedSource`` trees."""

    def __init__(self):
        self._parser = ts.Parser(ts.Language(ts_js.language()))
        self._source_bytes = b""

    def parse(self, source: str) -> ParsedSource:
        """Parse JavaScript source text.

        tree-sitter always returns a tree; syntax errors are recorded on the
        result rather than raised so the caller decides how strict to be.

        Args:
            source: JavaScript source code

        Returns:
            ParsedSource with the converted tree and error information
        """
        self._source_bytes = source.encode("utf-8")
        tree = self._parser.parse(self._source_bytes)

        errors = _collect_errors(tree.root_node)
        first_error = None
        if errors:
            point = errors[0].start_point
            first_error = (point.row + 1, point.column + 1)
            logger.info(
                f"Source has {len(errors)} syntax error(s), first at "
                f"line {first_error[0]}, column {first_error[1]}"
            )

        root = Program(
            range=_range(tree.root_node),
            body=self._convert_children(tree.root_node),
        )
        return ParsedSource(
            root=root,
            source=source,
            error_count=len(errors),
            first_error=first_error,
        )

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def _convert(self, node: ts.Node) -> Node:
        node_type = node.type

        if node_type == "parenthesized_expression":
            inner = [c for c in node.named_children if c.type not in SKIPPED_TYPES]
            if len(inner) == 1:
                return self._convert(inner[0])

        if node_type in IDENTIFIER_TYPES:
            return Identifier(range=_range(node), name=self._text(node))

        if node_type in FUNCTION_DECLARATION_TYPES:
            return self._convert_function(node)

        if node_type == "export_statement":
            return self._convert_export(node)

        if node_type == "call_expression":
            return self._convert_call(node)

        if node_type == "member_expression":
            return MemberExpression(
                range=_range(node),
                object=self._convert_field(node, "object"),
                property=self._convert_field(node, "property"),
            )

        if node_type == "subscript_expression":
            return MemberExpression(
                range=_range(node),
                object=self._convert_field(node, "object"),
                property=self._convert_field(node, "index"),
                computed=True,
            )

        if node_type == "binary_expression":
            return BinaryExpression(
                range=_range(node),
                operator=_operator(node),
                left=self._convert_field(node, "left"),
                right=self._convert_field(node, "right"),
            )

        if node_type == "unary_expression":
            return UnaryExpression(
                range=_range(node),
                operator=_operator(node),
                argument=self._convert_field(node, "argument"),
            )

        if node_type in ("number", "string", "true", "false", "null", "regex"):
            return self._convert_literal(node)

        return GenericNode(
            range=_range(node),
            grammar_type=node_type,
            children=self._convert_children(node),
        )

    def _convert_function(self, node: ts.Node) -> FunctionDeclaration:
        name = node.child_by_field_name("name")
        parameters = node.child_by_field_name("parameters")
        body = node.child_by_field_name("body")

        return FunctionDeclaration(
            range=_range(node),
            id=Identifier(range=_range(name), name=self._text(name)) if name else None,
            params=self._convert_children(parameters) if parameters else [],
            body=self._convert(body) if body else None,
        )

    def _convert_export(self, node: ts.Node) -> GenericNode:
        # `export default function (...) {}` declares a function, possibly
        # anonymous, but tree-sitter parses it as an expression
        value = node.child_by_field_name("value")
        children = []
        for child in node.named_children:
            if child.type in SKIPPED_TYPES:
                continue
            if (
                value is not None
                and child.start_byte == value.start_byte
                and child.type in DEFAULT_EXPORT_FUNCTION_TYPES
            ):
                children.append(self._convert_function(child))
            else:
                children.append(self._convert(child))

        return GenericNode(
            range=_range(node),
            grammar_type=node.type,
            children=children,
        )

    def _convert_call(self, node: ts.Node) -> CallExpression:
        arguments = node.child_by_field_name("arguments")
        if arguments is None:
            converted_arguments = []
        elif arguments.type == "arguments":
            converted_arguments = self._convert_children(arguments)
        else:
            # Tagged template: the template is the only argument
            converted_arguments = [self._convert(arguments)]

        return CallExpression(
            range=_range(node),
            callee=self._convert_field(node, "function"),
            arguments=converted_arguments,
        )

    def _convert_literal(self, node: ts.Node) -> Literal:
        raw = self._text(node)
        node_type = node.type

        if node_type == "string":
            value = raw[1:-1]
        elif node_type == "number":
            value = _number_value(raw)
        elif node_type == "true":
            value = True
        elif node_type == "false":
            value = False
        elif node_type == "null":
            value = None
        else:
            value = raw

        return Literal(range=_range(node), value=value, raw=raw)

    def _convert_field(self, node: ts.Node, field_name: str) -> Node | None:
        child = node.child_by_field_name(field_name)
        if child is None:
            return None
        return self._convert(child)

    def _convert_children(self, node: ts.Node) -> list[Node]:
        return [
            self._convert(child)
            for child in node.named_children
            if child.type not in SKIPPED_TYPES
        ]

    def _text(self, node: ts.Node) -> str:
        return self._source_bytes[node.start_byte : node.end_byte].decode(
            "utf-8", errors="replace"
        )


def _range(node: ts.Node) -> tuple[int, int]:
    return (node.start_byte, node.end_byte)


def _operator(node: ts.Node) -> str:
    operator = node.child_by_field_name("operator")
    return operator.type if operator is not None else ""


def _number_value(raw: str) -> int | float | None:
    """Convert a JavaScript numeric literal to a Python number."""
    text = raw.replace("_", "").rstrip("n")
    try:
        return int(text, 0)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        logger.debug(f"Unrecognized numeric literal: {raw}")
        return None


def _collect_errors(root: ts.Node) -> list[ts.Node]:
    """Return ERROR and missing nodes in document order."""
    errors = []
    if not root.has_error:
        return errors

    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            errors.append(node)
            continue
        if node.has_error:
            stack.extend(reversed(node.children))

    return errors
