"""Recognize boundary-relevant syntax patterns involving function parameters.

Each recognizer inspects a single node and its immediate children, and
returns the constraints it implies for the enclosing function's parameters.
A node that does not have the expected shape (a call without arguments, a
comparison against a non-numeric value) simply yields nothing.
"""

import logging
import math
import re
from collections.abc import Callable
from dataclasses import dataclass

from js_constraint_extractor.generators import ValueGenerator
from js_constraint_extractor.models import (
    FILE_EXISTS,
    FILE_WITH_CONTENT,
    INTEGER,
    STRING,
    Constraint,
)
from js_constraint_extractor.syntax import (
    BinaryExpression,
    CallExpression,
    Identifier,
    Literal,
    MemberExpression,
    Node,
    ParsedSource,
    UnaryExpression,
)

logger = logging.getLogger(__name__)

EQUALITY_OPERATORS = frozenset({"==", "!=", "===", "!=="})
RELATIONAL_OPERATORS = frozenset({"<", ">"})

# Mock filesystem entries the test harness provisions under these exact names
FILE_CONTENT_FIXTURES = [
    ("'pathContent/file1'", FILE_WITH_CONTENT),
    ("'pathContent/someDir'", FILE_WITH_CONTENT),
    ("'file'", FILE_EXISTS),
]
DIRECTORY_FIXTURES = [
    ("'emptyDir'", FILE_EXISTS),
    ("'nonEmptyDir'", FILE_EXISTS),
]

QUOTED_STRING = re.compile(r"^['\"](.*)['\"]$")

# JavaScript parseInt(): optional sign, then hex or decimal digits
PARSE_INT_PATTERN = re.compile(r"^\s*([+-]?)(?:0[xX]([0-9a-fA-F]+)|(\d+))")

# JavaScript Number() on a decimal string
DECIMAL_PATTERN = re.compile(
    r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)
RADIX_PATTERN = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")


@dataclass
class FunctionContext:
    """The function whose body is being scanned.

    Attributes:
        name: Function name ("" for anonymous declarations)
        params: Identifier parameter names in declaration order
        arity: Number of declared formal parameters, identifiers or not
        source: Parsed source the function belongs to
        generator: Value generator for synthesized values
    """

    name: str
    params: list[str]
    arity: int
    source: ParsedSource
    generator: ValueGenerator

    def constraint(
        self,
        ident: str,
        node: Node,
        value: str,
        kind: str,
        operator: str = "",
    ) -> Constraint:
        return Constraint(
            ident=ident,
            expression=self.source.text(node),
            operator=operator,
            value=value,
            func_name=self.name,
            kind=kind,
        )


Recognizer = Callable[[Node, FunctionContext], list[Constraint]]


def negated_property(node: Node, context: FunctionContext) -> list[Constraint]:
    """`!param.prop`: try both a truthy property and a falsy parameter."""
    match node:
        case UnaryExpression(
            operator="!",
            argument=MemberExpression(
                object=Identifier(name=ident),
                property=Identifier(name=prop),
            ),
        ) if ident in context.params:
            return [
                context.constraint(
                    ident, node, f"{ident} = {{'{prop}': true}}", STRING, node.operator
                ),
                context.constraint(ident, node, "false", STRING, node.operator),
            ]
    return []


def file_content_read(node: Node, context: FunctionContext) -> list[Constraint]:
    """`x.readFileSync(param)`: a file with content, a directory, a plain file."""
    ident = _parameter_passed_to(node, "readFileSync", context)
    if ident is None:
        return []
    return [
        context.constraint(ident, node, value, kind)
        for value, kind in FILE_CONTENT_FIXTURES
    ]


def directory_read(node: Node, context: FunctionContext) -> list[Constraint]:
    """`x.readdirSync(param)`: an empty and a non-empty directory."""
    ident = _parameter_passed_to(node, "readdirSync", context)
    if ident is None:
        return []
    return [
        context.constraint(ident, node, value, kind)
        for value, kind in DIRECTORY_FIXTURES
    ]


def equality_comparison(node: Node, context: FunctionContext) -> list[Constraint]:
    """`name == value` and friends.

    When ``name`` is a parameter, suggest the compared value and a value that
    differs from it. When it is not, but the function takes exactly one
    parameter, assume the local was derived from that parameter and suggest
    a phone-style number sharing the compared literal's leading digits.
    """
    match node:
        case BinaryExpression(
            operator=operator,
            left=Identifier(name=name),
            right=Node() as right,
        ) if operator in EQUALITY_OPERATORS:
            right_text = context.source.text(right)
            quoted = QUOTED_STRING.match(right_text)

            if name in context.params:
                different = f"'NEQ - {quoted.group(1)}'" if quoted else "NaN"
                return [
                    context.constraint(name, node, right_text, INTEGER, operator),
                    context.constraint(name, node, different, INTEGER, operator),
                ]

            if context.arity == 1 and len(context.params) == 1:
                ident = context.params[0]
                number = context.generator.phone_number(
                    quoted.group(1) if quoted else ""
                )
                return [
                    context.constraint(
                        ident, node, f"'NEQ - {right_text}'", STRING, operator
                    ),
                    context.constraint(ident, node, f'"{number}"', STRING, operator),
                ]
    return []


def relational_comparison(node: Node, context: FunctionContext) -> list[Constraint]:
    """`param < N` / `param > N`: probe one below and one above N."""
    match node:
        case BinaryExpression(
            operator=operator,
            left=Identifier(name=ident),
            right=Node() as right,
        ) if operator in RELATIONAL_OPERATORS and ident in context.params:
            bound = parse_int(context.source.text(right))
            if bound is None:
                return []
            return [
                context.constraint(ident, node, str(bound - 1), INTEGER, operator),
                context.constraint(ident, node, str(bound + 1), INTEGER, operator),
            ]
    return []


def substring_comparison(node: Node, context: FunctionContext) -> list[Constraint]:
    """`param.indexOf('x') == N`: a string with the token after N filler chars.

    The filler count comes from JavaScript's loose comparison of a counter
    against the right-hand source text, so a non-numeric right-hand side
    produces no filler at all.
    """
    match node:
        case BinaryExpression(
            operator=operator,
            left=CallExpression(
                callee=MemberExpression(object=Identifier(name=ident)),
                arguments=[Literal() as token, *_],
            ),
            right=Node() as right,
        ) if operator in EQUALITY_OPERATORS and ident in context.params:
            padding = filler_length(context.source.text(right))
            word = "a" * padding + _literal_text(token)
            return [context.constraint(ident, node, f"'{word}'", STRING, operator)]
    return []


# Applied in order to every node of a function body
RECOGNIZERS: list[Recognizer] = [
    negated_property,
    file_content_read,
    directory_read,
    equality_comparison,
    relational_comparison,
    substring_comparison,
]


def apply_recognizers(node: Node, context: FunctionContext) -> list[Constraint]:
    """Run every recognizer against a node and collect their constraints."""
    constraints = []
    for recognizer in RECOGNIZERS:
        found = recognizer(node, context)
        for constraint in found:
            logger.debug(
                f"{recognizer.__name__}: {context.name}.{constraint.ident} "
                f"= {constraint.value} ({constraint.kind})"
            )
        constraints.extend(found)
    return constraints


def parse_int(text: str) -> int | None:
    """JavaScript ``parseInt(text)``; None where JavaScript yields NaN."""
    match = PARSE_INT_PATTERN.match(text)
    if not match:
        return None
    sign, hex_digits, decimal_digits = match.groups()
    value = int(hex_digits, 16) if hex_digits else int(decimal_digits)
    return -value if sign == "-" else value


def to_number(text: str) -> float | None:
    """JavaScript ``Number(text)``; None where JavaScript yields NaN."""
    text = text.strip()
    if not text:
        return 0.0
    if RADIX_PATTERN.fullmatch(text):
        return float(int(text, 0))
    if DECIMAL_PATTERN.fullmatch(text):
        return float(text.replace("Infinity", "inf"))
    return None


def filler_length(bound_text: str) -> int:
    """How many times `for (i = 0; i < bound_text; i++)` runs in JavaScript."""
    bound = to_number(bound_text)
    if bound is None or not math.isfinite(bound) or bound <= 0:
        return 0
    return math.ceil(bound)


def _parameter_passed_to(
    node: Node, method_name: str, context: FunctionContext
) -> str | None:
    """Parameter name given as first argument to a `method_name` call.

    The callee is either a member access (`fs.readFileSync`) or a plain
    function whose name ends with the method name (`fs_readFileSync`).
    """
    match node:
        case CallExpression(
            callee=MemberExpression(property=Identifier(name=name)),
            arguments=[Identifier(name=ident), *_],
        ) if name == method_name and ident in context.params:
            return ident
        case CallExpression(
            callee=Identifier(name=name),
            arguments=[Identifier(name=ident), *_],
        ) if name.endswith(method_name) and ident in context.params:
            return ident
    return None


def _literal_text(literal: Literal) -> str:
    """JavaScript ``String(value)`` for a literal token."""
    value = literal.value
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or value is None:
        return literal.raw
    if isinstance(value, float):
        if not math.isfinite(value):
            return "Infinity" if value > 0 else "NaN"
        if value.is_integer():
            return str(int(value))
    return str(value)
