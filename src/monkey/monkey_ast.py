"""
Defines the abstract syntax tree (AST) node structure for the Monkey programming language.

Every node is a frozen dataclass. Child sequences are tuples, so a tree cannot
be mutated after the parser has built it. Each node carries the line/column of
the token it starts at; positions are ignored by equality so that trees built
by hand compare equal to parsed ones.

Statements:
    LetStatement, ReturnStatement, ExpressionStatement, BlockStatement

Expressions:
    Identifier, IntegerLiteral, BooleanLiteral, PrefixExpression,
    InfixExpression, IfExpression, FunctionLiteral, CallExpression

Rendering:
    `str(node)` gives a compact source-like form in which every prefix and
    infix expression is fully parenthesized, e.g. `((-a) * b)`.
    `node.to_dict()` gives a JSON-serializable nested dictionary.

Example:
    node = InfixExpression(Identifier("a"), "+", IntegerLiteral(1))
    str(node)  # "(a + 1)"
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, TypedDict, Union, cast


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of a node used for serialization.

    `kind` is the node class name; the remaining keys are the node's own fields,
    with child nodes serialized recursively and tuples turned into lists.
    """

    kind: str
    line: int
    col: int
    name: Any
    value: Any
    operator: str
    left: Any
    right: Any
    condition: Any
    consequence: Any
    alternative: Any
    parameters: list[Any]
    body: Any
    function: Any
    arguments: list[Any]
    statements: list[Any]
    expression: Any


@dataclass(frozen=True)
class Node:
    """Base class for every AST node."""

    line: int = field(default=0, compare=False, kw_only=True)
    col: int = field(default=0, compare=False, kw_only=True)

    def to_dict(self) -> ASTDict:
        out: dict[str, Any] = {"kind": type(self).__name__}
        for f in fields(self):
            if f.name in ("line", "col"):
                continue
            out[f.name] = _serialize(getattr(self, f.name))
        out["line"] = self.line
        out["col"] = self.col
        return cast(ASTDict, out)


def _serialize(value: Any) -> Any:
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_serialize(v) for v in value]
    return value


# Expressions


@dataclass(frozen=True)
class Identifier(Node):
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class IntegerLiteral(Node):
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BooleanLiteral(Node):
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class PrefixExpression(Node):
    """A unary operator (`-` or `!`) applied to its right operand."""

    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass(frozen=True)
class InfixExpression(Node):
    """A binary operator between two operands."""

    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True)
class IfExpression(Node):
    """`if (condition) { ... } else { ... }`; the else block is optional."""

    condition: Expression
    consequence: BlockStatement
    alternative: BlockStatement | None = None

    def __str__(self) -> str:
        out = f"if{self.condition} {self.consequence}"
        if self.alternative is not None:
            out += f"else {self.alternative}"
        return out


@dataclass(frozen=True)
class FunctionLiteral(Node):
    """`fn(params) { body }`. Parameter names are not checked for uniqueness."""

    parameters: tuple[Identifier, ...]
    body: BlockStatement

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"fn({params}) {self.body}"


@dataclass(frozen=True)
class CallExpression(Node):
    function: Expression
    arguments: tuple[Expression, ...]

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


# Statements


@dataclass(frozen=True)
class LetStatement(Node):
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"let {self.name} = {self.value};"


@dataclass(frozen=True)
class ReturnStatement(Node):
    """`return <value>;`. `value` is None for a bare `return;`."""

    value: Expression | None = None

    def __str__(self) -> str:
        if self.value is None:
            return "return;"
        return f"return {self.value};"


@dataclass(frozen=True)
class ExpressionStatement(Node):
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


@dataclass(frozen=True)
class BlockStatement(Node):
    """Statements between `{` and `}`, owned by an if or fn."""

    statements: tuple[Statement, ...] = ()

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


@dataclass(frozen=True)
class Program(Node):
    """Root of the tree: top-level statements in source order."""

    statements: tuple[Statement, ...] = ()

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


Expression = Union[
    Identifier,
    IntegerLiteral,
    BooleanLiteral,
    PrefixExpression,
    InfixExpression,
    IfExpression,
    FunctionLiteral,
    CallExpression,
]

Statement = Union[LetStatement, ReturnStatement, ExpressionStatement, BlockStatement]

__all__ = [
    "ASTDict",
    "BlockStatement",
    "BooleanLiteral",
    "CallExpression",
    "Expression",
    "ExpressionStatement",
    "FunctionLiteral",
    "Identifier",
    "IfExpression",
    "InfixExpression",
    "IntegerLiteral",
    "LetStatement",
    "Node",
    "PrefixExpression",
    "Program",
    "ReturnStatement",
    "Statement",
]
