"""
Defines the abstract syntax tree (AST) node structure for the Letter programming language.

Classes:
    NodeKind:
        Closed enumeration of node tags. Every concrete node class carries exactly one.

    ASTNode:
        Base class for all nodes. Provides `to_text()` (canonical rendering via the
        text emitter) and `to_dict()` (plain nested dictionaries for JSON output).

    ASTDict:
        TypedDict shape of a serialized node.

    Program, ExpressionStatement and one frozen dataclass per expression form.

Nodes are immutable once built: dataclasses are frozen and child sequences are
tuples. A tree has no sharing and no back-references; `Program` is the root.

Usage:
    This module is the parser's output model. The text emitter renders it and the
    test suites compare trees built by hand against parser output.

Example:
    node = BinaryExpression("+", NumericLiteral(1), Identifier("x"))
    node.to_text()  # "(1+x)"
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, ClassVar, TypedDict, Union


class NodeKind(str, Enum):
    PROGRAM = "program"
    EXPRESSION_STATEMENT = "expr_stmt"
    NUMERIC_LITERAL = "number"
    STRING_LITERAL = "string"
    BOOLEAN_LITERAL = "boolean"
    NULL_LITERAL = "null"
    IDENTIFIER = "identifier"
    THIS = "this"
    SUPER = "super"
    ASSIGNMENT = "assign"
    LOGICAL = "logical"
    BINARY = "binary"
    UNARY = "unary"
    MEMBER = "member"
    CALL = "call"
    NEW = "new"

    def __str__(self) -> str:
        return self.value


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of an ASTNode used for serialization.

    Only `kind` is always present; the remaining keys depend on the node class
    and hold plain values or nested ASTDicts.
    """

    kind: str
    statements: list["ASTDict"]
    expression: "ASTDict"
    value: Any
    name: str
    operator: str
    left: "ASTDict"
    right: "ASTDict"
    operand: "ASTDict"
    object: "ASTDict"
    property: "ASTDict"
    computed: bool
    callee: "ASTDict"
    arguments: list["ASTDict"]


@dataclass(frozen=True)
class ASTNode:
    """
    Base class of every Letter AST node.

    Subclasses set the `kind` class variable and declare their children as
    dataclass fields. Equality is structural.

    Methods:
        to_text(): Canonical textual rendering of the subtree.
        to_dict(): Converts the node (and all descendants) into nested dictionaries.
    """

    kind: ClassVar[NodeKind]

    def to_text(self) -> str:
        from letter.emitters.text_emitter import TextEmitter

        return TextEmitter().emit(self)

    def to_dict(self) -> ASTDict:
        """Serializes the subtree without recursing, so deep chains are safe."""
        root: dict[str, Any] = {}
        pending: list[tuple[ASTNode, dict[str, Any]]] = [(self, root)]
        while pending:
            node, data = pending.pop()
            data["kind"] = node.kind.value
            for f in fields(node):
                value = getattr(node, f.name)
                if isinstance(value, ASTNode):
                    child: dict[str, Any] = {}
                    data[f.name] = child
                    pending.append((value, child))
                elif isinstance(value, tuple):
                    items: list[dict[str, Any]] = []
                    for item in value:
                        items.append({})
                        pending.append((item, items[-1]))
                    data[f.name] = items
                else:
                    data[f.name] = value
        return root  # type: ignore[return-value]


# Literals and leaves


@dataclass(frozen=True)
class NumericLiteral(ASTNode):
    kind: ClassVar[NodeKind] = NodeKind.NUMERIC_LITERAL
    value: int


@dataclass(frozen=True)
class StringLiteral(ASTNode):
    """A string literal; `value` excludes the surrounding quotes."""

    kind: ClassVar[NodeKind] = NodeKind.STRING_LITERAL
    value: str


@dataclass(frozen=True)
class BooleanLiteral(ASTNode):
    kind: ClassVar[NodeKind] = NodeKind.BOOLEAN_LITERAL
    value: bool


@dataclass(frozen=True)
class NullLiteral(ASTNode):
    kind: ClassVar[NodeKind] = NodeKind.NULL_LITERAL


@dataclass(frozen=True)
class Identifier(ASTNode):
    kind: ClassVar[NodeKind] = NodeKind.IDENTIFIER
    name: str


@dataclass(frozen=True)
class ThisExpression(ASTNode):
    kind: ClassVar[NodeKind] = NodeKind.THIS


@dataclass(frozen=True)
class SuperExpression(ASTNode):
    """`super`; the parser only produces it as the callee of a call."""

    kind: ClassVar[NodeKind] = NodeKind.SUPER


# Operators


@dataclass(frozen=True)
class AssignmentExpression(ASTNode):
    """`left <operator> right` where operator is one of `=`, `+=`, `-=`, `*=`, `/=`."""

    kind: ClassVar[NodeKind] = NodeKind.ASSIGNMENT
    operator: str
    left: Expression
    right: Expression


@dataclass(frozen=True)
class LogicalExpression(ASTNode):
    """`&&`, `||`, and the equality operators `==` / `!=`."""

    kind: ClassVar[NodeKind] = NodeKind.LOGICAL
    operator: str
    left: Expression
    right: Expression


@dataclass(frozen=True)
class BinaryExpression(ASTNode):
    """Arithmetic (`+ - * /`) and relational (`< > <= >=`) operators."""

    kind: ClassVar[NodeKind] = NodeKind.BINARY
    operator: str
    left: Expression
    right: Expression


@dataclass(frozen=True)
class UnaryExpression(ASTNode):
    kind: ClassVar[NodeKind] = NodeKind.UNARY
    operator: str
    operand: Expression


# Member access and calls


@dataclass(frozen=True)
class MemberExpression(ASTNode):
    """
    Property access on `object`.

    Attributes:
        object (Expression): The accessed value.
        property (Expression): An Identifier for `a.b`, any expression for `a[b]`.
        computed (bool): True for bracket access.
    """

    kind: ClassVar[NodeKind] = NodeKind.MEMBER
    object: Expression
    property: Expression
    computed: bool = False


@dataclass(frozen=True)
class CallExpression(ASTNode):
    kind: ClassVar[NodeKind] = NodeKind.CALL
    callee: Expression
    arguments: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class NewExpression(ASTNode):
    kind: ClassVar[NodeKind] = NodeKind.NEW
    callee: Expression
    arguments: tuple[Expression, ...] = ()


Expression = Union[
    NumericLiteral,
    StringLiteral,
    BooleanLiteral,
    NullLiteral,
    Identifier,
    ThisExpression,
    SuperExpression,
    AssignmentExpression,
    LogicalExpression,
    BinaryExpression,
    UnaryExpression,
    MemberExpression,
    CallExpression,
    NewExpression,
]


# Statements


@dataclass(frozen=True)
class ExpressionStatement(ASTNode):
    kind: ClassVar[NodeKind] = NodeKind.EXPRESSION_STATEMENT
    expression: Expression


Statement = ExpressionStatement


@dataclass(frozen=True)
class Program(ASTNode):
    """Parse root; `statements` keeps source order."""

    kind: ClassVar[NodeKind] = NodeKind.PROGRAM
    statements: tuple[Statement, ...] = ()


__all__ = [
    "ASTDict",
    "ASTNode",
    "AssignmentExpression",
    "BinaryExpression",
    "BooleanLiteral",
    "CallExpression",
    "Expression",
    "ExpressionStatement",
    "Identifier",
    "LogicalExpression",
    "MemberExpression",
    "NewExpression",
    "NodeKind",
    "NullLiteral",
    "NumericLiteral",
    "Program",
    "Statement",
    "StringLiteral",
    "SuperExpression",
    "ThisExpression",
    "UnaryExpression",
]
