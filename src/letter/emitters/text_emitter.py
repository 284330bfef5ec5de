"""
Renders Letter AST nodes as canonical source-like text.

This module defines the `TextEmitter` class, which turns a parsed tree back into
a compact textual form for inspection, debugging and re-parsing.

Rendering rules:
    - Binary and logical operators: `(<left><op><right>)`, no spaces
    - Assignment: `<left> <op> <right>`, spaced and unparenthesized
    - Unary: `(<op><operand>)`
    - Member access: `<object>.<property>` or `<object>[<property>]`
    - Calls: `<callee>(<arg>, <arg>)`; `new` prefixes `new `
    - `this`, `super`, `null`, `true`, `false`: the keyword itself
    - Strings: re-quoted with `"` (or `'` when the value holds a `"`)
    - Program: statement texts concatenated with no separator

Whitespace and comments from the original input are not preserved.

Each `emit_<kind>` method returns the node's text as a list of parts: plain
strings and child nodes. `emit` expands child nodes from an explicit work stack,
so arbitrarily long operator folds and member chains render without recursion.

Raises:
    - `NotImplementedError`: If a node kind has no `emit_*` method.
"""

from collections.abc import Iterator

from letter.letter_ast import (  # isort:skip
    ASTNode,
    AssignmentExpression,
    BinaryExpression,
    BooleanLiteral,
    CallExpression,
    ExpressionStatement,
    Identifier,
    LogicalExpression,
    MemberExpression,
    NewExpression,
    NullLiteral,
    NumericLiteral,
    Program,
    StringLiteral,
    SuperExpression,
    ThisExpression,
    UnaryExpression,
)


Part = str | ASTNode
Parts = list[Part]


class TextEmitter:
    """Emits canonical text from Letter AST nodes.

    Each `NodeKind` value `k` is handled by a method named `emit_k`; `emit`
    dispatches on `node.kind`.

    Methods:
        emit(node): Returns the text for any node.
    """

    def emit(self, node: ASTNode) -> str:
        """
        Renders a whole subtree.

        Parameters
        ----------
        node : ASTNode
            The node to render.

        Returns
        -------
        str
            The rendered text.

        Raises
        ------
        NotImplementedError
            If no emitter exists for a node kind in the subtree.
        """
        out: list[str] = []
        stack: list[Iterator[Part]] = [iter((node,))]
        while stack:
            part = next(stack[-1], None)
            if part is None:
                stack.pop()
            elif isinstance(part, str):
                out.append(part)
            else:
                stack.append(iter(self.parts(part)))
        return "".join(out)

    def parts(self, node: ASTNode) -> Parts:
        """Dispatches a node to its `emit_<kind>` method."""
        method = getattr(self, f"emit_{node.kind.value}", None)
        if not callable(method):
            raise NotImplementedError(f"TextEmitter: no emitter for {node.kind}")
        # pylint: disable=not-callable
        return list(method(node))

    def emit_program(self, node: Program) -> Parts:
        return list(node.statements)

    def emit_expr_stmt(self, node: ExpressionStatement) -> Parts:
        return [node.expression]

    def emit_number(self, node: NumericLiteral) -> Parts:
        return [str(node.value)]

    def emit_string(self, node: StringLiteral) -> Parts:
        quote = "'" if '"' in node.value else '"'
        return [f"{quote}{node.value}{quote}"]

    def emit_boolean(self, node: BooleanLiteral) -> Parts:
        return ["true" if node.value else "false"]

    def emit_null(self, node: NullLiteral) -> Parts:
        return ["null"]

    def emit_identifier(self, node: Identifier) -> Parts:
        return [node.name]

    def emit_this(self, node: ThisExpression) -> Parts:
        return ["this"]

    def emit_super(self, node: SuperExpression) -> Parts:
        return ["super"]

    def emit_assign(self, node: AssignmentExpression) -> Parts:
        return [node.left, f" {node.operator} ", node.right]

    def emit_logical(self, node: LogicalExpression) -> Parts:
        return ["(", node.left, node.operator, node.right, ")"]

    def emit_binary(self, node: BinaryExpression) -> Parts:
        return ["(", node.left, node.operator, node.right, ")"]

    def emit_unary(self, node: UnaryExpression) -> Parts:
        return ["(", node.operator, node.operand, ")"]

    def emit_member(self, node: MemberExpression) -> Parts:
        if node.computed:
            return [node.object, "[", node.property, "]"]
        return [node.object, ".", node.property]

    def emit_arguments(self, arguments: tuple[ASTNode, ...]) -> Parts:
        parts: Parts = ["("]
        for i, arg in enumerate(arguments):
            if i:
                parts.append(", ")
            parts.append(arg)
        parts.append(")")
        return parts

    def emit_call(self, node: CallExpression) -> Parts:
        return [node.callee, *self.emit_arguments(node.arguments)]

    def emit_new(self, node: NewExpression) -> Parts:
        return ["new ", node.callee, *self.emit_arguments(node.arguments)]


__all__ = ["TextEmitter"]
