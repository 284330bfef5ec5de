"""
Letter Language Parser

Parses Letter source into a typed abstract syntax tree (AST).

This module implements a recursive-descent, precedence-climbing parser. It pulls
tokens from a `Lexer` one at a time, keeping a single token of lookahead, and
builds a `Program` of `ExpressionStatement` nodes.

Grammar
-------
    program        ::= (expression ';'?)*
    expression     ::= assignment
    assignment     ::= logical_or (('=' | '+=' | '-=' | '*=' | '/=') assignment)?
    logical_or     ::= logical_and ('||' logical_and)*
    logical_and    ::= equality ('&&' equality)*
    equality       ::= comparison (('==' | '!=') comparison)*
    comparison     ::= term (('<' | '>' | '<=' | '>=') term)*
    term           ::= factor (('+' | '-') factor)*
    factor         ::= unary (('*' | '/') unary)*
    unary          ::= ('+' | '-' | '!') unary | left_hand_side
    left_hand_side ::= 'super' call | member call?
    call           ::= arguments arguments*
    member         ::= primary ('.' IDENTIFIER | '[' expression ']')*
    primary        ::= literal | '(' expression ')' | IDENTIFIER | 'this'
                     | 'new' member arguments
    arguments      ::= '(' (assignment (',' assignment)*)? ')'

Parser Behavior
---------------
- Fail-fast: the first unexpected token raises `ParseError`; an unmatchable
  character raises `LexicalError`. There is no recovery.
- Equality operators build `LogicalExpression`; comparison and arithmetic
  operators build `BinaryExpression`.
- Assignment and unary prefixes are right-associative. Both are parsed with
  loops, so long prefix chains do not grow the Python stack.
- Bracketed nesting is limited by `max_depth`. Input that nests deeper than the
  interpreter stack allows also raises `ParseError`, never `RecursionError`.
- A `;` may follow any statement and is consumed. Letter itself has no statement
  separator; this is an extension, and a lone `;` is still rejected.

Entry Points
------------
- `parse(source)`: Parse a full program.
- `Parser.parse()`: Parse a full program from an existing lexer.
- `Parser.parse_expression_entrypoint()`: Parse exactly one expression spanning
  the whole input.

Raises
------
LexicalError
    When the lexer cannot match the remaining input.
ParseError
    When the token stream does not fit the grammar.
"""

from __future__ import annotations

from collections.abc import Callable

from letter.letter_ast import (  # isort:skip
    AssignmentExpression,
    BinaryExpression,
    BooleanLiteral,
    CallExpression,
    Expression,
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
from letter.letter_constants import (
    ASSIGNMENT_OPERATORS,
    LITERAL_TOKENS,
    UNARY_OPERATORS,
    TokenType,
)
from letter.letter_errors import LexicalError, ParseError
from letter.letter_lexer import CharacterStream, Lexer, Token

DEFAULT_MAX_DEPTH = 32
"""Default limit on nested parentheses, brackets and argument lists."""

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

BinaryNode = type[LogicalExpression] | type[BinaryExpression]


class Parser:
    """
    Letter Parser Class

    Turns the token stream of one `Lexer` into a `Program`. The parser owns the
    lexer and never looks at the source text itself.

    Attributes
    ----------
    lexer : Lexer
        Token source, pulled one token at a time.
    lookahead : Token
        The next token, fetched but not yet consumed.
    strict : bool
        When True, assignment targets must be identifiers or member expressions.
    max_depth : int
        Maximum nesting of bracketed sub-expressions.
    depth : int
        Current bracketed nesting.

    Raises
    ------
    LexicalError, ParseError
        On the first malformed input.
    """

    def __init__(
        self,
        lexer: Lexer,
        *,
        strict: bool = False,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self.lexer = lexer
        self.strict = strict
        self.max_depth = max_depth
        self.depth = 0
        self.lookahead: Token = Token(TokenType.EOF)

    @classmethod
    def from_source(
        cls,
        source: str,
        *,
        strict: bool = False,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> Parser:
        return cls(
            Lexer(CharacterStream(source)), strict=strict, max_depth=max_depth
        )

    # Token handling

    def advance(self) -> Token:
        """Pulls the next token into the lookahead slot and returns it."""
        tok = self.lexer.next_token()
        if tok.type is TokenType.ERROR:
            raise LexicalError(self.lexer.stream.peek())
        self.lookahead = tok
        return tok

    def check(self, *types: TokenType) -> bool:
        return self.lookahead.type in types

    def match(self, *types: TokenType) -> Token:
        """Consumes the lookahead if its category is one of `types`.

        Returns:
            Token: The consumed token.

        Raises:
            ParseError: At end of input, or when the lookahead has another category.
        """
        tok = self.lookahead
        expected = tuple(str(t) for t in types)
        if tok.type is TokenType.EOF:
            raise ParseError(
                f"Unexpected end of input, expected: {' or '.join(expected)}",
                found=tok.type,
                expected=expected,
            )
        if tok.type not in types:
            raise ParseError(
                f"Unexpected token: {tok.type} ({tok.value!r}), "
                f"expected: {' or '.join(expected)}",
                found=tok.type,
                expected=expected,
            )
        self.advance()
        return tok

    def enter_nested(self) -> None:
        self.depth += 1
        if self.depth > self.max_depth:
            raise ParseError(
                f"Maximum nesting depth of {self.max_depth} exceeded",
                found=self.lookahead.type,
            )

    def leave_nested(self) -> None:
        self.depth -= 1

    def stack_exhausted(self) -> ParseError:
        # A max_depth above what the interpreter stack holds ends up here.
        return ParseError(
            f"Maximum nesting depth exceeded at depth {self.depth} "
            f"(max_depth={self.max_depth} is too deep for the Python stack)",
            found=self.lookahead.type,
        )

    # Entry points

    def parse(self) -> Program:
        """Parse a full Letter program."""
        try:
            self.advance()
            statements: list[ExpressionStatement] = []
            while not self.check(TokenType.EOF):
                statements.append(self.parse_statement())
        except RecursionError:
            raise self.stack_exhausted() from None
        return Program(tuple(statements))

    def parse_expression_entrypoint(self) -> Expression:
        """Parse a single expression that must make up the whole input."""
        self.advance()
        try:
            expr = self.parse_expression()
        except RecursionError:
            raise self.stack_exhausted() from None
        if self.check(TokenType.SEMICOLON):
            self.match(TokenType.SEMICOLON)
        if not self.check(TokenType.EOF):
            raise ParseError(
                f"Unexpected token: {self.lookahead.type} ({self.lookahead.value!r}), "
                f"expected: {TokenType.EOF}",
                found=self.lookahead.type,
                expected=(str(TokenType.EOF),),
            )
        return expr

    # Statements

    def parse_statement(self) -> ExpressionStatement:
        return self.parse_expression_statement()

    def parse_expression_statement(self) -> ExpressionStatement:
        expr = self.parse_expression()
        if self.check(TokenType.SEMICOLON):
            self.match(TokenType.SEMICOLON)
        return ExpressionStatement(expr)

    # Expressions, lowest precedence first

    def parse_expression(self) -> Expression:
        return self.parse_assignment()

    def parse_assignment(self) -> Expression:
        """Parse `a = b += c` as `a = (b += c)`."""
        operands = [self.parse_logical_or()]
        operators: list[str] = []
        while self.check(*ASSIGNMENT_OPERATORS):
            operators.append(self.match(*ASSIGNMENT_OPERATORS).value)
            operands.append(self.parse_logical_or())

        node = operands.pop()
        while operators:
            left = operands.pop()
            self.check_assignment_target(left)
            node = AssignmentExpression(operators.pop(), left, node)
        return node

    def check_assignment_target(self, target: Expression) -> None:
        if self.strict and not isinstance(target, (Identifier, MemberExpression)):
            raise ParseError(
                f"Invalid left-hand side in assignment: {type(target).__name__}"
            )

    def parse_binary(
        self,
        operand: Callable[[], Expression],
        operator: TokenType,
        node_type: BinaryNode,
    ) -> Expression:
        """Left-fold `operand (operator operand)*` into `node_type` nodes."""
        left = operand()
        while self.check(operator):
            op = self.match(operator).value
            left = node_type(op, left, operand())
        return left

    def parse_logical_or(self) -> Expression:
        return self.parse_binary(
            self.parse_logical_and, TokenType.LOGICAL_OR, LogicalExpression
        )

    def parse_logical_and(self) -> Expression:
        return self.parse_binary(
            self.parse_equality, TokenType.LOGICAL_AND, LogicalExpression
        )

    def parse_equality(self) -> Expression:
        return self.parse_binary(
            self.parse_comparison, TokenType.EQUALITY_OPERATOR, LogicalExpression
        )

    def parse_comparison(self) -> Expression:
        return self.parse_binary(
            self.parse_term, TokenType.RELATIONAL_OPERATOR, BinaryExpression
        )

    def parse_term(self) -> Expression:
        return self.parse_binary(
            self.parse_factor, TokenType.ADDITIVE_OPERATOR, BinaryExpression
        )

    def parse_factor(self) -> Expression:
        return self.parse_binary(
            self.parse_unary, TokenType.MULTIPLICATIVE_OPERATOR, BinaryExpression
        )

    def parse_unary(self) -> Expression:
        """Parse stacked prefixes: `-+!x` is `(-(+(!x)))`."""
        operators: list[str] = []
        while self.check(*UNARY_OPERATORS):
            operators.append(self.match(*UNARY_OPERATORS).value)

        node = self.parse_left_hand_side()
        for op in reversed(operators):
            node = UnaryExpression(op, node)
        return node

    # Member and call chains

    def parse_left_hand_side(self) -> Expression:
        if self.check(TokenType.SUPER):
            return self.parse_call(self.parse_super())

        member = self.parse_member()
        if self.check(TokenType.LPAREN):
            return self.parse_call(member)
        return member

    def parse_super(self) -> SuperExpression:
        self.match(TokenType.SUPER)
        return SuperExpression()

    def parse_call(self, callee: Expression) -> Expression:
        """Parse `callee(...)(...)...`; every argument list wraps the previous call."""
        node: Expression = CallExpression(callee, self.parse_arguments())
        while self.check(TokenType.LPAREN):
            node = CallExpression(node, self.parse_arguments())
        return node

    def parse_member(self) -> Expression:
        """Parse `primary` followed by any mix of `.name` and `[expr]`."""
        node = self.parse_primary()
        while self.check(TokenType.DOT, TokenType.LBRACKET):
            if self.check(TokenType.DOT):
                self.match(TokenType.DOT)
                node = MemberExpression(node, self.parse_identifier(), computed=False)
            else:
                self.match(TokenType.LBRACKET)
                self.enter_nested()
                prop = self.parse_expression()
                self.leave_nested()
                self.match(TokenType.RBRACKET)
                node = MemberExpression(node, prop, computed=True)
        return node

    def parse_arguments(self) -> tuple[Expression, ...]:
        """Parse a parenthesized, comma-separated argument list."""
        self.match(TokenType.LPAREN)
        self.enter_nested()
        args: list[Expression] = []
        if not self.check(TokenType.RPAREN, TokenType.EOF):
            args = self.parse_argument_list()
        self.leave_nested()
        self.match(TokenType.RPAREN)
        return tuple(args)

    def parse_argument_list(self) -> list[Expression]:
        args = [self.parse_assignment()]
        while self.check(TokenType.COMMA):
            self.match(TokenType.COMMA)
            args.append(self.parse_assignment())
        return args

    # Primaries

    def parse_primary(self) -> Expression:
        tok = self.lookahead
        if tok.type in LITERAL_TOKENS:
            return self.parse_literal()
        if tok.type is TokenType.LPAREN:
            self.match(TokenType.LPAREN)
            self.enter_nested()
            expr = self.parse_expression()
            self.leave_nested()
            self.match(TokenType.RPAREN)
            return expr
        if tok.type is TokenType.IDENTIFIER:
            return self.parse_identifier()
        if tok.type is TokenType.THIS:
            self.match(TokenType.THIS)
            return ThisExpression()
        if tok.type is TokenType.NEW:
            return self.parse_new()
        if tok.type is TokenType.EOF:
            raise ParseError(
                "Unexpected end of input, expected: primary expression",
                found=tok.type,
                expected=("primary expression",),
            )
        raise ParseError(
            f"Unexpected primary expression: {tok.type} ({tok.value!r})",
            found=tok.type,
            expected=("primary expression",),
        )

    def parse_new(self) -> NewExpression:
        self.match(TokenType.NEW)
        self.enter_nested()
        callee = self.parse_member()
        self.leave_nested()
        return NewExpression(callee, self.parse_arguments())

    def parse_identifier(self) -> Identifier:
        return Identifier(self.match(TokenType.IDENTIFIER).value)

    def parse_literal(self) -> Expression:
        tok = self.lookahead
        if tok.type is TokenType.NUMBER:
            text = self.match(TokenType.NUMBER).value
            value = int(text, 10)
            if not INT64_MIN <= value <= INT64_MAX:
                raise ParseError(
                    f"Numeric literal out of range: {text}", found=TokenType.NUMBER
                )
            return NumericLiteral(value)
        if tok.type is TokenType.STRING:
            return StringLiteral(self.match(TokenType.STRING).value[1:-1])
        if tok.type is TokenType.TRUE:
            self.match(TokenType.TRUE)
            return BooleanLiteral(True)
        if tok.type is TokenType.FALSE:
            self.match(TokenType.FALSE)
            return BooleanLiteral(False)
        if tok.type is TokenType.NULL:
            self.match(TokenType.NULL)
            return NullLiteral()
        raise ParseError(
            f"Unexpected literal: {tok.type} ({tok.value!r})",
            found=tok.type,
            expected=tuple(sorted(str(t) for t in LITERAL_TOKENS)),
        )


def parse(
    source: str,
    *,
    strict: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Program:
    """Parse Letter source text into a `Program`."""
    return Parser.from_source(source, strict=strict, max_depth=max_depth).parse()


__all__ = ["DEFAULT_MAX_DEPTH", "Parser", "parse"]
