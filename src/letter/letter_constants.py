"""
Token categories and the lexical rule table for the Letter language.

Exports:
    TokenType: Closed enumeration of every lexical category.
    KEYWORDS: Reserved words mapped to their keyword category.
    LEXICAL_RULES: Ordered ``(pattern, TokenType)`` pairs consumed by the lexer.
    ASSIGNMENT_OPERATORS, UNARY_OPERATORS, LITERAL_TOKENS: Token groupings used by the parser.

The order of ``LEXICAL_RULES`` is significant: the first rule that matches wins.
Comments must come before the ``/`` operator, two-character operators before
their one-character prefixes, and keywords before the generic identifier rule.
"""

from enum import Enum


class TokenType(str, Enum):
    """Lexical categories produced by the Letter lexer."""

    # Delimiters
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    LBRACE = "LBRACE"
    RBRACE = "RBRACE"
    LBRACKET = "LBRACKET"
    RBRACKET = "RBRACKET"
    COMMA = "COMMA"
    SEMICOLON = "SEMICOLON"
    DOT = "DOT"

    # Keywords
    LET = "LET"
    IF = "IF"
    ELSE = "ELSE"
    TRUE = "TRUE"
    FALSE = "FALSE"
    NULL = "NULL"
    DEF = "DEF"
    RETURN = "RETURN"
    WHILE = "WHILE"
    DO = "DO"
    FOR = "FOR"
    CLASS = "CLASS"
    THIS = "THIS"
    EXTENDS = "EXTENDS"
    SUPER = "SUPER"
    NEW = "NEW"

    # Literals
    NUMBER = "NUMBER"
    STRING = "STRING"
    IDENTIFIER = "IDENTIFIER"

    # Operators
    SIMPLE_ASSIGN = "SIMPLE_ASSIGN"
    COMPLEX_ASSIGN = "COMPLEX_ASSIGN"
    RELATIONAL_OPERATOR = "RELATIONAL_OPERATOR"
    EQUALITY_OPERATOR = "EQUALITY_OPERATOR"
    ADDITIVE_OPERATOR = "ADDITIVE_OPERATOR"
    MULTIPLICATIVE_OPERATOR = "MULTIPLICATIVE_OPERATOR"
    LOGICAL_AND = "LOGICAL_AND"
    LOGICAL_OR = "LOGICAL_OR"
    LOGICAL_NOT = "LOGICAL_NOT"

    # Never emitted: whitespace and comments
    IGNORE = "IGNORE"

    # Sentinels
    EOF = "EOF"
    ERROR = "ERROR"

    def __str__(self) -> str:
        return self.value


KEYWORDS: dict[str, TokenType] = {
    "let": TokenType.LET,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "null": TokenType.NULL,
    "def": TokenType.DEF,
    "return": TokenType.RETURN,
    "class": TokenType.CLASS,
    "this": TokenType.THIS,
    "extends": TokenType.EXTENDS,
    "super": TokenType.SUPER,
    "new": TokenType.NEW,
    "while": TokenType.WHILE,
    "do": TokenType.DO,
    "for": TokenType.FOR,
}

# Patterns are matched at the cursor with ASCII semantics for \w, \d and \b.
# They must not contain capturing groups.
LEXICAL_RULES: list[tuple[str, TokenType]] = [
    # Whitespace and comments
    (r"[\t\n\f\r ]+", TokenType.IGNORE),
    (r"//.*", TokenType.IGNORE),
    (r"/\*[\s\S]*?\*/", TokenType.IGNORE),
    # Delimiters
    (r"\{", TokenType.LBRACE),
    (r"\}", TokenType.RBRACE),
    (r"\(", TokenType.LPAREN),
    (r"\)", TokenType.RPAREN),
    (r"\[", TokenType.LBRACKET),
    (r"\]", TokenType.RBRACKET),
    (r",", TokenType.COMMA),
    (r";", TokenType.SEMICOLON),
    (r"\.", TokenType.DOT),
    # Relational and equality
    (r"[<>]=?", TokenType.RELATIONAL_OPERATOR),
    (r"[!=]=", TokenType.EQUALITY_OPERATOR),
    # Logical
    (r"&&", TokenType.LOGICAL_AND),
    (r"\|\|", TokenType.LOGICAL_OR),
    (r"!", TokenType.LOGICAL_NOT),
    # Assignment
    (r"=", TokenType.SIMPLE_ASSIGN),
    (r"[+\-*/]=", TokenType.COMPLEX_ASSIGN),
    # Arithmetic
    (r"[+\-]", TokenType.ADDITIVE_OPERATOR),
    (r"[*/]", TokenType.MULTIPLICATIVE_OPERATOR),
    # Keywords
    *((rf"{word}\b", token_type) for word, token_type in KEYWORDS.items()),
    # Literals
    (r"\d+", TokenType.NUMBER),
    (r'"[^"]*"', TokenType.STRING),
    (r"'[^']*'", TokenType.STRING),
    (r"\w+", TokenType.IDENTIFIER),
]

ASSIGNMENT_OPERATORS: tuple[TokenType, ...] = (
    TokenType.SIMPLE_ASSIGN,
    TokenType.COMPLEX_ASSIGN,
)

UNARY_OPERATORS: tuple[TokenType, ...] = (
    TokenType.ADDITIVE_OPERATOR,
    TokenType.LOGICAL_NOT,
)

LITERAL_TOKENS: frozenset[TokenType] = frozenset(
    {
        TokenType.NUMBER,
        TokenType.STRING,
        TokenType.TRUE,
        TokenType.FALSE,
        TokenType.NULL,
    }
)

__all__ = [
    "ASSIGNMENT_OPERATORS",
    "KEYWORDS",
    "LEXICAL_RULES",
    "LITERAL_TOKENS",
    "TokenType",
    "UNARY_OPERATORS",
]
