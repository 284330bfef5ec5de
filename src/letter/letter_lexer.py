"""
Lexical analyzer for the Letter programming language.

This module turns raw source text into tokens, one token per request:

Classes:
    CharacterStream: Source text plus the scan cursor.
    Token: A single token with its category and matched text.
    Lexer: Pulls tokens from a CharacterStream using the ordered rule table.

Features:
    - Skips whitespace, `//` line comments and `/* */` block comments
    - First-match (priority) recognition over ``LEXICAL_RULES``, not longest match
    - Keywords only match on a word boundary, so `lettuce` is one identifier
    - Unmatchable input yields an ``ERROR`` token instead of raising

Example:
    >>> lexer = Lexer(CharacterStream("let x"))
    >>> lexer.next_token()
    Token(LET, let)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
"""

import re
from collections.abc import Iterator
from typing import Any

from letter.letter_constants import LEXICAL_RULES, TokenType


def compile_rules(rules: list[tuple[str, TokenType]]) -> re.Pattern[str]:
    """Compiles an ordered rule table into one alternation.

    Each rule becomes a named group ``r<index>``. Regex alternation tries the
    groups left to right and stops at the first that matches, so rule priority
    is preserved.

    Args:
        rules (list[tuple[str, TokenType]]): Ordered ``(pattern, category)`` pairs.

    Returns:
        re.Pattern[str]: The combined pattern.
    """
    alternatives = "|".join(
        f"(?P<r{index}>{pattern})" for index, (pattern, _) in enumerate(rules)
    )
    return re.compile(alternatives, re.ASCII)


_RULE_PATTERN = compile_rules(LEXICAL_RULES)
_RULE_TYPES: dict[str, TokenType] = {
    f"r{index}": token_type for index, (_, token_type) in enumerate(LEXICAL_RULES)
}


class CharacterStream:
    """
    Source text with a cursor marking the start of the unconsumed remainder.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
    """

    def __init__(self, source: str, position: int = 0):
        self.source = source
        self.position = position

    def advance(self, count: int) -> str:
        """
        Consumes ``count`` characters and returns them.

        Raises:
            Exception: If reading past the end of the source.
        """
        end = self.position + count
        if end > len(self.source):
            raise Exception(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>"
            )
        text = self.source[self.position : end]
        self.position = end
        return text

    def peek(self, offset: int = 0) -> str:
        """Returns the character at ``offset`` from the cursor, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in the Letter language.

    Attributes:
        type (TokenType): The token's category.
        value (str): The matched source text ("" for ``EOF`` and ``ERROR``).
    """

    def __init__(self, type_: TokenType, value: str = ""):
        self.type = type_
        self.value = value

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value))


class Lexer:
    """Lexical analyzer for the Letter language.

    The Lexer reads from a CharacterStream and hands out one Token per call to
    ``next_token``. It keeps no state apart from the stream's cursor.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def next_token(self) -> Token:
        """Consumes and returns the next significant Token.

        Returns:
            Token: The next token, ``EOF`` at end of input, or ``ERROR`` when no
            rule matches (the cursor is left on the offending character).
        """
        while not self.stream.end_of_file():
            match = _RULE_PATTERN.match(self.stream.source, self.stream.position)
            if match is None or match.lastgroup is None:
                return Token(TokenType.ERROR)

            token_type = _RULE_TYPES[match.lastgroup]
            text = self.stream.advance(match.end() - match.start())
            if token_type is TokenType.IGNORE:
                continue
            return Token(token_type, text)

        return Token(TokenType.EOF)

    def tokens(self) -> Iterator[Token]:
        """Yields tokens up to and including the first ``EOF`` or ``ERROR``."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.type in (TokenType.EOF, TokenType.ERROR):
                return


def tokenize(source: str) -> list[Token]:
    """Tokenizes a whole source string, ending with ``EOF`` (or ``ERROR``)."""
    return list(Lexer(CharacterStream(source)).tokens())


__all__ = ["CharacterStream", "Lexer", "Token", "compile_rules", "tokenize"]
