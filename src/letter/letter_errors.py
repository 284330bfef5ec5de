"""
Exceptions raised by the Letter front-end.

Every failure is fatal: the first lexical or grammar error aborts the parse and
propagates to the caller unchanged.

Classes:
    LetterSyntaxError: Base class for all front-end failures.
    LexicalError: No lexical rule matched the remaining input.
    ParseError: The token stream does not fit the grammar.
"""

from letter.letter_constants import TokenType


class LetterSyntaxError(SyntaxError):
    """Base class for lexical and grammar failures."""


class LexicalError(LetterSyntaxError):
    """Raised when the lexer reports an ``ERROR`` token.

    Attributes:
        character (str): The character no rule could match.
    """

    def __init__(self, character: str) -> None:
        self.character = character
        super().__init__(f"Unexpected character {character!r} in input")


class ParseError(LetterSyntaxError):
    """Raised when the parser cannot continue.

    Attributes:
        found (TokenType | None): Category of the offending lookahead, if any.
        expected (tuple[str, ...]): Categories or productions the rule required.
    """

    def __init__(
        self,
        message: str,
        found: TokenType | None = None,
        expected: tuple[str, ...] = (),
    ) -> None:
        self.found = found
        self.expected = expected
        super().__init__(message)


__all__ = ["LetterSyntaxError", "LexicalError", "ParseError"]
