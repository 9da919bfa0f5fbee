"""
Diagnostics reported by the Monkey parser.

Every diagnostic is a `ParseError`, a `SyntaxError` subclass that remembers the
offending token and its position. The parser raises them internally and
records them on `Parser.errors`; none of them aborts a parse.

Classes:
    ParseError: Base class for all parse diagnostics.
    UnexpectedToken: An `expect_peek` check saw the wrong token kind.
    NoPrefixParseRule: No expression can start with the current token.
    IntegerLiteralOverflow: An integer literal does not fit in 64 bits.
    IllegalCharacter: An `ILLEGAL` token reached the parser.
    NestingTooDeep: A statement nests deeper than the parser can recurse.
"""

from monkey.monkey_constants import TokenType
from monkey.monkey_lexer import Token


class ParseError(SyntaxError):
    """Base class for parse diagnostics.

    Attributes:
        message (str): The message without position information.
        token (Token): The token the diagnostic is about.
        line (int): Line of `token` (0 when unknown).
        col (int): Column of `token` (0 when unknown).
    """

    def __init__(self, message: str, token: Token):
        self.message = message
        self.token = token
        self.line = token.line
        self.col = token.col
        super().__init__(message)

    def __str__(self) -> str:
        if self.line:
            return f"{self.message} at line {self.line}, col {self.col}"
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"

    def __eq__(self, other: object) -> bool:
        return (
            type(self) is type(other)
            and isinstance(other, ParseError)
            and self.message == other.message
            and self.token == other.token
        )

    def __hash__(self) -> int:
        return hash((type(self), self.message, self.token))


def _describe(token: Token) -> str:
    if token.type in (TokenType.IDENT, TokenType.INT):
        return f"{token.type} ({token.literal})"
    return str(token.type)


class UnexpectedToken(ParseError):
    """Raised when the next token is not the kind the grammar requires."""

    def __init__(self, expected: TokenType, actual: Token):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"expected next token to be {expected}, got {_describe(actual)} instead",
            actual,
        )


class NoPrefixParseRule(ParseError):
    """Raised when no expression can begin with the current token."""

    def __init__(self, actual: Token):
        self.actual = actual
        super().__init__(f"no prefix parse rule for {actual.type} found", actual)


class IntegerLiteralOverflow(ParseError):
    """Raised when an integer literal is outside the signed 64-bit range."""

    def __init__(self, literal: Token):
        self.literal = literal.literal
        super().__init__(f"could not parse {literal.literal} as integer", literal)


class IllegalCharacter(ParseError):
    """Raised when the lexer produced an `ILLEGAL` token."""

    def __init__(self, literal: Token):
        self.literal = literal.literal
        super().__init__(f"illegal character {literal.literal!r}", literal)


class NestingTooDeep(ParseError):
    """Recorded when the statement starting at `start` nests too deeply to parse."""

    def __init__(self, start: Token):
        super().__init__("expression nested too deeply", start)


__all__ = [
    "IllegalCharacter",
    "IntegerLiteralOverflow",
    "NestingTooDeep",
    "NoPrefixParseRule",
    "ParseError",
    "UnexpectedToken",
]
