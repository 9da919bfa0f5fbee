"""
Shared constants for the Monkey front end.

Defines the closed set of token kinds, the keyword and operator tables used by
the lexer, and the operator precedence levels used by the parser.

Exports:
    - TokenType
    - Precedence
    - KEYWORDS
    - SINGLE_CHAR_TOKENS
    - TWO_CHAR_TOKENS
    - PRECEDENCES
"""

from enum import Enum, IntEnum
from types import MappingProxyType


class TokenType(Enum):
    """Token kinds. Each value is the canonical symbol shown in diagnostics."""

    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # Identifiers + literals
    IDENT = "IDENT"
    INT = "INT"

    # Operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    # Delimiters
    COMMA = ","
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"

    # Keywords
    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"

    def __str__(self) -> str:
        return self.value


class Precedence(IntEnum):
    """Binding strength of operators, weakest first."""

    LOWEST = 1
    EQUALS = 2
    LESSGREATER = 3
    SUM = 4
    PRODUCT = 5
    PREFIX = 6
    CALL = 7


KEYWORDS: MappingProxyType[str, TokenType] = MappingProxyType(
    {
        "fn": TokenType.FUNCTION,
        "let": TokenType.LET,
        "true": TokenType.TRUE,
        "false": TokenType.FALSE,
        "if": TokenType.IF,
        "else": TokenType.ELSE,
        "return": TokenType.RETURN,
    }
)

SINGLE_CHAR_TOKENS: MappingProxyType[str, TokenType] = MappingProxyType(
    {
        "=": TokenType.ASSIGN,
        "+": TokenType.PLUS,
        "-": TokenType.MINUS,
        "!": TokenType.BANG,
        "*": TokenType.ASTERISK,
        "/": TokenType.SLASH,
        "<": TokenType.LT,
        ">": TokenType.GT,
        ",": TokenType.COMMA,
        ";": TokenType.SEMICOLON,
        "(": TokenType.LPAREN,
        ")": TokenType.RPAREN,
        "{": TokenType.LBRACE,
        "}": TokenType.RBRACE,
    }
)

# Only `=` and `!` start a two-character operator.
TWO_CHAR_TOKENS: MappingProxyType[str, TokenType] = MappingProxyType(
    {
        "==": TokenType.EQ,
        "!=": TokenType.NOT_EQ,
    }
)

PRECEDENCES: MappingProxyType[TokenType, Precedence] = MappingProxyType(
    {
        TokenType.EQ: Precedence.EQUALS,
        TokenType.NOT_EQ: Precedence.EQUALS,
        TokenType.LT: Precedence.LESSGREATER,
        TokenType.GT: Precedence.LESSGREATER,
        TokenType.PLUS: Precedence.SUM,
        TokenType.MINUS: Precedence.SUM,
        TokenType.ASTERISK: Precedence.PRODUCT,
        TokenType.SLASH: Precedence.PRODUCT,
        TokenType.LPAREN: Precedence.CALL,
    }
)

INT64_MAX = 2**63 - 1

__all__ = [
    "INT64_MAX",
    "KEYWORDS",
    "PRECEDENCES",
    "Precedence",
    "SINGLE_CHAR_TOKENS",
    "TWO_CHAR_TOKENS",
    "TokenType",
]
