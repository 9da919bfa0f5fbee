import pytest

from monkey.monkey_constants import PRECEDENCES, Precedence, TokenType
from monkey.monkey_errors import (
    IllegalCharacter,
    IntegerLiteralOverflow,
    NestingTooDeep,
    NoPrefixParseRule,
    ParseError,
    UnexpectedToken,
)
from monkey.monkey_lexer import Token


def test_unexpected_token_message() -> None:
    err = UnexpectedToken(TokenType.RPAREN, Token(TokenType.EOF, "", 2, 9))
    assert err.expected is TokenType.RPAREN
    assert err.actual.type is TokenType.EOF
    assert err.message == "expected next token to be ), got EOF instead"
    assert str(err) == "expected next token to be ), got EOF instead at line 2, col 9"


def test_unexpected_token_names_identifier_literal() -> None:
    err = UnexpectedToken(TokenType.ASSIGN, Token(TokenType.IDENT, "y"))
    assert str(err) == "expected next token to be =, got IDENT (y) instead"


def test_message_without_position() -> None:
    err = NoPrefixParseRule(Token(TokenType.RBRACE, "}"))
    assert str(err) == "no prefix parse rule for } found"
    assert (err.line, err.col) == (0, 0)


@pytest.mark.parametrize(
    "err,expected",
    [
        (
            IntegerLiteralOverflow(Token(TokenType.INT, "99999999999999999999")),
            "could not parse 99999999999999999999 as integer",
        ),
        (IllegalCharacter(Token(TokenType.ILLEGAL, "@")), "illegal character '@'"),
        (
            NoPrefixParseRule(Token(TokenType.FUNCTION, "fn")),
            "no prefix parse rule for FUNCTION found",
        ),
        (
            NestingTooDeep(Token(TokenType.MINUS, "-", 3, 4)),
            "expression nested too deeply at line 3, col 4",
        ),
    ],
)
def test_diagnostic_messages(err: ParseError, expected: str) -> None:
    assert str(err) == expected


def test_diagnostics_compare_by_value() -> None:
    tok = Token(TokenType.ILLEGAL, "@", 1, 1)
    assert IllegalCharacter(tok) == IllegalCharacter(tok)
    assert IllegalCharacter(tok) != NoPrefixParseRule(tok)
    assert len({IllegalCharacter(tok), IllegalCharacter(tok)}) == 1


def test_diagnostic_repr() -> None:
    err = IllegalCharacter(Token(TokenType.ILLEGAL, "#"))
    assert repr(err) == "IllegalCharacter(\"illegal character '#'\")"


def test_diagnostics_can_be_raised() -> None:
    with pytest.raises(SyntaxError, match="illegal character"):
        raise IllegalCharacter(Token(TokenType.ILLEGAL, "~"))


def test_precedence_order() -> None:
    assert (
        Precedence.LOWEST
        < Precedence.EQUALS
        < Precedence.LESSGREATER
        < Precedence.SUM
        < Precedence.PRODUCT
        < Precedence.PREFIX
        < Precedence.CALL
    )
    assert PRECEDENCES[TokenType.EQ] is Precedence.EQUALS
    assert PRECEDENCES[TokenType.LPAREN] is Precedence.CALL
    assert TokenType.ASSIGN not in PRECEDENCES
