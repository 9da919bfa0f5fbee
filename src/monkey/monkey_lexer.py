"""
Lexical analyzer for the Monkey programming language.

This module provides core components for converting raw source code into token streams:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Represents a single immutable token with type, literal, and source location.
    Lexer: Converts source text into a sequence of tokens, one per call, on demand.

Features:
    - Skips spaces, tabs, newlines and carriage returns
    - Recognizes `==` and `!=` with one character of lookahead
    - Recognizes:
        * Identifiers and keywords (`let fn true false if else return`)
        * Integers (runs of decimal digits, unsigned)
        * Operators and delimiters
    - Never raises: any unknown character becomes an `ILLEGAL` token

Example:
    >>> lexer = Lexer("let x = 5;")
    >>> lexer.next_token()
    Token(LET, let)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
"""

from collections.abc import Callable, Iterator
from typing import Any

from monkey.monkey_constants import (
    KEYWORDS,
    SINGLE_CHAR_TOKENS,
    TWO_CHAR_TOKENS,
    TokenType,
)


class CharacterStream:
    """
    Cursor over Monkey source text that tracks where each token starts.

    The lexer reads one character at a time through `next()` and never needs
    more than one character of lookahead: `peek(1)` is how it tells `==` from
    `=` and `!=` from `!`. Newlines advance `line` and reset `column`, which
    gives every token its 1-based position.

    Attributes:
        source (str): Monkey source text.
        position (int): Index of the next unread character.
        line (int): Line of the next unread character (1-indexed).
        column (int): Column of the next unread character (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def location(self) -> tuple[int, int]:
        """Line and column a token starting here would be reported at."""
        return self.line, self.column

    def next(self) -> str:
        """
        Consume one character.

        Raises:
            EOFError: If the source is exhausted. `Lexer` checks `end_of_file()`
                first, so this only fires on misuse of the stream.
        """
        if self.end_of_file():
            raise EOFError(
                f"no more Monkey source to read at line {self.line}, col {self.column}"
            )
        char = self.source[self.position]
        self.position += 1
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """The unread character `offset` places ahead, or "" past either end."""
        index = self.position + offset
        if 0 <= index < len(self.source):
            return self.source[index]
        return ""

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in the Monkey language.

    Tokens are immutable value objects: assigning to an attribute after
    construction raises `AttributeError`.

    Attributes:
        type (TokenType): The token kind.
        literal (str): The exact source text matched (empty for EOF).
        line (int): The 1-based line number where the token starts.
        col (int): The 1-based column number where the token starts.
    """

    __slots__ = ("type", "literal", "line", "col")

    type: TokenType
    literal: str
    line: int
    col: int

    def __init__(self, type_: TokenType, literal: str, line: int = 0, col: int = 0):
        object.__setattr__(self, "type", type_)
        object.__setattr__(self, "literal", literal)
        object.__setattr__(self, "line", line)
        object.__setattr__(self, "col", col)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Token is immutable; cannot set {name!r}")

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.literal})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.literal == other.literal
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.literal, self.line, self.col))


def _is_letter(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


def _is_digit(ch: str) -> bool:
    # ASCII only; `str.isdigit` also accepts superscripts that `int()` rejects
    return ch != "" and "0" <= ch <= "9"


class Lexer:
    """Lexical analyzer for the Monkey language.

    The Lexer owns its input and hands out one `Token` per `next_token()` call.
    Once the input is exhausted every further call returns an EOF token, so
    callers may poll indefinitely.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, source: str | CharacterStream) -> None:
        """Initializes the Lexer.

        Args:
            source (str | CharacterStream): Raw source text or a prepared stream.
        """
        self.stream = (
            source if isinstance(source, CharacterStream) else CharacterStream(source)
        )

    def __iter__(self) -> Iterator[Token]:
        """Yields tokens up to, but not including, the EOF token."""
        while True:
            tok = self.next_token()
            if tok.type is TokenType.EOF:
                return
            yield tok

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        """Skips spaces, tabs, newlines and carriage returns."""
        while not self.stream.end_of_file() and self.peek() in " \t\r\n":
            self.advance()

    def read_while(self, predicate: Callable[[str], bool]) -> str:
        """Consumes the maximal run of characters accepted by `predicate`."""
        text = ""
        while not self.stream.end_of_file() and predicate(self.peek()):
            text += self.advance()
        return text

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token; EOF once the input is exhausted.
        """
        self.skip_whitespace()

        line, col = self.stream.location()
        if self.stream.end_of_file():
            return Token(TokenType.EOF, "", line, col)

        ch = self.peek()

        # 1. Identifier or keyword
        if _is_letter(ch):
            ident = self.read_while(lambda c: c.isalnum() or c == "_")
            return Token(KEYWORDS.get(ident, TokenType.IDENT), ident, line, col)

        # 2. Integer
        if _is_digit(ch):
            return Token(TokenType.INT, self.read_while(_is_digit), line, col)

        # 3. Two-character operator (`==`, `!=`)
        pair = ch + self.stream.peek(1)
        if pair in TWO_CHAR_TOKENS:
            self.advance()
            self.advance()
            return Token(TWO_CHAR_TOKENS[pair], pair, line, col)

        # 4. Single-character operator or delimiter
        self.advance()
        if ch in SINGLE_CHAR_TOKENS:
            return Token(SINGLE_CHAR_TOKENS[ch], ch, line, col)

        # 5. Unknown character
        return Token(TokenType.ILLEGAL, ch, line, col)


def tokenize(source: str) -> list[Token]:
    """Lexes `source` completely.

    Returns:
        list[Token]: Every token in order, ending with exactly one EOF token.
    """
    lexer = Lexer(source)
    tokens = list(lexer)
    tokens.append(lexer.next_token())
    return tokens


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize"]
