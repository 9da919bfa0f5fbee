"""
Monkey Language Parser

Parses Monkey source text into an abstract syntax tree (AST).

The parser pulls tokens from a `Lexer` it owns and inspects exactly two of them
at a time (`cur_token` and `peek_token`). Statements are parsed by recursive
descent; expressions by precedence climbing (Pratt parsing), driven by two
tables of parse rules keyed by token type.

Supported Constructs
--------------------
- Statements:
    * `let <ident> = <expr>;`
    * `return <expr>;` and a bare `return;`
    * Expression statements; the trailing `;` is optional
- Expressions:
    * Identifiers, integers, `true` / `false`
    * Prefix `-x`, `!x`
    * Infix `+ - * / < > == !=` (left associative)
    * Grouping with `( ... )`
    * `if (cond) { ... } else { ... }`
    * `fn(a, b) { ... }`
    * Calls `f(a, b)`

Parser Behavior
---------------
- Errors never stop the parse. A failing rule raises a `ParseError`; the
  nearest statement loop (top level or block) records it on `errors`, skips one
  token and carries on, so several independent errors are reported per pass.
- Input nested deeper than the interpreter stack allows is reported as
  `NestingTooDeep` and the rest of that statement, up to the next `;`, is
  skipped.
- A block only closes on its own `}`. Braces of inner blocks are told apart by
  `brace_depth`, so a failure inside an inner block does not end the outer one.
- `parse_program()` always terminates: every loop iteration advances.

Entry Points
------------
- `Parser(lexer).parse_program()`: parse a full program; read `errors` after.
- `parse(source)`: convenience wrapper returning `(program, errors)`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from monkey.monkey_ast import (
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
)
from monkey.monkey_constants import INT64_MAX, PRECEDENCES, Precedence, TokenType
from monkey.monkey_errors import (
    IllegalCharacter,
    IntegerLiteralOverflow,
    NestingTooDeep,
    NoPrefixParseRule,
    ParseError,
    UnexpectedToken,
)
from monkey.monkey_lexer import Lexer, Token

logger = logging.getLogger(__name__)

PrefixParseFn = Callable[[], Expression]
InfixParseFn = Callable[[Expression], Expression]


class Parser:
    """
    Monkey Parser Class

    Transforms the token stream of a `Lexer` into a `Program`.

    Attributes
    ----------
    lexer : Lexer
        The token source, owned exclusively by this parser.
    cur_token : Token
        The token under examination.
    peek_token : Token
        The token after `cur_token`.
    errors : list[ParseError]
        Diagnostics collected so far, in the order they were found.
    brace_depth : int
        Number of `{` minus `}` read up to `cur_token`; tells a block its own
        closing brace apart from an inner block's.
    prefix_parse_fns : dict[TokenType, PrefixParseFn]
        Rules for tokens that can start an expression.
    infix_parse_fns : dict[TokenType, InfixParseFn]
        Rules for tokens that can continue an expression.

    Methods
    -------
    parse_program() -> Program
        Parse statements until EOF.
    parse_statement() -> Statement
        Parse one let, return or expression statement.
    parse_expression(precedence) -> Expression
        Pratt loop: parse an expression binding tighter than `precedence`.
    parse_block_statement() -> BlockStatement
        Parse statements up to the closing `}`.

    Raises
    ------
    ParseError
        From the individual parse rules. `parse_program()` itself never raises
        it; it records every error on `errors` instead.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer: Lexer = lexer
        self.errors: list[ParseError] = []

        self.prefix_parse_fns: dict[TokenType, PrefixParseFn] = {}
        self.infix_parse_fns: dict[TokenType, InfixParseFn] = {}

        self.register_prefix(TokenType.IDENT, self.parse_identifier)
        self.register_prefix(TokenType.INT, self.parse_integer_literal)
        self.register_prefix(TokenType.TRUE, self.parse_boolean)
        self.register_prefix(TokenType.FALSE, self.parse_boolean)
        self.register_prefix(TokenType.BANG, self.parse_prefix_expression)
        self.register_prefix(TokenType.MINUS, self.parse_prefix_expression)
        self.register_prefix(TokenType.LPAREN, self.parse_grouped_expression)
        self.register_prefix(TokenType.IF, self.parse_if_expression)
        self.register_prefix(TokenType.FUNCTION, self.parse_function_literal)

        for op in (
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.ASTERISK,
            TokenType.SLASH,
            TokenType.LT,
            TokenType.GT,
            TokenType.EQ,
            TokenType.NOT_EQ,
        ):
            self.register_infix(op, self.parse_infix_expression)
        self.register_infix(TokenType.LPAREN, self.parse_call_expression)

        # Count of `{` minus `}` up to and including `cur_token`.
        self.brace_depth: int = 0

        # Prime the two-token window.
        self.cur_token: Token = Token(TokenType.EOF, "")
        self.peek_token: Token = Token(TokenType.EOF, "")
        self.next_token()
        self.next_token()

    # Token window

    def register_prefix(self, token_type: TokenType, fn: PrefixParseFn) -> None:
        self.prefix_parse_fns[token_type] = fn

    def register_infix(self, token_type: TokenType, fn: InfixParseFn) -> None:
        self.infix_parse_fns[token_type] = fn

    def next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()
        if self.cur_token.type is TokenType.LBRACE:
            self.brace_depth += 1
        elif self.cur_token.type is TokenType.RBRACE:
            self.brace_depth -= 1

    def cur_token_is(self, t: TokenType) -> bool:
        return self.cur_token.type is t

    def peek_token_is(self, t: TokenType) -> bool:
        return self.peek_token.type is t

    def expect_peek(self, t: TokenType) -> None:
        """Advance if the next token has type `t`, otherwise raise.

        Raises:
            IllegalCharacter: If the next token is `ILLEGAL`.
            UnexpectedToken: If the next token is of any other wrong type.
        """
        if self.peek_token_is(t):
            self.next_token()
            return
        if self.peek_token_is(TokenType.ILLEGAL):
            raise IllegalCharacter(self.peek_token)
        raise UnexpectedToken(t, self.peek_token)

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    # Statements

    def parse_program(self) -> Program:
        """Parse the whole input. Diagnostics are left on `self.errors`."""
        first = self.cur_token
        statements: list[Statement] = []
        while not self.cur_token_is(TokenType.EOF):
            start = self.cur_token
            try:
                stmt = self._parse_statement_recording()
            except RecursionError:
                # Only caught here, where the stack has unwound to the top.
                stmt = None
                self._record(NestingTooDeep(start))
                self.skip_to_statement_end()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()
        logger.debug(
            "parsed %d statement(s) with %d error(s)", len(statements), len(self.errors)
        )
        return Program(tuple(statements), line=first.line, col=first.col)

    def _parse_statement_recording(self) -> Statement | None:
        try:
            stmt = self.parse_statement()
        except ParseError as e:
            self._record(e)
            return None
        logger.debug("parsed statement: %s", stmt)
        return stmt

    def _record(self, error: ParseError) -> None:
        logger.debug("recorded parse error: %s", error)
        self.errors.append(error)

    def skip_to_statement_end(self) -> None:
        """Advance until `cur_token` is a `;` or EOF."""
        while not self.cur_token_is(TokenType.SEMICOLON) and not self.cur_token_is(
            TokenType.EOF
        ):
            self.next_token()

    def parse_statement(self) -> Statement:
        """Parse a single statement starting at `cur_token`."""
        if self.cur_token_is(TokenType.LET):
            return self.parse_let_statement()
        if self.cur_token_is(TokenType.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement:
        tok = self.cur_token

        self.expect_peek(TokenType.IDENT)
        name = Identifier(
            self.cur_token.literal, line=self.cur_token.line, col=self.cur_token.col
        )

        self.expect_peek(TokenType.ASSIGN)
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return LetStatement(name, value, line=tok.line, col=tok.col)

    def parse_return_statement(self) -> ReturnStatement:
        tok = self.cur_token

        value: Expression | None = None
        if not (
            self.peek_token_is(TokenType.SEMICOLON)
            or self.peek_token_is(TokenType.RBRACE)
            or self.peek_token_is(TokenType.EOF)
        ):
            self.next_token()
            value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return ReturnStatement(value, line=tok.line, col=tok.col)

    def parse_expression_statement(self) -> ExpressionStatement:
        tok = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return ExpressionStatement(expression, line=tok.line, col=tok.col)

    def parse_block_statement(self) -> BlockStatement:
        """Parse statements after a `{` up to and including the matching `}`.

        Expects `cur_token` to be the opening brace; leaves it on the closing one.
        """
        tok = self.cur_token
        # A `}` at this depth is the brace that closes this block.
        closing_depth = self.brace_depth - 1
        statements: list[Statement] = []
        self.next_token()

        while not self._at_block_end(closing_depth) and not self.cur_token_is(
            TokenType.EOF
        ):
            stmt = self._parse_statement_recording()
            if stmt is not None:
                statements.append(stmt)
            elif self._at_block_end(closing_depth):
                # The failed statement stopped on this block's closing brace.
                break
            self.next_token()

        if not self._at_block_end(closing_depth):
            raise UnexpectedToken(TokenType.RBRACE, self.cur_token)
        return BlockStatement(tuple(statements), line=tok.line, col=tok.col)

    def _at_block_end(self, closing_depth: int) -> bool:
        return self.cur_token_is(TokenType.RBRACE) and self.brace_depth == closing_depth

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Expression:
        """Parse an expression whose operators all bind tighter than `precedence`."""
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            if self.cur_token_is(TokenType.ILLEGAL):
                raise IllegalCharacter(self.cur_token)
            raise NoPrefixParseRule(self.cur_token)
        left = prefix()

        while (
            not self.peek_token_is(TokenType.SEMICOLON)
            and precedence < self.peek_precedence()
        ):
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self) -> Expression:
        tok = self.cur_token
        return Identifier(tok.literal, line=tok.line, col=tok.col)

    def parse_integer_literal(self) -> Expression:
        tok = self.cur_token
        # Length check first: int() refuses very long digit strings.
        digits = tok.literal.lstrip("0") or "0"
        if len(digits) > len(str(INT64_MAX)) or int(digits) > INT64_MAX:
            raise IntegerLiteralOverflow(tok)
        return IntegerLiteral(int(digits), line=tok.line, col=tok.col)

    def parse_boolean(self) -> Expression:
        tok = self.cur_token
        return BooleanLiteral(
            self.cur_token_is(TokenType.TRUE), line=tok.line, col=tok.col
        )

    def parse_prefix_expression(self) -> Expression:
        tok = self.cur_token
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        return PrefixExpression(tok.literal, right, line=tok.line, col=tok.col)

    def parse_infix_expression(self, left: Expression) -> Expression:
        tok = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        return InfixExpression(left, tok.literal, right, line=left.line, col=left.col)

    def parse_grouped_expression(self) -> Expression:
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenType.RPAREN)
        return expression

    def parse_if_expression(self) -> Expression:
        tok = self.cur_token

        self.expect_peek(TokenType.LPAREN)
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenType.RPAREN)

        self.expect_peek(TokenType.LBRACE)
        consequence = self.parse_block_statement()

        alternative: BlockStatement | None = None
        if self.peek_token_is(TokenType.ELSE):
            self.next_token()
            self.expect_peek(TokenType.LBRACE)
            alternative = self.parse_block_statement()

        return IfExpression(
            condition, consequence, alternative, line=tok.line, col=tok.col
        )

    def parse_function_literal(self) -> Expression:
        tok = self.cur_token

        self.expect_peek(TokenType.LPAREN)
        parameters = self.parse_function_parameters()

        self.expect_peek(TokenType.LBRACE)
        body = self.parse_block_statement()

        return FunctionLiteral(parameters, body, line=tok.line, col=tok.col)

    def parse_function_parameters(self) -> tuple[Identifier, ...]:
        """Parse `a, b, c)` after the opening parenthesis of a function literal."""
        identifiers: list[Identifier] = []

        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return ()

        self.expect_peek(TokenType.IDENT)
        identifiers.append(
            Identifier(
                self.cur_token.literal, line=self.cur_token.line, col=self.cur_token.col
            )
        )
        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            self.expect_peek(TokenType.IDENT)
            identifiers.append(
                Identifier(
                    self.cur_token.literal,
                    line=self.cur_token.line,
                    col=self.cur_token.col,
                )
            )

        self.expect_peek(TokenType.RPAREN)
        return tuple(identifiers)

    def parse_call_expression(self, function: Expression) -> Expression:
        arguments = self.parse_call_arguments()
        return CallExpression(function, arguments, line=function.line, col=function.col)

    def parse_call_arguments(self) -> tuple[Expression, ...]:
        """Parse `a, b + 1, f(c))` after the opening parenthesis of a call."""
        args: list[Expression] = []

        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return ()

        self.next_token()
        args.append(self.parse_expression(Precedence.LOWEST))
        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            self.next_token()
            args.append(self.parse_expression(Precedence.LOWEST))

        self.expect_peek(TokenType.RPAREN)
        return tuple(args)


def parse(source: str) -> tuple[Program, list[ParseError]]:
    """Parse `source` in one call.

    Returns:
        tuple[Program, list[ParseError]]: The program and every diagnostic found.
    """
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors


__all__ = ["InfixParseFn", "Parser", "PrefixParseFn", "parse"]
