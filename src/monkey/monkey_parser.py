"""
Monkey Language Parser

Parses the token stream produced by `monkey_lexer.Lexer` into an abstract syntax
tree (`monkey_ast.Program`) using recursive descent for statements and Pratt
(operator-precedence) parsing for expressions.

Supported Constructs
--------------------
- Statements:
    * Bindings: `let x = <expr>;`
    * Returns: `return <expr>;` and value-less `return;`
    * Expression statements: `<expr>;`
    * Blocks: `{ ... }` (bodies of `if` and `fn`)

- Expressions:
    * Identifiers, integer literals (decimal or `0x`/`0o`/`0b`), `true`/`false`
    * Prefix operators: `!x`, `-x`
    * Infix operators: `+ - * / < > == !=`
    * Grouping: `(a + b) * c`
    * Conditionals: `if (x < y) { x } else { y }`
    * Function literals: `fn(x, y) { x + y; }`
    * Calls: `add(1, 2 * 3)`

Parser Behavior
---------------
- Keeps a two-token window (`cur_token`, `peek_token`) over the lexer.
- Never raises on malformed input: every problem is appended to `errors`, the
  offending statement yields no node, and parsing resumes with the next token.
- Prefix and infix strategies live in per-instance registries keyed by
  `TokenType`, populated once in `__init__`.

Entry Points
------------
- `Parser(lexer).parse_program()`: Parse a full program.
- `parse(source)`: Build a fresh lexer/parser pair, return `(program, errors)`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import IntEnum

from monkey.monkey_ast import (
    BlockStatement,
    Boolean,
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
from monkey.monkey_lexer import Lexer
from monkey.monkey_token import Token, TokenType

logger = logging.getLogger(__name__)

PrefixParseFn = Callable[[], Expression | None]
InfixParseFn = Callable[[Expression], Expression | None]

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Nested parse_expression calls allowed before the statement is abandoned.
MAX_NESTING = 64


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2  # ==
    LESSGREATER = 3  # > or <
    SUM = 4  # +
    PRODUCT = 5  # *
    PREFIX = 6  # -X or !X
    CALL = 7  # myFunction(X)


# Tokens that end the skip over a malformed statement without being consumed.
STATEMENT_BOUNDARIES = (
    TokenType.RBRACE,
    TokenType.LET,
    TokenType.RETURN,
    TokenType.EOF,
)

precedences: dict[TokenType, Precedence] = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
}


def parse_int_literal(literal: str) -> int | None:
    """Converts a lexed integer literal to a signed 64-bit value.

    Plain digit runs are read as base 10 (leading zeros allowed); `0x`, `0o`
    and `0b` prefixes select base 16, 8 and 2.

    Returns:
        int | None: The value, or None if malformed or out of range.
    """
    try:
        if literal[:2].lower() in ("0x", "0o", "0b"):
            value = int(literal, 0)
        else:
            value = int(literal, 10)
    except ValueError:
        return None
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return value


class Parser:
    """
    Monkey Parser Class

    Pulls tokens from a privately owned `Lexer` and builds a `Program`.

    Attributes
    ----------
    lexer : Lexer
        Token source; consumed strictly forward.
    cur_token : Token
        Token under examination.
    peek_token : Token
        One-token lookahead; EOF at the end, never absent.
    errors : list[str]
        Diagnostics in the order they were found.
    prefix_parse_fns : dict[TokenType, PrefixParseFn]
        Strategies for tokens that may begin an expression.
    infix_parse_fns : dict[TokenType, InfixParseFn]
        Strategies for tokens that combine a left-hand expression with what follows.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self.errors: list[str] = []
        self.depth = 0

        self.prefix_parse_fns: dict[TokenType, PrefixParseFn] = {}
        self.register_prefix(TokenType.IDENT, self.parse_identifier)
        self.register_prefix(TokenType.INT, self.parse_integer_literal)
        self.register_prefix(TokenType.TRUE, self.parse_boolean)
        self.register_prefix(TokenType.FALSE, self.parse_boolean)
        self.register_prefix(TokenType.BANG, self.parse_prefix_expression)
        self.register_prefix(TokenType.MINUS, self.parse_prefix_expression)
        self.register_prefix(TokenType.LPAREN, self.parse_grouped_expression)
        self.register_prefix(TokenType.IF, self.parse_if_expression)
        self.register_prefix(TokenType.FUNCTION, self.parse_function_literal)

        self.infix_parse_fns: dict[TokenType, InfixParseFn] = {}
        for kind in (
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.SLASH,
            TokenType.ASTERISK,
            TokenType.EQ,
            TokenType.NOT_EQ,
            TokenType.LT,
            TokenType.GT,
        ):
            self.register_infix(kind, self.parse_infix_expression)
        self.register_infix(TokenType.LPAREN, self.parse_call_expression)

        # Read two tokens, so cur_token and peek_token are both set
        self.cur_token: Token = self.lexer.next_token()
        self.peek_token: Token = self.lexer.next_token()

    # Token window

    def next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, kind: TokenType) -> bool:
        return self.cur_token.type == kind

    def peek_token_is(self, kind: TokenType) -> bool:
        return self.peek_token.type == kind

    def expect_peek(self, kind: TokenType) -> bool:
        """Advances if the peek token is `kind`; otherwise records an error and stays put."""
        if self.peek_token_is(kind):
            self.next_token()
            return True
        self.peek_error(kind)
        return False

    def peek_precedence(self) -> Precedence:
        return precedences.get(self.peek_token.type, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return precedences.get(self.cur_token.type, Precedence.LOWEST)

    def register_prefix(self, kind: TokenType, fn: PrefixParseFn) -> None:
        self.prefix_parse_fns[kind] = fn

    def register_infix(self, kind: TokenType, fn: InfixParseFn) -> None:
        self.infix_parse_fns[kind] = fn

    # Diagnostics

    def add_error(self, msg: str) -> None:
        tok = self.cur_token
        logger.debug("parse error at line %d, col %d: %s", tok.line, tok.col, msg)
        self.errors.append(msg)

    def peek_error(self, kind: TokenType) -> None:
        self.add_error(
            f"expected next token to be {kind}, got {self.peek_token.type} instead"
        )

    def no_prefix_parse_fn_error(self, kind: TokenType) -> None:
        self.add_error(f"no prefix parse function for {kind} found")

    # Statements

    def parse_program(self) -> Program:
        """Parse a full Monkey program, collecting statements until EOF."""
        program = Program()
        while not self.cur_token_is(TokenType.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                program.statements.append(stmt)
            self.next_token()
        return program

    def parse_statement(self) -> Statement | None:
        if self.cur_token.type == TokenType.LET:
            return self.parse_let_statement()
        if self.cur_token.type == TokenType.RETURN:
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement | None:
        token = self.cur_token

        if not self.expect_peek(TokenType.IDENT):
            self.skip_statement()
            return None
        name = Identifier(self.cur_token, self.cur_token.literal)

        if not self.expect_peek(TokenType.ASSIGN):
            self.skip_statement()
            return None

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        if value is None:
            return None
        return LetStatement(token, name, value)

    def parse_return_statement(self) -> ReturnStatement | None:
        token = self.cur_token
        self.next_token()

        if self.cur_token_is(TokenType.SEMICOLON) or self.cur_token_is(TokenType.EOF):
            return ReturnStatement(token)

        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        if value is None:
            return None
        return ReturnStatement(token, value)

    def parse_expression_statement(self) -> ExpressionStatement | None:
        token = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        if expression is None:
            return None
        return ExpressionStatement(token, expression)

    def parse_block_statement(self) -> BlockStatement | None:
        block = BlockStatement(self.cur_token)
        self.next_token()

        while not self.cur_token_is(TokenType.RBRACE) and not self.cur_token_is(
            TokenType.EOF
        ):
            stmt = self.parse_statement()
            if stmt is not None:
                block.statements.append(stmt)
            self.next_token()

        if self.cur_token_is(TokenType.EOF):
            self.add_error("expected next token to be RBRACE, got EOF instead")
            return None
        return block

    def skip_statement(self) -> None:
        """Moves to the last token of a malformed statement.

        Stops on its `;`, or just before a closing `}`, the next `let`/`return`
        or EOF, so the caller's advance lands on the next construct.
        """
        while not self.cur_token_is(TokenType.SEMICOLON) and not any(
            self.peek_token_is(kind) for kind in STATEMENT_BOUNDARIES
        ):
            self.next_token()

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Expression | None:
        if self.depth >= MAX_NESTING:
            self.add_error("expression nested too deeply")
            while not self.peek_token_is(TokenType.SEMICOLON) and not (
                self.peek_token_is(TokenType.EOF)
            ):
                self.next_token()
            return None

        self.depth += 1
        try:
            return self.parse_operators(precedence)
        finally:
            self.depth -= 1

    def parse_operators(self, precedence: Precedence) -> Expression | None:
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token.type)
            return None
        left = prefix()

        while (
            left is not None
            and not self.peek_token_is(TokenType.SEMICOLON)
            and precedence < self.peek_precedence()
        ):
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self) -> Expression:
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self) -> Expression | None:
        value = parse_int_literal(self.cur_token.literal)
        if value is None:
            self.add_error(f'could not parse "{self.cur_token.literal}" as integer')
            return None
        return IntegerLiteral(self.cur_token, value)

    def parse_boolean(self) -> Expression:
        return Boolean(self.cur_token, self.cur_token_is(TokenType.TRUE))

    def parse_prefix_expression(self) -> Expression | None:
        token = self.cur_token
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return PrefixExpression(token, token.literal, right)

    def parse_infix_expression(self, left: Expression) -> Expression | None:
        token = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(token, left, token.literal, right)

    def parse_grouped_expression(self) -> Expression | None:
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None or not self.expect_peek(TokenType.RPAREN):
            return None
        return expression

    def parse_if_expression(self) -> Expression | None:
        token = self.cur_token

        if not self.expect_peek(TokenType.LPAREN):
            return None
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None or not self.expect_peek(TokenType.RPAREN):
            return None

        if not self.expect_peek(TokenType.LBRACE):
            return None
        consequence = self.parse_block_statement()
        if consequence is None:
            return None

        alternative = None
        if self.peek_token_is(TokenType.ELSE):
            self.next_token()
            if not self.expect_peek(TokenType.LBRACE):
                return None
            alternative = self.parse_block_statement()
            if alternative is None:
                return None

        return IfExpression(token, condition, consequence, alternative)

    def parse_function_literal(self) -> Expression | None:
        token = self.cur_token

        if not self.expect_peek(TokenType.LPAREN):
            return None
        parameters = self.parse_function_parameters()
        if parameters is None:
            return None

        if not self.expect_peek(TokenType.LBRACE):
            return None
        body = self.parse_block_statement()
        if body is None:
            return None

        return FunctionLiteral(token, parameters, body)

    def parse_function_parameters(self) -> list[Identifier] | None:
        identifiers: list[Identifier] = []

        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return identifiers

        if not self.expect_peek(TokenType.IDENT):
            return None
        identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            if not self.expect_peek(TokenType.IDENT):
                return None
            identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        if not self.expect_peek(TokenType.RPAREN):
            return None
        return identifiers

    def parse_call_expression(self, function: Expression) -> Expression | None:
        token = self.cur_token
        arguments = self.parse_call_arguments()
        if arguments is None:
            return None
        return CallExpression(token, function, arguments)

    def parse_call_arguments(self) -> list[Expression] | None:
        args: list[Expression] = []

        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return args

        self.next_token()
        arg = self.parse_expression(Precedence.LOWEST)
        if arg is None:
            return None
        args.append(arg)

        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            self.next_token()
            arg = self.parse_expression(Precedence.LOWEST)
            if arg is None:
                return None
            args.append(arg)

        if not self.expect_peek(TokenType.RPAREN):
            return None
        return args


def parse(source: str) -> tuple[Program, list[str]]:
    """Parse `source` with a fresh lexer/parser pair.

    Returns:
        tuple[Program, list[str]]: The (possibly partial) program and its diagnostics.
    """
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors


__all__ = ["Parser", "Precedence", "parse", "parse_int_literal", "precedences"]
