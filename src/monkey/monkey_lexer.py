"""
Lexical analyzer for the Monkey programming language.

This module converts raw source text into a pull-based stream of tokens:

Classes:
    Lexer: Scans a source string one character at a time and hands out Tokens.

Functions:
    tokenize(source): Convenience wrapper returning every token before EOF.

Features:
    - Skips whitespace (space, tab, newline, carriage return)
    - One character of lookahead for two-character operators (`==`, `!=`)
    - Greedy identifiers/keywords and integer literals (decimal or `0x`/`0o`/`0b`)
    - Unknown characters become ILLEGAL tokens instead of raising

Example:
    >>> lexer = Lexer("let five = 5;")
    >>> lexer.next_token()
    Token(LET, 'let')
"""

import logging
from collections.abc import Iterator

from monkey.monkey_token import (
    Token,
    TokenType,
    double_char_tokens,
    lookup_ident,
    single_char_tokens,
)

logger = logging.getLogger(__name__)

WHITESPACE = frozenset(" \t\n\r")
BASE_PREFIXES = frozenset("xXoObB")


def is_letter(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


def is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class Lexer:
    """Tokenizer for Monkey source text.

    The current character `ch` is the empty string once the input is exhausted;
    from then on `position` stays at `len(source)` and every call to
    `next_token()` yields an EOF token.

    Attributes:
        source (str): The input source text.
        position (int): Index of `ch` in the source.
        read_position (int): Index of the next character to read.
        ch (str): The character under examination.
        line (int): 1-based line of `ch`.
        col (int): 1-based column of `ch`.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.position = 0
        self.read_position = 0
        self.ch = ""
        self.line = 1
        self.col = 1
        self.read_char()

    def read_char(self) -> None:
        """Moves to the next character, or parks on the EOF sentinel."""
        if self.ch == "\n":
            self.line += 1
            self.col = 1
        elif self.ch:
            self.col += 1
        if self.read_position >= len(self.source):
            self.ch = ""
            self.position = len(self.source)
            return
        self.ch = self.source[self.read_position]
        self.position = self.read_position
        self.read_position += 1

    def peek_char(self) -> str:
        """Returns the character after `ch` without consuming it."""
        if self.read_position >= len(self.source):
            return ""
        return self.source[self.read_position]

    def skip_whitespace(self) -> None:
        while self.ch in WHITESPACE:
            self.read_char()

    def read_identifier(self) -> str:
        start = self.position
        while is_letter(self.ch) or is_digit(self.ch):
            self.read_char()
        return self.source[start : self.position]

    def read_number(self) -> str:
        start = self.position
        if self.ch == "0" and self.peek_char() in BASE_PREFIXES:
            self.read_char()
            self.read_char()
            while self.ch.isascii() and self.ch.isalnum():
                self.read_char()
            return self.source[start : self.position]
        while is_digit(self.ch):
            self.read_char()
        return self.source[start : self.position]

    def next_token(self) -> Token:
        """Consumes and returns the next Token.

        Returns:
            Token: The next token; EOF (with an empty literal) once the
            source is exhausted, on this and every later call.
        """
        self.skip_whitespace()
        line, col = self.line, self.col

        if self.ch == "":
            return Token(TokenType.EOF, "", line, col)

        # 1. Two-character operators need one character of lookahead
        pair = self.ch + self.peek_char()
        if pair in double_char_tokens:
            self.read_char()
            self.read_char()
            return Token(double_char_tokens[pair], pair, line, col)

        # 2. Single-character operators and delimiters
        if self.ch in single_char_tokens:
            ch = self.ch
            self.read_char()
            return Token(single_char_tokens[ch], ch, line, col)

        # 3. Identifier or keyword
        if is_letter(self.ch):
            word = self.read_identifier()
            return Token(lookup_ident(word), word, line, col)

        # 4. Integer literal
        if is_digit(self.ch):
            return Token(TokenType.INT, self.read_number(), line, col)

        # 5. Unknown character
        ch = self.ch
        logger.debug("illegal character %r at line %d, col %d", ch, line, col)
        self.read_char()
        return Token(TokenType.ILLEGAL, ch, line, col)

    def __iter__(self) -> Iterator[Token]:
        """Yields tokens until (and excluding) the EOF token."""
        while True:
            tok = self.next_token()
            if tok.type == TokenType.EOF:
                return
            yield tok


def tokenize(source: str) -> list[Token]:
    """Returns every token of `source` up to, but not including, EOF."""
    return list(Lexer(source))


__all__ = ["Lexer", "tokenize"]
