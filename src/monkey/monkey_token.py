"""
Token vocabulary for the Monkey programming language.

Classes:
    TokenType: Closed enumeration of every lexical token kind.
    Token: Immutable token value carrying its kind, source literal and location.

Functions:
    lookup_ident(word): Classify a scanned word as a keyword or identifier.

The vocabulary is exhaustive and stable: downstream consumers (pretty printers,
evaluators) may switch over `TokenType` without a fallback branch.
"""

from dataclasses import dataclass
from enum import Enum


class TokenType(str, Enum):
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
        return self.name


keywords: dict[str, TokenType] = {
    "fn": TokenType.FUNCTION,
    "let": TokenType.LET,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "return": TokenType.RETURN,
}

# Characters that always form a token on their own.
single_char_tokens: dict[str, TokenType] = {
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

# Two-character operators, keyed by their full spelling.
double_char_tokens: dict[str, TokenType] = {
    "==": TokenType.EQ,
    "!=": TokenType.NOT_EQ,
}


def lookup_ident(word: str) -> TokenType:
    """Returns the keyword kind for `word`, or IDENT if it is not reserved."""
    return keywords.get(word, TokenType.IDENT)


@dataclass(frozen=True)
class Token:
    """Represents a single lexical token.

    Attributes:
        type (TokenType): The token kind.
        literal (str): The exact source substring ("" for EOF).
        line (int): 1-based line of the first character.
        col (int): 1-based column of the first character.
    """

    type: TokenType
    literal: str
    line: int = 0
    col: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.literal!r})"


__all__ = [
    "Token",
    "TokenType",
    "double_char_tokens",
    "keywords",
    "lookup_ident",
    "single_char_tokens",
]
