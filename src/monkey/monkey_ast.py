"""
Defines the abstract syntax tree (AST) node structure for the Monkey programming language.

Classes:
    Node: Base class for every syntax tree node.
    Statement / Expression: Marker bases for the two node families.
    Program: Root node, an ordered sequence of statements.
    LetStatement, ReturnStatement, ExpressionStatement, BlockStatement:
        Statement variants.
    Identifier, IntegerLiteral, Boolean, PrefixExpression, InfixExpression,
    IfExpression, FunctionLiteral, CallExpression:
        Expression variants.

Each node keeps the token that began it (for position reporting) and offers:
    token_literal(): The literal of that token.
    to_dict(): Nested plain-dict form, suitable for JSON output or debugging.
    str(node): Canonical source rendering, fully parenthesizing operator
        expressions so that precedence decisions are visible, e.g. `((-a) * b)`.

Nodes are pure data; they carry no parsing or evaluation behaviour.
"""

from dataclasses import dataclass, field, fields
from typing import Any

from monkey.monkey_token import Token


class Node:
    token: Token

    def token_literal(self) -> str:
        return self.token.literal

    def to_dict(self) -> dict[str, Any]:
        """Converts the node and all descendants into nested dictionaries."""
        out: dict[str, Any] = {"kind": type(self).__name__}
        tok = getattr(self, "token", None)
        if tok is not None:
            out["line"] = tok.line
            out["col"] = tok.col
        for f in fields(self):  # type: ignore[arg-type]
            if f.name == "token":
                continue
            out[f.name] = _to_plain(getattr(self, f.name))
        return out


def _to_plain(value: Any) -> Any:
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, list):
        return [_to_plain(v) for v in value]
    return value


class Statement(Node):
    pass


class Expression(Node):
    pass


@dataclass
class Program(Node):
    statements: list[Statement] = field(default_factory=list)

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "Program",
            "statements": [s.to_dict() for s in self.statements],
        }

    def __str__(self) -> str:
        return "\n".join(str(s) for s in self.statements)


# Expressions


@dataclass
class Identifier(Expression):
    token: Token
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass
class IntegerLiteral(Expression):
    token: Token
    value: int

    def __str__(self) -> str:
        return self.token.literal


@dataclass
class Boolean(Expression):
    token: Token
    value: bool

    def __str__(self) -> str:
        return self.token.literal


@dataclass
class PrefixExpression(Expression):
    token: Token
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass
class InfixExpression(Expression):
    token: Token
    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass
class BlockStatement(Statement):
    token: Token
    statements: list[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


@dataclass
class IfExpression(Expression):
    token: Token
    condition: Expression
    consequence: BlockStatement
    alternative: BlockStatement | None = None

    def __str__(self) -> str:
        out = f"if{self.condition} {self.consequence}"
        if self.alternative is not None:
            out += f"else {self.alternative}"
        return out


@dataclass
class FunctionLiteral(Expression):
    token: Token
    parameters: list[Identifier]
    body: BlockStatement

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"


@dataclass
class CallExpression(Expression):
    token: Token
    function: Expression
    arguments: list[Expression]

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


# Statements


@dataclass
class LetStatement(Statement):
    token: Token
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {self.value};"


@dataclass
class ReturnStatement(Statement):
    token: Token
    return_value: Expression | None = None

    def __str__(self) -> str:
        if self.return_value is None:
            return f"{self.token_literal()};"
        return f"{self.token_literal()} {self.return_value};"


@dataclass
class ExpressionStatement(Statement):
    token: Token
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


__all__ = [
    "BlockStatement",
    "Boolean",
    "CallExpression",
    "Expression",
    "ExpressionStatement",
    "FunctionLiteral",
    "Identifier",
    "IfExpression",
    "InfixExpression",
    "IntegerLiteral",
    "LetStatement",
    "Node",
    "PrefixExpression",
    "Program",
    "ReturnStatement",
    "Statement",
]
