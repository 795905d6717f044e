"""Tokens de la calculadora y tablas de operadores."""

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    NUMBER = "number"
    OPERATOR = "operator"
    LEFT_PAREN = "left_paren"
    RIGHT_PAREN = "right_paren"
    PERCENT = "percent"


# ── Tablas de operadores ─────────────────────────────────────────

OPERATORS = ("+", "-", "*", "/")

PRECEDENCE = {"+": 1, "-": 1, "*": 2, "/": 2}

LEFT_ASSOCIATIVE = {"+": True, "-": True, "*": True, "/": True}

# Signo unario ("0 - x" implícito): liga más que cualquier binario y
# asocia por la derecha para que "--5" sea 0 - (0 - 5)
UNARY_PRECEDENCE = 3


@dataclass(frozen=True)
class Token:
    """Token tipado. `text` solo se usa en números y operadores."""

    type: TokenType
    text: str = ""
    unary: bool = False

    @classmethod
    def number(cls, text: str) -> "Token":
        return cls(TokenType.NUMBER, text)

    @classmethod
    def operator(cls, symbol: str, unary: bool = False) -> "Token":
        if symbol not in OPERATORS:
            raise ValueError(f"Operador desconocido: {symbol}")
        return cls(TokenType.OPERATOR, symbol, unary)

    @property
    def precedence(self) -> int:
        if self.unary:
            return UNARY_PRECEDENCE
        return PRECEDENCE[self.text]

    @property
    def left_associative(self) -> bool:
        return not self.unary and LEFT_ASSOCIATIVE[self.text]

    @property
    def is_paren(self) -> bool:
        return self.type in (TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN)

    def __str__(self) -> str:
        if self.type is TokenType.LEFT_PAREN:
            return "("
        if self.type is TokenType.RIGHT_PAREN:
            return ")"
        if self.type is TokenType.PERCENT:
            return "%"
        return self.text


LEFT_PAREN = Token(TokenType.LEFT_PAREN)
RIGHT_PAREN = Token(TokenType.RIGHT_PAREN)
PERCENT = Token(TokenType.PERCENT)
