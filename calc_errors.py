"""
Errores y resultado etiquetado del motor de cálculo.

Cada etapa (tokenizador, parser, evaluador) lanza una subclase de
CalcError con un `kind` concreto. La entrada pública
`evaluate_expression` nunca lanza: devuelve un CalcResult que conserva
el tipo de error para que los llamadores puedan distinguirlo.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CalcErrorKind(Enum):
    INVALID_CHARACTER = "invalid_character"
    MISMATCHED_PARENTHESES = "mismatched_parentheses"
    INVALID_NUMBER = "invalid_number"
    PERCENT_ERROR = "percent_error"
    OPERATOR_ERROR = "operator_error"
    DIVISION_BY_ZERO = "division_by_zero"
    INVALID_EXPRESSION = "invalid_expression"
    MATH_ERROR = "math_error"


class CalcError(ValueError):
    """Expresión inválida. `kind` indica la causa concreta."""

    def __init__(self, kind: CalcErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


class TokenizeError(CalcError):
    def __init__(self, char: str):
        super().__init__(
            CalcErrorKind.INVALID_CHARACTER, f"Carácter inválido: {char!r}"
        )
        self.char = char


class ParseError(CalcError):
    pass


class EvalError(CalcError):
    pass


@dataclass(frozen=True)
class CalcResult:
    ok: bool
    value: str | None = None
    kind: CalcErrorKind | None = None
    message: str = ""

    @classmethod
    def success(cls, value: str) -> CalcResult:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: CalcError) -> CalcResult:
        return cls(ok=False, kind=error.kind, message=str(error))
