"""
Motor de cálculo para la calculadora aritmética.

Este módulo provee la clase CalculatorEngine que procesa y evalúa
expresiones con + - * /, paréntesis y porcentaje. Es independiente de
la interfaz gráfica y no guarda estado entre llamadas.

Contrato de interfaz:
    - evaluate(expression: str) -> str          (lanza CalcError)
    - evaluate_expression(expression: str) -> CalcResult   (no lanza)
"""

import logging
from decimal import ROUND_HALF_UP, Decimal, localcontext

from calc_errors import CalcError, CalcResult
from formula_evaluator import FormulaEvaluator

logger = logging.getLogger(__name__)


class CalculatorEngine:
    """Evalúa expresiones aritméticas y formatea el resultado."""

    # Redondeo a 12 decimales, mitades hacia fuera del cero: absorbe el
    # ruido de coma flotante (0.1+0.2) y 5e-13 sube a 1e-12
    RESULT_DECIMALS = 12
    # Cubre los 309 dígitos enteros del mayor float más los decimales
    _ROUNDING_PRECISION = 400
    INTEGER_LIMIT = 1e15

    def __init__(self):
        self._evaluator = FormulaEvaluator()

    # ── Evaluación principal ─────────────────────────────────────

    def evaluate(self, expression: str) -> str:
        """Evalúa la expresión y devuelve el resultado como cadena.

        Raises:
            CalcError: expresión inválida; `kind` indica la etapa y causa.
        """
        value = self._evaluator.evaluate(expression)
        return self._format_result(self._round_result(value))

    def evaluate_expression(self, expression: str) -> CalcResult:
        try:
            return CalcResult.success(self.evaluate(expression))
        except CalcError as exc:
            logger.debug("Evaluación fallida de %r: %s (%s)",
                         expression, exc, exc.kind.value)
            return CalcResult.failure(exc)

    # ── Formato del resultado ────────────────────────────────────

    @classmethod
    def _round_result(cls, value: float) -> float:
        quantum = Decimal(1).scaleb(-cls.RESULT_DECIMALS)
        with localcontext() as ctx:
            ctx.prec = cls._ROUNDING_PRECISION
            rounded = Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)
        return float(rounded)

    @classmethod
    def _format_result(cls, value: float) -> str:
        # Sin notación científica: el resultado debe poder reintroducirse
        if value == int(value) and abs(value) < cls.INTEGER_LIMIT:
            return str(int(value))
        text = format(Decimal(repr(value)), "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text


_default_engine = CalculatorEngine()


def evaluate_expression(expression: str) -> CalcResult:
    """Punto de entrada único para la interfaz y llamadores externos."""
    return _default_engine.evaluate_expression(expression)
