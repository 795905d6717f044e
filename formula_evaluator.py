"""Tokenización, conversión a postfijo y evaluación de expresiones."""

import math
import re

from calc_errors import CalcErrorKind, EvalError, ParseError, TokenizeError
from calc_tokens import (
    LEFT_PAREN,
    OPERATORS,
    PERCENT,
    RIGHT_PAREN,
    Token,
    TokenType,
)


_NUMBER_RE = re.compile(r"[0-9.]+")


# ── Tokenizador ──────────────────────────────────────────────────

def _expects_operand(tokens: list) -> bool:
    """True si un signo '+' o '-' en esta posición es unario."""
    if not tokens:
        return True
    last = tokens[-1]
    return last.type in (TokenType.OPERATOR, TokenType.LEFT_PAREN)


def tokenize(expression: str) -> list:
    """Divide la expresión en tokens.

    Los signos unarios se normalizan a operaciones binarias insertando
    un 0 implícito: "-5" produce [0, -, 5] y "+5" produce [0, +, 5].
    El operador marcado como `unary` liga más que cualquier binario.

    Raises:
        TokenizeError: carácter fuera del alfabeto admitido.
    """
    tokens = []
    i = 0
    n = len(expression)

    while i < n:
        ch = expression[i]

        if ch.isspace():
            i += 1
            continue

        # Los puntos repetidos se detectan al evaluar el número
        match = _NUMBER_RE.match(expression, i)
        if match:
            tokens.append(Token.number(match.group()))
            i = match.end()
            continue

        if ch in OPERATORS:
            unary = ch in "+-" and _expects_operand(tokens)
            if unary:
                tokens.append(Token.number("0"))
            tokens.append(Token.operator(ch, unary))
        elif ch == "(":
            tokens.append(LEFT_PAREN)
        elif ch == ")":
            tokens.append(RIGHT_PAREN)
        elif ch == "%":
            tokens.append(PERCENT)
        else:
            raise TokenizeError(ch)
        i += 1

    return tokens


# ── Shunting-yard ────────────────────────────────────────────────

def _should_pop(o1: Token, o2: Token) -> bool:
    if o1.left_associative:
        return o1.precedence <= o2.precedence
    return o1.precedence < o2.precedence


def _mismatched() -> ParseError:
    return ParseError(
        CalcErrorKind.MISMATCHED_PARENTHESES, "Paréntesis desbalanceados"
    )


def to_postfix(tokens: list) -> list:
    """Reordena tokens infijos en notación polaca inversa.

    El porcentaje pasa directo a la salida: se aplica al último
    operando apilado durante la evaluación.

    Raises:
        ParseError: paréntesis desbalanceados.
    """
    output = []
    stack = []

    for tok in tokens:
        if tok.type in (TokenType.NUMBER, TokenType.PERCENT):
            output.append(tok)
        elif tok.type is TokenType.OPERATOR:
            while (
                stack
                and stack[-1].type is TokenType.OPERATOR
                and _should_pop(tok, stack[-1])
            ):
                output.append(stack.pop())
            stack.append(tok)
        elif tok.type is TokenType.LEFT_PAREN:
            stack.append(tok)
        elif tok.type is TokenType.RIGHT_PAREN:
            while stack:
                top = stack.pop()
                if top.type is TokenType.LEFT_PAREN:
                    break
                output.append(top)
            else:
                raise _mismatched()

    while stack:
        top = stack.pop()
        if top.is_paren:
            raise _mismatched()
        output.append(top)

    return output


# ── Evaluación RPN ───────────────────────────────────────────────

def _parse_number(text: str) -> float:
    try:
        value = float(text)
    except ValueError as exc:
        raise EvalError(
            CalcErrorKind.INVALID_NUMBER, f"Número inválido: {text}"
        ) from exc
    if not math.isfinite(value):
        raise EvalError(CalcErrorKind.INVALID_NUMBER, f"Número inválido: {text}")
    return value


def _apply(symbol: str, a: float, b: float) -> float:
    if symbol == "+":
        return a + b
    if symbol == "-":
        return a - b
    if symbol == "*":
        return a * b
    if b == 0:
        raise EvalError(CalcErrorKind.DIVISION_BY_ZERO, "División por cero")
    return a / b


def evaluate_postfix(postfix: list) -> float:
    """Ejecuta la secuencia postfija sobre una pila numérica.

    Raises:
        EvalError: número mal formado, operandos insuficientes,
            división por cero, pila sin reducir o resultado no finito.
    """
    stack = []

    for tok in postfix:
        if tok.type is TokenType.NUMBER:
            stack.append(_parse_number(tok.text))
        elif tok.type is TokenType.PERCENT:
            if not stack:
                raise EvalError(
                    CalcErrorKind.PERCENT_ERROR, "Falta operando para '%'"
                )
            stack.append(stack.pop() / 100)
        elif tok.type is TokenType.OPERATOR:
            if len(stack) < 2:
                raise EvalError(
                    CalcErrorKind.OPERATOR_ERROR,
                    f"Faltan operandos para '{tok.text}'",
                )
            b = stack.pop()
            a = stack.pop()
            stack.append(_apply(tok.text, a, b))
        else:
            raise EvalError(
                CalcErrorKind.INVALID_EXPRESSION, f"Token inesperado: {tok}"
            )

    if len(stack) != 1:
        raise EvalError(CalcErrorKind.INVALID_EXPRESSION, "Expresión incompleta")

    result = stack[0]
    if not math.isfinite(result):
        raise EvalError(CalcErrorKind.MATH_ERROR, "Resultado no finito")
    return result


class FormulaEvaluator:
    """Encadena tokenizador, parser y evaluador sobre una expresión."""

    def evaluate(self, expression: str) -> float:
        tokens = tokenize(expression)
        postfix = to_postfix(tokens)
        return evaluate_postfix(postfix)
