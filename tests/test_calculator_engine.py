"""Pruebas de extremo a extremo del motor de cálculo."""

import pytest

from calc_errors import CalcError, CalcErrorKind
from calculator_engine import CalculatorEngine, evaluate_expression


@pytest.mark.parametrize("expr,expected", [
    ("2+3*4", "14"),
    ("(2+3)*4", "20"),
    ("-5+3", "-2"),
    ("3*-2", "-6"),
    ("(-2)*3", "-6"),
    ("50%", "0.5"),
    ("200+10%", "200.1"),
    ("0.1+0.2", "0.3"),
    ("-5", "-5"),
    ("+5", "5"),
    ("7/2", "3.5"),
    ("1/3", "0.333333333333"),
    ("0.5-0.5", "0"),
    ("-0", "0"),
    ("1.", "1"),
    (".5*2", "1"),
    ("10000000000*10000000000", "100000000000000000000"),
    ("1/1000000000000", "0.000000000001"),
    (" 1 + 1 ", "2"),
])
def test_evaluate_expression_values(expr, expected):
    result = evaluate_expression(expr)
    assert result.ok
    assert result.value == expected
    assert result.kind is None


@pytest.mark.parametrize("expr,expected", [
    ("3*-2", "-6"),
    ("2/-2*3", "-3"),
    ("2*-3+1", "-5"),
    ("8/-2/2", "-2"),
    ("6/-(1+2)", "-2"),
    ("--5", "5"),
    ("2*+3", "6"),
    ("(+4)/2", "2"),
    ("-50%", "-0.5"),
])
def test_sign_binds_to_following_operand(expr, expected):
    assert evaluate_expression(expr).value == expected


@pytest.mark.parametrize("expr,expected", [
    ("0.0000000000005", "0.000000000001"),
    ("0.0000000000004", "0"),
    ("-0.0000000000005", "-0.000000000001"),
    ("0.1234567890125", "0.123456789013"),
])
def test_rounding_halves_away_from_zero(expr, expected):
    assert evaluate_expression(expr).value == expected


@pytest.mark.parametrize("expr,kind", [
    ("5/0", CalcErrorKind.DIVISION_BY_ZERO),
    ("5/(1-1)", CalcErrorKind.DIVISION_BY_ZERO),
    ("(1+2", CalcErrorKind.MISMATCHED_PARENTHESES),
    ("1+2)", CalcErrorKind.MISMATCHED_PARENTHESES),
    ("1+a", CalcErrorKind.INVALID_CHARACTER),
    ("%", CalcErrorKind.PERCENT_ERROR),
    ("2*", CalcErrorKind.OPERATOR_ERROR),
    ("1.2.3+1", CalcErrorKind.INVALID_NUMBER),
    ("()", CalcErrorKind.INVALID_EXPRESSION),
    ("", CalcErrorKind.INVALID_EXPRESSION),
])
def test_evaluate_expression_errors(expr, kind):
    result = evaluate_expression(expr)
    assert not result.ok
    assert result.value is None
    assert result.kind is kind
    assert result.message


def test_evaluate_raises_calc_error():
    with pytest.raises(CalcError) as info:
        CalculatorEngine().evaluate("5/0")
    assert info.value.kind is CalcErrorKind.DIVISION_BY_ZERO
    assert isinstance(info.value, ValueError)


@pytest.mark.parametrize("expr", ["2+3*4", "0.1+0.2", "-7/3", "1/1000000000000"])
def test_deterministic(expr):
    results = {evaluate_expression(expr) for _ in range(5)}
    assert len(results) == 1


@pytest.mark.parametrize("expr", [
    "-5+3", "0.1+0.2", "22/7", "-1/3", "99999999*99999999",
    "1/1000000000000", "10000000000*10000000000*10000000000",
])
def test_result_can_be_evaluated_again(expr):
    first = evaluate_expression(expr).value
    again = evaluate_expression(first)
    assert again.ok
    assert again.value == first
