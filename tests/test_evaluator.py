"""Tests for postfix evaluation and numeric semantics."""

import math

import pytest

from rpncalc_pkg.api import evaluate_expression
from rpncalc_pkg.evaluator import evaluate_rpn, parse_number
from rpncalc_pkg.types import ErrorKind, Token, TokenKind


def num(text):
    return Token(TokenKind.NUMBER, text)


def op(symbol, unary=False):
    return Token(TokenKind.OPERATOR, symbol, unary)


class TestParseNumber:
    """Test numeric-prefix parsing of number tokens."""

    def test_plain_numbers(self):
        assert parse_number("42") == 42.0
        assert parse_number("3.5") == 3.5
        assert parse_number(".5") == 0.5
        assert parse_number("5.") == 5.0

    def test_signed_numbers(self):
        assert parse_number("-5") == -5.0
        assert parse_number("+.25") == 0.25

    def test_trailing_garbage_ignored(self):
        assert parse_number("1.2.3") == 1.2

    def test_no_numeric_prefix(self):
        assert parse_number(".") is None
        assert parse_number("-.") is None
        assert parse_number("..5") is None


class TestEvaluateRpn:
    """Test the value-stack evaluator on hand-built postfix input."""

    def test_binary_operand_order(self):
        assert evaluate_rpn([num("8"), num("2"), op("-")]).value == 6.0
        assert evaluate_rpn([num("8"), num("2"), op("/")]).value == 4.0

    def test_flagged_unary(self):
        assert evaluate_rpn([num("2"), num("3"), op("-", unary=True), op("-")]).value == 5.0

    def test_sign_with_one_operand_acts_as_unary(self):
        assert evaluate_rpn([num("5"), op("-")]).value == -5.0
        assert evaluate_rpn([num("5"), op("+")]).value == 5.0

    def test_missing_unary_operand(self):
        result = evaluate_rpn([op("-", unary=True)])
        assert result.error.kind == ErrorKind.EVAL
        assert result.error.code == "MISSING_UNARY_OPERAND"
        assert evaluate_rpn([op("+")]).error.code == "MISSING_UNARY_OPERAND"

    def test_insufficient_operands(self):
        result = evaluate_rpn([num("3"), op("*")])
        assert result.error.code == "INSUFFICIENT_OPERANDS"
        assert result.error.message == "insufficient operands for binary operator '*'"

    def test_invalid_number(self):
        result = evaluate_rpn([num(".")])
        assert result.error.code == "INVALID_NUMBER"
        assert "'.'" in result.error.message

    def test_unexpected_stack_size(self):
        assert evaluate_rpn([num("1"), num("2")]).error.code == "STACK_SIZE"
        assert evaluate_rpn([]).error.code == "STACK_SIZE"


@pytest.mark.parametrize(
    "expression, expected",
    [
        ("3 + 4", 7.0),
        ("8 - (5 - 2)", 5.0),
        ("2 ^ 3", 8.0),
        ("2 ^ 3 ^ 2", 64.0),
        ("-5", -5.0),
        ("+(-2) * (-3)", 6.0),
        ("5.7 % 2", 1.0),
        ("7 / 2", 3.5),
        ("2 + 3 * 4", 14.0),
        ("(2 + 3) * 4", 20.0),
        ("10 - 4 - 3", 3.0),
        ("100 / 10 / 5", 2.0),
        ("3 - -2", 5.0),
        ("2 - -(3)", 5.0),
        ("2 * -(3)", -6.0),
        ("-(2) ^ 2", -4.0),
        ("-2 ^ 2", 4.0),
        ("1.2.3 + 1", 2.2),
        ("2 + 3)", 5.0),
        ("3 +", 3.0),
    ],
)
def test_expression_values(expression, expected):
    result = evaluate_expression(expression)
    assert result.ok, result.error
    assert math.isclose(result.value, expected)


class TestModulo:
    """Test truncating modulo semantics."""

    def test_fraction_discarded(self):
        assert evaluate_expression("5.7 % 2.9").value == 1.0

    def test_sign_follows_dividend(self):
        assert evaluate_expression("-7 % 3").value == -1.0
        assert evaluate_expression("7 % -3").value == 1.0

    def test_modulo_by_zero(self):
        result = evaluate_expression("5 % 0")
        assert result.error.code == "MODULO_BY_ZERO"
        assert str(result.error) == "EvalError: modulo by zero"

    def test_modulo_by_truncated_zero(self):
        assert evaluate_expression("7 % 0.5").error.code == "MODULO_BY_ZERO"


class TestArithmeticErrors:
    """Test failures raised while computing values."""

    def test_division_by_zero(self):
        result = evaluate_expression("4 / 0")
        assert not result.ok
        assert result.error.kind == ErrorKind.EVAL
        assert result.error.code == "DIVISION_BY_ZERO"
        assert str(result.error) == "EvalError: division by zero"

    def test_division_by_computed_zero(self):
        assert evaluate_expression("1 / (2 - 2)").error.code == "DIVISION_BY_ZERO"

    def test_power_overflow(self):
        assert evaluate_expression("10 ^ 400").error.code == "OVERFLOW"

    def test_power_domain_errors(self):
        assert evaluate_expression("(-8) ^ 0.5").error.code == "DOMAIN_ERROR"
        assert evaluate_expression("0 ^ -1").error.code == "DOMAIN_ERROR"

    def test_juxtaposed_groups_leave_two_values(self):
        assert evaluate_expression("(5)(6)").error.code == "STACK_SIZE"


def test_idempotent():
    for expression in ("3 + 4", "4 / 0", "7 & 3", "(1"):
        first = evaluate_expression(expression)
        second = evaluate_expression(expression)
        assert first == second
