"""Tests for the StackCalculator engine.

Covers entry parsing, the four binary operators, the scientific functions,
and rollback: every failed operation must leave the stack exactly as it was.
"""

import logging
import math

import pytest

from stackcalc.engine import StackCalculator, parse_operand
from stackcalc.models import (
    BinaryOp,
    CalculatorError,
    DivisionByZero,
    EmptyInput,
    ErrorKind,
    InsufficientOperands,
    InvalidDomain,
    InvalidNumber,
    OperationError,
    ParseError,
    UnaryOp,
    UnknownOperator,
)


@pytest.fixture
def calc():
    return StackCalculator()


def push_all(calc, *values):
    for v in values:
        calc.push_value(str(v))


# --- Entry ---

@pytest.mark.parametrize("text, expected", [
    ("3", 3.0),
    ("  42  ", 42.0),
    ("-4", -4.0),
    ("2.5", 2.5),
    (".5", 0.5),
    ("1e3", 1000.0),
])
def test_push_valid_number(calc, text, expected):
    before = len(calc)
    value = calc.push_value(text)
    assert value == expected
    assert len(calc) == before + 1
    assert calc.peek() == expected


@pytest.mark.parametrize("text", ["", "   ", "\t\n"])
def test_push_empty_input(calc, text):
    push_all(calc, 1)
    with pytest.raises(EmptyInput) as exc:
        calc.push_value(text)
    assert exc.value.kind is ErrorKind.EMPTY_INPUT
    assert calc.snapshot() == (1.0,)


@pytest.mark.parametrize("text", ["abc", "1.2.3", "3+4", "1_000", "--1", ".", "٣", "１２"])
def test_push_invalid_number(calc, text):
    push_all(calc, 1)
    with pytest.raises(InvalidNumber) as exc:
        calc.push_value(text)
    assert exc.value.kind is ErrorKind.INVALID_NUMBER
    assert exc.value.text == text
    assert calc.snapshot() == (1.0,)


def test_parse_errors_share_base_class():
    with pytest.raises(ParseError):
        parse_operand("")
    with pytest.raises(ParseError):
        parse_operand("x")


# --- Binary operations ---

@pytest.mark.parametrize("op, expected", [
    ("+", 13.0),
    ("-", 7.0),
    ("*", 30.0),
    ("/", 10.0 / 3.0),
    (BinaryOp.SUBTRACT, 7.0),
    ("mul", 30.0),
])
def test_binary_operation(calc, op, expected):
    push_all(calc, 10, 3)
    result = calc.binary_operation(op)
    assert result == pytest.approx(expected)
    assert calc.snapshot() == (pytest.approx(expected),)


def test_operand_order_is_second_from_top_then_top(calc):
    push_all(calc, 2, 8)
    assert calc.binary_operation("-") == -6.0
    push_all(calc, 1)
    assert calc.binary_operation("/") == -6.0


def test_binary_leaves_rest_of_stack(calc):
    push_all(calc, 100, 6, 4)
    calc.binary_operation("/")
    assert calc.snapshot() == (100.0, 1.5)


@pytest.mark.parametrize("values", [(), (5,)])
def test_binary_insufficient_operands(calc, values):
    push_all(calc, *values)
    before = calc.snapshot()
    with pytest.raises(InsufficientOperands) as exc:
        calc.binary_operation("+")
    assert exc.value.required == 2
    assert calc.snapshot() == before


def test_divide_by_zero_restores_stack(calc):
    push_all(calc, 9, 7, 0)
    with pytest.raises(DivisionByZero):
        calc.binary_operation("/")
    assert calc.snapshot() == (9.0, 7.0, 0.0)


def test_divide_by_negative_zero(calc):
    push_all(calc, 7, "-0")
    with pytest.raises(DivisionByZero):
        calc.binary_operation(BinaryOp.DIVIDE)
    snap = calc.snapshot()
    assert snap == (7.0, 0.0)
    assert math.copysign(1.0, snap[-1]) == -1.0


def test_zero_dividend_is_fine(calc):
    push_all(calc, 0, 5)
    assert calc.binary_operation("/") == 0.0


def test_unknown_binary_operator_restores_stack(calc):
    push_all(calc, 1, 2, 3)
    with pytest.raises(UnknownOperator) as exc:
        calc.binary_operation("%")
    assert exc.value.operator == "%"
    assert calc.snapshot() == (1.0, 2.0, 3.0)


def test_insufficient_operands_checked_before_operator(calc):
    push_all(calc, 1)
    with pytest.raises(InsufficientOperands):
        calc.binary_operation("%")


# --- Scientific operations ---

def test_sin_90_degrees(calc):
    push_all(calc, 90)
    assert calc.unary_scientific_operation("sin") == pytest.approx(1.0)
    assert calc.snapshot() == (pytest.approx(1.0),)


@pytest.mark.parametrize("op, a, expected", [
    (UnaryOp.SIN, 30, 0.5),
    (UnaryOp.COS, 60, 0.5),
    (UnaryOp.COS, 180, -1.0),
    (UnaryOp.TAN, 45, 1.0),
    (UnaryOp.SQRT, 16, 4.0),
    (UnaryOp.SQRT, 0, 0.0),
    ("SIN", 0, 0.0),
])
def test_unary_operation(calc, op, a, expected):
    push_all(calc, 7, a)
    assert calc.unary_scientific_operation(op) == pytest.approx(expected)
    assert len(calc) == 2
    assert calc.snapshot()[0] == 7.0


def test_trig_of_infinity_is_nan(calc):
    push_all(calc, "inf")
    assert math.isnan(calc.unary_scientific_operation("cos"))


def test_sqrt_negative_restores_stack(calc):
    push_all(calc, 3, -4)
    with pytest.raises(InvalidDomain) as exc:
        calc.unary_scientific_operation("sqrt")
    assert exc.value.kind is ErrorKind.INVALID_DOMAIN
    assert calc.snapshot() == (3.0, -4.0)


def test_unary_insufficient_operands(calc):
    with pytest.raises(InsufficientOperands) as exc:
        calc.unary_scientific_operation("sin")
    assert exc.value.unary
    assert calc.snapshot() == ()


def test_unknown_unary_operator_restores_stack(calc):
    push_all(calc, 100)
    with pytest.raises(UnknownOperator) as exc:
        calc.unary_scientific_operation("log")
    assert exc.value.unary
    assert calc.snapshot() == (100.0,)


def test_operation_errors_share_base_class(calc):
    with pytest.raises(OperationError):
        calc.binary_operation("+")
    with pytest.raises(CalculatorError):
        calc.unary_scientific_operation("sqrt")


# --- apply() dispatch ---

def test_apply_token_sequence(calc):
    for token in ["3", "4", "+", "2", "*", "-4", "+"]:
        calc.apply(token)
    assert calc.snapshot() == (10.0,)


def test_apply_scientific_and_enum_tokens(calc):
    calc.apply("81")
    calc.apply(UnaryOp.SQRT)
    calc.apply("3")
    calc.apply(BinaryOp.DIVIDE)
    assert calc.snapshot() == (3.0,)


def test_apply_garbage_is_invalid_number(calc):
    with pytest.raises(InvalidNumber):
        calc.apply("log")


# --- Clearing, snapshot, atomicity ---

def test_clear_all_empties_stack(calc):
    push_all(calc, 1, 2, 3)
    calc.clear_all()
    assert len(calc) == 0
    assert calc.snapshot() == ()
    assert calc.peek() is None


def test_clear_entry_is_noop(calc):
    push_all(calc, 1, 2)
    calc.clear_entry()
    assert calc.snapshot() == (1.0, 2.0)


def test_snapshot_is_stable_and_detached(calc):
    push_all(calc, 1, 2)
    first = calc.snapshot()
    second = calc.snapshot()
    assert first == second == (1.0, 2.0)
    calc.push_value("3")
    assert first == (1.0, 2.0)


def test_transaction_restores_on_any_exception(calc):
    push_all(calc, 1, 2)
    with pytest.raises(RuntimeError):
        with calc._transaction() as stack:
            stack.pop()
            stack.append(99.0)
            raise RuntimeError("boom")
    assert calc.snapshot() == (1.0, 2.0)


def test_rollback_is_logged(calc, caplog):
    caplog.set_level(logging.INFO, logger="stackcalc")
    push_all(calc, 1, 0)
    with pytest.raises(DivisionByZero):
        calc.binary_operation("/")
    assert "division-by-zero" in caplog.text
