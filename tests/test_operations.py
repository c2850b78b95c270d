"""Tests for arithmetic, validation wrappers, parsing and number formatting."""

import math

import pytest

from keycalc.models import ErrorKind, Evaluation, Operation
from keycalc.operations import (
    add,
    evaluate,
    format_number,
    is_decimal_literal,
    is_unary,
    parse_operand,
    power,
    symbol_for,
    with_validation,
)


# --- Dispatch table ---

@pytest.mark.parametrize("op, a, b, expected", [
    (Operation.ADD, 2, 3, 5),
    (Operation.SUBTRACT, 2, 3, -1),
    (Operation.MULTIPLY, 4, 2.5, 10),
    (Operation.DIVIDE, 15, 4, 3.75),
    (Operation.POWER, 2, 8, 256),
    (Operation.SQRT, 81, 0, 9),
])
def test_evaluate(op, a, b, expected):
    result = evaluate(op, a, b)
    assert result.ok
    assert result.value == pytest.approx(expected)


def test_raw_arithmetic_takes_both_operands():
    assert add(2, 3) == 5
    with pytest.raises(TypeError):
        add(2)


def test_symbols():
    assert symbol_for(Operation.MULTIPLY) == "×"
    assert symbol_for(Operation.DIVIDE) == "÷"
    assert symbol_for(Operation.SQRT) == "√"
    assert symbol_for(Operation.MULTIPLY, ascii=True) == "*"
    assert symbol_for(Operation.DIVIDE, ascii=True) == "/"


def test_only_sqrt_is_unary():
    assert [op for op in Operation if is_unary(op)] == [Operation.SQRT]


def test_operation_parse():
    assert Operation.parse(" Divide ") is Operation.DIVIDE
    with pytest.raises(ValueError, match="Unknown operation"):
        Operation.parse("modulo")


# --- Validation ---

def test_divide_by_zero_is_an_error_value():
    result = evaluate(Operation.DIVIDE, 5, 0)
    assert not result.ok
    assert result.value is None
    assert result.error is ErrorKind.DIVISION_BY_ZERO
    assert result.error.message == "Cannot divide by zero"


def test_divide_by_negative_zero_is_an_error_value():
    assert evaluate(Operation.DIVIDE, 5, -0.0).error is ErrorKind.DIVISION_BY_ZERO


def test_sqrt_of_negative_is_an_error_value():
    result = evaluate(Operation.SQRT, -4)
    assert result.error is ErrorKind.NEGATIVE_RADICAND
    assert result.error.message == "Negative number under root"


def test_validation_runs_before_operation():
    def explode(a, b):
        raise AssertionError("operation must not run")

    guarded = with_validation(explode, lambda a, b: ErrorKind.DIVISION_BY_ZERO)
    assert guarded(1, 0) == Evaluation.failure(ErrorKind.DIVISION_BY_ZERO)


def test_validation_passes_through():
    guarded = with_validation(lambda a, b: a * b, lambda a, b: None)
    assert guarded(6, 7) == Evaluation.success(42)


# --- Power edge cases ---

def test_power_overflow_is_infinite():
    assert power(10, 400) == math.inf
    assert power(-10, 401) == -math.inf


def test_power_zero_to_negative_is_infinite():
    assert power(0, -1) == math.inf


def test_power_negative_base_fractional_exponent_is_nan():
    assert math.isnan(power(-8, 0.5))


# --- Parsing ---

@pytest.mark.parametrize("text, expected", [
    ("0", 0.0),
    ("42", 42.0),
    ("-7", -7.0),
    ("3.", 3.0),
    ("0.5", 0.5),
    ("1e+21", 1e21),
    ("12.5abc", 12.5),
    ("Infinity", math.inf),
    ("-Infinity", -math.inf),
])
def test_parse_operand(text, expected):
    assert parse_operand(text) == expected


@pytest.mark.parametrize("text", ["NaN", "abc", ".", "-", ""])
def test_parse_operand_without_number_is_nan(text):
    assert math.isnan(parse_operand(text))


@pytest.mark.parametrize("text, expected", [
    ("12", True),
    ("-0.5", True),
    ("3.", True),
    ("0", True),
    ("1e+21", False),
    ("NaN", False),
    ("Infinity", False),
    ("-", False),
    ("", False),
])
def test_is_decimal_literal(text, expected):
    assert is_decimal_literal(text) is expected


# --- Formatting ---

@pytest.mark.parametrize("value, expected", [
    (8.0, "8"),
    (-3.0, "-3"),
    (0.0, "0"),
    (-0.0, "0"),
    (0.5, "0.5"),
    (-2.5, "-2.5"),
    (0.1 + 0.2, "0.30000000000000004"),
    (123456.789, "123456.789"),
    (1e20, "100000000000000000000"),
    (1e21, "1e+21"),
    (1.5e22, "1.5e+22"),
    (0.000001, "0.000001"),
    (1e-7, "1e-7"),
    (1.5e-7, "1.5e-7"),
    (math.inf, "Infinity"),
    (-math.inf, "-Infinity"),
    (math.nan, "NaN"),
])
def test_format_number(value, expected):
    assert format_number(value) == expected
