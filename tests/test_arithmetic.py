import math

import pytest

from calculator.parser import MAX_NESTING_DEPTH, NestingTooDeepError, UnexpectedTokenError, parse
from calculator.runtime import calculate, evaluate, format_number
from calculator.tokenizer import InvalidCharacterError, MalformedNumberError, tokenize
from calculator.utils import CalculatorError


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("1", 1.0),
        pytest.param("3.25", 3.25),
        pytest.param(".5", 0.5),
        pytest.param("1.", 1.0),
        pytest.param("-1", -1.0),
        pytest.param("1+2", 3.0),
        pytest.param("(1+2)", 3.0),
        pytest.param("-(1+2)", -3.0),
        pytest.param("(((1)))", 1.0),
        pytest.param("((1+2))", 3.0),
        pytest.param("1 * 4 + 5", 9.0),
        pytest.param("1 + 4 * 5", 21.0),
        pytest.param("1+2*3", 7.0),
        pytest.param("(1+2)*3", 9.0),
        pytest.param("1-2-3", -4.0),
        pytest.param("10 / 5 / 2 / 2", 0.5),
        pytest.param("10 + 2 * (5 + 3 - 1)", 24.0),
        pytest.param("-2*3", -6.0),
        pytest.param("-2+3", 1.0),
        pytest.param("--2", 2.0),
        pytest.param("2*-3", -6.0),
        pytest.param("1 - -1", 2.0),
    ],
)
def test_eval_arithmetic(code: str, expected_ret_val: float) -> None:
    tokens = tokenize(code)
    ast = parse(tokens)
    assert evaluate(ast) == expected_ret_val


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("1/0", math.inf),
        pytest.param("-1/0", -math.inf),
        pytest.param("1/-0", -math.inf),
        pytest.param("1/(0*-1)", -math.inf),
    ],
)
def test_division_by_zero_gives_infinity(code: str, expected_ret_val: float) -> None:
    assert calculate(code) == expected_ret_val


def test_zero_by_zero_is_nan() -> None:
    assert math.isnan(calculate("0/0"))


def test_overflow_gives_infinity() -> None:
    big = "9" * 200
    assert calculate(f"{big}*{big}*{big}*{big}") == math.inf


@pytest.mark.parametrize(
    "code, error_type",
    [
        pytest.param("1+", UnexpectedTokenError),
        pytest.param("()", UnexpectedTokenError),
        pytest.param("1 2", UnexpectedTokenError),
        pytest.param("", UnexpectedTokenError),
        pytest.param("(1+2", UnexpectedTokenError),
        pytest.param("1+2)", UnexpectedTokenError),
        pytest.param("*2", UnexpectedTokenError),
        pytest.param("+2", UnexpectedTokenError),
        pytest.param("1..2", MalformedNumberError),
        pytest.param(".", MalformedNumberError),
        pytest.param("1+a", InvalidCharacterError),
        pytest.param("2^3", InvalidCharacterError),
    ],
)
def test_malformed_input_fails(code: str, error_type: type) -> None:
    with pytest.raises(error_type):
        calculate(code)


def test_all_errors_share_a_base() -> None:
    for code in ["1+", "1..2", "1+a"]:
        with pytest.raises(CalculatorError):
            calculate(code)


def test_repeated_runs_give_same_result() -> None:
    code = "(1.5 - 4) * -2 / 3"
    assert {calculate(code) for _ in range(5)} == {calculate(code)}


@pytest.mark.parametrize(
    "value, expected",
    [
        pytest.param(7.0, "7"),
        pytest.param(-4.0, "-4"),
        pytest.param(0.5, "0.5"),
        pytest.param(-0.0, "-0"),
        pytest.param(0.1 + 0.2, "0.30000000000000004"),
        pytest.param(math.inf, "inf"),
        pytest.param(-math.inf, "-inf"),
        pytest.param(math.nan, "nan"),
    ],
)
def test_format_number(value: float, expected: str) -> None:
    assert format_number(value) == expected


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("+".join(["1"] * 1500), 1500.0),
        pytest.param("-".join(["1"] * 5000), -4998.0),
        pytest.param("*".join(["1"] * 3000), 1.0),
        pytest.param("-" * (MAX_NESTING_DEPTH - 1) + "1", -1.0),
        pytest.param("(" * (MAX_NESTING_DEPTH - 1) + "1" + ")" * (MAX_NESTING_DEPTH - 1), 1.0),
    ],
)
def test_long_expressions(code: str, expected_ret_val: float) -> None:
    assert calculate(code) == expected_ret_val


@pytest.mark.parametrize(
    "code",
    [
        pytest.param("-" * 600 + "1"),
        pytest.param("(" * 2000 + "1" + ")" * 2000),
        pytest.param("-" * MAX_NESTING_DEPTH + "1"),
    ],
)
def test_too_deep_nesting_is_reported(code: str) -> None:
    with pytest.raises(NestingTooDeepError):
        calculate(code)
