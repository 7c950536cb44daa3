import math
from fractions import Fraction

import pytest

from messages import ERROR_MESSAGES, ErrorKind
from validation import (
    are_all_valid_numbers,
    is_valid_number,
    validate_decode_code,
    validate_encode_params,
    validate_parameter_range,
)

# ===================================
# 1. Number predicate
# ===================================

@pytest.mark.parametrize("value", [0, 123, -5, 3.14, 999_999_999, 10**30, Fraction(1, 2)])
def test_valid_numbers(value):
    assert is_valid_number(value)


@pytest.mark.parametrize("value", [
    math.nan, math.inf, -math.inf, None, "123", "abc", "", True, False, {}, [], object(),
])
def test_invalid_numbers(value):
    assert not is_valid_number(value)


def test_are_all_valid_numbers():
    assert are_all_valid_numbers(1, 2, 3)
    assert not are_all_valid_numbers(1, None, 3)
    assert not are_all_valid_numbers(1, math.nan, 3)
    assert not are_all_valid_numbers(1, math.inf, 3)
    assert not are_all_valid_numbers(1, "2", 3)


# ===================================
# 2. Decode code shape
# ===================================

def test_decode_code_rejects_empty_and_absent():
    for code in ("", None, 123, ["abc"]):
        result = validate_decode_code(code)
        assert not result.valid
        assert result.kind == ErrorKind.INVALID_ADDRESS
        assert result.error == "잘못된 주소입니다."


def test_decode_code_rejects_overlong():
    result = validate_decode_code("x" * 51)
    assert not result.valid
    assert result.kind == ErrorKind.INVALID_CODE_LENGTH
    assert result.error == "오류: 코드 길이가 너무 깁니다."


def test_decode_code_accepts_max_length():
    result = validate_decode_code("a" * 50)
    assert result.valid
    assert result.error is None
    assert result.as_payload() == {"valid": True}


def test_decode_code_custom_max_length():
    assert validate_decode_code("abcdef", max_length=5).kind == ErrorKind.INVALID_CODE_LENGTH
    assert validate_decode_code("abcde", max_length=5).valid


# ===================================
# 3. Encode parameter presence
# ===================================

def test_encode_params_accepts_valid():
    result = validate_encode_params({"site": "www", "key": 1, "bbsNo": 2, "nttNo": 3})
    assert result.valid
    assert result.error is None


@pytest.mark.parametrize("params", [
    {"site": "", "key": 1, "bbsNo": 2, "nttNo": 3},
    {"site": None, "key": 1, "bbsNo": 2, "nttNo": 3},
    {"key": 1, "bbsNo": 2, "nttNo": 3},
    {"site": "www", "key": math.nan, "bbsNo": 2, "nttNo": 3},
    {"site": "www", "key": 1, "bbsNo": math.nan, "nttNo": 3},
    {"site": "www", "key": 1, "bbsNo": 2, "nttNo": math.nan},
    {"site": "www", "key": "abc", "bbsNo": 2, "nttNo": 3},
    {"site": "www", "key": math.inf, "bbsNo": 2, "nttNo": 3},
    {"site": "www", "key": None, "bbsNo": 2, "nttNo": 3},
    {"site": "www", "bbsNo": 2, "nttNo": 3},
])
def test_encode_params_rejects_missing_or_non_numeric(params):
    result = validate_encode_params(params)
    assert not result.valid
    assert result.kind == ErrorKind.MISSING_PARAMETERS
    assert "필수 파라미터" in result.error


def test_missing_site_reported_before_range():
    """A missing site is a presence failure even when the numbers are also out of range."""
    params = {"site": "", "key": -1, "bbsNo": 10**12, "nttNo": 3}
    assert validate_encode_params(params).kind == ErrorKind.MISSING_PARAMETERS


# ===================================
# 4. Encode parameter range
# ===================================

@pytest.mark.parametrize("params", [
    {"key": 0, "bbsNo": 0, "nttNo": 0},
    {"key": 999_999_999, "bbsNo": 999_999_999, "nttNo": 999_999_999},
    {"key": 123, "bbsNo": 456, "nttNo": 789},
])
def test_range_accepts_bounds(params):
    assert validate_parameter_range(params).valid


@pytest.mark.parametrize("params", [
    {"key": 1_000_000_000, "bbsNo": 0, "nttNo": 0},
    {"key": -1, "bbsNo": 0, "nttNo": 0},
    {"key": 1, "bbsNo": -1, "nttNo": 3},
    {"key": 1, "bbsNo": 2, "nttNo": 1_000_000_000},
    {"key": 9_999_999_999, "bbsNo": 2, "nttNo": 3},
])
def test_range_rejects_out_of_bounds(params):
    result = validate_parameter_range(params)
    assert not result.valid
    assert result.kind == ErrorKind.INVALID_PARAMETER_RANGE
    assert result.error == ERROR_MESSAGES[ErrorKind.INVALID_PARAMETER_RANGE]
    assert result.as_payload() == {"valid": False, "error": result.error}


def test_range_with_configured_bounds():
    params = {"key": 50, "bbsNo": 10, "nttNo": 99}
    assert validate_parameter_range(params, minimum=10, maximum=99).valid
    assert not validate_parameter_range(params, minimum=11, maximum=99).valid
    assert not validate_parameter_range(params, minimum=10, maximum=98).valid


def test_range_rejects_non_numbers():
    assert not validate_parameter_range({"key": "5", "bbsNo": 1, "nttNo": 1}).valid
    assert not validate_parameter_range({"bbsNo": 1, "nttNo": 1}).valid
