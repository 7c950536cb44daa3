"""
Input checks that run before the codec.

Callers must apply them in order: ``validate_encode_params`` before
``validate_parameter_range`` before encoding, and ``validate_decode_code``
before decoding. The order decides which message a bad input produces.
"""
import math
import numbers
from typing import Any, Mapping

from config import MAX_CODE_LENGTH, MAX_NUMERIC_VALUE, MIN_NUMERIC_VALUE
from messages import ErrorKind
from models import ValidationResult

NUMERIC_FIELDS: tuple[str, ...] = ("key", "bbsNo", "nttNo")


def is_valid_number(value: Any) -> bool:
    """True for a finite real number. Rejects bools, strings, None, NaN and infinities."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    if isinstance(value, numbers.Integral):
        return True
    return math.isfinite(value)


def are_all_valid_numbers(*values: Any) -> bool:
    return all(is_valid_number(v) for v in values)


def validate_decode_code(code: Any, max_length: int = MAX_CODE_LENGTH) -> ValidationResult:
    """Checks that a short code is present and not longer than ``max_length``."""
    if not isinstance(code, str) or not code:
        return ValidationResult.failed(ErrorKind.INVALID_ADDRESS)

    if len(code) > max_length:
        return ValidationResult.failed(ErrorKind.INVALID_CODE_LENGTH)

    return ValidationResult.passed()


def validate_encode_params(params: Mapping[str, Any]) -> ValidationResult:
    """Checks that ``site`` is a non-empty string and key, bbsNo, nttNo are valid numbers.

    Does not report which field failed.
    """
    site = params.get("site")
    if not isinstance(site, str) or not site:
        return ValidationResult.failed(ErrorKind.MISSING_PARAMETERS)

    if not are_all_valid_numbers(*(params.get(name) for name in NUMERIC_FIELDS)):
        return ValidationResult.failed(ErrorKind.MISSING_PARAMETERS)

    return ValidationResult.passed()


def validate_parameter_range(
    params: Mapping[str, Any],
    minimum: int = MIN_NUMERIC_VALUE,
    maximum: int = MAX_NUMERIC_VALUE,
) -> ValidationResult:
    """Checks that key, bbsNo and nttNo all lie in ``[minimum, maximum]``."""
    for name in NUMERIC_FIELDS:
        value = params.get(name)
        if not is_valid_number(value) or not minimum <= value <= maximum:
            return ValidationResult.failed(ErrorKind.INVALID_PARAMETER_RANGE)

    return ValidationResult.passed()
