"""
Static user-facing text. Every failure the core can report is one of the
ErrorKind members below, each with exactly one fixed message.
"""
from enum import Enum


class ErrorKind(str, Enum):
    INVALID_ADDRESS = "invalid_address"
    INVALID_CODE_LENGTH = "invalid_code_length"
    INVALID_CODE_FORMAT = "invalid_code_format"
    UNKNOWN_SITE_CODE = "unknown_site_code"
    MISSING_PARAMETERS = "missing_parameters"
    INVALID_PARAMETER_RANGE = "invalid_parameter_range"
    UNSUPPORTED_SITE = "unsupported_site"
    INVALID_NUMERIC_PARAMS = "invalid_numeric_params"
    CODEC_FAILURE = "codec_failure"


ERROR_PREFIX = "오류: "

ERROR_MESSAGES: dict[ErrorKind, str] = {
    # Decode errors
    ErrorKind.INVALID_ADDRESS: "잘못된 주소입니다.",
    ErrorKind.INVALID_CODE_LENGTH: ERROR_PREFIX + "코드 길이가 너무 깁니다.",
    ErrorKind.INVALID_CODE_FORMAT: "잘못된 코드입니다.",
    ErrorKind.UNKNOWN_SITE_CODE: "존재하지 않는 사이트 코드입니다.",
    # Encode errors
    ErrorKind.MISSING_PARAMETERS: ERROR_PREFIX + "필수 파라미터가 누락되었거나 잘못되었습니다.",
    ErrorKind.INVALID_PARAMETER_RANGE: ERROR_PREFIX + "파라미터 값이 유효 범위를 벗어났습니다.",
    ErrorKind.UNSUPPORTED_SITE: "지원하지 않는 사이트입니다: {site}",
    ErrorKind.INVALID_NUMERIC_PARAMS: "key, bbsNo, nttNo는 반드시 숫자여야 합니다.",
    ErrorKind.CODEC_FAILURE: ERROR_PREFIX + "단축 코드를 생성하지 못했습니다.",
}

# Page text
HOME_TITLE = "KNUE 단축 URL 생성기"
COPY_HINT = "(주소를 클릭하면 클립보드에 복사됩니다.)"


def error_message(kind: ErrorKind, **kwargs) -> str:
    """Returns the fixed message for an error kind, filling in any placeholders."""
    template = ERROR_MESSAGES[kind]
    return template.format(**kwargs) if kwargs else template


def with_error_prefix(message: str) -> str:
    """Prefixes a message for inline display unless it already carries the prefix."""
    return message if message.startswith(ERROR_PREFIX) else ERROR_PREFIX + message
