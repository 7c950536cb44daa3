"""
Handles the encoding and decoding of bulletin-board post coordinates
(site, key, bbsNo, nttNo) into short, reversible strings using the sqids
library, and rebuilds the canonical KNUE post URL from a decoded code.
"""
from functools import lru_cache
from typing import Any, Optional
from urllib.parse import quote, urlencode

from sqids import Sqids

from config import Settings, get_settings
from core_logic import logger
from messages import ErrorKind
from models import DecodeResult, EncodeResult
from sites import SiteRegistry, get_registry
from validation import are_all_valid_numbers

# Number of integers packed into every code: site id, key, bbsNo, nttNo.
CODE_ARITY = 4


def _as_integer(value: Any) -> Optional[int]:
    """Returns ``value`` as an int when it is integral, otherwise None."""
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    try:
        as_int = int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return as_int if as_int == value else None


class URLCodec:
    """Bidirectional transform between a post's coordinates and a short code."""

    def __init__(self, registry: SiteRegistry, settings: Settings):
        self.registry = registry
        self.settings = settings
        self._sqids = Sqids(
            alphabet=settings.sqids_alphabet,
            min_length=settings.sqids_min_length,
            blocklist=settings.sqids_blocklist,
        )

    def _in_bounds(self, *values: int) -> bool:
        low, high = self.settings.min_numeric_value, self.settings.max_numeric_value
        return all(low <= v <= high for v in values)

    def build_target_url(self, site: str, key: int, bbs_no: int, ntt_no: int) -> str:
        """Composes ``<domain>/<site>/<endpoint>?key=..&bbsNo=..&nttNo=..``."""
        query = urlencode({"key": key, "bbsNo": bbs_no, "nttNo": ntt_no})
        return f"{self.settings.domain_root}{quote(site, safe='')}/{self.settings.endpoint_path}?{query}"

    def encode(self, site: Any, key: Any, bbs_no: Any, ntt_no: Any) -> EncodeResult:
        """Encodes the four parameters into a short code.

        Never raises for bad input; the result carries the failure instead.
        """
        site_id = self.registry.site_id(site)
        if site_id is None:
            logger.info(f"Rejected encode for unsupported site: {site!r}")
            return EncodeResult.failure(ErrorKind.UNSUPPORTED_SITE, site=site)

        if not are_all_valid_numbers(key, bbs_no, ntt_no):
            return EncodeResult.failure(ErrorKind.INVALID_NUMERIC_PARAMS)
        numbers = [_as_integer(v) for v in (key, bbs_no, ntt_no)]
        if any(n is None for n in numbers):
            return EncodeResult.failure(ErrorKind.INVALID_NUMERIC_PARAMS)

        if self.settings.enforce_bounds_in_codec and not self._in_bounds(*numbers):
            return EncodeResult.failure(ErrorKind.INVALID_PARAMETER_RANGE)

        try:
            code = self._sqids.encode([site_id, *numbers])
        except (ValueError, TypeError) as e:
            logger.error(f"Sqids failed to encode {[site_id, *numbers]}: {e}")
            return EncodeResult.failure(ErrorKind.CODEC_FAILURE)

        return EncodeResult.success(code)

    def decode(self, code: Any) -> DecodeResult:
        """Expands a short code into the absolute KNUE post URL."""
        if not isinstance(code, str) or not code:
            return DecodeResult.failure(ErrorKind.INVALID_ADDRESS)
        if len(code) > self.settings.max_code_length:
            return DecodeResult.failure(ErrorKind.INVALID_CODE_LENGTH)

        try:
            numbers = self._sqids.decode(code)
            if len(numbers) != CODE_ARITY:
                return DecodeResult.failure(ErrorKind.INVALID_CODE_FORMAT)

            site_id, key, bbs_no, ntt_no = numbers
            if self.settings.enforce_bounds_in_codec and not self._in_bounds(key, bbs_no, ntt_no):
                return DecodeResult.failure(ErrorKind.INVALID_CODE_FORMAT)

            # Several strings can decode to the same numbers; only the one encode() emits is accepted.
            if self.settings.canonical_codes and self._sqids.encode(numbers) != code:
                return DecodeResult.failure(ErrorKind.INVALID_CODE_FORMAT)
        except (ValueError, TypeError, IndexError) as e:
            logger.warning(f"Sqids failed to decode {code!r}: {e}")
            return DecodeResult.failure(ErrorKind.INVALID_CODE_FORMAT)

        site = self.registry.site_name(site_id)
        if site is None:
            return DecodeResult.failure(ErrorKind.UNKNOWN_SITE_CODE)

        return DecodeResult.success(self.build_target_url(site, key, bbs_no, ntt_no))


@lru_cache()
def get_codec() -> URLCodec:
    """
    Returns a cached, singleton codec built from the configured registry and settings.
    Issued codes depend on these staying fixed for the life of the process.
    """
    return URLCodec(get_registry(), get_settings())


def encode_url(site: Any, key: Any, bbs_no: Any, ntt_no: Any) -> EncodeResult:
    """Encodes post coordinates with the process-wide codec."""
    return get_codec().encode(site, key, bbs_no, ntt_no)


def decode_url(code: Any) -> DecodeResult:
    """Decodes a short code with the process-wide codec."""
    return get_codec().decode(code)
