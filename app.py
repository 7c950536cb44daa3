import argparse
import re
import sys
from enum import Enum
from typing import Any, Mapping, Optional
from urllib.parse import parse_qsl

from pydantic import BaseModel, ConfigDict, ValidationError

from config import Settings, get_settings
from core_logic import decode_data_uri, generate_qr_code_data_uri, is_trusted_redirect, logger
from encoding import URLCodec
from messages import COPY_HINT, HOME_TITLE, ErrorKind, error_message, with_error_prefix
from models import DecodeResult, EncodeResult
from schemas import DecodeRequest, EncodeRequest
from sites import SiteRegistry
from validation import validate_decode_code, validate_encode_params, validate_parameter_range


class PageKind(str, Enum):
    HOME = "home"
    REDIRECT = "redirect"
    FALLBACK = "fallback"
    SHORT_LINK = "short_link"
    ERROR = "error"


class PageResult(BaseModel):
    """What the page shows (or where it navigates) for one query string."""
    model_config = ConfigDict(frozen=True)

    kind: PageKind
    message: Optional[str] = None
    location: Optional[str] = None
    alert: Optional[str] = None
    short_url: Optional[str] = None
    display_url: Optional[str] = None
    copy_hint: Optional[str] = None
    qr_code_data: Optional[str] = None


class ShortenerApp:
    """Drives the validators and the codec in order and renders the outcome."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        registry: Optional[SiteRegistry] = None,
        codec: Optional[URLCodec] = None,
    ):
        self.settings = settings or get_settings()
        self.registry = registry or SiteRegistry(self.settings.sites)
        self.codec = codec or URLCodec(self.registry, self.settings)

    # --- Core pipeline ---

    def shorten(self, query: Mapping[str, Any]) -> EncodeResult:
        """Parses raw encode parameters, validates them and encodes them."""
        try:
            request = EncodeRequest.from_query(query)
        except ValidationError as e:
            logger.info(f"Rejected encode parameters ({e.error_count()} errors)")
            return EncodeResult.failure(ErrorKind.MISSING_PARAMETERS)

        params = request.as_params()
        for check in (
            validate_encode_params(params),
            validate_parameter_range(
                params,
                minimum=self.settings.min_numeric_value,
                maximum=self.settings.max_numeric_value,
            ),
        ):
            if not check.valid:
                return EncodeResult(error=check.error, kind=check.kind)

        return self.codec.encode(request.site, request.key, request.bbs_no, request.ntt_no)

    def expand(self, code: Any) -> DecodeResult:
        """Validates the shape of a short code and decodes it."""
        check = validate_decode_code(code, max_length=self.settings.max_code_length)
        if not check.valid:
            return DecodeResult(error=check.error, kind=check.kind)
        return self.codec.decode(code)

    # --- Page rendering ---

    def short_url_for(self, code: str) -> str:
        return f"{self.settings.short_base_url}?{code}"

    def handle(self, search: str) -> PageResult:
        """Renders the page for a raw query string such as ``?XyZ123`` or ``?site=www&...``."""
        query = (search or "").strip()
        if query.startswith("?"):
            query = query[1:]

        if not query:
            return PageResult(kind=PageKind.HOME, message=HOME_TITLE)

        if "=" not in query:
            return self._handle_decode(query)

        return self._handle_encode(dict(parse_qsl(query, keep_blank_values=True)))

    def _handle_decode(self, query: str) -> PageResult:
        request = DecodeRequest.from_search(query)
        result = self.expand(request.code)

        if result.ok and is_trusted_redirect(result.url, self.settings.trusted_domain):
            return PageResult(kind=PageKind.REDIRECT, location=result.url)

        if result.ok:
            logger.error(f"Refused redirect outside the trusted domain: {result.url}")
            message = error_message(ErrorKind.INVALID_ADDRESS)
        else:
            logger.warning(f"Could not expand code {request.code!r}: {result.kind.value}")
            message = result.error

        return PageResult(
            kind=PageKind.FALLBACK,
            message=message,
            alert=error_message(ErrorKind.INVALID_ADDRESS),
            location=self.settings.fallback_location,
        )

    def _handle_encode(self, query: Mapping[str, str]) -> PageResult:
        result = self.shorten(query)
        if not result.ok:
            return PageResult(kind=PageKind.ERROR, message=with_error_prefix(result.error))

        short_url = self.short_url_for(result.code)
        try:
            qr_code_data = generate_qr_code_data_uri(
                short_url,
                box_size=self.settings.qr_box_size,
                border=self.settings.qr_border,
            )
        except Exception:
            # The short link is still usable without its QR image.
            qr_code_data = None

        return PageResult(
            kind=PageKind.SHORT_LINK,
            short_url=short_url,
            display_url=re.sub(r"^https?://", "", short_url),
            copy_hint=COPY_HINT,
            qr_code_data=qr_code_data,
        )


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create or expand KNUE bulletin-board short links.",
        epilog='Examples: app.py "?site=www&key=12345&bbsNo=678&nttNo=9012"   app.py "?XyZ123"',
    )
    parser.add_argument("query", nargs="?", default="", help="query string of the page, with or without the leading '?'")
    parser.add_argument("--qr-out", metavar="FILE", help="write the QR code PNG of a new short link to FILE")
    args = parser.parse_args(argv)

    page = ShortenerApp().handle(args.query)

    if args.qr_out and page.qr_code_data:
        with open(args.qr_out, "wb") as f:
            f.write(decode_data_uri(page.qr_code_data))
        logger.info(f"QR code written to {args.qr_out}")

    print(page.model_dump_json(indent=2, exclude_none=True, exclude={"qr_code_data"} if args.qr_out else None))
    return 1 if page.kind in (PageKind.ERROR, PageKind.FALLBACK) else 0


if __name__ == "__main__":
    sys.exit(main())
