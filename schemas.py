import re
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

_INTEGER_RE = re.compile(r"[+-]?\d+")


class EncodeRequest(BaseModel):
    """Typed encode parameters parsed from raw query-string values."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    site: str
    key: int
    bbs_no: int = Field(alias="bbsNo")
    ntt_no: int = Field(alias="nttNo")

    @field_validator("site", mode="before")
    def validate_site(cls, value):
        if not isinstance(value, str) or not value.strip():
            raise ValueError("site cannot be empty")
        return value.strip()

    @field_validator("key", "bbs_no", "ntt_no", mode="before")
    def validate_integer(cls, value):
        """Accepts ints and plain decimal integer text; anything else is a parse failure."""
        if isinstance(value, bool):
            raise ValueError("Expected an integer")
        if isinstance(value, int):
            return value
        if isinstance(value, str) and _INTEGER_RE.fullmatch(value.strip()):
            return int(value.strip())
        raise ValueError("Expected an integer")

    @classmethod
    def from_query(cls, query: Mapping[str, Any]) -> "EncodeRequest":
        """Raises pydantic.ValidationError when a field is missing or malformed."""
        return cls.model_validate(dict(query))

    def as_params(self) -> dict[str, Any]:
        """The ``{site, key, bbsNo, nttNo}`` mapping the validators expect."""
        return self.model_dump(by_alias=True)


class DecodeRequest(BaseModel):
    """A short code taken from the query string of a short link."""
    model_config = ConfigDict(frozen=True)

    code: str

    @field_validator("code", mode="before")
    def validate_code(cls, value):
        if value is None:
            return ""
        if not isinstance(value, str):
            raise ValueError("code must be a string")
        return value.strip()

    @classmethod
    def from_search(cls, search: str) -> "DecodeRequest":
        """Builds a request from ``?<code>``; the leading ``?`` is optional."""
        return cls(code=search[1:] if search.startswith("?") else search)
