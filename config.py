from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ============================================================================
# REFERENCE CONSTANTS
# ============================================================================

DOMAIN_ROOT: str = "https://www.knue.ac.kr/"
ENDPOINT_PATH: str = "selectBbsNttView.do"

MAX_CODE_LENGTH: int = 50
MIN_NUMERIC_VALUE: int = 0
MAX_NUMERIC_VALUE: int = 999_999_999

# Letters, digits and the URL-safe unreserved symbols.
SQIDS_ALPHABET: str = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-._~"
SQIDS_MIN_LENGTH: int = 3
SQIDS_BLOCKLIST: tuple[str, ...] = ("admin", "www", "api")

# KNUE bulletin-board sites. Ids are baked into every issued code: never renumber.
KNUE_SITES: dict[str, int] = {
    "www": 1,
    "grad": 2,
    "edupol": 3,
    "kfund": 4,
    "eng": 5,
    "education": 6,
    "ece": 7,
    "sped": 8,
    "korean": 9,
    "german": 10,
    "french": 11,
    "history": 12,
    "english": 13,
    "social": 14,
    "chinese": 15,
    "geography": 16,
    "homeedu": 17,
    "techedu": 18,
    "phys": 19,
    "bioedu": 20,
    "math": 21,
    "earth": 22,
    "comedu": 23,
    "chemedu": 24,
    "envi": 25,
    "artedu": 26,
    "music": 27,
    "phy": 28,
    "ethics": 29,
    "pr": 30,
    "ipsi": 31,
    "idea": 32,
}

# ============================================================================
# SETTINGS
# ============================================================================

class Settings(BaseSettings):
    """Centralized configuration with validation.

    Every value can be overridden with a ``KNUE_``-prefixed environment
    variable (complex values such as ``KNUE_SITES`` are read as JSON).
    """

    model_config = SettingsConfigDict(
        env_prefix="KNUE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Target URL reconstruction
    domain_root: str = DOMAIN_ROOT
    endpoint_path: str = ENDPOINT_PATH

    # Caller-side rendering
    short_base_url: str = "https://knue.url.kr/"
    trusted_domain: str = DOMAIN_ROOT
    fallback_location: str = "/"
    qr_box_size: int = Field(10, ge=1)
    qr_border: int = Field(2, ge=0)

    # Validation
    max_code_length: int = Field(MAX_CODE_LENGTH, ge=1)
    min_numeric_value: int = Field(MIN_NUMERIC_VALUE, ge=0)
    max_numeric_value: int = MAX_NUMERIC_VALUE

    # Codec
    sqids_alphabet: str = SQIDS_ALPHABET
    sqids_min_length: int = Field(SQIDS_MIN_LENGTH, ge=0, le=255)
    sqids_blocklist: list[str] = Field(default_factory=lambda: list(SQIDS_BLOCKLIST))
    enforce_bounds_in_codec: bool = True
    canonical_codes: bool = True

    # Site registry
    sites: dict[str, int] = Field(default_factory=lambda: dict(KNUE_SITES))

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @field_validator("domain_root", "short_base_url", "trusted_domain")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must include http:// or https://")
        return v if v.endswith("/") else v + "/"

    @field_validator("endpoint_path")
    @classmethod
    def validate_endpoint_path(cls, v: str) -> str:
        v = v.strip().strip("/")
        if not v:
            raise ValueError("endpoint_path cannot be empty")
        return v

    @field_validator("sqids_alphabet")
    @classmethod
    def validate_alphabet(cls, v: str) -> str:
        if len(v) < 3:
            raise ValueError("Alphabet must contain at least 3 characters")
        if len(set(v)) != len(v):
            raise ValueError("Alphabet must contain unique characters")
        if not v.isascii():
            raise ValueError("Alphabet cannot contain multibyte characters")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return v

    @model_validator(mode="after")
    def validate_bounds(self) -> "Settings":
        if self.min_numeric_value > self.max_numeric_value:
            raise ValueError("min_numeric_value must not exceed max_numeric_value")
        return self


@lru_cache()
def get_settings() -> Settings:
    """Returns the process-wide settings, read once from the environment."""
    return Settings()
