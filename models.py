from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from messages import ErrorKind, error_message


class Outcome(BaseModel):
    """Base for discriminated success-or-failure results.

    Subclasses declare a single payload field; a result carries either that
    payload or an error message, never both.
    """
    model_config = ConfigDict(frozen=True)

    payload_field: ClassVar[str] = ""

    error: Optional[str] = None
    kind: Optional[ErrorKind] = None

    @model_validator(mode="after")
    def check_exclusive(self):
        payload = getattr(self, self.payload_field, None) if self.payload_field else None
        if (payload is None) == (self.error is None):
            raise ValueError("Exactly one of payload and error must be set")
        if (self.error is None) != (self.kind is None):
            raise ValueError("error and kind must be set together")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, kind: ErrorKind, **kwargs):
        return cls(error=error_message(kind, **kwargs), kind=kind)

    def as_payload(self) -> dict[str, Any]:
        """The plain ``{<payload>: ...}`` / ``{error: ...}`` dict handed to callers."""
        if self.error is not None:
            return {"error": self.error}
        return {self.payload_field: getattr(self, self.payload_field)}


class EncodeResult(Outcome):
    """Result of encoding a parameter tuple into a short code."""
    payload_field: ClassVar[str] = "code"
    code: Optional[str] = None

    @classmethod
    def success(cls, code: str) -> "EncodeResult":
        return cls(code=code)


class DecodeResult(Outcome):
    """Result of expanding a short code into the target URL."""
    payload_field: ClassVar[str] = "url"
    url: Optional[str] = None

    @classmethod
    def success(cls, url: str) -> "DecodeResult":
        return cls(url=url)


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: bool
    error: Optional[str] = None
    kind: Optional[ErrorKind] = None

    @model_validator(mode="after")
    def check_consistent(self):
        if self.valid != (self.error is None) or (self.error is None) != (self.kind is None):
            raise ValueError("A failed validation needs an error and kind; a passed one has neither")
        return self

    @classmethod
    def passed(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def failed(cls, kind: ErrorKind, **kwargs) -> "ValidationResult":
        return cls(valid=False, error=error_message(kind, **kwargs), kind=kind)

    def as_payload(self) -> dict[str, Any]:
        if self.valid:
            return {"valid": True}
        return {"valid": False, "error": self.error}
