"""Error taxonomy shared by every layer.

Each error carries a stable ``code``. Services translate repository errors
into ``ServiceError`` payloads with the same code, and the SOAP endpoint
turns those codes into faults.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import ValidationError


class ErrorCode(StrEnum):
    """Stable error/fault codes."""

    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    MALFORMED_REQUEST = "MALFORMED_REQUEST"
    INTERNAL = "INTERNAL"


def describe_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic error into one human-readable line."""
    parts = []
    for err in exc.errors():
        field = ".".join(str(loc) for loc in err["loc"]) or "value"
        parts.append(f"{field}: {err['msg']}")
    return "; ".join(parts)


class CountryError(Exception):
    """Base class for all countryws errors."""

    code: ErrorCode = ErrorCode.INTERNAL

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArgumentError(CountryError):
    """Caller input is missing or out of range."""

    code = ErrorCode.INVALID_ARGUMENT

    @classmethod
    def from_validation(cls, exc: ValidationError) -> InvalidArgumentError:
        return cls(describe_validation_error(exc))


class NotFoundError(CountryError):
    """Valid input, but no record matches."""

    code = ErrorCode.NOT_FOUND


class ConflictError(CountryError):
    """A write would violate name uniqueness."""

    code = ErrorCode.CONFLICT


class MalformedRequestError(CountryError):
    """The inbound document could not be parsed into a request."""

    code = ErrorCode.MALFORMED_REQUEST
