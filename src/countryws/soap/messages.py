"""Protocol-level request, response, and fault values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from countryws.domain.errors import ErrorCode

# Fault codes raised by the server side rather than the caller.
_SERVER_CODES = frozenset({ErrorCode.INTERNAL})


@dataclass(frozen=True, slots=True)
class ParsedRequest:
    """One decoded request element.

    Attributes:
        operation: Local name of the request element (``getCountryRequest``).
        params: Leaf text values; nested elements use dotted keys
            (``country.name``).
    """

    operation: str
    params: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Response:
    """Successful reply. ``payload`` is rendered as child elements."""

    operation: str
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Fault:
    """Structured failure carried back across the protocol boundary."""

    code: ErrorCode
    message: str

    @property
    def is_client_fault(self) -> bool:
        return self.code not in _SERVER_CODES

    @property
    def fault_role(self) -> str:
        """SOAP 1.1 faultcode local name."""
        return "Client" if self.is_client_fault else "Server"
