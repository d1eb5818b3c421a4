"""Failure kinds raised by the integration layer.

Every public operation either returns a typed value or raises one of the
subclasses below. ``retryable`` drives RetryExecutor; ``http_status`` lets an
outer HTTP layer translate the error without knowing the class tree.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class StellarErrorCode(str, Enum):
    """Stable machine-readable error codes."""

    NETWORK_ERROR = "NETWORK_ERROR"
    INVALID_ADDRESS = "INVALID_ADDRESS"
    CONTRACT_ERROR = "CONTRACT_ERROR"
    RATE_LIMITED = "RATE_LIMITED"
    TIMEOUT = "TIMEOUT"
    NOT_FOUND = "NOT_FOUND"
    PARSE_ERROR = "PARSE_ERROR"


class StellarError(Exception):
    """Base class for all integration-layer failures."""

    code: StellarErrorCode = StellarErrorCode.NETWORK_ERROR
    retryable: bool = True
    http_status: int = 502

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.details is not None:
            body["details"] = (
                self.details if isinstance(self.details, (dict, list, str, int))
                else str(self.details)
            )
        return body


class StellarNetworkError(StellarError):
    """Transport failure talking to Horizon or Soroban RPC."""

    code = StellarErrorCode.NETWORK_ERROR


class InvalidAddressError(StellarError):
    """Malformed account or contract address."""

    code = StellarErrorCode.INVALID_ADDRESS
    retryable = False
    http_status = 400

    def __init__(self, address: object) -> None:
        super().__init__(f"Invalid Stellar address: {address}", {"address": str(address)})
        self.address = address


class ContractCallError(StellarError):
    """Simulation returned an error, or a dependent sub-call failed."""

    code = StellarErrorCode.CONTRACT_ERROR


class RateLimitedError(StellarError):
    """The sliding-window request budget is exhausted."""

    code = StellarErrorCode.RATE_LIMITED
    retryable = False
    http_status = 429

    def __init__(self, message: str = "Rate limit exceeded. Please try again later.") -> None:
        super().__init__(message)


class StellarTimeoutError(StellarError):
    """A single attempt outlived the request deadline."""

    code = StellarErrorCode.TIMEOUT
    retryable = False
    http_status = 504

    def __init__(self, operation: str) -> None:
        super().__init__(f"Operation timed out: {operation}", {"operation": operation})
        self.operation = operation


class NotFoundError(StellarError):
    """The ledger reports the resource does not (yet) exist."""

    code = StellarErrorCode.NOT_FOUND
    retryable = False
    http_status = 404

    def __init__(self, resource: str, identifier: object) -> None:
        super().__init__(
            f"{resource} not found: {identifier}",
            {"resource": resource, "identifier": str(identifier)},
        )
        self.resource = resource
        self.identifier = identifier


class ParseError(StellarError):
    """Malformed on-chain payload. Retrying cannot repair it."""

    code = StellarErrorCode.PARSE_ERROR
    retryable = False
    http_status = 500

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(f"Parse error: {message}", details)
