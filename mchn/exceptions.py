"""Exceptions raised by the mchn client."""

from __future__ import annotations

from typing import Optional


class MchnError(Exception):
    """Base class for all mchn errors."""


class TransportError(MchnError):
    """The HTTP call could not be completed (connection failure, timeout, ...).

    The originating ``requests`` exception is available as ``__cause__``.
    """

    def __init__(self, message: str, endpoint: Optional[str] = None) -> None:
        super().__init__(message)
        self.endpoint = endpoint


class MalformedResponse(MchnError):
    """The response body could not be decoded as JSON.

    This is never raised by ``ApiProvider.execute``; an instance is attached to
    the returned ``ApiResponse`` so that callers can still inspect the status
    code and the raw body.
    """

    DEPTH = "depth"
    CONTROL_CHARACTER = "control_character"
    SYNTAX = "syntax"

    def __init__(self, reason: str, endpoint: str, detail: str = "") -> None:
        self.reason = reason
        self.endpoint = endpoint
        self.detail = detail
        super().__init__(f"{_DESCRIPTIONS[reason]} on endpoint {endpoint}")


_DESCRIPTIONS = {
    MalformedResponse.DEPTH: "Maximum stack depth exceeded",
    MalformedResponse.CONTROL_CHARACTER: "Unexpected control character found",
    MalformedResponse.SYNTAX: "Syntax error, malformed JSON",
}


class UnsupportedAlgorithm(MchnError, ValueError):
    """A digest name that the hashing backend does not provide."""

    def __init__(self, algorithm: str) -> None:
        self.algorithm = algorithm
        super().__init__(f"Unsupported hash algorithm: {algorithm!r}")


class ResourceNotSupported(MchnError, KeyError):
    """The resource type has no entry in the routing table."""

    def __init__(self, resource_type: object) -> None:
        self.resource_type = resource_type
        super().__init__(resource_type)

    def __str__(self) -> str:
        return f"Unsupported resource type: {self.resource_type!r}"


class RequestValidationError(MchnError, ValueError):
    """Raised by ``ValidationResult.raise_if_invalid``, as strict clients do."""
