"""Resolution errors.

Every pipeline stage raises one of these; the external boundary turns
them into a plain message string.
"""

from __future__ import annotations


class ResolveError(Exception):
    """Base error for play URL resolution."""


class IdentifierNotFoundError(ResolveError):
    """No BV id could be found in the page URL."""

    def __init__(self, url: str = "") -> None:
        super().__init__("failed to extract identifier from URL")
        self.url = url


class TransportError(ResolveError):
    """Network failure, timeout or non-success HTTP status."""


class DecodeError(ResolveError):
    """Response body is not the expected JSON envelope."""


class UpstreamApiError(ResolveError):
    """Envelope reports a non-zero status code."""

    def __init__(self, code: int, message: str | None = None) -> None:
        self.code = code
        self.upstream_message = message or "unknown error"
        super().__init__(f"upstream reports: {self.upstream_message}")


class MissingDataError(ResolveError):
    """Envelope reports success but carries no payload."""

    def __init__(self) -> None:
        super().__init__("upstream response contains no data")


class NoStreamFoundError(ResolveError):
    """Payload present, but no usable stream URL in any format."""
