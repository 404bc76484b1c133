"""Exception hierarchy shared by the Agentic Search MCP server modules."""

from __future__ import annotations

from typing import Optional


class AgenticSearchError(Exception):
    """Base class for every failure raised by the server core."""


class ConfigurationError(AgenticSearchError):
    """Raised at startup when required settings are missing or invalid."""


class ArgumentValidationError(AgenticSearchError):
    """Raised when tool arguments do not describe a valid search."""


class UpstreamError(AgenticSearchError):
    """Base class for failures of the single upstream request."""


class UpstreamTimeoutError(UpstreamError):
    """The upstream request did not complete within the timeout."""

    def __init__(self, timeout: float):
        super().__init__(f"API request timed out after {timeout:g} seconds.")
        self.timeout = timeout


class UpstreamHttpError(UpstreamError):
    """The upstream API answered with a non-2xx status."""

    def __init__(self, status_code: int, body: Optional[str] = None):
        self.status_code = status_code
        self.body = body or ""
        detail = f": {self.body}" if self.body else ""
        super().__init__(f"API request failed (HTTP {status_code}{detail}).")


class UpstreamConnectionError(UpstreamError):
    """The upstream API could not be reached (DNS, reset, TLS, ...)."""


class MalformedResponseError(UpstreamError):
    """The upstream API answered successfully with an unusable body."""


__all__ = [
    "AgenticSearchError",
    "ArgumentValidationError",
    "ConfigurationError",
    "MalformedResponseError",
    "UpstreamConnectionError",
    "UpstreamError",
    "UpstreamHttpError",
    "UpstreamTimeoutError",
]
