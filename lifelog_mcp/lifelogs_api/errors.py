"""Error types specific to the Limitless API layer.

Purpose:
- Provide typed exceptions raised by ``LifelogsApiClient``.
- Expose HTTP-oriented context (status code, response body, underlying cause)
  for diagnosis.

Usage:
- Catch ``LifelogsApiError`` for any remote API failure.
- Catch ``RequestError`` when the API answered with a non-success status and
  inspect ``status_code`` / ``details``.
- Catch ``TransportError`` when the request never produced a response and
  inspect ``cause``.
"""

from __future__ import annotations

from typing import Any, Optional


class LifelogsApiError(Exception):
    """Base error for Limitless API failures.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code associated with the failure.
        details: Optional payload from the server (e.g., the response body text).
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class RequestError(LifelogsApiError):
    """Raised when the API returns a non-success HTTP status."""

    def __init__(self, status_code: int, details: str) -> None:
        super().__init__(f"Request failed: {status_code} {details}", status_code=status_code, details=details)


class TransportError(LifelogsApiError):
    """Raised when the request fails at the network or transport level."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Request failed: {str(cause) or type(cause).__name__}")
        self.cause = cause
