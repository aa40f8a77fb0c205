"""Typed exceptions for AvaTax API client."""

from typing import Any


class AvaTaxError(Exception):
    """Base exception for all AvaTax client errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AvaTaxAPIError(AvaTaxError):
    """API request error with status code and response details."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        error_code: str | None = None,
        details: list[dict[str, Any]] | None = None,
        response_body: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.error_code = error_code  # e.g., "EntityNotFoundError"
        self.details = details or []
        self.response_body = response_body
        super().__init__(message)


class AvaTaxAuthError(AvaTaxAPIError):
    """Credentials rejected (401) or not permitted (403)."""


class AvaTaxRateLimitError(AvaTaxAPIError):
    """Rate limit exceeded - includes retry information."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int = 429,
        retry_after: float | None = None,
        error_code: str | None = None,
        details: list[dict[str, Any]] | None = None,
        response_body: dict[str, Any] | None = None,
    ) -> None:
        self.retry_after = retry_after  # seconds until retry is allowed
        super().__init__(
            message,
            status_code=status_code,
            error_code=error_code,
            details=details,
            response_body=response_body,
        )
