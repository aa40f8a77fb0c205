"""Base API client with common functionality."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import BaseModel
from pydantic_core import to_jsonable_python
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from avatax_client.exceptions import AvaTaxAPIError, AvaTaxAuthError, AvaTaxRateLimitError

if TYPE_CHECKING:
    from avatax_client.api.types import QueryOptions, RequestBody
    from avatax_client.auth import AvaTaxAuth
    from avatax_client.config import AvaTaxConfig

logger = logging.getLogger(__name__)


def _wait_for_rate_limit(retry_state: RetryCallState) -> float:
    """Custom wait strategy that respects Retry-After header.

    If the exception has a retry_after value, use it.
    Otherwise, fall back to exponential backoff.
    """
    exception = retry_state.outcome.exception() if retry_state.outcome else None

    if isinstance(exception, AvaTaxRateLimitError) and exception.retry_after:
        wait_time = float(exception.retry_after)
        logger.info("Rate limited, waiting %s seconds (from Retry-After header)", wait_time)
        return wait_time

    # Exponential backoff: 2, 4, 8, 16... capped at 60 seconds
    exp_wait = wait_exponential(multiplier=1, min=2, max=60)
    wait_time = exp_wait(retry_state)
    logger.info("Rate limited, waiting %.1f seconds (exponential backoff)", wait_time)
    return wait_time


def _format_param(value: Any) -> str:
    """Render a query parameter value the way the service expects it."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (list, tuple)):
        return ",".join(_format_param(v) for v in value)
    return str(value)


def _build_query(params: QueryOptions | None) -> dict[str, str]:
    """Build a fresh query dict, dropping None values."""
    if not params:
        return {}
    return {k: _format_param(v) for k, v in params.items() if v is not None}


def _serialize_body(body: RequestBody | None) -> Any:
    """Convert a request model or mapping into JSON-compatible data."""
    if body is None:
        return None
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(body, Mapping):
        return to_jsonable_python(dict(body), by_alias=True)
    return to_jsonable_python(body, by_alias=True)


def _parse_retry_after(value: str | None) -> float | None:
    """Convert a Retry-After header (delta-seconds or HTTP-date) to seconds.

    Returns None when the header is missing or unusable, so the caller
    falls back to exponential backoff.
    """
    if not value:
        return None

    try:
        seconds = float(value)
    except ValueError:
        try:
            retry_at = parsedate_to_datetime(value)
        except (TypeError, ValueError):
            logger.debug("Ignoring unparseable Retry-After header: %r", value)
            return None
        if retry_at.tzinfo is None:
            retry_at = retry_at.replace(tzinfo=UTC)
        seconds = (retry_at - datetime.now(UTC)).total_seconds()

    if not math.isfinite(seconds):
        return None
    return max(seconds, 0.0)


def _parse_error(error_body: Any, default: str) -> tuple[str, str | None, list[dict[str, Any]]]:
    """Extract message, code and details from the service's error envelope.

    Error format:
        {"error": {"code": "...", "message": "...", "details": [{...}]}}
    """
    if not isinstance(error_body, dict):
        return default, None, []

    error_detail = error_body.get("error")
    if not isinstance(error_detail, dict):
        return default, None, []

    message = error_detail.get("message") or default
    details = error_detail.get("details") or []
    # The first detail usually carries the most specific explanation
    if details and isinstance(details[0], dict) and details[0].get("description"):
        message = f"{message} ({details[0]['description']})"

    return message, error_detail.get("code"), details


class BaseAPI:
    """Base class for AvaTax API endpoints.

    Provides the shared request primitives (``_get`` / ``_post``) with
    authentication, body serialization, error handling and response parsing.
    """

    def __init__(
        self,
        config: AvaTaxConfig,
        auth: AvaTaxAuth,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self.auth = auth
        self._http_client = http_client

    def set_http_client(self, http_client: httpx.AsyncClient | None) -> None:
        """Set the shared HTTP client for connection pooling."""
        self._http_client = http_client

    @retry(
        retry=retry_if_exception_type(AvaTaxRateLimitError),
        wait=_wait_for_rate_limit,
        stop=stop_after_attempt(5),
        reraise=True,
    )
    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        params: QueryOptions | None = None,
        json_body: RequestBody | None = None,
    ) -> dict[str, Any]:
        """Make an authenticated API request.

        Automatically retries on rate limit (429) with exponential backoff,
        respecting Retry-After header when provided.

        Args:
            method: HTTP method
            endpoint: API path (e.g., "/api/v2/transactions/create")
            params: Query parameters (not modified)
            json_body: Request model or mapping to send as JSON

        Returns:
            Parsed JSON response

        Raises:
            AvaTaxAuthError: On 401/403
            AvaTaxAPIError: On any other API error
            AvaTaxRateLimitError: On rate limit (429) after max retries
        """
        url = f"{self.config.base_url}{endpoint}"

        query_params = _build_query(params)
        body = _serialize_body(json_body)

        headers = self.auth.sign_request(method, url, query_params if query_params else None)
        headers["Accept"] = "application/json"

        if body is not None:
            headers["Content-Type"] = "application/json"

        logger.debug("Request: %s %s", method, url)
        logger.debug("Params: %s", query_params)

        if self._http_client is not None:
            # Use shared connection pool
            response = await self._http_client.request(
                method,
                url,
                params=query_params if query_params else None,
                json=body,
                headers=headers,
            )
        else:
            # Fallback: create per-request client (no pooling)
            async with httpx.AsyncClient(timeout=self.config.timeout) as client:
                response = await client.request(
                    method,
                    url,
                    params=query_params if query_params else None,
                    json=body,
                    headers=headers,
                )

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> dict[str, Any]:
        """Handle API response, raising appropriate errors."""
        if response.status_code >= 400:
            try:
                error_body = response.json()
            except ValueError:
                error_body = None

            if response.status_code == 429:
                message, error_code, details = _parse_error(error_body, "Rate limit exceeded")
                raise AvaTaxRateLimitError(
                    message,
                    retry_after=_parse_retry_after(response.headers.get("Retry-After")),
                    error_code=error_code,
                    details=details,
                    response_body=error_body if isinstance(error_body, dict) else None,
                )

            message, error_code, details = _parse_error(
                error_body, f"API error: {response.status_code}"
            )
            error_cls = AvaTaxAuthError if response.status_code in (401, 403) else AvaTaxAPIError

            logger.debug("Error response %s: %s", response.status_code, error_body)
            raise error_cls(
                message,
                status_code=response.status_code,
                error_code=error_code,
                details=details,
                response_body=error_body if isinstance(error_body, dict) else None,
            )

        if response.status_code == 204 or not response.content:
            return {}

        result: dict[str, Any] = response.json()
        return result

    async def _get(
        self,
        endpoint: str,
        params: QueryOptions | None = None,
    ) -> dict[str, Any]:
        """Make a GET request."""
        return await self._request("GET", endpoint, params=params)

    async def _post(
        self,
        endpoint: str,
        json_body: RequestBody | None = None,
        params: QueryOptions | None = None,
    ) -> dict[str, Any]:
        """Make a POST request."""
        return await self._request("POST", endpoint, params=params, json_body=json_body)
