"""Tests for async_runner module."""

import pytest
import typer

from avatax_client.cli.async_runner import _describe_api_error, async_command
from avatax_client.exceptions import AvaTaxAPIError, AvaTaxAuthError


class TestDescribeApiError:
    """Tests for terminal error descriptions."""

    def test_includes_error_code(self) -> None:
        """Should lead with the service error code when present."""
        error = AvaTaxAPIError(
            "Document not found.",
            status_code=404,
            error_code="EntityNotFoundError",
        )
        assert _describe_api_error(error) == "EntityNotFoundError: Document not found. (HTTP 404)"

    def test_without_error_code(self) -> None:
        """Should fall back to message and status."""
        error = AvaTaxAPIError("API error: 502", status_code=502)
        assert _describe_api_error(error) == "API error: 502 (HTTP 502)"


class TestAsyncCommand:
    """Tests for the async_command decorator."""

    def test_returns_coroutine_result(self) -> None:
        """Should run the coroutine and return its value."""

        @async_command
        async def command(x: int) -> int:
            return x * 2

        assert command(21) == 42

    def test_preserves_signature_metadata(self) -> None:
        """Typer relies on the wrapped function's name and docstring."""

        @async_command
        async def my_command() -> None:
            """Do the thing."""

        assert my_command.__name__ == "my_command"
        assert my_command.__doc__ == "Do the thing."

    @pytest.mark.parametrize(
        "error",
        [
            AvaTaxAuthError("Unauthorized", status_code=401),
            AvaTaxAPIError("Bad request", status_code=400),
            ValueError("Missing credentials: password"),
        ],
    )
    def test_known_errors_exit_with_1(self, error: Exception) -> None:
        """Credential and API errors should become exit code 1."""

        @async_command
        async def command() -> None:
            raise error

        with pytest.raises(typer.Exit) as exc_info:
            command()

        assert exc_info.value.exit_code == 1

    def test_other_errors_propagate(self) -> None:
        """Unexpected errors should not be swallowed."""

        @async_command
        async def command() -> None:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            command()
