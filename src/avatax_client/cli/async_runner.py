"""Async command support for Typer."""

import asyncio
from collections.abc import Callable, Coroutine
from functools import wraps
from typing import Any, TypeVar

import typer

from avatax_client.exceptions import AvaTaxAPIError, AvaTaxAuthError

T = TypeVar("T")


def _describe_api_error(e: AvaTaxAPIError) -> str:
    """Build a one-line description of an API error for the terminal."""
    if e.error_code:
        return f"{e.error_code}: {e.message} (HTTP {e.status_code})"
    return f"{e.message} (HTTP {e.status_code})"


def async_command(f: Callable[..., Coroutine[Any, Any, T]]) -> Callable[..., T]:
    """Decorator to run async Typer commands.

    Turns credential and API errors into a message on stderr and exit code 1.

    Usage:
        @app.command()
        @async_command
        async def my_command(ctx: typer.Context):
            async with get_client(ctx.obj) as client:
                result = await client.transactions.get_transaction_by_id(1)
                ...
    """

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        from avatax_client.cli.formatters import print_error, print_info

        try:
            return asyncio.run(f(*args, **kwargs))
        except AvaTaxAuthError as e:
            print_error(_describe_api_error(e))
            print_info("Check your credentials with 'avatax-cli config show'.")
            raise typer.Exit(1) from None
        except AvaTaxAPIError as e:
            print_error(_describe_api_error(e))
            raise typer.Exit(1) from None
        except ValueError as e:
            # Missing credentials or unreadable request body
            print_error(str(e))
            raise typer.Exit(1) from None

    return wrapper
