"""Client factory for CLI commands."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from avatax_client.client import AvaTaxClient
from avatax_client.config import AvaTaxConfig

if TYPE_CHECKING:
    from avatax_client.cli.config import CLIConfig


@asynccontextmanager
async def get_client(config: CLIConfig) -> AsyncGenerator[AvaTaxClient]:
    """Create and configure an AvaTaxClient for CLI use.

    Credentials come from the environment-specific config file, with
    environment variables taking precedence. The connection pool is open
    for the lifetime of the context.

    Usage:
        async with get_client(cli_config) as client:
            tx = await client.transactions.get_transaction_by_id(12345)
    """
    username, password = config.load_credentials()

    avatax_config = AvaTaxConfig(
        username=username,
        password=password,
        sandbox=config.sandbox,
        app_name="avatax-cli",
    )

    async with AvaTaxClient(avatax_config) as client:
        yield client
