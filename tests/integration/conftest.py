"""Pytest configuration for integration tests.

Integration tests require AvaTax sandbox credentials:
- AVATAX_SANDBOX_USERNAME and AVATAX_SANDBOX_PASSWORD
  (an account ID and license key work too)
- AVATAX_SANDBOX_COMPANY_CODE (optional, defaults to DEFAULT)

Environment variables can be set via:
- .env.integration file (loaded if present)
- Shell environment
- CI/CD secrets
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from dotenv import load_dotenv

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from avatax_client import AvaTaxClient, AvaTaxConfig

env_file = Path(__file__).parent.parent.parent / ".env.integration"
if env_file.exists():
    load_dotenv(env_file)


def _get_env_or_skip(var_name: str) -> str:
    """Get environment variable or skip test."""
    value = os.environ.get(var_name)
    if not value:
        pytest.skip(f"Missing required environment variable: {var_name}")
    return value


@pytest.fixture(scope="session")
def integration_config() -> AvaTaxConfig:
    """Get AvaTax configuration for integration tests."""
    from avatax_client import AvaTaxConfig

    config = AvaTaxConfig(
        username=_get_env_or_skip("AVATAX_SANDBOX_USERNAME"),
        password=_get_env_or_skip("AVATAX_SANDBOX_PASSWORD"),
        sandbox=True,
        app_name="avatax-client-integration",
    )

    assert "sandbox-rest.avatax.com" in config.base_url, "Integration tests must use sandbox"
    return config


@pytest.fixture(scope="session")
def company_code() -> str:
    """Company code the sandbox account records transactions under."""
    return os.environ.get("AVATAX_SANDBOX_COMPANY_CODE", "DEFAULT")


@pytest.fixture
async def async_integration_client(
    integration_config: AvaTaxConfig,
) -> AsyncGenerator[AvaTaxClient]:
    """Get an AvaTax client for integration tests.

    Note: Function-scoped because httpx.AsyncClient must be created
    in the same event loop where it will be used.
    """
    from avatax_client import AvaTaxClient

    async with AvaTaxClient(integration_config) as client:
        yield client
