"""Main AvaTax client."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from avatax_client.api.transactions import TransactionsAPI
from avatax_client.auth import AvaTaxAuth
from avatax_client.config import AvaTaxConfig

if TYPE_CHECKING:
    from types import TracebackType


class AvaTaxClient:
    """AvaTax API client.

    Provides a unified interface to the AvaTax REST API.

    Usage (context manager - recommended for connection pooling):
        async with AvaTaxClient(config) as client:
            tx = await client.transactions.get_transaction_by_code("DEFAULT", "INV-001")

    Usage (explicit lifecycle):
        client = AvaTaxClient(config)
        await client.open()
        try:
            tx = await client.transactions.get_transaction_by_id(12345)
        finally:
            await client.close()

    Usage (external HTTP client - shared across integrations):
        http_client = httpx.AsyncClient(timeout=30.0)
        client = AvaTaxClient(config, http_client=http_client)
        # Client uses shared pool, doesn't close it

    Usage (no pooling - creates connection per request):
        client = AvaTaxClient(config)
        tx = await client.transactions.get_transaction_by_id(12345)
    """

    def __init__(
        self,
        config: AvaTaxConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: AvaTax configuration with credentials
            http_client: Optional httpx.AsyncClient for connection pooling.
                        If provided, the client will use this pool and NOT close it.
                        If not provided, use open()/close() or context manager to
                        enable pooling, or each request creates its own connection.
        """
        self.config = config
        self.auth = AvaTaxAuth(config)

        # HTTP client management
        self._http_client = http_client
        self._owns_http_client = http_client is None  # We manage lifecycle if not provided

        self.transactions = TransactionsAPI(config, self.auth, http_client)

    def _set_http_client(self, http_client: httpx.AsyncClient | None) -> None:
        """Update HTTP client on all API modules."""
        self._http_client = http_client
        self.transactions.set_http_client(http_client)

    async def open(self) -> None:
        """Open connection pool for HTTP requests.

        Creates a shared httpx.AsyncClient for connection pooling.
        Only needed if not using context manager or external http_client.
        """
        if self._http_client is None and self._owns_http_client:
            http_client = httpx.AsyncClient(timeout=self.config.timeout)
            self._set_http_client(http_client)

    async def close(self) -> None:
        """Close connection pool.

        Only closes the pool if this client owns it (not external).
        """
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._set_http_client(None)

    async def __aenter__(self) -> AvaTaxClient:
        """Async context manager entry - opens connection pool."""
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Async context manager exit - closes connection pool."""
        await self.close()

    @classmethod
    def from_env(cls, *, sandbox: bool = True) -> AvaTaxClient:
        """Create client from environment variables.

        Expects AVATAX_USERNAME and AVATAX_PASSWORD
        (or AVATAX_ACCOUNT_ID and AVATAX_LICENSE_KEY).
        """
        config = AvaTaxConfig.from_env(sandbox=sandbox)
        return cls(config)

    @property
    def has_credentials(self) -> bool:
        """Check if the client has credentials to authenticate with."""
        return self.auth.has_credentials

    def set_bearer_token(self, token: str | None) -> None:
        """Authenticate with a bearer token instead of Basic credentials."""
        self.auth.set_bearer_token(token)
