"""AvaTax API client library.

A typed, async Python client for the AvaTax REST v2 Transactions API.

Example:
    from avatax_client import AvaTaxClient, AvaTaxConfig

    # Create client from environment variables
    client = AvaTaxClient.from_env(sandbox=True)

    # Or with explicit config
    config = AvaTaxConfig(
        username="your_account_id",
        password="your_license_key",
        sandbox=True,
    )

    async with AvaTaxClient(config) as client:
        model = (
            TransactionBuilder("DEFAULT")
            .sales_invoice()
            .customer("ABC")
            .single_location("100 Ravine Lane NE", city="Bainbridge Island", region="WA")
            .line(100)
            .build()
        )
        tx = await client.transactions.create_transaction(model, {"$include": "Lines"})
        await client.transactions.commit_transaction("DEFAULT", tx["code"], {"commit": True})
"""

from avatax_client._version import __version__
from avatax_client.builders import DocumentType, TransactionBuilder
from avatax_client.client import AvaTaxClient
from avatax_client.config import AvaTaxConfig
from avatax_client.exceptions import (
    AvaTaxAPIError,
    AvaTaxAuthError,
    AvaTaxError,
    AvaTaxRateLimitError,
)

__all__ = [
    "__version__",
    # Builders
    "TransactionBuilder",
    # Enums (commonly used)
    "DocumentType",
    # Main client
    "AvaTaxClient",
    "AvaTaxConfig",
    # Exceptions
    "AvaTaxAPIError",
    "AvaTaxAuthError",
    "AvaTaxError",
    "AvaTaxRateLimitError",
]
