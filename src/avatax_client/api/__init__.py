"""AvaTax API client modules."""

from avatax_client.api.transactions import TransactionsAPI

__all__ = ["TransactionsAPI"]
