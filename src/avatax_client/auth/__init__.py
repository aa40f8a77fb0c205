"""Authentication for AvaTax API."""

from avatax_client.auth.basic import API_VERSION, AvaTaxAuth

__all__ = ["API_VERSION", "AvaTaxAuth"]
