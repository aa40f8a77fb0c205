"""HTTP Basic and bearer authentication for AvaTax API."""

from __future__ import annotations

import base64
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from avatax_client.config import AvaTaxConfig

logger = logging.getLogger(__name__)

API_VERSION = "v2"


class AvaTaxAuth:
    """Builds authentication and client-identification headers.

    AvaTax accepts HTTP Basic credentials (username/password or
    account ID/license key) on every request. A bearer token obtained
    elsewhere may be set instead, in which case it takes precedence.
    """

    def __init__(self, config: AvaTaxConfig) -> None:
        self.config = config
        self._bearer_token: str | None = None

    @property
    def has_credentials(self) -> bool:
        """Check if any usable credentials are configured."""
        return self._bearer_token is not None or bool(
            self.config.username and self.config.password
        )

    @property
    def client_header(self) -> str:
        """Value of the X-Avalara-Client identification header."""
        return (
            f"{self.config.app_name}; {self.config.app_version}; "
            f"Python SDK; {API_VERSION}; {self.config.machine_name}"
        )

    def set_bearer_token(self, token: str | None) -> None:
        """Use a bearer token instead of Basic credentials (None to clear)."""
        self._bearer_token = token

    def _authorization(self) -> str:
        if self._bearer_token:
            return f"Bearer {self._bearer_token}"
        raw = f"{self.config.username}:{self.config.password}".encode()
        return f"Basic {base64.b64encode(raw).decode('ascii')}"

    def sign_request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, str]:
        """Build headers for a request.

        Basic and bearer schemes do not depend on the method, URL or query
        parameters; they are accepted so callers sign every request the same way.

        Returns:
            A new header dict (safe for the caller to extend)
        """
        logger.debug("Signing %s %s", method, url)
        return {
            "Authorization": self._authorization(),
            "X-Avalara-Client": self.client_header,
        }
