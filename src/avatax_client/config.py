"""Configuration management for AvaTax client."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import dataclass, field
from pathlib import Path

from avatax_client._version import __version__


def _get_config_dir() -> Path:
    """Get XDG-compliant config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "avatax-client"
    return Path.home() / ".config" / "avatax-client"


@dataclass(frozen=True, slots=True)
class AvaTaxConfig:
    """AvaTax API configuration.

    ``username`` and ``password`` are sent as HTTP Basic credentials. They may
    be either an AvaTax username and password, or an account ID and license key.
    """

    username: str
    password: str = field(repr=False)
    sandbox: bool = True

    # Identification sent in the X-Avalara-Client header
    app_name: str = "avatax-client"
    app_version: str = __version__
    machine_name: str = field(default_factory=platform.node)

    timeout: float = 30.0

    # API URLs
    _sandbox_base_url: str = field(default="https://sandbox-rest.avatax.com", repr=False)
    _production_base_url: str = field(default="https://rest.avatax.com", repr=False)

    @property
    def base_url(self) -> str:
        """Get the appropriate base URL based on sandbox mode."""
        return self._sandbox_base_url if self.sandbox else self._production_base_url

    @property
    def environment(self) -> str:
        """Get the environment name."""
        return "sandbox" if self.sandbox else "production"

    @classmethod
    def from_env(cls, *, sandbox: bool = True) -> AvaTaxConfig:
        """Create config from environment variables.

        Expected env vars:
        - AVATAX_USERNAME and AVATAX_PASSWORD, or
        - AVATAX_ACCOUNT_ID and AVATAX_LICENSE_KEY
        """
        username = os.environ.get("AVATAX_USERNAME") or os.environ.get("AVATAX_ACCOUNT_ID")
        password = os.environ.get("AVATAX_PASSWORD") or os.environ.get("AVATAX_LICENSE_KEY")

        if not username or not password:
            msg = (
                "Missing required environment variables: "
                "AVATAX_USERNAME and AVATAX_PASSWORD "
                "(or AVATAX_ACCOUNT_ID and AVATAX_LICENSE_KEY)"
            )
            raise ValueError(msg)

        return cls(username=username, password=password, sandbox=sandbox)

    @classmethod
    def from_file(cls, path: Path | None = None, *, sandbox: bool = True) -> AvaTaxConfig:
        """Load config from JSON file.

        Default path: ~/.config/avatax-client/config.json

        Expected format:
        {
            "username": "...",
            "password": "..."
        }

        ``account_id`` / ``license_key`` are accepted in place of
        ``username`` / ``password``.
        """
        if path is None:
            path = _get_config_dir() / "config.json"

        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with path.open() as f:
            data = json.load(f)

        username = data.get("username") or data.get("account_id")
        password = data.get("password") or data.get("license_key")
        if not username or not password:
            msg = f"Config file {path} must define username and password"
            raise ValueError(msg)

        return cls(username=str(username), password=str(password), sandbox=sandbox)

    @classmethod
    def load(cls, *, sandbox: bool = True) -> AvaTaxConfig:
        """Load config from environment or file (env takes precedence)."""
        try:
            return cls.from_env(sandbox=sandbox)
        except ValueError:
            return cls.from_file(sandbox=sandbox)
