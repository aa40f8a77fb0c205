"""CLI configuration with XDG-compliant paths and environment variable overrides."""

import json
import logging
import os
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

logger = logging.getLogger(__name__)


class OutputFormat(StrEnum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"
    CSV = "csv"


def _default_config_dir() -> Path:
    """Get XDG-compliant config directory for credentials.

    Uses XDG_CONFIG_HOME if set, otherwise ~/.config/avatax-cli.
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "avatax-cli"
    return Path.home() / ".config" / "avatax-cli"


@dataclass
class CLIConfig:
    """Configuration passed through Typer context.

    Attributes:
        sandbox: Whether to use sandbox (True) or production (False) environment.
        verbose: Enable verbose output.
        config_dir: Directory for configuration files (credentials).

    Directory Structure:
        config_dir/
        ├── sandbox.json        # Sandbox credentials
        └── production.json     # Production credentials
    """

    sandbox: bool = True
    verbose: bool = False
    config_dir: Path = field(default_factory=_default_config_dir)

    @property
    def environment(self) -> str:
        """Get the environment name."""
        return "sandbox" if self.sandbox else "production"

    @property
    def credentials_path(self) -> Path:
        """Get the credentials file path for current environment."""
        return self.config_dir / f"{self.environment}.json"

    def load_credentials(self) -> tuple[str, str]:
        """Load credentials from config file with environment variable overrides.

        Loading priority:
        1. Load from environment-specific config file (sandbox.json or production.json)
        2. Override individual values with environment variables if set

        Environment variables:
        - AVATAX_USERNAME (or AVATAX_ACCOUNT_ID): Overrides username from file
        - AVATAX_PASSWORD (or AVATAX_LICENSE_KEY): Overrides password from file

        Returns:
            Tuple of (username, password)

        Raises:
            ValueError: If credentials cannot be determined from file or env vars
        """
        username: str | None = None
        password: str | None = None

        if self.credentials_path.exists():
            try:
                with self.credentials_path.open() as f:
                    data = json.load(f)
                username = data.get("username")
                password = data.get("password")
            except (json.JSONDecodeError, OSError) as e:
                logger.warning("Failed to read %s: %s", self.credentials_path, e)

        if env_user := os.environ.get("AVATAX_USERNAME") or os.environ.get("AVATAX_ACCOUNT_ID"):
            username = env_user
        if env_pass := os.environ.get("AVATAX_PASSWORD") or os.environ.get("AVATAX_LICENSE_KEY"):
            password = env_pass

        if not username or not password:
            missing = []
            if not username:
                missing.append("username")
            if not password:
                missing.append("password")

            msg = (
                f"Missing credentials: {', '.join(missing)}. "
                f"Set via environment variables (AVATAX_USERNAME, AVATAX_PASSWORD) "
                f"or run 'avatax-cli config set' to create {self.credentials_path}"
            )
            raise ValueError(msg)

        return username, password

    def save_credentials(self, username: str, password: str) -> None:
        """Save credentials to the environment-specific config file.

        Args:
            username: AvaTax username or account ID
            password: AvaTax password or license key
        """
        self.config_dir.mkdir(parents=True, exist_ok=True)

        data = {
            "username": username,
            "password": password,
        }

        with self.credentials_path.open("w") as f:
            json.dump(data, f, indent=2)

        # Owner read/write only
        self.credentials_path.chmod(0o600)

    def has_credentials(self) -> bool:
        """Check if credentials are available from file or environment."""
        try:
            self.load_credentials()
            return True
        except ValueError:
            return False
