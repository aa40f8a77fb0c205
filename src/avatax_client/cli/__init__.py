"""AvaTax CLI - Command-line interface for AvaTax API."""

from avatax_client.cli.app import app

# Import command modules to register them with the app
from avatax_client.cli.commands import config, transactions

# Register sub-apps
app.add_typer(config.app, name="config", help="Credential configuration.")
app.add_typer(transactions.app, name="transactions", help="Transaction management.")


def main() -> None:
    """Entry point for the CLI."""
    app()


__all__ = ["app", "main"]
