"""Credential configuration commands."""

import os

import typer

from avatax_client.cli.config import CLIConfig
from avatax_client.cli.formatters import console, print_info, print_success

app = typer.Typer(no_args_is_help=True)


@app.command("set")
def set_credentials(
    ctx: typer.Context,
    username: str = typer.Option(
        ...,
        "--username",
        "-u",
        prompt="Username or account ID",
        help="AvaTax username or account ID.",
    ),
    password: str = typer.Option(
        ...,
        "--password",
        prompt="Password or license key",
        hide_input=True,
        help="AvaTax password or license key.",
    ),
) -> None:
    """Save credentials for the current environment."""
    config: CLIConfig = ctx.obj

    config.save_credentials(username, password)
    print_success(f"Credentials saved to {config.credentials_path}")


@app.command("show")
def show(ctx: typer.Context) -> None:
    """Show where credentials come from (never prints secrets)."""
    config: CLIConfig = ctx.obj

    console.print(f"Environment: [bold]{config.environment}[/bold]")
    console.print(f"Credentials file: {config.credentials_path}")

    if os.environ.get("AVATAX_USERNAME") or os.environ.get("AVATAX_ACCOUNT_ID"):
        print_info("Username overridden by environment")
    if os.environ.get("AVATAX_PASSWORD") or os.environ.get("AVATAX_LICENSE_KEY"):
        print_info("Password overridden by environment")

    if config.has_credentials():
        username, _ = config.load_credentials()
        print_success(f"Credentials configured for {username}")
    else:
        print_info("No credentials - run 'avatax-cli config set' to add them")
