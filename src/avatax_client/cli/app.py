"""Main Typer application."""

import logging
from pathlib import Path

import typer

from avatax_client.cli.config import CLIConfig, _default_config_dir

app = typer.Typer(
    name="avatax-cli",
    help="AvaTax API command-line interface.",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    sandbox: bool = typer.Option(
        True,
        "--sandbox/--production",
        "-s/-p",
        help="Use sandbox (default) or production environment.",
        envvar="AVATAX_SANDBOX",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (HTTP request logging).",
    ),
    config_dir: Path | None = typer.Option(
        None,
        "--config-dir",
        "-c",
        help="Config directory (default: ~/.config/avatax-cli).",
        envvar="AVATAX_CLI_CONFIG_DIR",
    ),
) -> None:
    """AvaTax API command-line interface.

    Use --production to connect to the live AvaTax API.
    Default is sandbox mode for testing.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    ctx.obj = CLIConfig(
        sandbox=sandbox,
        verbose=verbose,
        config_dir=config_dir or _default_config_dir(),
    )
