"""Main CLI application for Finboard.

This module provides the entry point for all Finboard CLI operations: linking
institutions through Plaid, fetching accounts and transactions, printing
monthly summaries, and serving the dashboard API.
"""

import logging
from typing import Annotated

import typer

from ..config import get_settings
from ..logging import setup_logging
from .commands import plaid, serve, summary

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="finboard",
    help="Finboard: personal finance dashboard backed by Plaid",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose debug logging",
        ),
    ] = False,
) -> None:
    """Global options for Finboard CLI.

    Settings are read from the environment and from a .env file in the
    working directory (PLAID_CLIENT_ID, PLAID_SECRET, PLAID_ENV and the
    FINBOARD_* variables). Missing Plaid credentials produce a warning here
    and an error from any command that calls Plaid.
    """
    setup_logging(cli_mode=True, verbose=verbose)

    settings = get_settings()
    logger.debug(f"Plaid environment: {settings.plaid.environment}")


# Add command groups
app.add_typer(plaid.app, name="plaid", help="Plaid link, account and transaction commands")
app.add_typer(summary.app, name="summary", help="Monthly and dashboard summaries")
app.command("serve")(serve.serve)


def main() -> None:
    """Entry point for the Finboard CLI application."""
    app()


if __name__ == "__main__":
    main()
