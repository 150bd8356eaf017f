"""Plaid commands for Finboard CLI.

These commands call the Plaid API directly with the configured credentials
and print results as JSON on stdout. Access tokens are never stored.
"""

import json
import logging
from datetime import datetime
from typing import Annotated, Any

import typer

from finboard.config import get_settings
from finboard.connectors.plaid_client import PlaidClient
from finboard.errors import UpstreamError
from finboard.services.transactions import TransactionRetrievalService

app = typer.Typer(help="Link institutions and fetch data from Plaid", no_args_is_help=True)
logger = logging.getLogger(__name__)

AccessTokenOption = Annotated[
    str,
    typer.Option(
        "--access-token",
        "-t",
        help="Plaid access token of the institution",
        envvar="PLAID_ACCESS_TOKEN",
    ),
]


def _client() -> PlaidClient:
    return PlaidClient(get_settings().plaid)


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2, default=str))


@app.command("link-token")
def link_token(
    user_id: Annotated[str, typer.Option("--user-id", "-u", help="End user identifier")],
) -> None:
    """Create a Plaid Link token for a user."""
    try:
        _echo_json({"link_token": _client().create_link_token(user_id)})
    except UpstreamError as e:
        logger.error(f"❌ Could not create link token: {e}")
        raise typer.Exit(1) from e


@app.command("exchange")
def exchange(
    public_token: Annotated[str, typer.Argument(help="Public token from Plaid Link")],
) -> None:
    """Exchange a Plaid Link public token for an access token."""
    try:
        result = _client().exchange_public_token(public_token)
    except UpstreamError as e:
        logger.error(f"❌ Token exchange failed: {e}")
        raise typer.Exit(1) from e
    _echo_json(result.model_dump())


@app.command("sandbox-token")
def sandbox_token(
    institution_id: Annotated[
        str, typer.Option("--institution-id", help="Sandbox institution ID")
    ] = "ins_109508",
) -> None:
    """Create a sandbox access token (sandbox environment only)."""
    try:
        access_token = _client().create_sandbox_access_token(institution_id)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    except UpstreamError as e:
        logger.error(f"❌ Sandbox token creation failed: {e}")
        raise typer.Exit(1) from e
    _echo_json({"access_token": access_token})


@app.command("accounts")
def accounts(
    access_token: AccessTokenOption,
    live: Annotated[
        bool, typer.Option("--live", help="Query real-time balances")
    ] = False,
) -> None:
    """List the accounts of a linked institution."""
    client = _client()
    try:
        records = client.get_balances(access_token) if live else client.get_accounts(access_token)
    except UpstreamError as e:
        logger.error(f"❌ Could not fetch accounts: {e}")
        raise typer.Exit(1) from e
    _echo_json([r.model_dump(mode="json") for r in records])


@app.command("transactions")
def transactions(
    access_token: AccessTokenOption,
    start_date: Annotated[
        datetime | None,
        typer.Option("--start-date", "-s", formats=["%Y-%m-%d"], help="First day (YYYY-MM-DD)"),
    ] = None,
    end_date: Annotated[
        datetime | None,
        typer.Option("--end-date", "-e", formats=["%Y-%m-%d"], help="Last day (YYYY-MM-DD)"),
    ] = None,
) -> None:
    """Fetch every transaction in a window (defaults to the last 30 days)."""
    settings = get_settings()
    service = TransactionRetrievalService(
        PlaidClient(settings.plaid),
        page_size=settings.plaid.page_size,
        lookback_days=settings.plaid.days_lookback,
    )
    try:
        records = service.get_transactions(
            access_token,
            start_date.date() if start_date else None,
            end_date.date() if end_date else None,
        )
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    except UpstreamError as e:
        logger.error(f"❌ Could not fetch transactions: {e}")
        raise typer.Exit(1) from e

    logger.info(f"✅ Fetched {len(records)} transactions")
    _echo_json([r.model_dump(mode="json", by_alias=True) for r in records])


@app.command("remove-item")
def remove_item(access_token: AccessTokenOption) -> None:
    """Unlink an institution; its access token stops working."""
    try:
        _client().remove_item(access_token)
    except UpstreamError as e:
        logger.error(f"❌ Could not remove item: {e}")
        raise typer.Exit(1) from e
    logger.info("✅ Institution unlinked")
