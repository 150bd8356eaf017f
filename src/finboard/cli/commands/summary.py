"""Summary commands for Finboard CLI.

These commands compute the same figures as the dashboard endpoints for one
or more linked institutions and print them as JSON.
"""

import json
import logging
from datetime import date
from typing import Annotated

import typer

from finboard.config import get_settings
from finboard.connectors.plaid_client import PlaidClient
from finboard.errors import DataUnavailable, UpstreamError
from finboard.services.dashboard import DashboardService
from finboard.services.transactions import TransactionRetrievalService

app = typer.Typer(help="Monthly summaries and dashboard figures", no_args_is_help=True)
logger = logging.getLogger(__name__)

AccessTokensOption = Annotated[
    list[str],
    typer.Option(
        "--access-token",
        "-t",
        help="Plaid access token (repeat for several institutions)",
        envvar="PLAID_ACCESS_TOKEN",
    ),
]
YearOption = Annotated[int | None, typer.Option("--year", "-y", help="Defaults to this year")]
MonthOption = Annotated[
    int | None,
    typer.Option("--month", "-m", min=1, max=12, help="Defaults to this month"),
]


def _dashboard_service() -> DashboardService:
    settings = get_settings()
    client = PlaidClient(settings.plaid)
    retrieval = TransactionRetrievalService(
        client,
        page_size=settings.plaid.page_size,
        lookback_days=settings.plaid.days_lookback,
    )
    return DashboardService(client, retrieval)


def _year_month(year: int | None, month: int | None) -> tuple[int, int]:
    today = date.today()
    return year or today.year, month or today.month


@app.command("month")
def month_summary(
    access_token: AccessTokensOption,
    year: YearOption = None,
    month: MonthOption = None,
) -> None:
    """Income, expenses, savings and expenses by category for a month."""
    year, month = _year_month(year, month)
    try:
        summary = _dashboard_service().monthly_summary(list(access_token), year, month)
    except (UpstreamError, DataUnavailable) as e:
        logger.error(f"❌ Could not build summary for {year}-{month:02d}: {e}")
        raise typer.Exit(1) from e
    typer.echo(summary.model_dump_json(indent=2))


@app.command("dashboard")
def dashboard_summary(
    access_token: AccessTokensOption,
    year: YearOption = None,
    month: MonthOption = None,
) -> None:
    """Dashboard figures and changes against the previous month."""
    year, month = _year_month(year, month)
    metrics = _dashboard_service().dashboard(list(access_token), year, month)
    if metrics.unavailable:
        logger.warning(f"⚠️  Unavailable: {', '.join(metrics.unavailable)}")
    typer.echo(json.dumps(metrics.model_dump(), indent=2))
