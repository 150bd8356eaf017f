# ruff: noqa: S101,S105,S106
"""Tests for the Finboard CLI.

Tests CLI-specific functionality: argument parsing, exit codes, JSON output
and error handling. Business logic is tested in the service tests.
"""

import json
from collections.abc import Callable
from datetime import date
from typing import Any
from unittest.mock import MagicMock

import pytest
from typer.testing import CliRunner

from finboard.cli.main import app
from finboard.config import FinboardSettings
from finboard.connectors.plaid_schemas import (
    AccountRecord,
    TransactionRecord,
    TransactionsPage,
)
from finboard.errors import UpstreamError
from finboard.services.metrics import DerivedMetrics


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def mock_setup_logging(mocker: Any) -> MagicMock:
    """Mock setup_logging so handlers do not leak between tests."""
    return mocker.patch("finboard.cli.main.setup_logging")


@pytest.fixture(autouse=True)
def mock_settings(mocker: Any, settings: FinboardSettings) -> FinboardSettings:
    """Serve the dummy settings to every command module."""
    for module in ("main", "commands.plaid", "commands.summary", "commands.serve"):
        mocker.patch(f"finboard.cli.{module}.get_settings", return_value=settings)
    return settings


@pytest.fixture
def mock_plaid_client(mocker: Any) -> MagicMock:
    """Replace PlaidClient in the command modules with one shared mock."""
    client = MagicMock()
    mocker.patch("finboard.cli.commands.plaid.PlaidClient", return_value=client)
    mocker.patch("finboard.cli.commands.summary.PlaidClient", return_value=client)
    return client


@pytest.mark.unit
def test_verbose_flag_configures_debug_logging(
    runner: CliRunner, mock_setup_logging: MagicMock, mock_plaid_client: MagicMock
) -> None:
    mock_plaid_client.create_link_token.return_value = "link-sandbox-1"

    result = runner.invoke(app, ["--verbose", "plaid", "link-token", "--user-id", "u1"])

    assert result.exit_code == 0
    mock_setup_logging.assert_called_once_with(cli_mode=True, verbose=True)


@pytest.mark.unit
def test_link_token_prints_json(
    runner: CliRunner, mock_setup_logging: MagicMock, mock_plaid_client: MagicMock
) -> None:
    mock_plaid_client.create_link_token.return_value = "link-sandbox-1"

    result = runner.invoke(app, ["plaid", "link-token", "-u", "u1"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"link_token": "link-sandbox-1"}


@pytest.mark.unit
def test_upstream_error_exits_with_code_1(
    runner: CliRunner, mock_setup_logging: MagicMock, mock_plaid_client: MagicMock
) -> None:
    mock_plaid_client.exchange_public_token.side_effect = UpstreamError(
        "item_public_token_exchange", "HTTP 400: invalid", "INVALID_PUBLIC_TOKEN"
    )

    result = runner.invoke(app, ["plaid", "exchange", "public-bad"])

    assert result.exit_code == 1
    assert "Traceback" not in result.output


@pytest.mark.unit
def test_sandbox_token_outside_sandbox_is_usage_error(
    runner: CliRunner, mock_setup_logging: MagicMock, mock_plaid_client: MagicMock
) -> None:
    mock_plaid_client.create_sandbox_access_token.side_effect = ValueError(
        "create_sandbox_access_token is only available in sandbox"
    )

    result = runner.invoke(app, ["plaid", "sandbox-token"])

    assert result.exit_code == 2


@pytest.mark.unit
def test_accounts_live_uses_balances(
    runner: CliRunner,
    mock_setup_logging: MagicMock,
    mock_plaid_client: MagicMock,
    make_account: Callable[..., AccountRecord],
) -> None:
    mock_plaid_client.get_balances.return_value = [make_account(10.5)]

    result = runner.invoke(app, ["plaid", "accounts", "-t", "access-1", "--live"])

    assert result.exit_code == 0
    (account,) = json.loads(result.stdout)
    assert account["account_id"] == "acc_1"
    mock_plaid_client.get_balances.assert_called_once_with("access-1")
    mock_plaid_client.get_accounts.assert_not_called()


@pytest.mark.unit
def test_access_token_from_environment(
    runner: CliRunner,
    mock_setup_logging: MagicMock,
    mock_plaid_client: MagicMock,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("PLAID_ACCESS_TOKEN", "access-env")
    mock_plaid_client.get_accounts.return_value = []

    result = runner.invoke(app, ["plaid", "accounts"])

    assert result.exit_code == 0
    mock_plaid_client.get_accounts.assert_called_once_with("access-env")


@pytest.mark.unit
def test_transactions_with_window(
    runner: CliRunner,
    mock_setup_logging: MagicMock,
    mock_plaid_client: MagicMock,
    make_transaction: Callable[..., TransactionRecord],
) -> None:
    mock_plaid_client.get_transactions.return_value = TransactionsPage(
        transactions=[make_transaction("4.20")], total_transactions=1
    )

    result = runner.invoke(
        app,
        ["plaid", "transactions", "-t", "access-1", "-s", "2024-03-01", "-e", "2024-03-31"],
    )

    assert result.exit_code == 0
    (tx,) = json.loads(result.stdout)
    assert tx["date"] == "2024-03-15"
    call = mock_plaid_client.get_transactions.call_args
    assert call.args[1:] == (date(2024, 3, 1), date(2024, 3, 31))


@pytest.mark.unit
def test_transactions_inverted_window_is_usage_error(
    runner: CliRunner, mock_setup_logging: MagicMock, mock_plaid_client: MagicMock
) -> None:
    result = runner.invoke(
        app,
        ["plaid", "transactions", "-t", "access-1", "-s", "2024-03-31", "-e", "2024-03-01"],
    )

    assert result.exit_code == 2
    mock_plaid_client.get_transactions.assert_not_called()


@pytest.mark.unit
def test_summary_dashboard_accepts_several_tokens(
    runner: CliRunner, mock_setup_logging: MagicMock, mocker: Any
) -> None:
    dashboard = mocker.patch("finboard.cli.commands.summary.DashboardService").return_value
    mocker.patch("finboard.cli.commands.summary.PlaidClient")
    dashboard.dashboard.return_value = DerivedMetrics(income=10.0)

    result = runner.invoke(
        app,
        ["summary", "dashboard", "-t", "access-a", "-t", "access-b", "-y", "2024", "-m", "3"],
    )

    assert result.exit_code == 0
    assert json.loads(result.stdout)["income"] == 10.0
    dashboard.dashboard.assert_called_once_with(["access-a", "access-b"], 2024, 3)


@pytest.mark.unit
def test_summary_month_failure_exits_with_code_1(
    runner: CliRunner, mock_setup_logging: MagicMock, mock_plaid_client: MagicMock
) -> None:
    mock_plaid_client.get_transactions.side_effect = UpstreamError(
        "transactions_get", "HTTP 500: boom"
    )

    result = runner.invoke(app, ["summary", "month", "-t", "access-1", "-y", "2024", "-m", "3"])

    assert result.exit_code == 1


@pytest.mark.unit
def test_serve_runs_uvicorn_with_settings(
    runner: CliRunner, mock_setup_logging: MagicMock, mocker: Any
) -> None:
    create_app = mocker.patch("finboard.cli.commands.serve.create_app")
    uvicorn_run = mocker.patch("finboard.cli.commands.serve.uvicorn.run")

    result = runner.invoke(app, ["serve", "--port", "8001"])

    assert result.exit_code == 0
    uvicorn_run.assert_called_once_with(
        create_app.return_value, host="127.0.0.1", port=8001, log_config=None
    )
