"""Shared pytest fixtures for finboard tests.

This module provides the fixtures used across the test suite: settings cache
isolation, a clean Plaid environment, and factories for Plaid-shaped payloads.
"""

from collections.abc import Callable, Generator
from datetime import date
from decimal import Decimal
from typing import Any

import pytest

from finboard.config import FinboardSettings, PlaidConfig, clear_settings_cache
from finboard.connectors.plaid_schemas import AccountRecord, TransactionRecord

PLAID_ENV_VARS = ("PLAID_CLIENT_ID", "PLAID_SECRET", "PLAID_ENV", "PLAID_ACCESS_TOKEN")


@pytest.fixture(autouse=True)
def clean_settings_state(
    request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Clear the settings cache and any Plaid variables around each test.

    Unit tests that need credentials set them explicitly with monkeypatch.
    Integration tests keep the real environment.
    """
    if request.node.get_closest_marker("integration") is None:
        for name in PLAID_ENV_VARS:
            monkeypatch.delenv(name, raising=False)
    clear_settings_cache()

    yield

    clear_settings_cache()


@pytest.fixture
def settings() -> FinboardSettings:
    """Settings with dummy sandbox credentials."""
    return FinboardSettings(
        plaid=PlaidConfig(client_id="client-dummy", secret="secret-dummy")
    )


@pytest.fixture
def make_transaction() -> Callable[..., TransactionRecord]:
    """Factory for transactions; positive amounts are expenses."""
    counter = {"n": 0}

    def _make(
        amount: str | float,
        on: date = date(2024, 3, 15),
        name: str = "Transaction",
        category: list[str] | None = None,
        merchant_name: str | None = None,
        account_id: str = "acc_1",
    ) -> TransactionRecord:
        counter["n"] += 1
        return TransactionRecord.model_validate({
            "transaction_id": f"tx_{counter['n']}",
            "account_id": account_id,
            "amount": Decimal(str(amount)),
            "iso_currency_code": "USD",
            "date": on,
            "name": name,
            "merchant_name": merchant_name,
            "category": category,
            "pending": False,
        })

    return _make


@pytest.fixture
def make_account() -> Callable[..., AccountRecord]:
    """Factory for accounts with a current balance."""

    def _make(
        current: float | None,
        account_type: str = "depository",
        account_id: str = "acc_1",
        subtype: str | None = "checking",
    ) -> AccountRecord:
        return AccountRecord.model_validate({
            "account_id": account_id,
            "balances": {
                "available": current,
                "current": current,
                "iso_currency_code": "USD",
            },
            "mask": "0000",
            "name": "Account",
            "official_name": None,
            "subtype": subtype,
            "type": account_type,
        })

    return _make


@pytest.fixture
def transaction_payload() -> Callable[..., dict[str, Any]]:
    """Factory for raw transaction dicts shaped like Plaid's /transactions/get items."""

    def _payload(i: int, amount: str = "12.34", **overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "transaction_id": f"tx_{i}",
            "account_id": "acc_123",
            "amount": Decimal(amount),
            "iso_currency_code": "USD",
            "date": "2024-03-15",
            "name": "Test Transaction",
            "merchant_name": None,
            "category": ["Shops"],
            "pending": False,
        }
        payload.update(overrides)
        return payload

    return _payload
