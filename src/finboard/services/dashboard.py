"""Dashboard data assembled from the caller's linked institutions.

The caller passes the Plaid access tokens of its linked institutions on each
request; nothing here keeps them or the fetched data between calls.
"""

import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

from ..connectors.plaid_client import PlaidClient
from ..connectors.plaid_schemas import AccountRecord, DateRange, TransactionRecord
from ..errors import DataUnavailable, UpstreamError
from .metrics import DerivedMetrics, compute_summary
from .summaries import (
    MonthlySummary,
    PeriodSummary,
    YearlySummary,
    month_date_range,
    previous_month,
    summarize_month,
    summarize_year,
    total_balance,
    year_date_range,
)
from .transactions import TransactionRetrievalService

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DashboardService:
    """Fan requests out over access tokens and reconcile the results."""

    def __init__(self, client: PlaidClient, retrieval: TransactionRetrievalService):
        self.client = client
        self.retrieval = retrieval

    @staticmethod
    def _require_tokens(access_tokens: Sequence[str]) -> None:
        if not access_tokens:
            raise DataUnavailable("no linked institutions")

    def fetch_transactions(
        self, access_tokens: Sequence[str], date_range: DateRange
    ) -> list[TransactionRecord]:
        """All transactions in the window, institution by institution."""
        self._require_tokens(access_tokens)
        transactions: list[TransactionRecord] = []
        for token in access_tokens:
            transactions.extend(
                self.retrieval.get_transactions(
                    token, date_range.start_date, date_range.end_date
                )
            )
        return transactions

    def fetch_accounts(self, access_tokens: Sequence[str]) -> list[AccountRecord]:
        """Accounts of every linked institution, with cached balances."""
        self._require_tokens(access_tokens)
        accounts: list[AccountRecord] = []
        for token in access_tokens:
            accounts.extend(self.client.get_accounts(token))
        return accounts

    def monthly_summary(
        self, access_tokens: Sequence[str], year: int, month: int
    ) -> MonthlySummary:
        """Income, expenses and savings for one calendar month."""
        transactions = self.fetch_transactions(access_tokens, month_date_range(year, month))
        return summarize_month(transactions, year, month)

    def yearly_summary(self, access_tokens: Sequence[str], year: int) -> YearlySummary:
        """Totals for a calendar year with a monthly breakdown."""
        transactions = self.fetch_transactions(access_tokens, year_date_range(year))
        return summarize_year(transactions, year)

    def total_balance(self, access_tokens: Sequence[str]) -> float:
        """Net live balance across every account of every linked institution."""
        self._require_tokens(access_tokens)
        accounts: list[AccountRecord] = []
        for token in access_tokens:
            accounts.extend(self.client.get_balances(token))
        return total_balance(accounts)

    def dashboard(
        self, access_tokens: Sequence[str], year: int, month: int
    ) -> DerivedMetrics:
        """Dashboard figures for a month compared with the month before.

        The current month and the total balance are resolved independently.
        One that fails is logged, listed in ``unavailable`` and left at its
        default instead of failing the view. The previous month is only
        fetched once the current month has resolved, so a missing current
        month never shows changes.
        """
        unavailable: list[str] = []

        current = self._resolve(
            "current_period",
            lambda: self.monthly_summary(access_tokens, year, month),
            unavailable,
        )
        # Without the current month there is nothing to compare against
        prior: MonthlySummary | None = None
        if current is None:
            unavailable.append("prior_period")
        else:
            prior_year, prior_month = previous_month(year, month)
            prior = self._resolve(
                "prior_period",
                lambda: self.monthly_summary(access_tokens, prior_year, prior_month),
                unavailable,
            )
        balance = self._resolve(
            "total_balance", lambda: self.total_balance(access_tokens), unavailable
        )

        return compute_summary(
            current if current is not None else PeriodSummary(),
            prior,
            total_balance=balance,
            unavailable=unavailable,
        )

    @staticmethod
    def _resolve(name: str, fetch: Callable[[], T], unavailable: list[str]) -> T | None:
        try:
            return fetch()
        except DataUnavailable as e:
            logger.info(f"{name} unavailable: {e}")
        except UpstreamError as e:
            logger.warning(f"{name} could not be fetched: {e}")
        unavailable.append(name)
        return None
