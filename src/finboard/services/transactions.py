"""Complete transaction retrieval over Plaid's offset pagination."""

import logging
from collections.abc import Callable
from datetime import date, timedelta
from typing import Protocol

from ..connectors.plaid_schemas import DateRange, TransactionRecord, TransactionsPage
from ..errors import TransactionCountMismatchError
from ..logging import token_fingerprint

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 500
DEFAULT_LOOKBACK_DAYS = 30


class TransactionSource(Protocol):
    """Anything that can return one page of transactions (PlaidClient)."""

    def get_transactions(
        self,
        access_token: str,
        start_date: date,
        end_date: date,
        offset: int = 0,
        count: int = DEFAULT_PAGE_SIZE,
    ) -> TransactionsPage: ...


def _as_date(value: date | str) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


class TransactionRetrievalService:
    """Return every transaction in a window, paging transparently."""

    def __init__(
        self,
        client: TransactionSource,
        page_size: int = DEFAULT_PAGE_SIZE,
        lookback_days: int = DEFAULT_LOOKBACK_DAYS,
        today: Callable[[], date] = date.today,
    ):
        if not 1 <= page_size <= 500:
            raise ValueError("page_size must be between 1 and 500")
        self.client = client
        self.page_size = page_size
        self.lookback_days = lookback_days
        self._today = today

    def default_date_range(self) -> DateRange:
        """Trailing window ending today, recomputed on every call."""
        end = self._today()
        return DateRange(start_date=end - timedelta(days=self.lookback_days), end_date=end)

    def resolve_date_range(
        self,
        start_date: date | str | None = None,
        end_date: date | str | None = None,
    ) -> DateRange:
        """Fill in missing bounds from the default window and validate order.

        Raises:
            ValueError: If a string is not ``YYYY-MM-DD`` or start is after end
        """
        default = self.default_date_range()
        return DateRange(
            start_date=_as_date(start_date) if start_date else default.start_date,
            end_date=_as_date(end_date) if end_date else default.end_date,
        )

    def get_transactions(
        self,
        access_token: str,
        start_date: date | str | None = None,
        end_date: date | str | None = None,
    ) -> list[TransactionRecord]:
        """Fetch all transactions for the window in upstream order.

        Pages are requested one after another with ``offset`` equal to the
        number of records received so far, until that number reaches the
        ``total_transactions`` reported by the latest page. If any page fails
        the error propagates and nothing is returned.

        Args:
            access_token: Plaid access token for the institution
            start_date: First day of the window. Defaults to today minus the lookback.
            end_date: Last day of the window. Defaults to today.

        Returns:
            list[TransactionRecord]: Exactly ``total_transactions`` records

        Raises:
            UpstreamError: If a page request fails
            TransactionCountMismatchError: If the received count does not match
                the upstream total once paging stops
            ValueError: If the date range is invalid
        """
        window = self.resolve_date_range(start_date, end_date)

        transactions: list[TransactionRecord] = []
        total: int | None = None
        pages = 0

        while total is None or len(transactions) < total:
            page = self.client.get_transactions(
                access_token,
                window.start_date,
                window.end_date,
                offset=len(transactions),
                count=self.page_size,
            )
            pages += 1
            total = page.total_transactions

            # An empty page before the total is reached would never terminate
            if not page.transactions and len(transactions) < total:
                raise TransactionCountMismatchError(expected=total, received=len(transactions))

            transactions.extend(page.transactions)

        if len(transactions) != total:
            raise TransactionCountMismatchError(expected=total, received=len(transactions))

        logger.info(
            f"Retrieved {len(transactions)} transactions for "
            f"{window.start_date}..{window.end_date} in {pages} page(s) "
            f"(token {token_fingerprint(access_token)})"
        )
        return transactions
