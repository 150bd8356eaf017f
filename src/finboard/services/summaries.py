"""Monthly and yearly aggregation of transactions for the dashboard.

Transactions are loaded into a polars DataFrame and aggregated there. Plaid
amounts are positive for money leaving an account, so income is the negated
sum of negative amounts and expenses the sum of positive amounts.
"""

import calendar
from collections.abc import Iterable
from datetime import date

import polars as pl
from pydantic import BaseModel, ConfigDict, Field

from ..connectors.plaid_schemas import AccountRecord, DateRange, TransactionRecord
from .categories import categorize_transaction

LIABILITY_ACCOUNT_TYPES = frozenset({"credit", "loan"})

TRANSACTION_SCHEMA = {
    "transaction_date": pl.Date,
    "amount": pl.Float64,
    "category": pl.Utf8,
    "pending": pl.Boolean,
}


class PeriodSummary(BaseModel):
    """Income, expenses and savings for one period."""

    model_config = ConfigDict(frozen=True)

    income: float = 0.0
    expenses: float = 0.0
    savings: float = 0.0
    balance: float | None = None


class CategoryAmount(BaseModel):
    """Expenses attributed to one category."""

    model_config = ConfigDict(frozen=True)

    category: str
    amount: float


class MonthlySummary(PeriodSummary):
    """Summary of a calendar month with its expense breakdown."""

    year: int
    month: int = Field(..., ge=1, le=12)
    categorized_expenses: list[CategoryAmount] = Field(default_factory=list)


class MonthBreakdown(BaseModel):
    """Income and expenses for one month of a yearly summary."""

    model_config = ConfigDict(frozen=True)

    month: int = Field(..., ge=1, le=12)
    income: float = 0.0
    expenses: float = 0.0


class YearlySummary(PeriodSummary):
    """Summary of a calendar year with all twelve months present."""

    year: int
    monthly_breakdown: list[MonthBreakdown] = Field(default_factory=list)


def month_date_range(year: int, month: int) -> DateRange:
    """First to last day of a calendar month."""
    last_day = calendar.monthrange(year, month)[1]
    return DateRange(start_date=date(year, month, 1), end_date=date(year, month, last_day))


def year_date_range(year: int) -> DateRange:
    """First to last day of a calendar year."""
    return DateRange(start_date=date(year, 1, 1), end_date=date(year, 12, 31))


def previous_month(year: int, month: int) -> tuple[int, int]:
    """The (year, month) before the given one."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def transactions_frame(transactions: Iterable[TransactionRecord]) -> pl.DataFrame:
    """Build a DataFrame with one row per transaction and its category."""
    rows = [
        {
            "transaction_date": tx.transaction_date,
            "amount": float(tx.amount),
            "category": categorize_transaction(tx),
            "pending": tx.pending,
        }
        for tx in transactions
    ]
    return pl.DataFrame(rows, schema=TRANSACTION_SCHEMA)


def _income_expenses(frame: pl.DataFrame) -> tuple[float, float]:
    totals = frame.select(
        income=pl.col("amount").filter(pl.col("amount") < 0).sum().abs(),
        expenses=pl.col("amount").filter(pl.col("amount") > 0).sum(),
    )
    income, expenses = totals.row(0)
    return round(float(income or 0.0), 2), round(float(expenses or 0.0), 2)


def summarize_month(
    transactions: Iterable[TransactionRecord], year: int, month: int
) -> MonthlySummary:
    """Aggregate the transactions that fall in one calendar month.

    Uncategorized expenses count towards the totals but are left out of the
    category breakdown, which is ordered from largest to smallest.
    """
    frame = transactions_frame(transactions).filter(
        (pl.col("transaction_date").dt.year() == year)
        & (pl.col("transaction_date").dt.month() == month)
    )
    income, expenses = _income_expenses(frame)

    by_category = (
        frame.filter((pl.col("amount") > 0) & pl.col("category").is_not_null())
        .group_by("category")
        .agg(pl.col("amount").sum().round(2))
        .sort(["amount", "category"], descending=[True, False])
    )

    return MonthlySummary(
        year=year,
        month=month,
        income=income,
        expenses=expenses,
        savings=round(income - expenses, 2),
        categorized_expenses=[
            CategoryAmount(category=row["category"], amount=row["amount"])
            for row in by_category.iter_rows(named=True)
        ],
    )


def summarize_year(transactions: Iterable[TransactionRecord], year: int) -> YearlySummary:
    """Aggregate a calendar year, with a breakdown for every month."""
    frame = transactions_frame(transactions).filter(
        pl.col("transaction_date").dt.year() == year
    )
    income, expenses = _income_expenses(frame)

    monthly = (
        frame.with_columns(pl.col("transaction_date").dt.month().alias("month"))
        .group_by("month")
        .agg(
            income=pl.col("amount").filter(pl.col("amount") < 0).sum().abs(),
            expenses=pl.col("amount").filter(pl.col("amount") > 0).sum(),
        )
    )
    by_month = {row["month"]: row for row in monthly.iter_rows(named=True)}

    breakdown = [
        MonthBreakdown(
            month=m,
            income=round(float(by_month.get(m, {}).get("income") or 0.0), 2),
            expenses=round(float(by_month.get(m, {}).get("expenses") or 0.0), 2),
        )
        for m in range(1, 13)
    ]

    return YearlySummary(
        year=year,
        income=income,
        expenses=expenses,
        savings=round(income - expenses, 2),
        monthly_breakdown=breakdown,
    )


def total_balance(accounts: Iterable[AccountRecord]) -> float:
    """Net current balance across accounts.

    Credit and loan balances are owed amounts and are subtracted. Accounts
    without a current balance are skipped.
    """
    total = 0.0
    for account in accounts:
        current = account.balances.current
        if current is None:
            continue
        if account.type in LIABILITY_ACCOUNT_TYPES:
            total -= float(current)
        else:
            total += float(current)
    return round(total, 2)
