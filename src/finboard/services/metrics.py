"""Derived figures for the dashboard summary cards.

``compute_summary`` is a pure function: it is invoked once the current
period, the prior period and the independent total-balance query have each
resolved (or failed), and never holds state between calls.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from .summaries import PeriodSummary

Number = Decimal | float | int

# There is no historical balance series yet, so the previous balance is
# approximated as this fraction of the current one.
PLACEHOLDER_PRIOR_BALANCE_RATIO = Decimal("0.95")


class DerivedMetrics(BaseModel):
    """Figures and month-over-month changes shown on the dashboard."""

    model_config = ConfigDict(frozen=True)

    income: float = 0.0
    expenses: float = 0.0
    savings: float = 0.0
    balance: float = 0.0
    income_change: float = 0.0
    expenses_change: float = 0.0
    savings_change: float = 0.0
    balance_change: float = 0.0
    balance_change_is_estimate: bool = False
    unavailable: list[str] = Field(default_factory=list)


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def percentage_delta(current: Number | None, previous: Number | None) -> float:
    """Percentage change from ``previous`` to ``current``.

    Returns 0 when there is no usable previous value (None or zero); a
    missing current value counts as zero.
    """
    if previous is None:
        return 0.0
    prev = _to_decimal(previous)
    if prev == 0:
        return 0.0
    cur = _to_decimal(current if current is not None else 0)
    return float((cur - prev) / prev * 100)


def placeholder_prior_balance(balance: Number) -> float:
    """Stand-in for last month's balance until balance history is tracked."""
    return float(_to_decimal(balance) * PLACEHOLDER_PRIOR_BALANCE_RATIO)


def compute_summary(
    current: PeriodSummary,
    prior: PeriodSummary | None = None,
    total_balance: Number | None = None,
    unavailable: list[str] | None = None,
) -> DerivedMetrics:
    """Combine the current and prior period into dashboard metrics.

    Args:
        current: Aggregates for the period being displayed
        prior: Aggregates for the previous period, if they resolved
        total_balance: Independently queried balance across all accounts;
            when given it replaces ``current.balance``
        unavailable: Names of aggregates that could not be resolved

    Returns:
        DerivedMetrics: Figures with percentage changes (0 without a prior)
    """
    if total_balance is not None:
        balance = float(total_balance)
    else:
        balance = current.balance or 0.0

    metrics: dict[str, float | bool] = {}
    if prior is not None:
        metrics["income_change"] = percentage_delta(current.income, prior.income)
        metrics["expenses_change"] = percentage_delta(current.expenses, prior.expenses)
        metrics["savings_change"] = percentage_delta(current.savings, prior.savings)
        if prior.balance is not None:
            metrics["balance_change"] = percentage_delta(balance, prior.balance)
        else:
            metrics["balance_change"] = percentage_delta(
                balance, placeholder_prior_balance(balance)
            )
            metrics["balance_change_is_estimate"] = True

    return DerivedMetrics(
        income=current.income,
        expenses=current.expenses,
        savings=current.savings,
        balance=balance,
        unavailable=list(unavailable or []),
        **metrics,
    )
