"""Dashboard services built on top of the Plaid connector."""

from .dashboard import DashboardService
from .metrics import DerivedMetrics, compute_summary, percentage_delta
from .summaries import MonthlySummary, PeriodSummary, YearlySummary
from .transactions import TransactionRetrievalService

__all__ = [
    "DashboardService",
    "DerivedMetrics",
    "MonthlySummary",
    "PeriodSummary",
    "TransactionRetrievalService",
    "YearlySummary",
    "compute_summary",
    "percentage_delta",
]
