"""Connectors for external financial-data services.

Currently only Plaid is supported; see :mod:`finboard.connectors.plaid_client`.
"""

from .plaid_client import PlaidClient
from .plaid_schemas import (
    AccountRecord,
    DateRange,
    TokenExchangeResult,
    TransactionRecord,
    TransactionsPage,
)

__all__ = [
    "PlaidClient",
    "AccountRecord",
    "DateRange",
    "TokenExchangeResult",
    "TransactionRecord",
    "TransactionsPage",
]
