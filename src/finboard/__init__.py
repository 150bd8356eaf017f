"""Finboard: Personal-finance dashboard backend.

This package serves the data behind a personal-finance dashboard:
- Plaid API integration for linked bank accounts, balances and transactions
- Monthly and yearly income/expense summaries
- Month-over-month percentage changes for the dashboard cards
- FastAPI endpoints and a typer CLI for all operations

Plaid access tokens are supplied by the caller on every request and are never
stored by Finboard.
"""

__version__ = "0.1.0"
