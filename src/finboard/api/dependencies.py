"""FastAPI dependencies resolving per-app services and per-request tokens."""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request

from ..connectors.plaid_client import PlaidClient
from ..services.dashboard import DashboardService
from ..services.transactions import TransactionRetrievalService

ACCESS_TOKEN_HEADER = "X-Plaid-Access-Token"


def get_plaid_client(request: Request) -> PlaidClient:
    return request.app.state.plaid_client


def get_retrieval_service(request: Request) -> TransactionRetrievalService:
    return request.app.state.retrieval_service


def get_dashboard_service(request: Request) -> DashboardService:
    return request.app.state.dashboard_service


def get_optional_access_tokens(
    x_plaid_access_token: Annotated[str | None, Header()] = None,
) -> list[str]:
    """Access tokens from the X-Plaid-Access-Token header (comma-separated)."""
    return [t.strip() for t in (x_plaid_access_token or "").split(",") if t.strip()]


def get_access_tokens(
    tokens: Annotated[list[str], Depends(get_optional_access_tokens)],
) -> list[str]:
    """At least one access token; 400 when the header is missing."""
    if not tokens:
        raise HTTPException(
            status_code=400, detail=f"{ACCESS_TOKEN_HEADER} header is required"
        )
    return tokens


def get_access_token(tokens: Annotated[list[str], Depends(get_access_tokens)]) -> str:
    """Exactly one access token, for single-institution operations."""
    if len(tokens) != 1:
        raise HTTPException(
            status_code=400,
            detail=f"Exactly one {ACCESS_TOKEN_HEADER} is required for this operation",
        )
    return tokens[0]


PlaidClientDep = Annotated[PlaidClient, Depends(get_plaid_client)]
RetrievalServiceDep = Annotated[TransactionRetrievalService, Depends(get_retrieval_service)]
DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]
OptionalAccessTokensDep = Annotated[list[str], Depends(get_optional_access_tokens)]
AccessTokensDep = Annotated[list[str], Depends(get_access_tokens)]
AccessTokenDep = Annotated[str, Depends(get_access_token)]
