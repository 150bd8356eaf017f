from datetime import date

from fastapi import APIRouter, HTTPException, Query, Response

from ..dependencies import (
    AccessTokenDep,
    AccessTokensDep,
    DashboardServiceDep,
    PlaidClientDep,
    RetrievalServiceDep,
)
from ..schemas import (
    AccountOut,
    LinkTokenRequest,
    LinkTokenResponse,
    PublicTokenRequest,
    TokenExchangeResponse,
    TransactionOut,
)

router = APIRouter()


@router.post("/create-link-token", response_model=LinkTokenResponse)
def create_link_token(body: LinkTokenRequest, client: PlaidClientDep):
    """Create a Plaid Link token for the given user"""
    return LinkTokenResponse(link_token=client.create_link_token(body.user_id))


@router.post("/set-access-token", response_model=TokenExchangeResponse)
def set_access_token(body: PublicTokenRequest, client: PlaidClientDep):
    """Exchange the public token returned by Plaid Link for an access token"""
    result = client.exchange_public_token(body.public_token)
    return TokenExchangeResponse(access_token=result.access_token, item_id=result.item_id)


@router.get("/accounts", response_model=list[AccountOut])
def get_accounts(tokens: AccessTokensDep, dashboard: DashboardServiceDep):
    """Accounts of every linked institution"""
    return [AccountOut.model_validate(a) for a in dashboard.fetch_accounts(tokens)]


@router.get("/transactions", response_model=list[TransactionOut])
def get_transactions(
    token: AccessTokenDep,
    retrieval: RetrievalServiceDep,
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
):
    """All transactions of one institution (defaults to the last 30 days)"""
    try:
        transactions = retrieval.get_transactions(token, start_date, end_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return [TransactionOut.model_validate(tx.model_dump(by_alias=True)) for tx in transactions]


@router.delete("/items", status_code=204)
def remove_item(token: AccessTokenDep, client: PlaidClientDep):
    """Unlink an institution"""
    client.remove_item(token)
    return Response(status_code=204)
