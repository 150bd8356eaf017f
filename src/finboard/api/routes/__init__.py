from fastapi import APIRouter

from . import analytics, plaid

api_router = APIRouter()


@api_router.get("/health")
def health():
    return {"status": "ok"}


api_router.include_router(plaid.router, prefix="/plaid", tags=["plaid"])
api_router.include_router(analytics.router, tags=["analytics"])
