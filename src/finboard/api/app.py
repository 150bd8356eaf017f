"""FastAPI application factory for the dashboard API."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import FinboardSettings, get_settings
from ..connectors.plaid_client import PlaidClient
from ..errors import DataUnavailable, UpstreamError
from ..services.dashboard import DashboardService
from ..services.transactions import TransactionRetrievalService
from .routes import api_router

logger = logging.getLogger(__name__)


def create_app(
    settings: FinboardSettings | None = None,
    plaid_client: PlaidClient | None = None,
) -> FastAPI:
    """Build the API with its services wired from one settings object.

    Args:
        settings: Application settings. Defaults to the process-wide settings.
        plaid_client: Client to use instead of one built from ``settings``

    Returns:
        FastAPI: The configured application
    """
    if settings is None:
        settings = get_settings()
    if plaid_client is None:
        plaid_client = PlaidClient(settings.plaid)

    retrieval = TransactionRetrievalService(
        plaid_client,
        page_size=settings.plaid.page_size,
        lookback_days=settings.plaid.days_lookback,
    )

    app = FastAPI(
        title="Finboard API",
        description="Personal-finance dashboard backed by Plaid",
        version=__version__,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.plaid_client = plaid_client
    app.state.retrieval_service = retrieval
    app.state.dashboard_service = DashboardService(plaid_client, retrieval)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.server.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError):
        # Upstream payloads stay in the logs; callers get a generic message
        logger.error(f"{request.method} {request.url.path}: {exc}", exc_info=exc.__cause__)
        return JSONResponse(
            status_code=502,
            content={"message": "Failed to fetch data from the financial data provider"},
        )

    @app.exception_handler(DataUnavailable)
    async def data_unavailable_handler(request: Request, exc: DataUnavailable):
        return JSONResponse(status_code=404, content={"message": str(exc)})

    app.include_router(api_router, prefix="/api")
    return app
