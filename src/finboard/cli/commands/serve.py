"""Run the dashboard HTTP API."""

import logging
from typing import Annotated

import typer
import uvicorn

from finboard.api import create_app
from finboard.config import get_settings

logger = logging.getLogger(__name__)


def serve(
    host: Annotated[
        str | None, typer.Option("--host", help="Bind address (default from settings)")
    ] = None,
    port: Annotated[
        int | None, typer.Option("--port", help="Bind port (default from settings)")
    ] = None,
) -> None:
    """Serve the API with uvicorn."""
    settings = get_settings()
    bind_host = host or settings.server.host
    bind_port = port or settings.server.port

    logger.info(f"🚀 Serving Finboard API on http://{bind_host}:{bind_port}")
    uvicorn.run(create_app(settings), host=bind_host, port=bind_port, log_config=None)
