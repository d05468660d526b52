"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from printlink.api.routes import health, settings, simplyprint, unmatched, webhooks
from printlink.clients.simplyprint import SimplyPrintClient
from printlink.core.config import AppSettings
from printlink.core.exceptions import (
    ConfigurationError,
    NotFoundError,
    PrintLinkError,
    UpstreamError,
    ValidationError,
)
from printlink.core.logging_config import configure_logging
from printlink.persistence import create_persistence
from printlink.services import Services, build_services

logger = structlog.get_logger(__name__)

_STATUS_BY_ERROR: list[tuple[type[PrintLinkError], int]] = [
    (ValidationError, 400),
    (NotFoundError, 404),
    (ConfigurationError, 503),
    (UpstreamError, 502),
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize and tear down application resources."""
    if getattr(app.state, "services", None) is not None:
        yield
        return

    settings = AppSettings()
    configure_logging(settings.log_level, settings.json_logs)
    mapping_store, unmatched_store, settings_store = create_persistence(settings)
    client = SimplyPrintClient(
        company_id=settings.simplyprint.company_id,
        api_key=settings.simplyprint.api_key,
        base_url=settings.simplyprint.base_url,
        timeout=settings.simplyprint.timeout,
    )
    app.state.settings = settings
    app.state.services = build_services(
        settings=settings,
        mapping_store=mapping_store,
        unmatched_store=unmatched_store,
        settings_store=settings_store,
        catalog=client,
        queue=client,
    )
    logger.info("application_started", environment=settings.environment)
    try:
        yield
    finally:
        client.close()


async def _handle_printlink_error(request: Request, exc: PrintLinkError) -> JSONResponse:
    status = next((code for cls, code in _STATUS_BY_ERROR if isinstance(exc, cls)), 500)
    logger.warning("request_failed", path=request.url.path, status=status,
                   error_type=type(exc).__name__, error=str(exc))
    return JSONResponse(status_code=status, content={"error": str(exc)})


def create_app(services: Services | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Passing ``services`` skips production wiring in the lifespan.
    """
    app = FastAPI(
        title="PrintLink Shopify → SimplyPrint bridge",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.services = services
    app.add_exception_handler(PrintLinkError, _handle_printlink_error)
    app.include_router(health.router, prefix="/api")
    app.include_router(webhooks.router, prefix="/api/webhooks")
    app.include_router(simplyprint.router, prefix="/api/simplyprint")
    app.include_router(unmatched.router, prefix="/api/unmatched")
    app.include_router(settings.router, prefix="/api/settings")
    return app
