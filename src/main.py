"""
Credit Ledger Service - Main Application Entry Point

Savings accounts backed by an append-only ledger, scored credit lines
with a guarded lifecycle, and the reporting built on top of both.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from src import __version__
from src.core.config import settings
from src.core.logging import setup_logging
from src.core.metrics import get_metrics, get_metrics_content_type
from src.infrastructure.database import db_manager
from src.presentation.api import api_router
from src.presentation.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    error_handler_middleware,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Configure logging, open the engine, and dispose of it on shutdown."""
    setup_logging(settings.log_level, settings.log_format)
    db_manager.init()

    logger = structlog.get_logger(__name__)

    if settings.debug:
        # Local runs without migrations
        await db_manager.create_all()
        logger.info("database_tables_created")

    logger.info("application_started", app=settings.app_name, version=__version__)

    yield

    await db_manager.close()
    logger.info("application_stopped")


app = FastAPI(
    title="Credit Ledger Service",
    description="Savings ledger, credit scoring and credit lifecycle API",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestContextMiddleware)

error_handler_middleware(app)

app.include_router(api_router)


@app.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    if not settings.metrics_enabled:
        return Response(status_code=404)
    return Response(
        content=get_metrics(),
        media_type=get_metrics_content_type(),
    )


@app.get("/", include_in_schema=False)
async def root():
    return RedirectResponse(url="/docs")
