"""Vinyl Collection API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map VinylApiError → {error[, details]} JSON responses
    - CORS configured from settings (not hardcoded)
    - The store handle is created once in the lifespan and stored on app.state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Store handle on app.state, reached through Depends(get_db): swappable in tests
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vinyl_api.api.error_handlers import register_error_handlers
from vinyl_api.api.routes import health, statistics, vinyls
from vinyl_api.config import get_settings
from vinyl_api.infrastructure.database import DatabaseSessionManager
from vinyl_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Vinyl API started")
    yield
    logger.info("Vinyl API shutting down")
    await app.state.db_manager.close()


app = FastAPI(
    title="Vinyl Collection API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(vinyls.router)
app.include_router(statistics.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "vinyl_api.main:app", host=settings.api_host, port=settings.api_port,
    )
