"""FastAPI application entry point."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import ai, evacuation, health, realtime
from .config import configure_logging, settings
from .services.realtime import ConnectionHub

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the optional background jobs and cancel them on shutdown."""
    tasks: list[asyncio.Task] = []
    if settings.enable_jobs:
        from .db.supabase import get_supabase_client
        from .services.jobs import start_jobs

        client = get_supabase_client()
        if client is None:
            logger.warning("Background jobs enabled but Supabase is not configured; jobs not started")
        else:
            tasks = start_jobs(client, app.state.hub)

    yield

    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.app_name, root_path="", lifespan=lifespan)
    app.state.hub = ConnectionHub()
    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Root endpoint for diagnostics
    @app.get("/")
    def root():
        return {
            "service": settings.app_name,
            "status": "running",
            "api_prefix": settings.api_prefix,
            "health": f"{settings.api_prefix}/health",
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(ai.router, prefix=settings.api_prefix)
    app.include_router(evacuation.router, prefix=settings.api_prefix)
    app.include_router(realtime.router)
    return app


app = create_app()
