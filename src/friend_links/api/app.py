"""
friend_links.api.app

FastAPI app factory for the Friend Links service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Own shared infrastructure for the process lifetime (DB engine, session
  factory, outbound HTTP client, health-check scheduler).
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from friend_links import __version__
from friend_links.api.routers.config import router as config_router
from friend_links.api.routers.dev_auth import router as dev_auth_router
from friend_links.api.routers.friends import router as friends_router
from friend_links.api.routers.health import router as health_router
from friend_links.db.init_db import init_db
from friend_links.db.session import create_engine, create_sessionmaker
from friend_links.jobs.scheduler import PeriodicJob, run_health_check
from friend_links.observability.logging import configure_logging, get_logger
from friend_links.observability.middleware import RequestContextMiddleware
from friend_links.settings import Settings

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    `transport` replaces the network for outbound calls (webhook, link checks);
    tests pass an `httpx.MockTransport`.
    """

    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        console=settings.log_console,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        app.state.http = httpx.AsyncClient(
            transport=transport, timeout=settings.http_timeout_seconds
        )
        if settings.env in ("dev", "test"):
            # Prod uses Alembic migrations.
            await init_db(engine)

        job: PeriodicJob | None = None
        if settings.friend_check_interval_seconds > 0 and settings.env != "test":
            job = PeriodicJob(
                name="friend_health_check",
                interval_seconds=settings.friend_check_interval_seconds,
                func=lambda: run_health_check(
                    session_factory=app.state.sessionmaker, http=app.state.http
                ),
                run_immediately=settings.friend_check_on_startup,
            )
            job.start()

        try:
            yield
        finally:
            if job is not None:
                await job.stop()
            await app.state.http.aclose()
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Friend Links",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(dev_auth_router)
    app.include_router(friends_router)
    app.include_router(config_router)

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; permission rules and persistence live in services.
