"""
friend_links.jobs.__main__

One-shot health check: `python -m friend_links.jobs`. Suitable for cron or a
Kubernetes CronJob when the in-process scheduler is disabled.
"""

from __future__ import annotations

import asyncio

import httpx

from friend_links.db.init_db import init_db
from friend_links.db.session import create_engine, create_sessionmaker
from friend_links.jobs.scheduler import run_health_check
from friend_links.observability.logging import configure_logging, get_logger
from friend_links.settings import get_settings

log = get_logger(__name__)


async def _run() -> None:
    settings = get_settings()
    engine = create_engine(settings)
    try:
        if settings.env in ("dev", "test"):
            await init_db(engine)
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as http:
            summary = await run_health_check(
                session_factory=create_sessionmaker(engine), http=http
            )
        log.info("health_check_finished", **summary.as_dict())
    finally:
        await engine.dispose()


def main() -> None:
    settings = get_settings()
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        console=settings.log_console,
    )
    asyncio.run(_run())


if __name__ == "__main__":
    main()
