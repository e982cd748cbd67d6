"""
friend_links.jobs.scheduler

In-process periodic runner for the health-check job.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

import httpx
import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from friend_links.db.session import session_scope
from friend_links.observability.logging import get_logger
from friend_links.services.health_check import HealthCheckSummary, check_friends

log = get_logger(__name__)


async def run_health_check(
    *,
    session_factory: async_sessionmaker[AsyncSession],
    http: httpx.AsyncClient,
) -> HealthCheckSummary:
    async with session_scope(session_factory) as session:
        return await check_friends(session=session, http=http)


class PeriodicJob:
    """
    Calls `func` every `interval_seconds` on a background task. With
    `run_immediately` the first run starts right after `start()`; otherwise it
    happens one interval later. A failing run is logged and the loop keeps going.

    Processes that restart more often than the interval should either run
    immediately or leave checks to `python -m friend_links.jobs` under cron.
    """

    def __init__(
        self,
        *,
        name: str,
        interval_seconds: float,
        func: Callable[[], Awaitable[object]],
        run_immediately: bool = False,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._name = name
        self._interval = interval_seconds
        self._func = func
        self._run_immediately = run_immediately
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._loop(), name=self._name)
        log.info("job_started", job=self._name, interval_seconds=self._interval)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        log.info("job_stopped", job=self._name)

    async def run_once(self) -> None:
        structlog.contextvars.bind_contextvars(job=self._name)
        try:
            await self._func()
        except Exception:
            log.exception("job_failed", job=self._name)
        finally:
            structlog.contextvars.unbind_contextvars("job")

    async def _loop(self) -> None:
        if self._run_immediately:
            await self.run_once()
        while True:
            await asyncio.sleep(self._interval)
            await self.run_once()
