"""
friend_links.services.health_check

Link health checker.

Responsibilities:
- GET every stored friend URL once, sequentially, with the configured User-Agent.
- Write the outcome back into `Friend.health` ("" for healthy, otherwise the
  status code or the error message).
- Report a summary for logs and the manual-trigger endpoint.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from friend_links.db.repositories.friends import FriendRepo
from friend_links.observability.logging import get_logger
from friend_links.services.config_store import DEFAULT_FRIEND_UA, ConfigKey, server_config

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class HealthCheckSummary:
    enabled: bool
    total: int = 0
    healthy: int = 0
    unhealthy: int = 0

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


async def check_link(http: httpx.AsyncClient, url: str, *, user_agent: str) -> str:
    """
    Return the health string for one URL: "" when it answers 2xx, the status code
    for any other answer, or the error message when no answer arrived.
    """

    try:
        r = await http.get(url, headers={"User-Agent": user_agent}, follow_redirects=True)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        return str(e) or type(e).__name__

    log.info("friend_checked", url=url, status_code=r.status_code, reason=r.reason_phrase)
    return "" if r.is_success else str(r.status_code)


async def check_friends(*, session: AsyncSession, http: httpx.AsyncClient) -> HealthCheckSummary:
    config = server_config(session)
    if not await config.get_or_default(ConfigKey.friend_crontab, True):
        log.info("friend_crontab_disabled")
        return HealthCheckSummary(enabled=False)
    user_agent = str(await config.get(ConfigKey.friend_ua) or DEFAULT_FRIEND_UA)

    repo = FriendRepo(session)
    friends = await repo.list_all()
    log.info("friend_check_started", total=len(friends))

    healthy = 0
    unhealthy = 0
    for friend in friends:
        log.info("friend_checking", friend_id=friend.id, name=friend.name, url=friend.url)
        health = await check_link(http, friend.url, user_agent=user_agent)
        if health:
            log.warning("friend_unhealthy", friend_id=friend.id, health=health)
            unhealthy += 1
        else:
            healthy += 1
        await repo.set_health(friend.id, health)
        # Per-link commit keeps earlier results if a later request or write fails.
        await session.commit()

    summary = HealthCheckSummary(
        enabled=True, total=healthy + unhealthy, healthy=healthy, unhealthy=unhealthy
    )
    log.info("friend_check_done", **summary.as_dict())
    return summary


# --- Module Notes -----------------------------------------------------------
# Sequential, no retries: one GET per link per run. The job
# layer (`friend_links.jobs`) decides when this runs.
