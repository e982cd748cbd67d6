"""
friend_links.notifications.webhook

Webhook delivery for moderator notifications.

Responsibilities:
- POST a plain-text message to the configured webhook as `{"content": ...}`.
- Resolve the webhook URL (server config first, then process settings).
- Format the apply/update messages sent to moderators.
"""

from __future__ import annotations

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from friend_links.observability.logging import get_logger
from friend_links.services.config_store import ConfigKey, server_config
from friend_links.settings import Settings

log = get_logger(__name__)


async def resolve_webhook_url(*, session: AsyncSession, settings: Settings) -> str:
    configured = await server_config(session).get(ConfigKey.webhook_url)
    return str(configured or settings.webhook_url or "")


def format_friend_message(
    *,
    frontend_url: str,
    username: str,
    action: str,
    name: str,
    desc: str,
    url: str,
) -> str:
    return f"{frontend_url.rstrip('/')}/friends\n{username} {action}: {name}\n{desc}\n{url}"


async def notify(http: httpx.AsyncClient, webhook_url: str, content: str) -> bool:
    """
    Deliver `content` to `webhook_url`. Returns True when the webhook accepted it.

    Delivery failures are logged, not raised: the triggering change is already
    committed and the caller's response must not depend on the webhook.
    """

    if not webhook_url:
        log.debug("webhook_skipped", reason="no webhook url configured")
        return False

    try:
        r = await http.post(webhook_url, json={"content": content})
        r.raise_for_status()
    except httpx.HTTPStatusError as e:
        log.warning("webhook_rejected", status_code=e.response.status_code)
        return False
    except httpx.HTTPError as e:
        log.warning("webhook_failed", error=str(e) or type(e).__name__)
        return False

    log.info("webhook_delivered", status_code=r.status_code)
    return True


# --- Module Notes -----------------------------------------------------------
# The webhook URL is never logged; it usually embeds a bot token.
