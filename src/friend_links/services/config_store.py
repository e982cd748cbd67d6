"""
friend_links.services.config_store

Runtime configuration backed by the `config_entries` table.

Responsibilities:
- Typed access to scoped key/value settings (`client` vs `server`).
- Central list of known keys and their defaults.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from friend_links.db.models import ConfigScope
from friend_links.db.repositories.config import ConfigRepo

DEFAULT_FRIEND_UA = "FriendLinks-Check/0.1.0"


class ConfigKey:
    # client scope
    friend_apply_enable = "friend_apply_enable"
    # server scope
    friend_crontab = "friend_crontab"
    friend_ua = "friend_ua"
    webhook_url = "webhook_url"


class ConfigStore:
    def __init__(self, session: AsyncSession, scope: ConfigScope) -> None:
        self._repo = ConfigRepo(session)
        self._scope = scope

    @property
    def scope(self) -> ConfigScope:
        return self._scope

    async def get(self, key: str) -> Any | None:
        entry = await self._repo.get(self._scope, key)
        return None if entry is None else entry.value

    async def get_or_default(self, key: str, default: Any) -> Any:
        value = await self.get(key)
        return default if value is None else value

    async def set(self, key: str, value: Any) -> None:
        await self._repo.set(self._scope, key, value)

    async def all(self) -> dict[str, Any]:
        return {e.key: e.value for e in await self._repo.all(self._scope)}


def client_config(session: AsyncSession) -> ConfigStore:
    return ConfigStore(session, ConfigScope.client)


def server_config(session: AsyncSession) -> ConfigStore:
    return ConfigStore(session, ConfigScope.server)


# --- Module Notes -----------------------------------------------------------
# Values are stored as JSON, so booleans round-trip as booleans. Writes flush only;
# callers own the commit.
