"""
friend_links.db.repositories.config

Repository for `ConfigEntry` key/value rows.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from friend_links.db.models import ConfigEntry, ConfigScope


class ConfigRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, scope: ConfigScope, key: str) -> ConfigEntry | None:
        stmt = select(ConfigEntry).where(ConfigEntry.scope == scope, ConfigEntry.key == key)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def set(self, scope: ConfigScope, key: str, value: Any) -> ConfigEntry:
        existing = await self.get(scope, key)
        if existing is not None:
            existing.value = value
            existing.updated_at = datetime.utcnow()
            await self._session.flush()
            return existing

        entry = ConfigEntry(scope=scope, key=key, value=value)
        self._session.add(entry)
        await self._session.flush()
        return entry

    async def all(self, scope: ConfigScope) -> list[ConfigEntry]:
        stmt = select(ConfigEntry).where(ConfigEntry.scope == scope).order_by(ConfigEntry.key)
        return list((await self._session.execute(stmt)).scalars().all())
