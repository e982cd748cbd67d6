"""
friend_links.db.repositories.friends

Repository for `Friend` entities.

Responsibilities:
- Ordered listing (public vs. admin view).
- Lookup by id and by applicant uid.
- Partial updates, health write-back, and deletion.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from friend_links.db.models import Friend


class FriendRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_ordered(self, *, accepted_only: bool) -> list[Friend]:
        # Higher sort_order first, then oldest first; id breaks same-timestamp ties.
        stmt = select(Friend).order_by(desc(Friend.sort_order), Friend.created_at, Friend.id)
        if accepted_only:
            stmt = stmt.where(Friend.accepted == 1)
        return list((await self._session.execute(stmt)).scalars().all())

    async def list_all(self) -> list[Friend]:
        stmt = select(Friend).order_by(Friend.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def get(self, friend_id: int) -> Friend | None:
        return await self._session.get(Friend, friend_id)

    async def get_by_uid(self, uid: int) -> Friend | None:
        stmt = select(Friend).where(Friend.uid == uid).order_by(Friend.id).limit(1)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def create(
        self,
        *,
        name: str,
        desc: str,
        avatar: str,
        url: str,
        uid: int,
        accepted: int,
    ) -> Friend:
        friend = Friend(
            name=name,
            desc=desc,
            avatar=avatar,
            url=url,
            uid=uid,
            accepted=accepted,
            sort_order=0,
            health="",
        )
        self._session.add(friend)
        await self._session.flush()
        return friend

    async def update(
        self,
        friend_id: int,
        *,
        name: str | None = None,
        desc: str | None = None,
        avatar: str | None = None,
        url: str | None = None,
        accepted: int | None = None,
        sort_order: int | None = None,
    ) -> Friend | None:
        # None means "leave unchanged".
        friend = await self._session.get(Friend, friend_id, with_for_update=True)
        if friend is None:
            return None
        if name is not None:
            friend.name = name
        if desc is not None:
            friend.desc = desc
        if avatar is not None:
            friend.avatar = avatar
        if url is not None:
            friend.url = url
        if accepted is not None:
            friend.accepted = accepted
        if sort_order is not None:
            friend.sort_order = sort_order
        friend.updated_at = datetime.utcnow()
        await self._session.flush()
        return friend

    async def set_health(self, friend_id: int, health: str) -> None:
        # Plain UPDATE: a row deleted since it was loaded is simply skipped.
        await self._session.execute(
            update(Friend)
            .where(Friend.id == friend_id)
            .values(health=health)
            .execution_options(synchronize_session=False)
        )

    async def delete(self, friend_id: int) -> None:
        await self._session.execute(delete(Friend).where(Friend.id == friend_id))
