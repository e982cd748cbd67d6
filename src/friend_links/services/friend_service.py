"""
friend_links.services.friend_service

Friend link lifecycle service (transaction + permission owner).

Responsibilities:
- List links (public view vs. admin view) plus the caller's own application.
- Accept applications, edits, and deletions with owner/admin rules.
- Notify moderators via webhook when a non-admin applies or edits.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from friend_links.auth.models import Principal
from friend_links.db.models import (
    AVATAR_MAX_LEN,
    DESC_MAX_LEN,
    NAME_MAX_LEN,
    URL_MAX_LEN,
    Friend,
)
from friend_links.db.repositories.friends import FriendRepo
from friend_links.notifications.webhook import (
    format_friend_message,
    notify,
    resolve_webhook_url,
)
from friend_links.observability.logging import get_logger
from friend_links.services.config_store import ConfigKey, client_config
from friend_links.services.errors import (
    AlreadySent,
    ApplyDisabled,
    InvalidInput,
    NotFound,
    PermissionDenied,
    Unauthorized,
)
from friend_links.settings import Settings

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class FriendListing:
    friend_list: list[Friend]
    apply_list: Friend | None


def _blank_to_none(value: str | None) -> str | None:
    # Empty strings in an edit mean "keep the current value".
    return value if value else None


class FriendService:
    def __init__(
        self,
        *,
        session: AsyncSession,
        settings: Settings,
        http: httpx.AsyncClient,
    ) -> None:
        self._session = session
        self._settings = settings
        self._http = http
        self._friends = FriendRepo(session)

    async def list(self, *, principal: Principal | None) -> FriendListing:
        is_admin = principal is not None and principal.is_admin
        friends = await self._friends.list_ordered(accepted_only=not is_admin)
        own = await self._friends.get_by_uid(principal.uid) if principal is not None else None
        return FriendListing(friend_list=friends, apply_list=own)

    async def apply(
        self,
        *,
        principal: Principal | None,
        name: str,
        desc: str,
        avatar: str,
        url: str,
    ) -> Friend:
        is_admin = principal is not None and principal.is_admin
        await self._ensure_apply_enabled(is_admin=is_admin)

        if (
            len(name) > NAME_MAX_LEN
            or len(desc) > DESC_MAX_LEN
            or len(avatar) > AVATAR_MAX_LEN
            or len(url) > URL_MAX_LEN
        ):
            raise InvalidInput()
        if not name or not desc or not avatar or not url:
            raise InvalidInput()
        if principal is None:
            raise Unauthorized()

        if not is_admin and await self._friends.get_by_uid(principal.uid) is not None:
            raise AlreadySent()

        # Admin-created links skip review.
        friend = await self._friends.create(
            name=name,
            desc=desc,
            avatar=avatar,
            url=url,
            uid=principal.uid,
            accepted=1 if is_admin else 0,
        )
        await self._session.commit()
        log.info("friend_applied", friend_id=friend.id, uid=principal.uid, admin=is_admin)

        if not is_admin:
            await self._notify(
                principal=principal, action="applied for a friend link", name=name, desc=desc, url=url
            )
        return friend

    async def update(
        self,
        *,
        principal: Principal | None,
        friend_id: int,
        name: str | None,
        desc: str | None,
        url: str | None,
        avatar: str | None = None,
        accepted: int | None = None,
        sort_order: int | None = None,
    ) -> Friend:
        is_admin = principal is not None and principal.is_admin
        await self._ensure_apply_enabled(is_admin=is_admin)
        if principal is None:
            raise Unauthorized()

        existing = await self._friends.get(friend_id)
        if existing is None:
            raise NotFound()
        if not is_admin and existing.uid != principal.uid:
            raise PermissionDenied()

        if not is_admin:
            # Any owner edit goes back into the review queue; ordering is admin-only.
            accepted = 0
            sort_order = None

        friend = await self._friends.update(
            friend_id,
            name=_blank_to_none(name),
            desc=_blank_to_none(desc),
            avatar=_blank_to_none(avatar),
            url=_blank_to_none(url),
            accepted=accepted,
            sort_order=sort_order,
        )
        if friend is None:
            raise NotFound()
        await self._session.commit()
        log.info("friend_updated", friend_id=friend_id, uid=principal.uid, admin=is_admin)

        if not is_admin:
            await self._notify(
                principal=principal,
                action="updated a friend link",
                name=friend.name,
                desc=friend.desc,
                url=friend.url,
            )
        return friend

    async def delete(self, *, principal: Principal | None, friend_id: int) -> None:
        if principal is None:
            raise Unauthorized()

        existing = await self._friends.get(friend_id)
        if existing is None:
            raise NotFound()
        if not principal.is_admin and existing.uid != principal.uid:
            raise PermissionDenied()

        await self._friends.delete(friend_id)
        await self._session.commit()
        log.info("friend_deleted", friend_id=friend_id, uid=principal.uid, admin=principal.is_admin)

    async def _ensure_apply_enabled(self, *, is_admin: bool) -> None:
        enabled = await client_config(self._session).get_or_default(
            ConfigKey.friend_apply_enable, True
        )
        if not enabled and not is_admin:
            raise ApplyDisabled()

    async def _notify(
        self,
        *,
        principal: Principal,
        action: str,
        name: str,
        desc: str,
        url: str,
    ) -> None:
        webhook_url = await resolve_webhook_url(session=self._session, settings=self._settings)
        content = format_friend_message(
            frontend_url=self._settings.frontend_url,
            username=principal.username,
            action=action,
            name=name,
            desc=desc,
            url=url,
        )
        await notify(self._http, webhook_url, content)


# --- Module Notes -----------------------------------------------------------
# Writes are committed before the webhook fires, so a slow or failing webhook
# never loses the user's change.
