"""
friend_links.api.routers.friends

Friend link endpoints.

Responsibilities:
- List, apply, update, and delete friend links.
- Trigger an immediate link health check (admin).
- Map service-layer errors onto HTTP responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import httpx
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession

from friend_links.api.deps import db_session, friend_service, http_client
from friend_links.auth.deps import get_optional_principal, require_roles
from friend_links.auth.models import Principal
from friend_links.services.errors import FriendLinkError
from friend_links.services.friend_service import FriendService
from friend_links.services.health_check import check_friends

router = APIRouter(prefix="/v1/friends", tags=["friends"])


class FriendOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    desc: str
    avatar: str
    url: str
    uid: int
    accepted: int
    sort_order: int
    health: str
    created_at: datetime
    updated_at: datetime


class FriendListResponse(BaseModel):
    friend_list: list[FriendOut]
    apply_list: FriendOut | None


# Lengths are checked by the service so violations answer 400, not 422.
class FriendApplyRequest(BaseModel):
    name: str
    desc: str
    avatar: str
    url: str


class FriendUpdateRequest(BaseModel):
    name: str
    desc: str
    url: str
    avatar: str | None = None
    accepted: int | None = None
    sort_order: int | None = None


class OkResponse(BaseModel):
    status: str = "OK"
    id: int | None = None


def _http_error(e: FriendLinkError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.detail)


@router.get("", response_model=FriendListResponse)
async def list_friends(
    principal: Principal | None = Depends(get_optional_principal),
    svc: FriendService = Depends(friend_service),
) -> FriendListResponse:
    listing = await svc.list(principal=principal)
    return FriendListResponse(
        friend_list=[FriendOut.model_validate(f) for f in listing.friend_list],
        apply_list=(
            FriendOut.model_validate(listing.apply_list) if listing.apply_list is not None else None
        ),
    )


@router.post("", response_model=OkResponse)
async def apply_friend(
    body: FriendApplyRequest,
    principal: Principal | None = Depends(get_optional_principal),
    svc: FriendService = Depends(friend_service),
) -> OkResponse:
    try:
        friend = await svc.apply(
            principal=principal,
            name=body.name,
            desc=body.desc,
            avatar=body.avatar,
            url=body.url,
        )
    except FriendLinkError as e:
        raise _http_error(e) from e
    return OkResponse(id=friend.id)


@router.post(
    "/health-check",
    dependencies=[Depends(require_roles("admin"))],
)
async def trigger_health_check(
    session: AsyncSession = Depends(db_session),
    http: httpx.AsyncClient = Depends(http_client),
) -> dict[str, Any]:
    summary = await check_friends(session=session, http=http)
    return summary.as_dict()


@router.put("/{friend_id}", response_model=OkResponse)
async def update_friend(
    friend_id: int,
    body: FriendUpdateRequest,
    principal: Principal | None = Depends(get_optional_principal),
    svc: FriendService = Depends(friend_service),
) -> OkResponse:
    try:
        friend = await svc.update(
            principal=principal,
            friend_id=friend_id,
            name=body.name,
            desc=body.desc,
            url=body.url,
            avatar=body.avatar,
            accepted=body.accepted,
            sort_order=body.sort_order,
        )
    except FriendLinkError as e:
        raise _http_error(e) from e
    return OkResponse(id=friend.id)


@router.delete("/{friend_id}", response_model=OkResponse)
async def delete_friend(
    friend_id: int,
    principal: Principal | None = Depends(get_optional_principal),
    svc: FriendService = Depends(friend_service),
) -> OkResponse:
    try:
        await svc.delete(principal=principal, friend_id=friend_id)
    except FriendLinkError as e:
        raise _http_error(e) from e
    return OkResponse()


# --- Module Notes -----------------------------------------------------------
# Anonymous callers may list; every write resolves the caller's uid from the token.
