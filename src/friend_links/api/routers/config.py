"""
friend_links.api.routers.config

Runtime config endpoints.

Responsibilities:
- Expose client-scope config to anyone (the frontend reads feature toggles).
- Restrict server-scope reads and all writes to admins.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_404_NOT_FOUND

from friend_links.api.deps import db_session
from friend_links.auth.deps import require_roles
from friend_links.db.models import ConfigScope
from friend_links.services.config_store import ConfigStore

router = APIRouter(prefix="/v1/config", tags=["config"])


def _scope(raw: str) -> ConfigScope:
    try:
        return ConfigScope(raw)
    except ValueError as e:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Not found") from e


@router.get("/client")
async def get_client_config(session: AsyncSession = Depends(db_session)) -> dict[str, Any]:
    return await ConfigStore(session, ConfigScope.client).all()


@router.get("/server", dependencies=[Depends(require_roles("admin"))])
async def get_server_config(session: AsyncSession = Depends(db_session)) -> dict[str, Any]:
    return await ConfigStore(session, ConfigScope.server).all()


@router.post("/{scope}", dependencies=[Depends(require_roles("admin"))])
async def set_config(
    scope: str,
    body: dict[str, Any],
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    store = ConfigStore(session, _scope(scope))
    for key, value in body.items():
        await store.set(key, value)
    await session.commit()
    return await store.all()
