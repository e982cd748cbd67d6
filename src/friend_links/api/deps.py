"""
friend_links.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, DB sessions, and the shared HTTP client.
- Encapsulate app.state access patterns (engine/sessionmaker/http).
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from friend_links.services.friend_service import FriendService
from friend_links.settings import Settings


def settings_dep(request: Request) -> Settings:
    # The app carries its own settings so tests can run several apps side by side.
    return request.app.state.settings  # type: ignore[attr-defined]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # Created in the lifespan of `friend_links.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


def http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commit is managed explicitly by the service layer.
    async with session_factory() as session:
        yield session


def friend_service(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
    http: httpx.AsyncClient = Depends(http_client),
) -> FriendService:
    return FriendService(session=session, settings=settings, http=http)
