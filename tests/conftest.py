"""
tests.conftest

Shared fixtures: a per-test SQLite database, the app with its lifespan running,
an in-process HTTP client, and a fake outbound network that records webhook
deliveries and answers link checks.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from friend_links.api.app import create_app
from friend_links.auth.jwt import JwtConfig, issue_token
from friend_links.settings import Settings

WEBHOOK_URL = "https://hooks.test/notify"
FRONTEND_URL = "https://blog.test"
ADMIN_UID = 1


@dataclass
class FakeNetwork:
    """
    `routes` maps a full URL to a status code, a ready-made response, an
    exception to raise, or an async callable producing the response. Unknown
    URLs answer 404. The webhook answers `webhook_status`.
    """

    routes: dict[
        str,
        int | httpx.Response | Exception | Callable[[httpx.Request], Awaitable[httpx.Response]],
    ] = field(default_factory=dict)
    webhook_status: int = 204
    requests: list[httpx.Request] = field(default_factory=list)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if str(request.url) == WEBHOOK_URL:
            return httpx.Response(self.webhook_status)
        route = self.routes.get(str(request.url), 404)
        if isinstance(route, Exception):
            raise route
        if isinstance(route, httpx.Response):
            return route
        if callable(route):
            return await route(request)
        return httpx.Response(route)

    @property
    def webhook_messages(self) -> list[str]:
        return [
            json.loads(r.content)["content"] for r in self.requests if str(r.url) == WEBHOOK_URL
        ]

    @property
    def checks(self) -> list[httpx.Request]:
        return [r for r in self.requests if str(r.url) != WEBHOOK_URL]


@pytest.fixture
def network() -> FakeNetwork:
    return FakeNetwork()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'friend_links.db'}",
        webhook_url=WEBHOOK_URL,
        frontend_url=FRONTEND_URL,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(settings: Settings, network: FakeNetwork) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings, transport=httpx.MockTransport(network.handler))
    # ASGITransport does not drive lifespan; run it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def bearer(
    settings: Settings,
    *,
    uid: int,
    username: str = "alice",
    roles: tuple[str, ...] = (),
    ttl: timedelta = timedelta(minutes=5),
) -> dict[str, str]:
    token = issue_token(
        cfg=JwtConfig.from_settings(settings),
        subject=str(uid),
        username=username,
        roles=list(roles),
        ttl=ttl,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(settings: Settings) -> dict[str, str]:
    return bearer(settings, uid=ADMIN_UID, username="root", roles=("admin",))


@pytest.fixture
def alice_headers(settings: Settings) -> dict[str, str]:
    return bearer(settings, uid=2, username="alice")


@pytest.fixture
def bob_headers(settings: Settings) -> dict[str, str]:
    return bearer(settings, uid=3, username="bob")


@pytest.fixture
def headers_for(settings: Settings):
    def _make(uid: int, username: str = "user", roles: tuple[str, ...] = ()) -> dict[str, str]:
        return bearer(settings, uid=uid, username=username, roles=roles)

    return _make
