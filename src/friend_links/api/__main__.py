"""
friend_links.api.__main__

Entrypoint for running the FastAPI application via `python -m friend_links.api`
(or the `friend-links-api` console script).
"""

from __future__ import annotations

import uvicorn

from friend_links.api.app import create_app
from friend_links.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
        access_log=False,  # RequestContextMiddleware logs requests
        proxy_headers=True,
    )


if __name__ == "__main__":
    main()
