"""
friend_links.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Convert an optional bearer token into a typed `Principal` (or anonymous).
- Enforce RBAC via reusable dependency factories.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from friend_links.api.deps import settings_dep
from friend_links.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate
from friend_links.auth.models import Principal
from friend_links.settings import Settings

_bearer = HTTPBearer(auto_error=False)


def get_optional_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
) -> Principal | None:
    # Anonymous callers are allowed through; endpoints decide what they may see.
    if creds is None or not creds.credentials:
        return None

    try:
        payload = decode_and_validate(cfg=JwtConfig.from_settings(settings), token=creds.credentials)
    except JwtValidationError as e:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}") from e

    subject = str(payload.get("sub", ""))
    roles_raw = payload.get("roles", [])
    if not subject.isdigit():
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token subject")
    if not isinstance(roles_raw, list):
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token roles")

    return Principal(
        subject=subject,
        username=str(payload.get("name") or subject),
        roles=frozenset(str(r) for r in roles_raw),
    )


def get_principal(principal: Principal | None = Depends(get_optional_principal)) -> Principal:
    if principal is None:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Missing bearer token")
    return principal


def require_roles(*required: str):
    required_set = frozenset(required)

    def _dep(principal: Principal = Depends(get_principal)) -> Principal:
        # Admin bypasses role checks.
        if principal.is_admin:
            return principal
        if not required_set.issubset(principal.roles):
            raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Insufficient role")
        return principal

    return _dep


# --- Module Notes -----------------------------------------------------------
# Friend endpoints take the optional principal and apply their own 401/403 rules;
# admin-only endpoints (config writes, manual health check) use `require_roles("admin")`.
