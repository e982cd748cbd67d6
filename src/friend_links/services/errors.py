"""
friend_links.services.errors

Domain errors raised by the service layer. Each carries the HTTP status and
detail message the API layer reports for it.
"""

from __future__ import annotations

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
)


class FriendLinkError(Exception):
    status_code: int = HTTP_400_BAD_REQUEST
    detail: str = "Bad request"

    def __init__(self, detail: str | None = None) -> None:
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class ApplyDisabled(FriendLinkError):
    status_code = HTTP_403_FORBIDDEN
    detail = "Friend Link Apply Disabled"


class InvalidInput(FriendLinkError):
    status_code = HTTP_400_BAD_REQUEST
    detail = "Invalid input"


class Unauthorized(FriendLinkError):
    status_code = HTTP_401_UNAUTHORIZED
    detail = "Unauthorized"


class AlreadySent(FriendLinkError):
    status_code = HTTP_400_BAD_REQUEST
    detail = "Already sent"


class NotFound(FriendLinkError):
    status_code = HTTP_404_NOT_FOUND
    detail = "Not found"


class PermissionDenied(FriendLinkError):
    status_code = HTTP_403_FORBIDDEN
    detail = "Permission denied"
