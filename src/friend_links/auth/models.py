"""
friend_links.auth.models

Auth domain models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity. `subject` is the numeric user id as a string.
    """

    subject: str
    username: str
    roles: frozenset[str]

    @property
    def uid(self) -> int:
        return int(self.subject)

    @property
    def is_admin(self) -> bool:
        return "admin" in self.roles
