"""
friend_links.db.models

Persistence schema for the friend links service.

Responsibilities:
- Friend: a link to another site, its owner (applicant uid), review state,
  ordering weight, and the last health-check result.
- ConfigEntry: scoped key/value runtime configuration (client/server).
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Enum, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from friend_links.db.base import Base

NAME_MAX_LEN = 20
DESC_MAX_LEN = 100
AVATAR_MAX_LEN = 100
URL_MAX_LEN = 100


def _utcnow() -> datetime:
    # Naive UTC timestamps; SQLite has no tz-aware column type.
    return datetime.utcnow()


class ConfigScope(enum.StrEnum):
    # client: readable by anyone (rendered by the frontend); server: admin only.
    client = "client"
    server = "server"


class Friend(Base):
    __tablename__ = "friends"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(NAME_MAX_LEN), nullable=False)
    desc: Mapped[str] = mapped_column(String(DESC_MAX_LEN), nullable=False)
    avatar: Mapped[str] = mapped_column(String(AVATAR_MAX_LEN), nullable=False)
    url: Mapped[str] = mapped_column(String(URL_MAX_LEN), nullable=False)

    uid: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    # 0 = pending review, 1 = shown publicly.
    accepted: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # "" when the last check succeeded; status code or error message otherwise.
    health: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (Index("ix_friends_sort", "sort_order", "created_at"),)


class ConfigEntry(Base):
    __tablename__ = "config_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    scope: Mapped[ConfigScope] = mapped_column(Enum(ConfigScope), nullable=False)
    key: Mapped[str] = mapped_column(String(128), nullable=False)
    value: Mapped[Any] = mapped_column(JSON, nullable=True)

    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (UniqueConstraint("scope", "key", name="uq_config_scope_key"),)


# --- Module Notes -----------------------------------------------------------
# Column length limits mirror the input limits enforced by FriendService so the
# constants are shared from here.
