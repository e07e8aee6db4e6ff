"""Declarative bases for the two databases and the shared row mixin.

``Base`` holds check-up submissions, ``AuthBase`` holds accounts and
sessions. They never share a metadata so each can point at its own engine.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from ulid import ULID


def _new_id() -> str:
    return str(ULID())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class AuthBase(DeclarativeBase):
    pass


class ULIDMixin:
    """ULID primary key plus a UTC creation timestamp."""

    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=_new_id)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
