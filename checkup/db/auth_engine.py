"""Auth DB engine and session factory for users and sessions."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from checkup.config import get_settings
from checkup.db.engine import _ensure_sqlite_dir

_settings = get_settings()

_ensure_sqlite_dir(_settings.auth_database_url)

auth_engine = create_async_engine(_settings.auth_database_url, echo=False)
auth_session_factory = async_sessionmaker(auth_engine, class_=AsyncSession, expire_on_commit=False)


async def get_auth_db():
    """FastAPI dependency that yields an async session to the auth DB."""
    async with auth_session_factory() as session:
        yield session
