"""FastAPI dependency providers for settings, auth, and storage."""

from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from checkup.config import Settings, get_settings
from checkup.db.auth_engine import get_auth_db
from checkup.errors import AuthError
from checkup.services.access import AccessTier, Caller, authorize, required_tier
from checkup.services.directory import UserDirectory
from checkup.services.photo_store import PhotoStore


def get_settings_dep() -> Settings:
    return get_settings()


async def enforce_route_policy(
    request: Request,
    db: AsyncSession = Depends(get_auth_db),
) -> Caller:
    """Resolve the caller once per request and apply ROUTE_POLICY."""
    caller = await authorize(request, db)
    if not caller.satisfies(required_tier(request.url.path)):
        raise AuthError()
    return caller


def require_tier(tier: AccessTier):
    """Factory: returns a dependency that enforces a minimum tier."""
    async def _check(caller: Caller = Depends(enforce_route_policy)) -> Caller:
        if not caller.satisfies(tier):
            raise AuthError()
        return caller
    return _check


require_reporter = require_tier(AccessTier.REPORTER)
require_admin = require_tier(AccessTier.ADMIN)


_photo_store: PhotoStore | None = None


def get_photo_store(settings: Settings = Depends(get_settings_dep)) -> PhotoStore:
    global _photo_store
    if _photo_store is None:
        _photo_store = PhotoStore(settings.object_storage, settings.photos)
    return _photo_store


def get_user_directory(
    db: AsyncSession = Depends(get_auth_db),
    settings: Settings = Depends(get_settings_dep),
) -> UserDirectory:
    return UserDirectory(db, settings.auth.login_domain)
