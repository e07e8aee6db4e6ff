"""Auth API: login, logout, current caller."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from checkup.config import Settings
from checkup.db.auth_engine import get_auth_db
from checkup.dependencies import enforce_route_policy, get_settings_dep, require_reporter
from checkup.errors import AuthError
from checkup.models.auth_models import User
from checkup.schemas.user import LoginRequest
from checkup.services.access import Caller, classify
from checkup.services.auth import (
    SESSION_COOKIE_NAME, create_session, login_identifier, remove_session, verify_password,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login")
async def login(
    body: LoginRequest,
    request: Request,
    db: AsyncSession = Depends(get_auth_db),
    settings: Settings = Depends(get_settings_dep),
):
    email = login_identifier(body.username.strip(), settings.auth.login_domain)
    result = await db.execute(select(User).where(User.email == email))
    user = result.scalars().first()

    if not user or not user.is_active or not verify_password(body.password, user.password_hash):
        raise AuthError("Invalid credentials")

    ip = request.client.host if request.client else ""
    token = await create_session(user, db, ip_address=ip, max_age_days=settings.auth.session_max_age_days)

    user.last_login_at = datetime.now(timezone.utc)
    await db.commit()

    caller = classify(user)
    response = JSONResponse(content={"ok": True, "user_id": user.id, "role": user.role, "tier": caller.tier.name.lower()})
    response.set_cookie(
        SESSION_COOKIE_NAME, token,
        httponly=True, samesite="lax",
        max_age=86400 * settings.auth.session_max_age_days,
    )
    return response


@router.post("/logout")
async def logout(
    request: Request,
    caller: Caller = Depends(require_reporter),
    db: AsyncSession = Depends(get_auth_db),
):
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if token:
        await remove_session(token, db)
    response = JSONResponse(content={"ok": True})
    response.delete_cookie(SESSION_COOKIE_NAME)
    return response


@router.get("/me")
async def get_me(caller: Caller = Depends(enforce_route_policy)):
    return {
        "user_id": caller.user_id,
        "username": caller.username,
        "role": caller.role,
        "branch": caller.branch,
        "tier": caller.tier.name.lower(),
    }
