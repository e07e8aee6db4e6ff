"""User directory: list/create/delete accounts in the auth DB.

Callers gate these operations on the admin tier; nothing here checks who
is asking.
"""

from __future__ import annotations

import logging

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from checkup.catalog import ROLES, ROLE_REPORTER, UNASSIGNED_BRANCH
from checkup.errors import DuplicateUsernameError, FieldError, NotFoundError, ValidationError
from checkup.models.auth_models import User
from checkup.schemas.user import UserRead
from checkup.services.auth import hash_password, login_identifier, remove_all_user_sessions

logger = logging.getLogger(__name__)


def to_read(user: User) -> UserRead:
    return UserRead(
        id=user.id,
        username=user.username,
        email=user.email,
        role=user.role or ROLE_REPORTER,
        branch=user.branch or UNASSIGNED_BRANCH,
        created_at=user.created_at,
    )


class UserDirectory:
    def __init__(self, db: AsyncSession, login_domain: str):
        self._db = db
        self._domain = login_domain

    async def list(self) -> list[UserRead]:
        result = await self._db.execute(select(User).order_by(User.created_at))
        return [to_read(u) for u in result.scalars().all()]

    async def create(
        self,
        username: str | None,
        password: str | None,
        role: str | None = ROLE_REPORTER,
        branch: str | None = None,
    ) -> UserRead:
        username = (username or "").strip()
        role = role or ROLE_REPORTER
        errors = []
        if not username:
            errors.append(FieldError("username", "Username is required", "required"))
        if not password:
            errors.append(FieldError("password", "Password is required", "required"))
        if role not in ROLES:
            errors.append(FieldError("role", f"Role must be one of: {', '.join(ROLES)}", "role"))
        if errors:
            raise ValidationError(errors, "Username and password are required" if len(errors) > 1 else errors[0].message)

        email = login_identifier(username, self._domain)
        if await self._exists(username, email):
            raise DuplicateUsernameError(f"User '{username}' already exists")

        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            role=role,
            branch=branch or None,
        )
        self._db.add(user)
        try:
            await self._db.commit()
        except IntegrityError as e:
            # A concurrent create won the unique constraint.
            await self._db.rollback()
            raise DuplicateUsernameError(f"User '{username}' already exists") from e
        await self._db.refresh(user)
        logger.info("Created %s account %s", role, username)
        return to_read(user)

    async def _exists(self, username: str, email: str) -> bool:
        result = await self._db.execute(
            select(User.id).where(or_(User.email == email, User.username == username))
        )
        return result.first() is not None

    async def delete(self, user_id: str) -> None:
        user = await self._db.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")
        await remove_all_user_sessions(user.id, self._db)
        await self._db.delete(user)
        await self._db.commit()
        logger.info("Deleted account %s", user.username)
