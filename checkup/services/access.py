"""Access gate: three-tier caller classification and the route policy.

Every request under the API router resolves its caller exactly once
(``enforce_route_policy`` in ``checkup.dependencies``) and is checked
against ROUTE_POLICY, a prefix table of the minimum tier per path.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from checkup.catalog import ROLE_ADMIN, UNASSIGNED_BRANCH
from checkup.models.auth_models import User
from checkup.services.auth import SESSION_COOKIE_NAME, validate_session


class AccessTier(IntEnum):
    ANONYMOUS = 0
    REPORTER = 1
    ADMIN = 2


@dataclass(frozen=True)
class Caller:
    tier: AccessTier
    user_id: str | None = None
    username: str | None = None
    role: str | None = None
    branch: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.tier > AccessTier.ANONYMOUS

    def satisfies(self, required: AccessTier) -> bool:
        return self.tier >= required


ANONYMOUS = Caller(tier=AccessTier.ANONYMOUS)

# First matching prefix wins.
ROUTE_POLICY: tuple[tuple[str, AccessTier], ...] = (
    ("/api/auth/login", AccessTier.ANONYMOUS),
    ("/static", AccessTier.ANONYMOUS),
    ("/api/admin", AccessTier.ADMIN),
    ("/api", AccessTier.REPORTER),
)
DEFAULT_TIER = AccessTier.REPORTER


def required_tier(path: str) -> AccessTier:
    for prefix, tier in ROUTE_POLICY:
        if path == prefix or path.startswith(prefix.rstrip("/") + "/"):
            return tier
    return DEFAULT_TIER


def classify(user: User | None) -> Caller:
    """Map a resolved user (or none) to its access tier."""
    if user is None:
        return ANONYMOUS
    tier = AccessTier.ADMIN if user.role == ROLE_ADMIN else AccessTier.REPORTER
    return Caller(
        tier=tier,
        user_id=user.id,
        username=user.username,
        role=user.role,
        branch=user.branch or UNASSIGNED_BRANCH,
    )


async def authorize(request: Request, db: AsyncSession) -> Caller:
    """Resolve the session cookie to a caller. Read-only."""
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if not token:
        return ANONYMOUS
    return classify(await validate_session(token, db))
