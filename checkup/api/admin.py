"""Admin API: reporter summaries, reporter history, user management."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from checkup.config import Settings
from checkup.db import crud
from checkup.db.engine import get_db
from checkup.dependencies import get_settings_dep, get_user_directory, require_admin
from checkup.schemas.history import ReporterHistory, ReporterList
from checkup.schemas.user import UserCreate
from checkup.services import aggregator
from checkup.services.access import Caller
from checkup.services.directory import UserDirectory

router = APIRouter(prefix="/api/admin", tags=["admin"])


# ── Submissions ───────────────────────────────────────────

@router.get("/submissions", response_model=ReporterList)
async def list_reporters(
    auth: Caller = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
):
    if settings.summary_strategy == "database":
        reporters = aggregator.rank(await crud.reporter_summary_rows(db))
    else:
        reporters = aggregator.summarize(await crud.list_submission_stamps(db))
    return ReporterList(reporters=reporters)


@router.get("/submissions/{reporter_name}", response_model=ReporterHistory)
async def reporter_history(
    reporter_name: str,
    auth: Caller = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    name = reporter_name.strip()
    subs = await crud.list_submissions_for_reporter(db, name)
    return ReporterHistory(reporter_name=name, submissions=aggregator.history(subs))


# ── Users ─────────────────────────────────────────────────

@router.get("/users")
async def list_users(
    auth: Caller = Depends(require_admin),
    directory: UserDirectory = Depends(get_user_directory),
):
    users = await directory.list()
    return {"users": [u.model_dump(mode="json", by_alias=True) for u in users]}


@router.post("/users", status_code=201)
async def create_user(
    body: UserCreate,
    auth: Caller = Depends(require_admin),
    directory: UserDirectory = Depends(get_user_directory),
):
    user = await directory.create(body.username, body.password, body.role, body.branch)
    return {"user": user.model_dump(mode="json", by_alias=True)}


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: str,
    auth: Caller = Depends(require_admin),
    directory: UserDirectory = Depends(get_user_directory),
):
    await directory.delete(user_id)
    return {"success": True}
