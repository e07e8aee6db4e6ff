"""Report submission and the caller's own submission list."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from checkup.config import Settings
from checkup.db import crud
from checkup.db.engine import get_db
from checkup.dependencies import get_settings_dep, require_reporter
from checkup.schemas.submission import SubmissionRead, SubmitResult
from checkup.services.access import Caller
from checkup.services.notify import notify_submission
from checkup.services.validation import validate_submission

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["submissions"])


@router.post("/submit-checkup", response_model=SubmitResult)
async def submit_checkup(
    payload: Any = Body(...),
    caller: Caller = Depends(require_reporter),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
):
    data = validate_submission(payload, settings.photos)
    sub = await crud.create_submission(db, data)
    logger.info("Stored submission %s from %s (%s)", sub.id, sub.reporter_name, caller.username)

    warning = await notify_submission(data, settings.webhook)
    return SubmitResult(
        submission_id=sub.id,
        timestamp=datetime.now(timezone.utc),
        warning=warning,
    )


@router.get("/my-submissions")
async def my_submissions(
    caller: Caller = Depends(require_reporter),
    db: AsyncSession = Depends(get_db),
):
    subs = await crud.list_submissions_for_reporter(db, caller.username or "")
    return {
        "submissions": [
            SubmissionRead.model_validate(s).model_dump(mode="json", by_alias=True) for s in subs
        ]
    }
