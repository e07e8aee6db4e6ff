"""CRUD operations for submissions and their property reports."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from checkup.catalog import PROPERTY_NAMES
from checkup.errors import PersistenceError
from checkup.models import Submission, PropertyReport
from checkup.schemas.history import ReporterSummary
from checkup.schemas.submission import SubmissionCreate

logger = logging.getLogger(__name__)


# ── Submission ────────────────────────────────────────────

async def create_submission(db: AsyncSession, data: SubmissionCreate) -> Submission:
    """Insert a submission with all its property reports as one unit."""
    sub = Submission(
        reporter_name=data.reporter_name.strip(),
        branch_name=data.branch_name,
        date_started=data.date_started,
        date_ended=data.date_ended,
        submission_date=data.submission_date,
        additional_comments=data.additional_comments,
        client_metadata=data.metadata.model_dump(by_alias=True, exclude_none=True) if data.metadata else None,
        properties=[
            PropertyReport(
                position=i,
                property_id=prop.id,
                property_name=prop.name or PROPERTY_NAMES.get(prop.id, prop.id),
                condition=prop.condition,
                comments=prop.comments,
                photos=[photo.stored() for photo in prop.photos],
            )
            for i, prop in enumerate(data.properties)
        ],
    )
    db.add(sub)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.exception("Failed to persist submission for %s", data.reporter_name)
        raise PersistenceError("Failed to save the health check-up") from e
    await db.refresh(sub)
    return sub


async def get_submission(db: AsyncSession, submission_id: str) -> Submission | None:
    return await db.get(Submission, submission_id)


async def list_submission_stamps(db: AsyncSession):
    """Reporter name and date of every submission; the full-scan input to summarize()."""
    result = await db.execute(
        select(Submission.id, Submission.reporter_name, Submission.submission_date)
        .order_by(Submission.submission_date.desc())
    )
    return list(result.all())


async def reporter_summary_rows(db: AsyncSession) -> list[ReporterSummary]:
    """Per-reporter count and latest date, grouped by the database."""
    name = func.trim(Submission.reporter_name)
    result = await db.execute(
        select(
            name.label("reporter_name"),
            func.count(Submission.id).label("submissions_count"),
            func.max(Submission.submission_date).label("last_submission_date"),
        )
        .where(name != "")
        .group_by(name)
    )
    return [
        ReporterSummary(
            reporter_name=row.reporter_name,
            submissions_count=row.submissions_count,
            last_submission_date=row.last_submission_date,
        )
        for row in result.all()
    ]


async def list_submissions_for_reporter(db: AsyncSession, reporter_name: str) -> list[Submission]:
    result = await db.execute(
        select(Submission)
        .where(func.trim(Submission.reporter_name) == reporter_name.strip())
        .order_by(Submission.submission_date.desc())
    )
    return list(result.scalars().all())
