"""Reporter summaries and per-reporter "needs fixing" history.

Both functions are pure: they take rows already loaded by the caller (ORM
objects or anything exposing the same attributes) and never touch the
database.
"""

from __future__ import annotations

import logging
from datetime import datetime
from functools import cmp_to_key
from typing import Any, Iterable, Protocol

from checkup.catalog import NEEDS_FIXING
from checkup.schemas.history import (
    NeedsFixingItem, PhotoMeta, ReporterSummary, SubmissionHistoryView,
)

logger = logging.getLogger(__name__)


class SubmissionStamp(Protocol):
    reporter_name: str | None
    submission_date: datetime | None


def _by_latest(a: ReporterSummary, b: ReporterSummary) -> int:
    # A missing date compares equal to anything; such pairs keep their order.
    if a.last_submission_date is None or b.last_submission_date is None:
        return 0
    if a.last_submission_date > b.last_submission_date:
        return -1
    if a.last_submission_date < b.last_submission_date:
        return 1
    return 0


def rank(summaries: Iterable[ReporterSummary]) -> list[ReporterSummary]:
    """Most recent submitter first."""
    return sorted(summaries, key=cmp_to_key(_by_latest))


def summarize(stamps: Iterable[SubmissionStamp]) -> list[ReporterSummary]:
    """Group submissions by trimmed reporter name.

    Case is preserved, so "Ana" and "ana" are two reporters. Rows whose
    name is blank are skipped.
    """
    counts: dict[str, int] = {}
    latest: dict[str, datetime | None] = {}

    for stamp in stamps:
        name = (stamp.reporter_name or "").strip()
        if not name:
            logger.warning("Skipping submission with empty reporter name: %r", stamp)
            continue

        counts[name] = counts.get(name, 0) + 1
        when = stamp.submission_date
        current = latest.get(name)
        if current is None or (when is not None and when > current):
            latest[name] = when

    return rank(
        ReporterSummary(
            reporter_name=name,
            submissions_count=count,
            last_submission_date=latest[name],
        )
        for name, count in counts.items()
    )


def _photo_meta(photo: Any) -> PhotoMeta:
    if not isinstance(photo, dict):
        return PhotoMeta()
    return PhotoMeta(
        filename=photo.get("filename"),
        url=photo.get("url"),
        obs_key=photo.get("obsKey"),
        mime_type=photo.get("mimeType"),
        size=photo.get("size"),
    )


def _needs_fixing(properties: Iterable[Any]) -> list[NeedsFixingItem]:
    return [
        NeedsFixingItem(
            id=prop.id,
            property_id=prop.property_id,
            property_name=prop.property_name,
            comments=prop.comments,
            photos=[_photo_meta(p) for p in (prop.photos or [])],
        )
        for prop in properties
        if prop.condition == NEEDS_FIXING
    ]


def history(submissions: Iterable[Any]) -> list[SubmissionHistoryView]:
    """Project one reporter's submissions, newest first.

    Inline photo payloads are left out; only photo metadata is returned.
    """
    ordered = sorted(submissions, key=lambda s: s.submission_date, reverse=True)
    return [
        SubmissionHistoryView(
            id=s.id,
            reporter_name=s.reporter_name,
            branch_name=s.branch_name,
            date_started=s.date_started,
            date_ended=s.date_ended,
            submission_date=s.submission_date,
            additional_comments=s.additional_comments,
            needs_fixing=_needs_fixing(s.properties or []),
        )
        for s in ordered
    ]
