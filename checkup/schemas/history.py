from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

_camel = {"alias_generator": to_camel, "populate_by_name": True}


class ReporterSummary(BaseModel):
    reporter_name: str
    submissions_count: int
    last_submission_date: datetime | None = None

    model_config = _camel


class PhotoMeta(BaseModel):
    filename: str | None = None
    url: str | None = None
    obs_key: str | None = None
    mime_type: str | None = None
    size: int | None = None

    model_config = _camel


class NeedsFixingItem(BaseModel):
    id: str
    property_id: str
    property_name: str
    comments: str | None = None
    photos: list[PhotoMeta] = []

    model_config = _camel


class SubmissionHistoryView(BaseModel):
    id: str
    reporter_name: str
    branch_name: str
    date_started: date
    date_ended: date
    submission_date: datetime
    additional_comments: str | None = None
    needs_fixing: list[NeedsFixingItem] = []

    model_config = _camel


class ReporterList(BaseModel):
    reporters: list[ReporterSummary]


class ReporterHistory(BaseModel):
    reporter_name: str
    submissions: list[SubmissionHistoryView]

    model_config = _camel
