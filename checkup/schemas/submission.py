from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel

from checkup.catalog import OFFICE_BRANCHES, ADDITIONAL_COMMENTS_MAX_LENGTH

ReporterName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=150)]
Condition = Literal["Good", "Needs Fixing", "Not Available"]

_camel = {"alias_generator": to_camel, "populate_by_name": True}


class PhotoIn(BaseModel):
    filename: str
    base64: str | None = None
    url: str | None = None
    obs_key: str | None = None
    mime_type: str
    size: int = Field(ge=0)
    property_id: str
    preview: str | None = None

    model_config = _camel

    def stored(self) -> dict[str, Any]:
        """Shape persisted in the property report's photo list."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"preview"})


class PropertyReportIn(BaseModel):
    id: str
    name: str = ""
    condition: Condition
    comments: str | None = None
    photos: list[PhotoIn] = []

    model_config = _camel


class ClientMetadata(BaseModel):
    user_agent: str | None = None
    screen_resolution: str | None = None
    timezone: str | None = None

    model_config = _camel


class SubmissionCreate(BaseModel):
    reporter_name: ReporterName
    branch_name: str
    date_started: date
    date_ended: date
    submission_date: datetime
    properties: list[PropertyReportIn] = Field(min_length=1)
    additional_comments: str | None = Field(default=None, max_length=ADDITIONAL_COMMENTS_MAX_LENGTH)
    metadata: ClientMetadata | None = None

    model_config = _camel

    @field_validator("branch_name")
    @classmethod
    def _known_branch(cls, v: str) -> str:
        if v not in OFFICE_BRANCHES:
            raise ValueError("Please select a branch")
        return v

    @field_validator("submission_date")
    @classmethod
    def _as_utc(cls, v: datetime) -> datetime:
        # Stored without an offset; naive input is taken as UTC.
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class PropertyReportRead(BaseModel):
    id: str
    property_id: str
    property_name: str
    condition: str
    comments: str | None = None
    photos: list[dict[str, Any]] | None = None

    model_config = {**_camel, "from_attributes": True}


class SubmissionRead(BaseModel):
    id: str
    reporter_name: str
    branch_name: str
    date_started: date
    date_ended: date
    submission_date: datetime
    additional_comments: str | None = None
    client_metadata: dict[str, Any] | None = Field(default=None, serialization_alias="metadata")
    created_at: datetime
    properties: list[PropertyReportRead] = []

    model_config = {**_camel, "from_attributes": True}


class SubmitResult(BaseModel):
    success: bool = True
    message: str = "Health check-up submitted successfully"
    submission_id: str
    timestamp: datetime
    warning: str | None = None

    model_config = _camel
