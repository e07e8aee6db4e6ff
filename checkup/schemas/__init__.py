"""Pydantic request/response schemas."""

from checkup.schemas.submission import (
    PhotoIn, PropertyReportIn, ClientMetadata, SubmissionCreate,
    PropertyReportRead, SubmissionRead, SubmitResult,
)
from checkup.schemas.history import (
    ReporterSummary, PhotoMeta, NeedsFixingItem, SubmissionHistoryView,
    ReporterList, ReporterHistory,
)
from checkup.schemas.user import LoginRequest, UserCreate, UserRead

__all__ = [
    "PhotoIn", "PropertyReportIn", "ClientMetadata", "SubmissionCreate",
    "PropertyReportRead", "SubmissionRead", "SubmitResult",
    "ReporterSummary", "PhotoMeta", "NeedsFixingItem", "SubmissionHistoryView",
    "ReporterList", "ReporterHistory",
    "LoginRequest", "UserCreate", "UserRead",
]
