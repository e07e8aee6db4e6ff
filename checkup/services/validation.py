"""Submission validation: structural schema checks, then cross-field rules.

Structural problems (missing fields, bad dates, unknown branch) come from the
pydantic schema and are all reported together. When the structure is sound,
the rule pass checks everything that spans fields or depends on the photo
policy, again collecting every violation before raising.
"""

from __future__ import annotations

from typing import Any

import pydantic

from checkup.catalog import NEEDS_FIXING, PROPERTY_NAMES, COMMENTS_MAX_LENGTH
from checkup.config import PhotoPolicyConfig
from checkup.errors import FieldError, ValidationError
from checkup.schemas.submission import PropertyReportIn, SubmissionCreate


def _loc(parts: tuple[Any, ...] | list[Any]) -> str:
    return ".".join(str(p) for p in parts)


def _structural_errors(exc: pydantic.ValidationError) -> list[FieldError]:
    errors = []
    for err in exc.errors():
        field = _loc(err["loc"]) or "body"
        errors.append(FieldError(field, err["msg"], err["type"]))
    return errors


def normalize_property(prop: PropertyReportIn) -> PropertyReportIn:
    """Only items that need fixing keep comments and photos."""
    if prop.condition == NEEDS_FIXING:
        return prop
    return prop.model_copy(update={"comments": None, "photos": []})


def _property_errors(i: int, prop: PropertyReportIn, policy: PhotoPolicyConfig) -> list[FieldError]:
    base = f"properties.{i}"
    errors = []

    if prop.id not in PROPERTY_NAMES:
        errors.append(FieldError(f"{base}.id", f"Unknown office property '{prop.id}'", "unknown_property"))

    if prop.condition == NEEDS_FIXING and not (prop.comments or "").strip():
        errors.append(FieldError(
            f"{base}.comments", "Comments are required when condition is 'Needs Fixing'", "comments_required",
        ))
    if prop.comments and len(prop.comments) > COMMENTS_MAX_LENGTH:
        errors.append(FieldError(
            f"{base}.comments", f"Comments must not exceed {COMMENTS_MAX_LENGTH} characters", "comments_length",
        ))

    if len(prop.photos) > policy.max_per_property:
        errors.append(FieldError(
            f"{base}.photos", f"At most {policy.max_per_property} photos per property", "photo_count",
        ))

    for j, photo in enumerate(prop.photos):
        loc = f"{base}.photos.{j}"
        if photo.mime_type not in policy.allowed_types:
            errors.append(FieldError(
                f"{loc}.mimeType", f"Allowed types: {', '.join(policy.allowed_types)}", "type",
            ))
        if photo.size > policy.max_file_size:
            errors.append(FieldError(
                f"{loc}.size", f"File size exceeds {policy.max_file_size // (1024 * 1024)}MB limit", "size",
            ))
        if not photo.base64 and not photo.url:
            errors.append(FieldError(loc, "Photo must have either base64 data or OBS URL", "photo_location"))

    return errors


def check_rules(data: SubmissionCreate, policy: PhotoPolicyConfig) -> list[FieldError]:
    """Cross-field and policy rules over a structurally valid submission."""
    errors = []
    for i, prop in enumerate(data.properties):
        errors.extend(_property_errors(i, prop, policy))

    total = sum(photo.size for prop in data.properties for photo in prop.photos)
    if total > policy.max_total_size:
        errors.append(FieldError(
            "properties",
            f"Total photo size exceeds {policy.max_total_size // (1024 * 1024)}MB limit",
            "total_size",
        ))

    if data.date_ended < data.date_started:
        errors.append(FieldError(
            "dateEnded", "Date Ended must be the same or later than Date Started", "date_order",
        ))
    return errors


def validate_submission(payload: Any, policy: PhotoPolicyConfig) -> SubmissionCreate:
    """Validate and normalize an incoming report, or raise ValidationError."""
    try:
        data = SubmissionCreate.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise ValidationError(_structural_errors(exc)) from None

    data = data.model_copy(update={"properties": [normalize_property(p) for p in data.properties]})

    errors = check_rules(data, policy)
    if errors:
        raise ValidationError(errors)
    return data
