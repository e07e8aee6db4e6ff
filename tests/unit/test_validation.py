from datetime import datetime, timedelta, timezone

import pytest

from checkup.config import PhotoPolicyConfig
from checkup.errors import ValidationError
from checkup.services.validation import validate_submission

MB = 1024 * 1024


@pytest.fixture
def policy():
    return PhotoPolicyConfig()


def photo(size=1000, **overrides):
    p = {
        "filename": "leak.jpg",
        "base64": "data:image/jpeg;base64,AAAA",
        "mimeType": "image/jpeg",
        "size": size,
        "propertyId": "aircon",
    }
    p.update(overrides)
    return p


def payload(**overrides):
    body = {
        "reporterName": "  Ana Cruz ",
        "branchName": "Head Office",
        "dateStarted": "2024-01-01",
        "dateEnded": "2024-01-31",
        "submissionDate": "2024-02-01T08:30:00Z",
        "properties": [
            {"id": "aircon", "name": "Aircon", "condition": "Needs Fixing", "comments": "Leaking", "photos": [photo()]},
            {"id": "tables", "name": "Tables", "condition": "Good", "comments": None, "photos": []},
        ],
        "additionalComments": None,
        "metadata": {"userAgent": "pytest", "timezone": "Asia/Manila"},
    }
    body.update(overrides)
    return body


def test_valid_submission_is_trimmed(policy):
    data = validate_submission(payload(), policy)
    assert data.reporter_name == "Ana Cruz"
    assert data.properties[0].photos[0].mime_type == "image/jpeg"
    assert data.metadata.user_agent == "pytest"


def test_non_needs_fixing_items_are_cleared(policy):
    body = payload()
    body["properties"][1] = {
        "id": "tables", "name": "Tables", "condition": "Good",
        "comments": "fine", "photos": [photo()],
    }
    data = validate_submission(body, policy)
    assert data.properties[1].comments is None
    assert data.properties[1].photos == []


def test_date_ended_before_started_is_field_scoped(policy):
    with pytest.raises(ValidationError) as exc:
        validate_submission(payload(dateStarted="2024-02-10", dateEnded="2024-02-01"), policy)
    assert exc.value.fields == {"dateEnded"}
    assert "date_order" in exc.value.rules


def test_structural_errors_are_all_reported(policy):
    body = payload(reporterName="A", branchName="Moon Base", dateStarted="not-a-date")
    with pytest.raises(ValidationError) as exc:
        validate_submission(body, policy)
    assert {"reporterName", "branchName", "dateStarted"} <= exc.value.fields


def test_rule_errors_are_all_reported(policy):
    body = payload(dateStarted="2024-02-10", dateEnded="2024-02-01")
    body["properties"][0]["comments"] = "   "
    body["properties"][0]["photos"] = [photo(mimeType="image/gif"), photo(size=6 * MB), photo(base64=None)]
    with pytest.raises(ValidationError) as exc:
        validate_submission(body, policy)

    fields = exc.value.fields
    assert "properties.0.comments" in fields
    assert "properties.0.photos.0.mimeType" in fields
    assert "properties.0.photos.1.size" in fields
    assert "properties.0.photos.2" in fields
    assert "dateEnded" in fields


def test_photo_count_and_total_size(policy):
    body = payload()
    body["properties"][0]["photos"] = [photo(size=4 * MB) for _ in range(6)]
    with pytest.raises(ValidationError) as exc:
        validate_submission(body, policy)
    assert {"photo_count", "total_size"} <= exc.value.rules


def test_photo_with_url_only_is_accepted(policy):
    body = payload()
    body["properties"][0]["photos"] = [photo(base64=None, url="https://cdn.example/p.jpg", obsKey="p.jpg")]
    data = validate_submission(body, policy)
    assert data.properties[0].photos[0].obs_key == "p.jpg"


def test_unknown_property_rejected(policy):
    body = payload()
    body["properties"][1]["id"] = "jacuzzi"
    with pytest.raises(ValidationError) as exc:
        validate_submission(body, policy)
    assert exc.value.fields == {"properties.1.id"}


def test_empty_properties_rejected(policy):
    with pytest.raises(ValidationError) as exc:
        validate_submission(payload(properties=[]), policy)
    assert "properties" in exc.value.fields


def test_long_comments_rejected(policy):
    body = payload(additionalComments="x" * 1001)
    body["properties"][0]["comments"] = "y" * 501
    with pytest.raises(ValidationError) as exc:
        validate_submission(body, policy)
    assert "additionalComments" in exc.value.fields


def test_submission_date_is_converted_to_utc(policy):
    data = validate_submission(payload(submissionDate="2024-02-01T09:00:00+08:00"), policy)
    assert data.submission_date == datetime(2024, 2, 1, 1, 0, tzinfo=timezone.utc)
    assert data.submission_date.utcoffset() == timedelta(0)

    naive = validate_submission(payload(submissionDate="2024-02-01T09:00:00"), policy)
    assert naive.submission_date == datetime(2024, 2, 1, 9, 0, tzinfo=timezone.utc)
