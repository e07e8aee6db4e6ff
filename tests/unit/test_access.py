from checkup.models.auth_models import User
from checkup.services.access import (
    ANONYMOUS, AccessTier, classify, required_tier,
)


def make_user(role, branch=None):
    return User(id="u1", username="ana", email="ana@healthoffice.local", password_hash="x", role=role, branch=branch)


def test_no_user_is_anonymous():
    assert classify(None) == ANONYMOUS
    assert not classify(None).is_authenticated


def test_reporter_and_admin():
    reporter = classify(make_user("reporter"))
    admin = classify(make_user("admin", branch="Head Office"))

    assert reporter.tier is AccessTier.REPORTER
    assert reporter.branch == "Not Assigned"
    assert admin.tier is AccessTier.ADMIN
    assert admin.branch == "Head Office"


def test_unknown_role_is_reporter():
    assert classify(make_user("auditor")).tier is AccessTier.REPORTER


def test_tier_ordering():
    admin = classify(make_user("admin"))
    reporter = classify(make_user("reporter"))
    assert admin.satisfies(AccessTier.REPORTER)
    assert not reporter.satisfies(AccessTier.ADMIN)
    assert not ANONYMOUS.satisfies(AccessTier.REPORTER)


def test_route_policy():
    assert required_tier("/api/auth/login") is AccessTier.ANONYMOUS
    assert required_tier("/static/app.css") is AccessTier.ANONYMOUS
    assert required_tier("/api/admin/submissions") is AccessTier.ADMIN
    assert required_tier("/api/admin") is AccessTier.ADMIN
    assert required_tier("/api/administer") is AccessTier.REPORTER
    assert required_tier("/api/submit-checkup") is AccessTier.REPORTER
    assert required_tier("/api/auth/me") is AccessTier.REPORTER
