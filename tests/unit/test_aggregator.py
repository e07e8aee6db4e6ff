import random
from datetime import date, datetime
from types import SimpleNamespace

from checkup.models import Submission, PropertyReport
from checkup.services import aggregator


def stamp(name, when):
    return SimpleNamespace(reporter_name=name, submission_date=when)


def make_submission(sid, name, when, properties=()):
    return Submission(
        id=sid,
        reporter_name=name,
        branch_name="Head Office",
        date_started=date(2024, 1, 1),
        date_ended=date(2024, 1, 31),
        submission_date=when,
        additional_comments=None,
        properties=list(properties),
    )


def make_report(rid, condition, comments=None, photos=None):
    return PropertyReport(
        id=rid,
        property_id="aircon",
        property_name="Aircon",
        condition=condition,
        comments=comments,
        photos=photos or [],
    )


def test_summarize_empty_input():
    assert aggregator.summarize([]) == []


def test_summarize_groups_on_trimmed_name_and_keeps_case():
    stamps = [
        stamp("Ana", datetime(2024, 1, 5)),
        stamp("ana", datetime(2024, 2, 1)),
        stamp(" Ben ", datetime(2024, 1, 10)),
    ]
    result = aggregator.summarize(stamps)

    names = [s.reporter_name for s in result]
    assert sorted(names) == ["Ana", "Ben", "ana"]
    assert names == ["ana", "Ben", "Ana"]


def test_summarize_counts_and_latest_date():
    stamps = [
        stamp("Carla", datetime(2024, 3, 1)),
        stamp("Carla ", datetime(2024, 5, 1)),
        stamp("  Carla", datetime(2024, 4, 1)),
        stamp("Dan", datetime(2024, 6, 1)),
    ]
    result = aggregator.summarize(stamps)

    assert [s.reporter_name for s in result] == ["Dan", "Carla"]
    carla = result[1]
    assert carla.submissions_count == 3
    assert carla.last_submission_date == datetime(2024, 5, 1)


def test_summarize_skips_blank_names():
    stamps = [stamp("   ", datetime(2024, 1, 1)), stamp("", datetime(2024, 1, 2)), stamp("Eve", datetime(2024, 1, 3))]
    result = aggregator.summarize(stamps)
    assert len(result) == 1
    assert result[0].reporter_name == "Eve"


def test_summarize_is_independent_of_input_order():
    stamps = [
        stamp(name, datetime(2024, month, day))
        for name, month, day in [
            ("Ana", 1, 5), ("Ben", 2, 3), ("Ana", 3, 9), ("Cy", 1, 1),
            ("Ben", 1, 20), ("Dee", 4, 4), ("Cy", 2, 2),
        ]
    ]
    expected = aggregator.summarize(stamps)
    shuffled = stamps[:]
    random.Random(7).shuffle(shuffled)

    assert aggregator.summarize(shuffled) == expected
    assert len(expected) == len({s.reporter_name.strip() for s in stamps})


def test_missing_dates_compare_equal():
    a = aggregator.ReporterSummary(reporter_name="A", submissions_count=1, last_submission_date=None)
    b = aggregator.ReporterSummary(reporter_name="B", submissions_count=1, last_submission_date=datetime(2024, 1, 1))
    assert aggregator._by_latest(a, b) == 0
    assert aggregator._by_latest(b, a) == 0
    # Two-element sort with an incomparable pair keeps input order.
    assert [s.reporter_name for s in aggregator.rank([a, b])] == ["A", "B"]
    assert [s.reporter_name for s in aggregator.rank([b, a])] == ["B", "A"]


def test_summarize_ignores_missing_dates_within_group():
    stamps = [stamp("Fay", None), stamp("Fay", datetime(2024, 2, 2)), stamp("Gus", None)]
    result = {s.reporter_name: s for s in aggregator.summarize(stamps)}
    assert result["Fay"].submissions_count == 2
    assert result["Fay"].last_submission_date == datetime(2024, 2, 2)
    assert result["Gus"].last_submission_date is None


def test_history_empty():
    assert aggregator.history([]) == []


def test_history_orders_newest_first():
    subs = [
        make_submission("s1", "Ana", datetime(2024, 1, 5)),
        make_submission("s2", "Ana", datetime(2024, 3, 5)),
        make_submission("s3", "Ana", datetime(2024, 2, 5)),
    ]
    assert [v.id for v in aggregator.history(subs)] == ["s2", "s3", "s1"]


def test_history_needs_fixing_is_exact_match():
    reports = [
        make_report("r1", "Needs Fixing", "Broken vent"),
        make_report("r2", "Good", "Looks fine but noted"),
        make_report("r3", "needs fixing", "wrong case"),
        make_report("r4", "Not Available"),
    ]
    view = aggregator.history([make_submission("s1", "Ana", datetime(2024, 1, 5), reports)])[0]

    assert [item.id for item in view.needs_fixing] == ["r1"]
    assert view.needs_fixing[0].comments == "Broken vent"


def test_history_drops_inline_photo_bytes():
    photos = [
        {"filename": "a.jpg", "base64": "data:image/jpeg;base64,AAAA", "mimeType": "image/jpeg", "size": 10,
         "propertyId": "aircon"},
        {"filename": "b.png", "url": "https://cdn/x/b.png", "obsKey": "x/b.png", "mimeType": "image/png", "size": 20,
         "propertyId": "aircon"},
    ]
    report = make_report("r1", "Needs Fixing", "Leak", photos)
    view = aggregator.history([make_submission("s1", "Ana", datetime(2024, 1, 5), [report])])[0]

    dumped = view.model_dump(by_alias=True)
    photo_out = dumped["needsFixing"][0]["photos"]
    assert photo_out[0] == {"filename": "a.jpg", "url": None, "obsKey": None, "mimeType": "image/jpeg", "size": 10}
    assert photo_out[1]["url"] == "https://cdn/x/b.png"
    assert photo_out[1]["obsKey"] == "x/b.png"
    assert "base64" not in str(dumped)
