from datetime import date, timedelta

import pytest

from foreclosure_hub.services import timeline_service as ts


NOTICE = date(2025, 1, 15)


def test_standard_offsets_and_dates():
    milestones = ts.generate_timeline(NOTICE, "standard", today=NOTICE)
    assert [m["days_from_notice"] for m in milestones] == [0, 20, 75, 105, 126]
    assert [m["id"] for m in milestones] == [
        "notice-received", "cure-period", "notice-acceleration", "notice-sale-posted", "foreclosure-sale",
    ]
    for m in milestones:
        assert m["date"] == NOTICE + timedelta(days=m["days_from_notice"])


def test_detailed_offsets():
    milestones = ts.generate_timeline(NOTICE, "detailed", today=NOTICE)
    assert [m["days_from_notice"] for m in milestones] == [0, 7, 14, 30, 75, 105, 126]
    assert milestones[-1]["id"] == ts.SALE_MILESTONE_ID


def test_default_variant_is_standard():
    assert len(ts.generate_timeline(NOTICE, today=NOTICE)) == 5


def test_unknown_variant_rejected():
    with pytest.raises(ts.UnknownVariantError):
        ts.generate_timeline(NOTICE, "express")


def test_first_milestone_is_day_zero_in_every_variant():
    for variant in ts.VARIANTS:
        offsets = [m["days_from_notice"] for m in ts.generate_timeline(NOTICE, variant, today=NOTICE)]
        assert offsets[0] == 0
        assert offsets == sorted(set(offsets))


@pytest.mark.parametrize("delta, expected", [
    (-1, "past"),
    (0, "current"),
    (3, "current"),
    (4, "upcoming"),
])
def test_classify_status_boundaries(delta, expected):
    today = date(2025, 3, 1)
    assert ts.classify_status(today + timedelta(days=delta), today) == expected


def test_status_is_judged_against_today():
    milestones = ts.generate_timeline(NOTICE, "standard", today=NOTICE + timedelta(days=21))
    statuses = {m["id"]: m["status"] for m in milestones}
    assert statuses["notice-received"] == "past"
    assert statuses["cure-period"] == "past"
    assert statuses["notice-acceleration"] == "upcoming"


def test_days_until_sale():
    milestones = ts.generate_timeline(NOTICE, today=NOTICE)
    assert ts.days_until_sale(milestones, today=NOTICE) == 126
    assert ts.days_until_sale(milestones, today=NOTICE + timedelta(days=130)) == -4


@pytest.mark.parametrize("days_left, level", [
    (61, "time_to_act"),
    (60, "running_out"),
    (31, "running_out"),
    (30, "urgent"),
    (1, "urgent"),
    (0, "critical"),
    (-5, "critical"),
])
def test_urgency_alert_levels(days_left, level):
    assert ts.urgency_alert(days_left, "(832) 932-7585")["level"] == level


def test_urgent_alert_includes_phone():
    alert = ts.urgency_alert(10, "(832) 932-7585")
    assert "(832) 932-7585" in alert["message"]


def test_summarize_progress_ignores_unknown_keys():
    milestones = ts.generate_timeline(NOTICE, today=NOTICE)
    completed = {"notice-received-0": True, "notice-received-1": True, "contact-lender-0": True}
    progress = ts.summarize_progress(milestones, completed)
    assert progress["total_actions"] == 20
    assert progress["completed_actions"] == 2
    assert progress["completion_percentage"] == 10
    assert "contact-lender-0" not in progress["progress_map"]


def test_recommendations_without_timeline():
    recs = ts.build_recommendations(None, {}, None, "(832) 932-7585")
    assert [r["id"] for r in recs] == ["create-timeline"]


def test_recommendations_capped_at_three():
    # Day 18: cure period (day 20) is current, nothing upcoming within a week, >15 days since notice
    today = NOTICE + timedelta(days=18)
    milestones = ts.generate_timeline(NOTICE, today=today)
    recs = ts.build_recommendations(milestones, {}, NOTICE, "(832) 932-7585", today=today)
    ids = [r["id"] for r in recs]
    assert ids == ["complete-current-milestone", "contact-specialist", "explore-resources"]
    assert recs[1]["action_url"] == "tel:8329327585"


def test_recommendations_prepare_for_next_milestone():
    # Day 14: cure period (day 20) is 6 days out
    today = NOTICE + timedelta(days=14)
    milestones = ts.generate_timeline(NOTICE, today=today)
    recs = ts.build_recommendations(milestones, {}, NOTICE, "(832) 932-7585", today=today)
    assert [r["id"] for r in recs] == ["prepare-next-milestone", "explore-resources"]
    assert "6 days away" in recs[0]["description"]
