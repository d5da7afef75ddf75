from datetime import datetime, timezone

import pytest

from jobhunter.services.application_pipeline import (
    STATUSES,
    TRANSITIONS,
    initial_dates,
    plan_transition,
)

T1 = datetime(2026, 3, 1, tzinfo=timezone.utc)
T2 = datetime(2026, 3, 9, tzinfo=timezone.utc)


def _job(status="saved", **dates):
    job = {"status": status, "applied_date": None, "interview_date": None, "offer_date": None, "rejected_date": None}
    job.update(dates)
    return job


def test_every_distinct_pair_is_allowed():
    assert len(TRANSITIONS) == len(STATUSES) * (len(STATUSES) - 1)


def test_move_stamps_target_date():
    assert plan_transition(_job("saved"), "applied", now=T1) == {"status": "applied", "applied_date": T1}
    assert plan_transition(_job("applied"), "interviewing", now=T1) == {"status": "interviewing", "interview_date": T1}
    assert plan_transition(_job("interviewing"), "rejected", now=T1) == {"status": "rejected", "rejected_date": T1}


def test_existing_date_is_preserved_on_reentry():
    job = _job("interviewing", applied_date=T1)
    assert plan_transition(job, "applied", now=T2) == {"status": "applied"}


def test_move_back_to_saved_clears_nothing():
    job = _job("offer", applied_date=T1, offer_date=T1)
    assert plan_transition(job, "saved", now=T2) == {"status": "saved"}


def test_same_status_is_noop():
    assert plan_transition(_job("applied", applied_date=T1), "applied", now=T2) == {}


def test_unknown_status_rejected():
    with pytest.raises(ValueError):
        plan_transition(_job(), "ghosted")


def test_accepts_objects():
    class _Row:
        status = "saved"
        applied_date = None

    updates = plan_transition(_Row(), "applied", now=T1)
    assert updates["applied_date"] == T1


def test_initial_dates():
    assert initial_dates("saved", now=T1) == {}
    assert initial_dates("offer", now=T1) == {"offer_date": T1}
    assert "applied_date" in initial_dates("applied")


def test_saved_applied_interviewing_keeps_applied_date():
    job = _job("saved")
    job.update(plan_transition(job, "applied", now=T1))
    job.update(plan_transition(job, "interviewing", now=T2))
    assert job["status"] == "interviewing"
    assert job["applied_date"] == T1
    assert job["interview_date"] == T2
