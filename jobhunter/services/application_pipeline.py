"""Status transitions for saved jobs and the date stamps they leave behind."""
from datetime import datetime, timezone
from itertools import product
from typing import Any

from jobhunter.schemas.common import ApplicationStatus

STATUSES: tuple[ApplicationStatus, ...] = ("saved", "applied", "interviewing", "offer", "rejected")

STATUS_DATE_FIELDS: dict[str, str | None] = {
    "saved": None,
    "applied": "applied_date",
    "interviewing": "interview_date",
    "offer": "offer_date",
    "rejected": "rejected_date",
}

# Every status may move to every other; the target decides which date is stamped.
TRANSITIONS: dict[tuple[str, str], str | None] = {
    (src, dst): STATUS_DATE_FIELDS[dst] for src, dst in product(STATUSES, STATUSES) if src != dst
}


def _get(job: Any, field: str) -> Any:
    if isinstance(job, dict):
        return job.get(field)
    return getattr(job, field, None)


def plan_transition(job: Any, to_status: str, now: datetime | None = None) -> dict[str, Any]:
    """
    Column updates for moving `job` to `to_status`.

    Same-status moves return {}. A date is written only when the field is
    still empty, so the first entry into a stage is the one remembered.
    """
    if to_status not in STATUS_DATE_FIELDS:
        raise ValueError(f"Unknown application status: {to_status}")
    current = _get(job, "status") or "saved"
    if current == to_status:
        return {}
    updates: dict[str, Any] = {"status": to_status}
    date_field = TRANSITIONS[(current, to_status)]
    if date_field and _get(job, date_field) is None:
        updates[date_field] = now or datetime.now(timezone.utc)
    return updates


def initial_dates(status: str, now: datetime | None = None) -> dict[str, Any]:
    """Date stamp for a job saved directly into a later stage."""
    field = STATUS_DATE_FIELDS.get(status)
    if not field:
        return {}
    return {field: now or datetime.now(timezone.utc)}
