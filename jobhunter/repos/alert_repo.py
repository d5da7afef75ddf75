from datetime import datetime

from sqlalchemy.orm import Session

from jobhunter.models.job_alert import JobAlert
from jobhunter.core.security import generate_id

_EDITABLE_FIELDS = (
    "title",
    "keywords",
    "location",
    "min_salary",
    "remote_only",
    "notification_frequency",
    "is_active",
)


def create(db: Session, user_id: str, data: dict) -> JobAlert:
    alert = JobAlert(id=generate_id(), user_id=user_id, **data)
    db.add(alert)
    db.commit()
    db.refresh(alert)
    return alert


def list_for_user(db: Session, user_id: str) -> list[JobAlert]:
    return (
        db.query(JobAlert)
        .filter(JobAlert.user_id == user_id)
        .order_by(JobAlert.created_at.desc())
        .all()
    )


def list_active(db: Session) -> list[JobAlert]:
    """All active alerts across users, for the dispatch job."""
    return db.query(JobAlert).filter(JobAlert.is_active == True).all()


def get_by_id(db: Session, alert_id: str, user_id: str) -> JobAlert | None:
    return (
        db.query(JobAlert)
        .filter(JobAlert.id == alert_id, JobAlert.user_id == user_id)
        .first()
    )


def update(db: Session, alert_id: str, user_id: str, data: dict) -> JobAlert | None:
    alert = get_by_id(db, alert_id, user_id)
    if not alert:
        return None
    for field in _EDITABLE_FIELDS:
        if field in data and data[field] is not None:
            setattr(alert, field, data[field])
    db.commit()
    db.refresh(alert)
    return alert


def toggle_active(db: Session, alert_id: str, user_id: str) -> JobAlert | None:
    alert = get_by_id(db, alert_id, user_id)
    if not alert:
        return None
    alert.is_active = not alert.is_active
    db.commit()
    db.refresh(alert)
    return alert


def mark_sent(db: Session, alert: JobAlert, sent_at: datetime) -> JobAlert:
    alert.last_sent_at = sent_at
    db.commit()
    return alert


def delete(db: Session, alert_id: str, user_id: str) -> bool:
    alert = get_by_id(db, alert_id, user_id)
    if not alert:
        return False
    db.delete(alert)
    db.commit()
    return True
