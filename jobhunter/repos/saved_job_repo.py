from sqlalchemy.orm import Session

from jobhunter.config import settings
from jobhunter.core.exceptions import SavedJobLimitReached
from jobhunter.core.security import generate_id
from jobhunter.models.saved_job import SavedJob

_DETAIL_FIELDS = (
    "notes",
    "contact_name",
    "contact_email",
    "company_url",
    "recruiter_phone",
    "recruiter_linkedin",
)


def count_for_user(db: Session, user_id: str) -> int:
    return db.query(SavedJob).filter(SavedJob.user_id == user_id).count()


def create(db: Session, user_id: str, data: dict, limit: int | None = None) -> SavedJob:
    """Insert a saved job after a pre-flight count against the per-user cap.

    The count and the insert are separate statements, so two concurrent saves
    at the cap can both succeed.
    """
    limit = settings.max_saved_jobs if limit is None else limit
    if count_for_user(db, user_id) >= limit:
        raise SavedJobLimitReached(
            f"You have reached the limit of {limit} saved jobs. Remove some before saving more."
        )
    job = SavedJob(id=generate_id(), user_id=user_id, **data)
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


def list_for_user(db: Session, user_id: str, status: str | None = None) -> list[SavedJob]:
    q = db.query(SavedJob).filter(SavedJob.user_id == user_id)
    if status is not None:
        q = q.filter(SavedJob.status == status)
    return q.order_by(SavedJob.created_at.desc()).all()


def get_by_id(db: Session, job_id: str, user_id: str) -> SavedJob | None:
    return (
        db.query(SavedJob)
        .filter(SavedJob.id == job_id, SavedJob.user_id == user_id)
        .first()
    )


def get_by_external_id(db: Session, user_id: str, external_job_id: str) -> SavedJob | None:
    return (
        db.query(SavedJob)
        .filter(SavedJob.user_id == user_id, SavedJob.external_job_id == external_job_id)
        .first()
    )


def apply_updates(db: Session, job: SavedJob, updates: dict) -> SavedJob:
    if not updates:
        return job
    for field, value in updates.items():
        setattr(job, field, value)
    db.commit()
    db.refresh(job)
    return job


def update_details(db: Session, job_id: str, user_id: str, data: dict) -> SavedJob | None:
    job = get_by_id(db, job_id, user_id)
    if not job:
        return None
    updates = {k: v for k, v in data.items() if k in _DETAIL_FIELDS}
    return apply_updates(db, job, updates)


def delete(db: Session, job_id: str, user_id: str) -> bool:
    job = get_by_id(db, job_id, user_id)
    if not job:
        return False
    db.delete(job)
    db.commit()
    return True
