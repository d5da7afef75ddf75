from sqlalchemy.orm import Session

from jobhunter.models.resume import Resume
from jobhunter.core.security import generate_id


def create(db: Session, user_id: str, data: dict) -> Resume:
    """Store a parsed resume. The user's first resume becomes primary."""
    has_any = db.query(Resume).filter(Resume.user_id == user_id).first() is not None
    resume = Resume(
        id=generate_id(),
        user_id=user_id,
        original_filename=data["original_filename"],
        storage_path=data.get("storage_path"),
        parsed_data=data.get("parsed_data") or {},
        extracted_skills=data.get("extracted_skills") or [],
        work_experience=data.get("work_experience") or [],
        education=data.get("education") or [],
        certifications=data.get("certifications") or [],
        summary=data.get("summary"),
        is_primary=not has_any,
    )
    db.add(resume)
    db.commit()
    db.refresh(resume)
    return resume


def list_for_user(db: Session, user_id: str) -> list[Resume]:
    return (
        db.query(Resume)
        .filter(Resume.user_id == user_id)
        .order_by(Resume.created_at.desc())
        .all()
    )


def get_by_id(db: Session, resume_id: str, user_id: str) -> Resume | None:
    return (
        db.query(Resume)
        .filter(Resume.id == resume_id, Resume.user_id == user_id)
        .first()
    )


def get_primary(db: Session, user_id: str) -> Resume | None:
    return (
        db.query(Resume)
        .filter(Resume.user_id == user_id, Resume.is_primary == True)
        .first()
    )


def set_primary(db: Session, resume_id: str, user_id: str) -> Resume | None:
    """Clear every primary flag for the user, then set the chosen one."""
    resume = get_by_id(db, resume_id, user_id)
    if not resume:
        return None
    db.query(Resume).filter(Resume.user_id == user_id).update(
        {Resume.is_primary: False}, synchronize_session=False
    )
    resume.is_primary = True
    db.commit()
    db.refresh(resume)
    return resume


def delete(db: Session, resume_id: str, user_id: str) -> Resume | None:
    """Delete the row and return it so the caller can remove the stored file."""
    resume = get_by_id(db, resume_id, user_id)
    if not resume:
        return None
    db.delete(resume)
    db.commit()
    return resume
