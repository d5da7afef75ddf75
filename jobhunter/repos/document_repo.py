from sqlalchemy.orm import Session

from jobhunter.config import settings
from jobhunter.core.exceptions import DocumentLimitReached
from jobhunter.core.security import generate_id
from jobhunter.models.generated_document import GeneratedDocument


def count_for_job(db: Session, user_id: str, job_id: str, document_type: str) -> int:
    return (
        db.query(GeneratedDocument)
        .filter(
            GeneratedDocument.user_id == user_id,
            GeneratedDocument.job_id == job_id,
            GeneratedDocument.document_type == document_type,
        )
        .count()
    )


def create(db: Session, user_id: str, data: dict, limit: int | None = None) -> GeneratedDocument:
    limit = settings.max_documents_per_type if limit is None else limit
    if count_for_job(db, user_id, data["job_id"], data["document_type"]) >= limit:
        label = "cover letters" if data["document_type"] == "cover_letter" else "resumes"
        raise DocumentLimitReached(f"Limit reached: at most {limit} {label} per job.")
    doc = GeneratedDocument(id=generate_id(), user_id=user_id, **data)
    db.add(doc)
    db.commit()
    db.refresh(doc)
    return doc


def list_for_user(
    db: Session,
    user_id: str,
    job_id: str | None = None,
    document_type: str | None = None,
) -> list[GeneratedDocument]:
    q = db.query(GeneratedDocument).filter(GeneratedDocument.user_id == user_id)
    if job_id is not None:
        q = q.filter(GeneratedDocument.job_id == job_id)
    if document_type is not None:
        q = q.filter(GeneratedDocument.document_type == document_type)
    return q.order_by(GeneratedDocument.created_at.desc()).all()
