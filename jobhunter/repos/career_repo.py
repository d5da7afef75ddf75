from sqlalchemy.orm import Session

from jobhunter.models.career_item import CareerItem
from jobhunter.models.resume_analysis import ResumeAnalysis
from jobhunter.core.security import generate_id


def create_item(db: Session, user_id: str, data: dict) -> CareerItem:
    item = CareerItem(id=generate_id(), user_id=user_id, **data)
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def list_items(db: Session, user_id: str) -> list[CareerItem]:
    return (
        db.query(CareerItem)
        .filter(CareerItem.user_id == user_id)
        .order_by(CareerItem.created_at.desc())
        .all()
    )


def get_item(db: Session, item_id: str, user_id: str) -> CareerItem | None:
    return (
        db.query(CareerItem)
        .filter(CareerItem.id == item_id, CareerItem.user_id == user_id)
        .first()
    )


def update_item_status(db: Session, item_id: str, user_id: str, status: str) -> CareerItem | None:
    item = get_item(db, item_id, user_id)
    if not item:
        return None
    item.status = status
    db.commit()
    db.refresh(item)
    return item


def delete_item(db: Session, item_id: str, user_id: str) -> bool:
    item = get_item(db, item_id, user_id)
    if not item:
        return False
    db.delete(item)
    db.commit()
    return True


def create_analysis(db: Session, user_id: str, analysis_data: dict, resume_id: str | None = None) -> ResumeAnalysis:
    analysis = ResumeAnalysis(
        id=generate_id(),
        user_id=user_id,
        resume_id=resume_id,
        analysis_data=analysis_data,
    )
    db.add(analysis)
    db.commit()
    db.refresh(analysis)
    return analysis


def list_recent_analyses(db: Session, user_id: str, limit: int = 5) -> list[ResumeAnalysis]:
    return (
        db.query(ResumeAnalysis)
        .filter(ResumeAnalysis.user_id == user_id)
        .order_by(ResumeAnalysis.created_at.desc())
        .limit(limit)
        .all()
    )
