import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from jobhunter.database import get_db
from jobhunter.dependencies import AuthenticatedUser, get_current_user
from jobhunter.repos.career_repo import (
    create_analysis,
    create_item,
    delete_item,
    list_items,
    list_recent_analyses,
    update_item_status,
)
from jobhunter.repos.profile_repo import get_or_create as ensure_profile
from jobhunter.schemas.career import (
    CareerItemCreate,
    CareerItemResponse,
    CareerItemStatusUpdate,
    ResumeAnalysisCreate,
    ResumeAnalysisResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/career", tags=["career"])

RECENT_ANALYSES = 5


@router.get("/items", response_model=list[CareerItemResponse])
def get_items(
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return list_items(db, user.id)


@router.post("/items", response_model=CareerItemResponse, status_code=status.HTTP_201_CREATED)
def add_item(
    data: CareerItemCreate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    ensure_profile(db, user.id, user.email)
    item = create_item(db, user.id, data.model_dump())
    logger.info("Career item %s (%s) added for user %s", item.id, data.type, user.id)
    return item


@router.patch("/items/{item_id}", response_model=CareerItemResponse)
def set_item_status(
    item_id: str,
    data: CareerItemStatusUpdate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    item = update_item_status(db, item_id, user.id, data.status)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Career item not found")
    return item


@router.delete("/items/{item_id}")
def remove_item(
    item_id: str,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    if not delete_item(db, item_id, user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Career item not found")
    return {"message": "Career item deleted", "id": item_id}


@router.get("/analyses", response_model=list[ResumeAnalysisResponse])
def get_analyses(
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return list_recent_analyses(db, user.id, limit=RECENT_ANALYSES)


@router.post("/analyses", response_model=ResumeAnalysisResponse, status_code=status.HTTP_201_CREATED)
def add_analysis(
    data: ResumeAnalysisCreate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    ensure_profile(db, user.id, user.email)
    return create_analysis(db, user.id, data.analysis_data, resume_id=data.resume_id)
