import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from jobhunter.database import get_db
from jobhunter.dependencies import AuthenticatedUser, get_current_user
from jobhunter.repos.profile_repo import (
    get_or_create as ensure_profile,
    get_preferences,
    update as update_profile,
    upsert_preferences,
)
from jobhunter.schemas.profile import (
    JobPreferencesResponse,
    JobPreferencesUpdate,
    UserProfileResponse,
    UserProfileUpdate,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["profile"])


@router.get("/profile", response_model=UserProfileResponse)
def get_profile(
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return ensure_profile(db, user.id, user.email)


@router.put("/profile", response_model=UserProfileResponse)
def put_profile(
    data: UserProfileUpdate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    ensure_profile(db, user.id, user.email)
    profile = update_profile(db, user.id, data.model_dump(exclude_unset=True))
    logger.info("Profile updated for user %s", user.id)
    return profile


@router.get("/preferences", response_model=JobPreferencesResponse)
def get_job_preferences(
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    prefs = get_preferences(db, user.id)
    if not prefs:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No preferences saved")
    return prefs


@router.put("/preferences", response_model=JobPreferencesResponse)
def put_job_preferences(
    data: JobPreferencesUpdate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    ensure_profile(db, user.id, user.email)
    prefs = upsert_preferences(db, user.id, data.model_dump())
    logger.info("Preferences saved for user %s", user.id)
    return prefs
