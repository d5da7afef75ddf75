import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from jobhunter.core.exceptions import SavedJobLimitReached
from jobhunter.database import get_db
from jobhunter.dependencies import AuthenticatedUser, get_current_user
from jobhunter.repos.profile_repo import get_or_create as ensure_profile
from jobhunter.repos.resume_repo import get_primary as get_primary_resume
from jobhunter.repos.saved_job_repo import (
    apply_updates,
    create as create_saved_job,
    delete as delete_saved_job,
    get_by_external_id,
    get_by_id as get_saved_job,
    list_for_user,
    update_details,
)
from jobhunter.schemas.common import ApplicationStatus
from jobhunter.schemas.job import (
    KeywordMatch,
    SavedJobCreate,
    SavedJobResponse,
    SavedJobStatusUpdate,
    SavedJobUpdate,
)
from jobhunter.services.application_pipeline import initial_dates, plan_transition
from jobhunter.services.ats_service import keyword_match

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/saved-jobs", tags=["saved-jobs"])


@router.get("", response_model=list[SavedJobResponse])
def list_saved_jobs(
    status_filter: ApplicationStatus | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return list_for_user(db, user.id, status=status_filter)


@router.post("", response_model=SavedJobResponse, status_code=status.HTTP_201_CREATED)
def save_job(
    data: SavedJobCreate,
    response: Response,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    """Save a listing. Saving the same external listing again returns the existing row."""
    if data.external_job_id:
        existing = get_by_external_id(db, user.id, data.external_job_id)
        if existing:
            response.status_code = status.HTTP_200_OK
            return existing
    ensure_profile(db, user.id, user.email)
    payload = data.model_dump()
    payload.update(initial_dates(data.status))
    try:
        job = create_saved_job(db, user.id, payload)
    except SavedJobLimitReached as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    logger.info("Saved job %s for user %s", job.id, user.id)
    return job


@router.patch("/{job_id}", response_model=SavedJobResponse)
def update_saved_job(
    job_id: str,
    data: SavedJobUpdate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    job = update_details(db, job_id, user.id, data.model_dump(exclude_unset=True))
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Saved job not found")
    return job


@router.patch("/{job_id}/status", response_model=SavedJobResponse)
def move_saved_job(
    job_id: str,
    data: SavedJobStatusUpdate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    job = get_saved_job(db, job_id, user.id)
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Saved job not found")
    previous = job.status
    updates = plan_transition(job, data.status)
    job = apply_updates(db, job, updates)
    logger.info("Saved job %s moved %s -> %s for user %s", job_id, previous, data.status, user.id)
    return job


@router.delete("/{job_id}")
def remove_saved_job(
    job_id: str,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    if not delete_saved_job(db, job_id, user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Saved job not found")
    logger.info("Removed saved job %s for user %s", job_id, user.id)
    return {"message": "Saved job removed", "id": job_id}


@router.get("/{job_id}/skill-match", response_model=KeywordMatch)
def skill_match(
    job_id: str,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    """Coverage of the job's required skills by the primary resume's skills."""
    job = get_saved_job(db, job_id, user.id)
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Saved job not found")
    resume = get_primary_resume(db, user.id)
    candidate = (resume.extracted_skills or []) if resume else []
    return keyword_match(candidate, job.skills_required or [])
