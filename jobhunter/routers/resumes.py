import logging
from pathlib import Path

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from jobhunter.core.exceptions import LLMCallError, LLMNotConfigured, LLMParseError
from jobhunter.database import get_db
from jobhunter.dependencies import AuthenticatedUser, get_current_user
from jobhunter.repos.profile_repo import get_or_create as ensure_profile
from jobhunter.repos.resume_repo import (
    create as create_resume,
    delete as delete_resume,
    list_for_user,
    set_primary,
)
from jobhunter.schemas.resume import ResumeCreate, ResumeResponse
from jobhunter.services import resume_storage
from jobhunter.services.resume_parser_service import ResumeTextTooShort, parse_resume_text

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/resumes", tags=["resumes"])


def _resume_row(data: dict) -> dict:
    data["work_experience"] = [dict(w) for w in data.get("work_experience") or []]
    data["education"] = [dict(e) for e in data.get("education") or []]
    if not data.get("parsed_data"):
        data["parsed_data"] = {
            k: data.get(k)
            for k in ("summary", "extracted_skills", "work_experience", "education", "certifications")
        }
    return data


@router.get("", response_model=list[ResumeResponse])
def list_resumes(
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return list_for_user(db, user.id)


@router.post("", response_model=ResumeResponse, status_code=status.HTTP_201_CREATED)
def save_resume(
    data: ResumeCreate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    ensure_profile(db, user.id, user.email)
    resume = create_resume(db, user.id, _resume_row(data.model_dump()))
    logger.info("Resume %s saved for user %s (primary=%s)", resume.id, user.id, resume.is_primary)
    return resume


@router.post("/upload", response_model=ResumeResponse, status_code=status.HTTP_201_CREATED)
async def upload_resume(
    file: UploadFile = File(..., description="Resume PDF file"),
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    """Store a PDF, extract its text and persist the parsed resume."""
    if not file.filename or not file.filename.lower().endswith(".pdf"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File must be a PDF (.pdf)")
    content = await file.read()
    try:
        resume_storage.validate_pdf(content)
    except resume_storage.ResumeFileTooLarge as e:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=str(e)) from e
    except resume_storage.InvalidResumeFile as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    try:
        text = resume_storage.extract_text(content)
    except Exception as e:
        logger.exception("PDF text extraction failed for user=%s: %s", user.id, e)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Could not read text from the PDF.",
        ) from e

    try:
        parsed = parse_resume_text(text)
    except ResumeTextTooShort as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e
    except LLMParseError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="AI returned invalid JSON format. Please try again.",
        ) from e
    except (LLMCallError, LLMNotConfigured) as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from e

    ensure_profile(db, user.id, user.email)
    storage_path = resume_storage.save(user.id, Path(file.filename).name, content)
    data = parsed.model_dump()
    data.update({"original_filename": Path(file.filename).name, "storage_path": storage_path})
    try:
        resume = create_resume(db, user.id, _resume_row(data))
    except Exception:
        resume_storage.delete(storage_path)
        raise
    logger.info("Uploaded resume %s for user %s", resume.id, user.id)
    return resume


@router.post("/{resume_id}/primary", response_model=ResumeResponse)
def make_primary(
    resume_id: str,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    resume = set_primary(db, resume_id, user.id)
    if not resume:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resume not found")
    logger.info("Resume %s is now primary for user %s", resume_id, user.id)
    return resume


@router.delete("/{resume_id}")
def remove_resume(
    resume_id: str,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    resume = delete_resume(db, resume_id, user.id)
    if not resume:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resume not found")
    resume_storage.delete(resume.storage_path)
    logger.info("Deleted resume %s for user %s", resume_id, user.id)
    return {"message": "Resume deleted", "id": resume_id}
