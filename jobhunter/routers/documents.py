import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from jobhunter.core.exceptions import DocumentLimitReached
from jobhunter.database import get_db
from jobhunter.dependencies import AuthenticatedUser, get_current_user
from jobhunter.repos.document_repo import create as create_document, list_for_user
from jobhunter.repos.saved_job_repo import get_by_id as get_saved_job
from jobhunter.schemas.common import DocumentType
from jobhunter.schemas.document import GeneratedDocumentCreate, GeneratedDocumentResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("", response_model=list[GeneratedDocumentResponse])
def list_documents(
    job_id: str | None = Query(default=None),
    document_type: DocumentType | None = Query(default=None),
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return list_for_user(db, user.id, job_id=job_id, document_type=document_type)


@router.post("", response_model=GeneratedDocumentResponse, status_code=status.HTTP_201_CREATED)
def save_document(
    data: GeneratedDocumentCreate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    if not get_saved_job(db, data.job_id, user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Saved job not found")
    try:
        doc = create_document(db, user.id, data.model_dump())
    except DocumentLimitReached as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    logger.info("Saved %s %s for job %s user %s", data.document_type, doc.id, data.job_id, user.id)
    return doc
