from datetime import datetime

from pydantic import BaseModel, Field

from jobhunter.schemas.common import DocumentType


class GeneratedDocumentCreate(BaseModel):
    job_id: str
    resume_id: str | None = None
    document_type: DocumentType
    content: str = Field(min_length=1)
    ats_score: float | None = Field(default=None, ge=0, le=100)
    matched_keywords: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    storage_path: str | None = None


class GeneratedDocumentResponse(BaseModel):
    id: str
    user_id: str
    resume_id: str | None = None
    job_id: str
    document_type: DocumentType
    content: str
    ats_score: float | None = None
    matched_keywords: list[str] | None = None
    missing_keywords: list[str] | None = None
    storage_path: str | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True
