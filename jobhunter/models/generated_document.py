from sqlalchemy import Column, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func

from jobhunter.database import Base


class GeneratedDocument(Base):
    """AI-tailored resume or cover letter for one saved job."""

    __tablename__ = "generated_documents"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    resume_id = Column(String, ForeignKey("resumes.id", ondelete="SET NULL"))
    job_id = Column(String, ForeignKey("saved_jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    document_type = Column(String, nullable=False)  # resume | cover_letter
    content = Column(Text, nullable=False)
    ats_score = Column(Float)
    matched_keywords = Column(JSONB, default=list)
    missing_keywords = Column(JSONB, default=list)
    storage_path = Column(String)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
