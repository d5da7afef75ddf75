from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobhunter.database import Base


class Resume(Base):
    __tablename__ = "resumes"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    original_filename = Column(String, nullable=False)
    storage_path = Column(String)
    parsed_data = Column(JSONB, default=dict)
    extracted_skills = Column(JSONB, default=list)
    work_experience = Column(JSONB, default=list)
    education = Column(JSONB, default=list)
    certifications = Column(JSONB, default=list)
    summary = Column(Text)
    is_primary = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("UserProfile", back_populates="resumes")
