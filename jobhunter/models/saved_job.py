from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobhunter.database import Base


class SavedJob(Base):
    """A bookmarked job listing moving through the application pipeline."""

    __tablename__ = "saved_jobs"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    external_job_id = Column(String, index=True)
    title = Column(String, nullable=False)
    company = Column(String, nullable=False)
    location = Column(String)
    salary_min = Column(Integer)
    salary_max = Column(Integer)
    salary_range = Column(String)
    job_url = Column(String)
    description = Column(Text)
    requirements = Column(JSONB, default=list)
    skills_required = Column(JSONB, default=list)
    posted_at = Column(String)
    source = Column(String, default="adzuna")
    remote = Column(Boolean)
    job_type = Column(String)

    status = Column(String, nullable=False, default="saved")  # saved | applied | interviewing | offer | rejected
    applied_date = Column(DateTime(timezone=True))
    interview_date = Column(DateTime(timezone=True))
    offer_date = Column(DateTime(timezone=True))
    rejected_date = Column(DateTime(timezone=True))

    notes = Column(Text)
    contact_name = Column(String)
    contact_email = Column(String)
    company_url = Column(String)
    recruiter_phone = Column(String)
    recruiter_linkedin = Column(String)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("UserProfile", back_populates="saved_jobs")
