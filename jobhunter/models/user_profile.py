from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobhunter.database import Base


class UserProfile(Base):
    """Profile row keyed by the identity provider's user id."""

    __tablename__ = "user_profiles"

    id = Column(String, primary_key=True, index=True)
    full_name = Column(String)
    email = Column(String, index=True)
    phone = Column(String)
    location = Column(String)
    linkedin_url = Column(String)
    portfolio_url = Column(String)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    preferences = relationship("JobPreferences", back_populates="user", uselist=False)
    saved_jobs = relationship("SavedJob", back_populates="user")
    resumes = relationship("Resume", back_populates="user")
    alerts = relationship("JobAlert", back_populates="user")
