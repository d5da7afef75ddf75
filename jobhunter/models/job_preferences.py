from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobhunter.database import Base


class JobPreferences(Base):
    __tablename__ = "job_preferences"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False, unique=True)
    target_roles = Column(JSONB, default=list)
    target_industries = Column(JSONB, default=list)
    location = Column(String)
    remote_preference = Column(String, default="any")  # remote | hybrid | onsite | any
    salary_min = Column(Integer)
    salary_max = Column(Integer)
    search_radius_miles = Column(Integer, default=25)
    use_global_filters = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("UserProfile", back_populates="preferences")
