from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobhunter.database import Base


class JobAlert(Base):
    __tablename__ = "job_alerts"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    keywords = Column(JSONB, default=list)
    location = Column(String)
    min_salary = Column(Integer)
    remote_only = Column(Boolean, nullable=False, default=False)
    notification_frequency = Column(String, nullable=False, default="daily")  # daily | weekly
    is_active = Column(Boolean, nullable=False, default=True)
    last_sent_at = Column(DateTime(timezone=True))  # gates re-send eligibility
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("UserProfile", back_populates="alerts")
