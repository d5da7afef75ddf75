from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.sql import func

from jobhunter.database import Base


class CareerItem(Base):
    """User-curated role, certification or skill to pursue."""

    __tablename__ = "career_items"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String, nullable=False)  # role | certification | skill
    title = Column(String, nullable=False)
    description = Column(Text)
    url = Column(String)
    status = Column(String, nullable=False, default="saved")  # saved | in_progress | completed
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
