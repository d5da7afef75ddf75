from datetime import datetime

from pydantic import BaseModel, Field

from jobhunter.schemas.common import NotificationFrequency


class JobAlertCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    keywords: list[str] = Field(default_factory=list)
    location: str | None = None
    min_salary: int | None = Field(default=None, ge=0)
    remote_only: bool = False
    notification_frequency: NotificationFrequency = "daily"
    is_active: bool = True


class JobAlertUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    keywords: list[str] | None = None
    location: str | None = None
    min_salary: int | None = Field(default=None, ge=0)
    remote_only: bool | None = None
    notification_frequency: NotificationFrequency | None = None
    is_active: bool | None = None


class JobAlertResponse(BaseModel):
    id: str
    user_id: str
    title: str
    keywords: list[str] | None = None
    location: str | None = None
    min_salary: int | None = None
    remote_only: bool = False
    notification_frequency: NotificationFrequency
    is_active: bool = True
    last_sent_at: datetime | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class DispatchSummary(BaseModel):
    alerts: int = 0
    due: int = 0
    sent: int = 0
    skipped_empty: int = 0
    skipped_no_email: int = 0
    failed: int = 0
