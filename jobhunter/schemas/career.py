from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from jobhunter.schemas.common import CareerItemStatus, CareerItemType


class CareerItemCreate(BaseModel):
    type: CareerItemType
    title: str = Field(min_length=1, max_length=300)
    description: str | None = None
    url: str | None = None
    status: CareerItemStatus = "saved"


class CareerItemStatusUpdate(BaseModel):
    status: CareerItemStatus


class CareerItemResponse(BaseModel):
    id: str
    user_id: str
    type: CareerItemType
    title: str
    description: str | None = None
    url: str | None = None
    status: CareerItemStatus
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class ResumeAnalysisCreate(BaseModel):
    resume_id: str | None = None
    analysis_data: dict[str, Any]


class ResumeAnalysisResponse(BaseModel):
    id: str
    user_id: str
    resume_id: str | None = None
    analysis_data: dict[str, Any]
    created_at: datetime | None = None

    class Config:
        from_attributes = True
