from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class WorkExperience(BaseModel):
    company: str = ""
    title: str = ""
    location: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    is_current: bool = False
    description: str | None = None
    achievements: list[str] = Field(default_factory=list)


class Education(BaseModel):
    institution: str = ""
    degree: str | None = None
    field_of_study: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    gpa: str | None = None


class ResumeData(BaseModel):
    """Structured resume content as produced by the parser and sent by clients."""

    summary: str | None = None
    extracted_skills: list[str] = Field(default_factory=list)
    work_experience: list[WorkExperience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)


class ResumeCreate(ResumeData):
    original_filename: str = Field(min_length=1, max_length=255)
    storage_path: str | None = None
    parsed_data: dict[str, Any] = Field(default_factory=dict)


class ResumeResponse(BaseModel):
    id: str
    user_id: str
    original_filename: str
    storage_path: str | None = None
    parsed_data: dict[str, Any] | None = None
    extracted_skills: list[str] = Field(default_factory=list)
    work_experience: list[dict[str, Any]] = Field(default_factory=list)
    education: list[dict[str, Any]] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    summary: str | None = None
    is_primary: bool = False
    created_at: datetime | None = None

    class Config:
        from_attributes = True
