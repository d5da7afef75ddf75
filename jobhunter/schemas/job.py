from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from jobhunter.schemas.common import ApplicationStatus, SortBy


class JobSearchFilters(BaseModel):
    query: str = ""
    location: str = ""
    radius: int = Field(default=25, ge=0, le=500)
    remote_only: bool = False
    salary_min: int | None = Field(default=None, ge=0)
    salary_max: int | None = Field(default=None, ge=0)
    sort_by: SortBy = "relevance"
    country: str | None = Field(default=None, min_length=2, max_length=2)


class JobListing(BaseModel):
    id: str
    external_job_id: str
    title: str
    company: str
    location: str
    salary_min: int | None = None
    salary_max: int | None = None
    salary_range: str
    job_url: str | None = None
    description: str = ""
    requirements: list[str] = Field(default_factory=list)
    skills_required: list[str] = Field(default_factory=list)
    posted_at: str | None = None
    source: str = "adzuna"
    remote: bool | None = None
    job_type: str | None = None
    match_score: float | None = None
    match_reason: str | None = None


class JobSearchResult(BaseModel):
    results: list[JobListing] = Field(default_factory=list)
    count: int = 0


class DeepSearchRequest(BaseModel):
    resume_text: str = Field(default="", alias="resumeText")
    preferences: dict[str, Any] = Field(default_factory=dict)
    filters: JobSearchFilters = Field(default_factory=JobSearchFilters)

    class Config:
        populate_by_name = True


class DeepSearchResult(JobSearchResult):
    queries_used: list[str] = Field(default_factory=list)


class SavedJobCreate(BaseModel):
    external_job_id: str | None = None
    title: str = Field(min_length=1, max_length=500)
    company: str = Field(min_length=1, max_length=500)
    location: str | None = None
    salary_min: int | None = None
    salary_max: int | None = None
    salary_range: str | None = None
    job_url: str | None = None
    description: str | None = None
    requirements: list[str] = Field(default_factory=list)
    skills_required: list[str] = Field(default_factory=list)
    posted_at: str | None = None
    source: str = "adzuna"
    remote: bool | None = None
    job_type: str | None = None
    status: ApplicationStatus = "saved"


class SavedJobUpdate(BaseModel):
    """Detail edits; status changes go through the status endpoint."""

    notes: str | None = None
    contact_name: str | None = None
    contact_email: str | None = None
    company_url: str | None = None
    recruiter_phone: str | None = None
    recruiter_linkedin: str | None = None


class SavedJobStatusUpdate(BaseModel):
    status: ApplicationStatus


class SavedJobResponse(BaseModel):
    id: str
    user_id: str
    external_job_id: str | None = None
    title: str
    company: str
    location: str | None = None
    salary_min: int | None = None
    salary_max: int | None = None
    salary_range: str | None = None
    job_url: str | None = None
    description: str | None = None
    requirements: list[str] | None = None
    skills_required: list[str] | None = None
    posted_at: str | None = None
    source: str | None = None
    remote: bool | None = None
    job_type: str | None = None
    status: ApplicationStatus
    applied_date: datetime | None = None
    interview_date: datetime | None = None
    offer_date: datetime | None = None
    rejected_date: datetime | None = None
    notes: str | None = None
    contact_name: str | None = None
    contact_email: str | None = None
    company_url: str | None = None
    recruiter_phone: str | None = None
    recruiter_linkedin: str | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class KeywordMatch(BaseModel):
    matched: list[str]
    missing: list[str]
    score: int
