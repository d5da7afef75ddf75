from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from jobhunter.schemas.common import DocumentType
from jobhunter.schemas.resume import ResumeData


class AtsBreakdown(BaseModel):
    keywords: float = Field(ge=0, le=100)
    skills: float = Field(ge=0, le=100)
    experience: float = Field(ge=0, le=100)
    education: float = Field(ge=0, le=100)


PRIORITY_ALIASES = {
    "high": "High",
    "medium": "Medium",
    "low": "Low",
    "medium/low": "Medium",
}


class CertificateSuggestion(BaseModel):
    name: str
    description: str = ""
    priority: Literal["High", "Medium", "Low"] = "Medium"

    @field_validator("priority", mode="before")
    @classmethod
    def normalize_priority(cls, v):
        # Model wording varies; anything unrecognized counts as Medium.
        return PRIORITY_ALIASES.get(str(v or "").strip().lower(), "Medium")


class SteppingStoneRole(BaseModel):
    title: str
    reason: str = ""


class ImprovementPlan(BaseModel):
    certificates: list[CertificateSuggestion] = Field(default_factory=list)
    stepping_stone_roles: list[SteppingStoneRole] = Field(default_factory=list)


class AtsResult(BaseModel):
    ats_score: float = Field(ge=0, le=100)
    breakdown: AtsBreakdown
    matched_keywords: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    improvement_plan: ImprovementPlan = Field(default_factory=ImprovementPlan)
    recommendations: list[str] = Field(default_factory=list)


class AtsScoreRequest(BaseModel):
    resume_data: ResumeData | None = Field(default=None, alias="resumeData")
    raw_text: str | None = Field(default=None, alias="rawText")
    job_description: str = Field(alias="jobDescription", min_length=1)

    class Config:
        populate_by_name = True

    @model_validator(mode="after")
    def document_present(self):
        if self.resume_data is None and not (self.raw_text or "").strip():
            raise ValueError("Either resumeData or rawText is required")
        return self


class GenerateDocumentRequest(BaseModel):
    resume_data: ResumeData = Field(alias="resumeData")
    job_description: str = Field(alias="jobDescription", min_length=1)
    document_type: DocumentType = Field(alias="documentType")
    focus_keywords: list[str] | None = Field(default=None, alias="focusKeywords")
    job_title: str | None = Field(default=None, alias="jobTitle")

    class Config:
        populate_by_name = True


class GeneratedContent(BaseModel):
    content: str


class ImproveDocumentRequest(GenerateDocumentRequest):
    missing_keywords: list[str] = Field(default_factory=list, alias="missingKeywords")
    previous_score: float = Field(default=0, alias="previousScore", ge=0, le=100)


class ImproveDocumentResult(BaseModel):
    content: str
    ats: AtsResult
    previous_score: float
    improved: bool


class ParseResumeRequest(BaseModel):
    resume_text: str = Field(default="", alias="resumeText")

    class Config:
        populate_by_name = True


class ResearchCompanyRequest(BaseModel):
    company_name: str = Field(default="", alias="companyName")
    context: str | None = None

    class Config:
        populate_by_name = True


class AnalyzeResumeRequest(BaseModel):
    resume_text: str = Field(default="", alias="resumeText")
    current_role: str | None = Field(default=None, alias="currentRole")
    resume_id: str | None = Field(default=None, alias="resumeId")

    class Config:
        populate_by_name = True


class CareerAnalysis(BaseModel):
    readiness_score: float = Field(default=0, ge=0, le=100)
    recommended_roles: list[dict | str] = Field(default_factory=list)
    skill_gaps: list[dict | str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
