"""ATS compatibility scoring and deterministic keyword coverage."""
import json
import logging
from typing import Any

from pydantic import BaseModel, Field

from jobhunter.schemas.ai import AtsBreakdown, AtsResult, ImprovementPlan, ImproveDocumentResult
from jobhunter.schemas.job import KeywordMatch
from jobhunter.schemas.resume import ResumeData
from jobhunter.services import document_service
from jobhunter.services.llm_client import call_groq, decode_json

logger = logging.getLogger(__name__)

WEIGHTS = {"keywords": 0.40, "skills": 0.30, "experience": 0.20, "education": 0.10}

ATS_SYSTEM_PROMPT = """You are an ATS (Applicant Tracking System) analyzer. Analyze how well a resume matches a job description.

Score each category from 0 to 100:
- keywords: job description keyword match rate (weight 40%)
- skills: skills alignment (weight 30%)
- experience: experience relevance (weight 20%); penalize a seniority mismatch heavily
- education: education and certifications match (weight 10%)

Return valid JSON with this exact structure:
{
  "ats_score": 85,
  "breakdown": {"keywords": 0, "skills": 0, "experience": 0, "education": 0},
  "matched_keywords": ["keyword1", "keyword2"],
  "missing_keywords": ["keyword1", "keyword2"],
  "improvement_plan": {
    "certificates": [{"name": "...", "description": "...", "priority": "High"}],
    "stepping_stone_roles": [{"title": "...", "reason": "..."}]
  },
  "recommendations": ["Specific actionable recommendation 1", "Specific actionable recommendation 2"]
}

improvement_plan.certificates lists 2-3 certifications with priority High, Medium or Low.
improvement_plan.stepping_stone_roles lists 2-3 intermediate roles only when the candidate is under-qualified, otherwise [].
Be thorough and provide actionable insights."""


class _LLMAtsPayload(BaseModel):
    ats_score: float | None = None
    breakdown: AtsBreakdown
    matched_keywords: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    improvement_plan: ImprovementPlan = Field(default_factory=ImprovementPlan)
    recommendations: list[str] = Field(default_factory=list)


def composite_score(breakdown: AtsBreakdown) -> float:
    """Weighted composite of the four category scores, 0-100."""
    total = sum(getattr(breakdown, name) * weight for name, weight in WEIGHTS.items())
    return round(max(0.0, min(100.0, total)), 1)


def resume_data_to_text(resume_data: ResumeData | dict[str, Any]) -> str:
    if isinstance(resume_data, dict):
        resume_data = ResumeData.model_validate(resume_data)
    work = [w.model_dump() for w in resume_data.work_experience]
    edu = [e.model_dump() for e in resume_data.education]
    return (
        f"Summary: {resume_data.summary or 'Not provided'}\n"
        f"Skills: {', '.join(resume_data.extracted_skills) or 'Not provided'}\n"
        f"Work Experience: {json.dumps(work)}\n"
        f"Education: {json.dumps(edu)}\n"
        f"Certifications: {', '.join(resume_data.certifications) or 'None'}"
    )


def score_document(document_text: str, job_description: str) -> AtsResult:
    """Score a resume or cover letter. Malformed model output raises LLMParseError."""
    user_prompt = (
        f"Job Description:\n{job_description}\n\n"
        f"Resume Data:\n{document_text}\n\n"
        "Analyze the ATS compatibility and provide a score with recommendations."
    )
    text = call_groq(ATS_SYSTEM_PROMPT, user_prompt, temperature=0.3, json_mode=True)
    payload = decode_json(text, _LLMAtsPayload)
    score = composite_score(payload.breakdown)
    if payload.ats_score is not None and abs(payload.ats_score - score) >= 5:
        logger.info("ATS model score %.1f differs from weighted composite %.1f", payload.ats_score, score)
    return AtsResult(
        ats_score=score,
        breakdown=payload.breakdown,
        matched_keywords=payload.matched_keywords,
        missing_keywords=payload.missing_keywords,
        improvement_plan=payload.improvement_plan,
        recommendations=payload.recommendations,
    )


def keyword_match(candidate_skills: list[str], required_skills: list[str]) -> KeywordMatch:
    """Case-insensitive coverage of required skills; keeps the required list's order and casing."""
    have = {s.strip().lower() for s in candidate_skills if s and s.strip()}
    matched: list[str] = []
    missing: list[str] = []
    seen: set[str] = set()
    for skill in required_skills:
        key = (skill or "").strip().lower()
        if not key or key in seen:
            continue
        seen.add(key)
        (matched if key in have else missing).append(skill.strip())
    required = len(matched) + len(missing)
    score = round(len(matched) / required * 100) if required else 0
    return KeywordMatch(matched=matched, missing=missing, score=score)


def improve_document(
    resume_data: ResumeData,
    job_description: str,
    document_type: str,
    missing_keywords: list[str],
    previous_score: float,
    job_title: str | None = None,
) -> ImproveDocumentResult:
    """Regenerate with the previous run's missing keywords as focus, then re-score."""
    content = document_service.generate_document(
        resume_data,
        job_description,
        document_type,
        focus_keywords=missing_keywords,
        job_title=job_title,
    )
    ats = score_document(content, job_description)
    logger.info("Re-improve %s: previous=%.1f new=%.1f", document_type, previous_score, ats.ats_score)
    return ImproveDocumentResult(
        content=content,
        ats=ats,
        previous_score=previous_score,
        improved=ats.ats_score > previous_score,
    )
