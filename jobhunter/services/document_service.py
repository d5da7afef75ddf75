import json
import logging

from jobhunter.schemas.resume import ResumeData
from jobhunter.services.llm_client import call_groq, strip_code_fence

logger = logging.getLogger(__name__)

MIN_TARGET_SCORE = 92

RESUME_PROMPT = """You are an expert ATS resume optimizer. Create a tailored resume that matches the job description while showcasing the candidate's relevant experience and skills.

Guidelines:
- Highlight skills and experience that match the job requirements
- Use keywords from the job description naturally
- Quantify achievements where possible
- Keep it concise and ATS-friendly
- Maintain professional tone
- Format in clean, structured sections{focus}

Return ONLY the resume content as plain text, properly formatted with sections."""

COVER_LETTER_PROMPT = """You are an expert cover letter writer. Create a compelling, personalized cover letter that connects the candidate's experience to the job requirements.

Guidelines:
- Open with enthusiasm for the specific role and company
- Highlight 2-3 relevant achievements that match the job
- Show cultural fit and genuine interest
- Keep it concise (3-4 paragraphs)
- Professional yet personable tone
- Include a strong call to action{focus}

Return ONLY the cover letter content as plain text."""


def focus_instruction(focus_keywords: list[str] | None) -> str:
    keywords = [k.strip() for k in (focus_keywords or []) if k and k.strip()]
    if not keywords:
        return ""
    return (
        "\n\nCRITICAL: You MUST specifically incorporate and highlight these missing keywords "
        f"to improve ATS score: {', '.join(keywords)}. Aim for a compatibility score of at least "
        f"{MIN_TARGET_SCORE}% by ensuring these terms are used naturally and strategically in the "
        "context of the candidate's experience."
    )


def build_prompts(
    resume_data: ResumeData,
    job_description: str,
    document_type: str,
    focus_keywords: list[str] | None = None,
    job_title: str | None = None,
) -> tuple[str, str]:
    """Return (system_prompt, user_prompt) for the requested document type."""
    focus = focus_instruction(focus_keywords)
    header = f"Job Title: {job_title}\n" if job_title else ""
    skills = ", ".join(resume_data.extracted_skills) or "Not provided"
    if document_type == "resume":
        work = [w.model_dump() for w in resume_data.work_experience]
        edu = [e.model_dump() for e in resume_data.education]
        user = (
            f"{header}Job Description:\n{job_description}\n\n"
            "Candidate's Information:\n"
            f"Summary: {resume_data.summary or 'Not provided'}\n"
            f"Skills: {skills}\n"
            f"Work Experience: {json.dumps(work)}\n"
            f"Education: {json.dumps(edu)}\n"
            f"Certifications: {', '.join(resume_data.certifications) or 'None'}\n\n"
            "Create an optimized resume tailored to this job."
        )
        return RESUME_PROMPT.format(focus=focus), user
    if document_type == "cover_letter":
        # Cover letters only draw on the most recent role and degree.
        recent = resume_data.work_experience[0].model_dump() if resume_data.work_experience else {}
        edu = resume_data.education[0].model_dump() if resume_data.education else {}
        user = (
            f"{header}Job Description:\n{job_description}\n\n"
            "Candidate's Information:\n"
            f"Summary: {resume_data.summary or 'Not provided'}\n"
            f"Skills: {skills}\n"
            f"Recent Experience: {json.dumps(recent)}\n"
            f"Education: {json.dumps(edu)}\n\n"
            "Create a personalized cover letter for this job."
        )
        return COVER_LETTER_PROMPT.format(focus=focus), user
    raise ValueError(f"Unsupported document type: {document_type}")


def generate_document(
    resume_data: ResumeData,
    job_description: str,
    document_type: str,
    focus_keywords: list[str] | None = None,
    job_title: str | None = None,
) -> str:
    """Generate a tailored resume or cover letter as plain text."""
    system_prompt, user_prompt = build_prompts(
        resume_data, job_description, document_type, focus_keywords, job_title
    )
    text = call_groq(system_prompt, user_prompt, temperature=0.7, max_tokens=2000)
    content = strip_code_fence(text)
    logger.info("Generated %s length=%d focus_keywords=%d", document_type, len(content), len(focus_keywords or []))
    return content
