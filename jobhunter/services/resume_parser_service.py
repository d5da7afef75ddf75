import logging
import re

from jobhunter.schemas.resume import ResumeData
from jobhunter.services.llm_client import call_groq, decode_json

logger = logging.getLogger(__name__)

MAX_RESUME_CHARS = 10000
MIN_RESUME_CHARS = 5

_NON_PRINTABLE = re.compile(r"[^\x20-\x7E\n\r\t]")

PARSE_SYSTEM_PROMPT = """You are a resume parser. Extract information and return it as a structured JSON object.

Important: Return ONLY the JSON object. Do not include markdown formatting or backticks.
Schema:
{
  "summary": "string",
  "extracted_skills": ["string"],
  "work_experience": [{"company": "string", "title": "string", "location": "string", "start_date": "string", "end_date": "string", "is_current": boolean, "description": "string", "achievements": ["string"]}],
  "education": [{"institution": "string", "degree": "string", "field_of_study": "string", "start_date": "string", "end_date": "string", "gpa": "string"}],
  "certifications": ["string"]
}"""


class ResumeTextTooShort(ValueError):
    pass


def clean_resume_text(text: str) -> str:
    """Replace characters that break prompts and cap the length."""
    return _NON_PRINTABLE.sub(" ", text or "")[:MAX_RESUME_CHARS]


def parse_resume_text(text: str) -> ResumeData:
    """Structured resume fields from free text. Raises LLMParseError on bad model output."""
    if not text or len(text) < MIN_RESUME_CHARS:
        raise ResumeTextTooShort("No resume text provided or text too short.")
    clean = clean_resume_text(text)
    raw = call_groq(PARSE_SYSTEM_PROMPT, f"Parse this resume text:\n\n{clean}", temperature=0)
    parsed = decode_json(raw, ResumeData)
    logger.info(
        "Parsed resume text: %d skills, %d experience, %d education",
        len(parsed.extracted_skills), len(parsed.work_experience), len(parsed.education),
    )
    return parsed
