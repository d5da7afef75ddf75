"""Career analysis: Groq strategy review and Perplexity market insights, run side by side."""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from jobhunter.core.exceptions import LLMCallError, LLMParseError
from jobhunter.schemas.ai import CareerAnalysis
from jobhunter.services.llm_client import call_groq, call_perplexity, decode_json

logger = logging.getLogger(__name__)

MAX_RESUME_CHARS = 6000
NO_MARKET_INSIGHTS = "No market insights available."

ANALYSIS_SYSTEM_PROMPT = """You are a senior career coach. Analyze the user's resume text and provide strategic advice.
Return a JSON object with this schema:
{
  "recommended_roles": ["Role Title 1", "Role Title 2", "Role Title 3"],
  "skill_gaps": ["Skill 1", "Skill 2"],
  "strengths": ["Strength 1", "Strength 2"],
  "readiness_score": 0-100
}
Do not include markdown formatting."""

MARKET_SYSTEM_PROMPT = "You are a helpful career researcher."


def market_query(current_role: str | None) -> str:
    return (
        f"Best certifications and interview trends for a {current_role or 'software engineer'} "
        "in 2024. Include links to top 3 certifications."
    )


def _strategic_analysis(resume_text: str) -> dict[str, Any]:
    raw = call_groq(
        ANALYSIS_SYSTEM_PROMPT,
        f"Resume: {resume_text[:MAX_RESUME_CHARS]}",
        temperature=0.1,
        json_mode=True,
    )
    try:
        return decode_json(raw, CareerAnalysis).model_dump()
    except LLMParseError as e:
        logger.warning("Career analysis parse failed: %s", e)
        return {"error": "Failed to parse analysis", "raw": e.raw}


def _market_insights(current_role: str | None) -> str:
    try:
        content = call_perplexity(MARKET_SYSTEM_PROMPT, market_query(current_role), temperature=0.2)
    except LLMCallError as e:
        logger.warning("Market insights unavailable: %s", e)
        return NO_MARKET_INSIGHTS
    return content or NO_MARKET_INSIGHTS


def analyze_resume(resume_text: str, current_role: str | None = None) -> dict[str, Any]:
    """Returns {"analysis": {...}, "marketInsights": str}."""
    with ThreadPoolExecutor(max_workers=2) as executor:
        analysis_future = executor.submit(_strategic_analysis, resume_text)
        market_future = executor.submit(_market_insights, current_role)
        analysis = analysis_future.result()
        market = market_future.result()
    return {"analysis": analysis, "marketInsights": market}
