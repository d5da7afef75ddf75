"""
Deep search: LLM-generated queries fanned out to the job board, merged,
deduplicated and re-ranked against the candidate's resume.
"""
import json
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any

import pandas as pd
from pydantic import BaseModel, Field

from jobhunter.config import settings
from jobhunter.core.exceptions import LLMCallError, LLMNotConfigured, LLMParseError
from jobhunter.schemas.job import DeepSearchResult, JobListing, JobSearchFilters
from jobhunter.services import job_source
from jobhunter.services.llm_client import call_groq, decode_json, is_groq_configured

logger = logging.getLogger(__name__)

DEFAULT_SCORE = 0
DEFAULT_REASON = "Analysis unavailable"
RESUME_QUERY_CHARS = 500
RESUME_RANK_CHARS = 1000
DESCRIPTION_SNIPPET_CHARS = 300

QUERY_SYSTEM_PROMPT = """You are a professional recruiter.
Analyze the candidate's resume summary and preferences to generate 3 DISTINCT, targeted search queries for finding relevant jobs.

The queries should cover:
1. A direct role match
2. A technical skill-based match
3. An industry/creative role variation

Return ONLY a JSON array of strings, e.g., ["Senior React Developer", "Frontend Engineer Typescript", "UI Engineer FinTech"]."""

RANK_SYSTEM_PROMPT = """You are a career coach. Rank these jobs for the candidate based on semantic fit.
Return a JSON object where keys are job IDs and values are objects with "score" (0-100) and "reason" (short string).

Example:
{
  "123": { "score": 95, "reason": "Perfect skill match for React/Node" },
  "456": { "score": 60, "reason": "Requires Python which is missing" }
}"""


class JobRanking(BaseModel):
    score: float = Field(default=DEFAULT_SCORE, ge=0, le=100)
    reason: str = DEFAULT_REASON


def fallback_queries(filters: JobSearchFilters) -> list[str]:
    return [filters.query or "Software Engineer", "Developer"]


def generate_search_queries(resume_text: str, preferences: dict[str, Any], filters: JobSearchFilters) -> list[str]:
    """Ask the LLM for three distinct queries; fall back to the user's query."""
    user_prompt = (
        f"Resume Summary/Skills: {resume_text[:RESUME_QUERY_CHARS]}...\n"
        f"Preferences: {json.dumps(preferences or {})}\n"
        f"Base Query: {filters.query or 'Not specified'}\n"
        f"Location: {filters.location or 'Not specified'}\n"
    )
    try:
        text = call_groq(QUERY_SYSTEM_PROMPT, user_prompt, temperature=0.3)
        queries = decode_json(text, list[str])
    except (LLMCallError, LLMParseError) as e:
        logger.warning("Failed to generate deep search queries: %s", e)
        return fallback_queries(filters)

    seen: set[str] = set()
    distinct = []
    for q in queries:
        q = q.strip()
        if q and q.lower() not in seen:
            seen.add(q.lower())
            distinct.append(q)
    if not distinct:
        return fallback_queries(filters)
    return distinct[:3]


def _search_one(query: str, filters: JobSearchFilters) -> list[JobListing]:
    """Run one query. Called in worker thread; failures yield no results."""
    per_query = filters.model_copy(update={"query": query})
    try:
        return job_source.search_jobs(per_query, results_per_page=settings.deep_match_page_size).results
    except Exception as e:
        logger.warning("Search failed for query %r: %s", query, e)
        return []


def fan_out(queries: list[str], filters: JobSearchFilters) -> list[list[JobListing]]:
    """Search every query in parallel; the result keeps the query order."""
    if not queries:
        return []
    batches: list[list[JobListing]] = [[] for _ in queries]
    with ThreadPoolExecutor(max_workers=min(len(queries), 8)) as executor:
        futures = {executor.submit(_search_one, q, filters): i for i, q in enumerate(queries)}
        for future in as_completed(futures):
            batches[futures[future]] = future.result()
    return batches


def dedupe_listings(batches: list[list[JobListing]]) -> list[JobListing]:
    """Flatten batches and keep the first occurrence of each job id."""
    flat = [job for batch in batches for job in batch]
    if not flat:
        return []
    ids = pd.DataFrame({"id": [job.id for job in flat]})
    keep = ids.drop_duplicates(subset=["id"], keep="first").index
    return [flat[i] for i in keep]


def rank_listings(resume_text: str, jobs: list[JobListing]) -> dict[str, JobRanking]:
    """LLM scores keyed by job id. Any failure returns an empty mapping."""
    if not jobs:
        return {}
    jobs_for_ranking = [
        {
            "id": j.id,
            "title": j.title,
            "company": j.company,
            "description_snippet": j.description[:DESCRIPTION_SNIPPET_CHARS],
        }
        for j in jobs
    ]
    user_prompt = (
        f"Candidate Resume: {resume_text[:RESUME_RANK_CHARS]}...\n\n"
        f"Jobs to Rank:\n{json.dumps(jobs_for_ranking)}\n"
    )
    try:
        text = call_groq(RANK_SYSTEM_PROMPT, user_prompt, temperature=0.2)
        raw = decode_json(text, dict[str, Any])
    except (LLMCallError, LLMParseError) as e:
        logger.warning("Failed to rank deep search results: %s", e)
        return {}

    rankings: dict[str, JobRanking] = {}
    for job_id, entry in raw.items():
        try:
            rankings[str(job_id)] = JobRanking.model_validate(entry)
        except ValueError:
            logger.debug("Unusable ranking entry for job %s: %r", job_id, entry)
    return rankings


def apply_rankings(jobs: list[JobListing], rankings: dict[str, JobRanking]) -> list[JobListing]:
    ranked = []
    for job in jobs:
        r = rankings.get(job.id)
        ranked.append(job.model_copy(update={
            "match_score": r.score if r else DEFAULT_SCORE,
            "match_reason": r.reason if r and r.reason else DEFAULT_REASON,
        }))
    # sorted() is stable, so ties keep dedupe order.
    return sorted(ranked, key=lambda j: j.match_score or 0, reverse=True)


def deep_search(filters: JobSearchFilters, resume_text: str, preferences: dict[str, Any] | None = None) -> DeepSearchResult:
    if not job_source.is_configured() or not is_groq_configured():
        raise LLMNotConfigured("Missing API credentials (ADZUNA or GROQ)")

    queries = generate_search_queries(resume_text, preferences or {}, filters)
    logger.info("Generated deep search queries: %s", queries)

    batches = fan_out(queries, filters)
    unique = dedupe_listings(batches)
    top = unique[: settings.deep_match_top_n]
    logger.info(
        "Deep search fetched=%d unique=%d ranking=%d",
        sum(len(b) for b in batches), len(unique), len(top),
    )

    ranked = apply_rankings(top, rank_listings(resume_text, top))
    return DeepSearchResult(results=ranked, count=len(ranked), queries_used=queries)
