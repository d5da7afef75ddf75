import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from jobhunter.core.exceptions import JobSourceError, LLMNotConfigured
from jobhunter.dependencies import AuthenticatedUser, get_current_user
from jobhunter.schemas.job import DeepSearchRequest, DeepSearchResult, JobSearchFilters, JobSearchResult
from jobhunter.services.deep_match_service import deep_search
from jobhunter.services.job_source import search_jobs

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post("/search", response_model=JobSearchResult)
def search(
    filters: JobSearchFilters,
    user: AuthenticatedUser = Depends(get_current_user),
):
    """Keyword search. Upstream problems come back as 200 with an `error` field."""
    logger.info("Job search user=%s query=%r location=%r", user.id, filters.query, filters.location)
    try:
        return search_jobs(filters)
    except JobSourceError as e:
        return JSONResponse(status_code=200, content={"error": str(e), "results": [], "count": 0})


@router.post("/deep-search", response_model=DeepSearchResult)
def deep_search_jobs(
    body: DeepSearchRequest,
    user: AuthenticatedUser = Depends(get_current_user),
):
    if not body.resume_text:
        return JSONResponse(status_code=200, content={"error": "Resume text required"})
    try:
        result = deep_search(body.filters, body.resume_text, body.preferences)
    except (LLMNotConfigured, JobSourceError) as e:
        return JSONResponse(status_code=200, content={"error": str(e)})
    except Exception as e:
        logger.exception("Deep search failed for user=%s: %s", user.id, e)
        return JSONResponse(status_code=200, content={"error": str(e) or "Internal Server Error"})
    logger.info("Deep search user=%s results=%d queries=%s", user.id, result.count, result.queries_used)
    return result
