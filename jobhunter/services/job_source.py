"""Adzuna job board adapter: one search call, normalized listings."""
import logging
import re
from typing import Any

import requests

from jobhunter.config import settings
from jobhunter.core.exceptions import JobSourceError, JobSourceNotConfigured
from jobhunter.schemas.job import JobListing, JobSearchFilters, JobSearchResult

logger = logging.getLogger(__name__)

_HTML_TAG = re.compile(r"</?[^>]+(>|$)")


def is_configured() -> bool:
    return bool(settings.adzuna_app_id and settings.adzuna_api_key)


def strip_html(text: str | None) -> str:
    return _HTML_TAG.sub("", text or "")


def format_salary(salary_min: float | None, salary_max: float | None) -> str:
    """Render a salary range in thousands, rounding down."""
    if salary_min and salary_max:
        return f"${int(salary_min // 1000)}k - ${int(salary_max // 1000)}k"
    if salary_min:
        return f"${int(salary_min // 1000)}k+"
    return "Salary not disclosed"


def _as_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


def normalize_listing(raw: dict[str, Any]) -> JobListing:
    """Map one Adzuna result onto a JobListing."""
    location = raw.get("location") or {}
    areas = location.get("area") or []
    raw_id = str(raw.get("id", ""))
    return JobListing(
        id=raw_id,
        external_job_id=f"adzuna-{raw_id}",
        title=strip_html(raw.get("title")),
        company=(raw.get("company") or {}).get("display_name") or "Unknown Company",
        location=location.get("display_name") or "Location not specified",
        salary_min=_as_int(raw.get("salary_min")),
        salary_max=_as_int(raw.get("salary_max")),
        salary_range=format_salary(raw.get("salary_min"), raw.get("salary_max")),
        job_url=raw.get("redirect_url"),
        description=strip_html(raw.get("description")),
        requirements=[],
        skills_required=[],
        posted_at=raw.get("created"),
        source="adzuna",
        remote=any("remote" in str(a).lower() for a in areas),
        job_type="full-time" if raw.get("contract_time") == "full_time" else "part-time",
    )


def build_params(filters: JobSearchFilters, results_per_page: int) -> dict[str, Any]:
    params: dict[str, Any] = {
        "app_id": settings.adzuna_app_id,
        "app_key": settings.adzuna_api_key,
        "results_per_page": results_per_page,
        "content-type": "application/json",
    }
    what = filters.query.strip()
    if filters.remote_only:
        what = f"{what} remote" if what else "remote"
    if what:
        params["what"] = what
    if filters.location:
        params["where"] = filters.location
    if filters.radius:
        params["distance"] = filters.radius
    if filters.salary_min:
        params["salary_min"] = filters.salary_min
    if filters.salary_max:
        params["salary_max"] = filters.salary_max
    if filters.sort_by != "relevance":
        params["sort_by"] = filters.sort_by
    return params


def _masked(params: dict[str, Any]) -> dict[str, Any]:
    shown = dict(params)
    for key in ("app_id", "app_key"):
        if shown.get(key):
            shown[key] = f"MASKED(len:{len(str(shown[key]))})"
    return shown


def fetch_raw(filters: JobSearchFilters, results_per_page: int | None = None) -> dict[str, Any]:
    """Call the search endpoint and return the decoded payload."""
    if not is_configured():
        raise JobSourceNotConfigured(
            "Adzuna credentials not configured. Set ADZUNA_APP_ID and ADZUNA_API_KEY."
        )
    per_page = results_per_page or settings.search_page_size
    country = (filters.country or settings.adzuna_default_country).lower()
    url = f"{settings.adzuna_base_url}/{country}/search/1"
    params = build_params(filters, per_page)
    logger.info("Adzuna request: %s params=%s", url, _masked(params))
    try:
        r = requests.get(url, params=params, timeout=settings.http_timeout_seconds)
    except requests.RequestException as e:
        logger.warning("Adzuna request failed: %s", e)
        raise JobSourceError(f"Adzuna request failed: {e}") from e
    if not r.ok:
        logger.error("Adzuna API error: %s %s", r.status_code, r.text[:500])
        raise JobSourceError(
            f"Adzuna API error ({r.status_code}). This usually means invalid API credentials."
        )
    try:
        data = r.json()
    except ValueError as e:
        logger.error("Failed to parse Adzuna response: %s", r.text[:500])
        raise JobSourceError("Invalid response from Adzuna API") from e
    if not isinstance(data, dict):
        raise JobSourceError("Invalid response from Adzuna API")
    return data


def search_jobs(filters: JobSearchFilters, results_per_page: int | None = None) -> JobSearchResult:
    data = fetch_raw(filters, results_per_page)
    raw_results = data.get("results") or []
    results = [normalize_listing(r) for r in raw_results if isinstance(r, dict)]
    count = data.get("count") or len(results)
    return JobSearchResult(results=results, count=count)
