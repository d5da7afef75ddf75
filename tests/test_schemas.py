import pytest
from pydantic import ValidationError

from jobhunter.schemas.ai import AtsScoreRequest, CareerAnalysis
from jobhunter.schemas.job import DeepSearchRequest, JobSearchFilters
from jobhunter.schemas.profile import JobPreferencesUpdate


def test_search_filters_defaults_and_bounds():
    f = JobSearchFilters()
    assert f.radius == 25 and f.sort_by == "relevance" and f.remote_only is False
    with pytest.raises(ValidationError):
        JobSearchFilters(radius=501)
    with pytest.raises(ValidationError):
        JobSearchFilters(sort_by="popular")


def test_deep_search_request_accepts_alias_and_name():
    assert DeepSearchRequest(resumeText="cv").resume_text == "cv"
    assert DeepSearchRequest(resume_text="cv").resume_text == "cv"


def test_ats_request_needs_a_document():
    with pytest.raises(ValidationError):
        AtsScoreRequest(jobDescription="jd", rawText="   ")
    assert AtsScoreRequest(jobDescription="jd", rawText="cover letter").raw_text == "cover letter"


def test_preferences_salary_order():
    with pytest.raises(ValidationError):
        JobPreferencesUpdate(salary_min=10, salary_max=5)
    assert JobPreferencesUpdate(salary_min=5, salary_max=10).salary_max == 10


def test_career_analysis_score_bounds():
    with pytest.raises(ValidationError):
        CareerAnalysis(readiness_score=140)
