import json

import pytest

import jobhunter.services.ats_service as ats
from jobhunter.core.exceptions import LLMParseError
from jobhunter.schemas.ai import AtsBreakdown
from jobhunter.schemas.resume import ResumeData


def _payload(**overrides):
    body = {
        "ats_score": 99,
        "breakdown": {"keywords": 80, "skills": 70, "experience": 60, "education": 100},
        "matched_keywords": ["Python", "AWS"],
        "missing_keywords": ["Kubernetes"],
        "improvement_plan": {
            "certificates": [{"name": "CKA", "description": "k8s admin", "priority": "High"}],
            "stepping_stone_roles": [],
        },
        "recommendations": ["Mention Kubernetes"],
    }
    body.update(overrides)
    return json.dumps(body)


def test_composite_score_is_weighted_and_bounded():
    assert ats.composite_score(AtsBreakdown(keywords=80, skills=70, experience=60, education=100)) == 75.0
    assert ats.composite_score(AtsBreakdown(keywords=100, skills=100, experience=100, education=100)) == 100.0
    assert ats.composite_score(AtsBreakdown(keywords=0, skills=0, experience=0, education=0)) == 0.0


def test_score_document_uses_composite_not_model_total(monkeypatch):
    seen = {}

    def _groq(system, user, **kwargs):
        seen.update(kwargs)
        return f"```json\n{_payload()}\n```"

    monkeypatch.setattr(ats, "call_groq", _groq)
    result = ats.score_document("resume text", "We need Python and Kubernetes")
    assert result.ats_score == 75.0
    assert result.missing_keywords == ["Kubernetes"]
    assert result.improvement_plan.certificates[0].priority == "High"
    assert seen["json_mode"] is True


@pytest.mark.parametrize("raw, expected", [
    ("Medium/Low", "Medium"),
    ("medium", "Medium"),
    (" HIGH ", "High"),
    ("low", "Low"),
    ("Critical", "Medium"),
    (None, "Medium"),
])
def test_score_document_accepts_priority_variants(monkeypatch, raw, expected):
    plan = {"certificates": [{"name": "CKA", "priority": raw}], "stepping_stone_roles": []}
    monkeypatch.setattr(ats, "call_groq", lambda *a, **k: _payload(improvement_plan=plan))
    result = ats.score_document("resume", "jd")
    assert result.ats_score == 75.0
    assert result.improvement_plan.certificates[0].priority == expected


def test_score_document_rejects_malformed_output(monkeypatch):
    monkeypatch.setattr(ats, "call_groq", lambda *a, **k: "The resume looks great, 85/100!")
    with pytest.raises(LLMParseError):
        ats.score_document("resume", "jd")

    monkeypatch.setattr(ats, "call_groq", lambda *a, **k: _payload(breakdown={"keywords": 150, "skills": 1, "experience": 1, "education": 1}))
    with pytest.raises(LLMParseError):
        ats.score_document("resume", "jd")

    monkeypatch.setattr(ats, "call_groq", lambda *a, **k: json.dumps({"ats_score": 80}))
    with pytest.raises(LLMParseError):
        ats.score_document("resume", "jd")


def test_keyword_match_is_case_insensitive_and_ordered():
    out = ats.keyword_match(["python", "AWS ", "docker"], ["Python", "Kubernetes", "aws", "PYTHON", "Go"])
    assert out.matched == ["Python", "aws"]
    assert out.missing == ["Kubernetes", "Go"]
    assert out.score == 50


def test_keyword_match_empty_required_scores_zero():
    out = ats.keyword_match(["python"], [])
    assert out.matched == [] and out.missing == [] and out.score == 0
    assert ats.keyword_match([], ["Rust"]).score == 0


def test_resume_data_to_text_accepts_dict():
    text = ats.resume_data_to_text({"summary": "SRE", "extracted_skills": ["Go", "Linux"]})
    assert "Summary: SRE" in text
    assert "Skills: Go, Linux" in text
    assert "Certifications: None" in text


def test_improve_document_regenerates_with_focus_and_rescores(monkeypatch):
    seen = {}

    def _generate(resume_data, jd, document_type, focus_keywords=None, job_title=None):
        seen["focus"] = focus_keywords
        seen["type"] = document_type
        return "improved resume"

    monkeypatch.setattr(ats.document_service, "generate_document", _generate)
    monkeypatch.setattr(ats, "call_groq", lambda *a, **k: _payload())
    out = ats.improve_document(ResumeData(summary="x"), "jd", "resume", ["Kubernetes"], previous_score=60)
    assert seen == {"focus": ["Kubernetes"], "type": "resume"}
    assert out.content == "improved resume"
    assert out.ats.ats_score == 75.0
    assert out.improved is True

    out = ats.improve_document(ResumeData(), "jd", "resume", [], previous_score=80)
    assert out.improved is False


def test_keyword_match_partial_coverage_rounds():
    out = ats.keyword_match(["React", "Node"], ["React", "Node", "AWS"])
    assert out.matched == ["React", "Node"]
    assert out.missing == ["AWS"]
    assert out.score == 67
