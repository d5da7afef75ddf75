import json

import pytest

import jobhunter.services.company_research_service as crs
import jobhunter.services.resume_analysis_service as ras
import jobhunter.services.resume_parser_service as rps
import jobhunter.services.resume_storage as storage
from jobhunter.core.exceptions import LLMCallError, LLMParseError


def test_clean_resume_text_replaces_control_chars_and_caps():
    text = "Jane\x00Doe•Python\n" + "x" * 20000
    clean = rps.clean_resume_text(text)
    assert clean.startswith("Jane Doe Python\n")
    assert len(clean) == rps.MAX_RESUME_CHARS


def test_parse_resume_text_rejects_short_input():
    with pytest.raises(rps.ResumeTextTooShort):
        rps.parse_resume_text("abc")
    with pytest.raises(rps.ResumeTextTooShort):
        rps.parse_resume_text("")


def test_parse_resume_text_decodes(monkeypatch):
    payload = {
        "summary": "Engineer",
        "extracted_skills": ["Python"],
        "work_experience": [{"company": "ACME", "title": "SWE", "is_current": True}],
        "education": [],
        "certifications": [],
    }
    seen = {}

    def _groq(system, user, **kwargs):
        seen.update(kwargs)
        return json.dumps(payload)

    monkeypatch.setattr(rps, "call_groq", _groq)
    out = rps.parse_resume_text("Jane Doe, Python engineer at ACME")
    assert out.work_experience[0].company == "ACME"
    assert seen["temperature"] == 0


def test_parse_resume_text_bad_json(monkeypatch):
    monkeypatch.setattr(rps, "call_groq", lambda *a, **k: "Here is the resume: name Jane")
    with pytest.raises(LLMParseError):
        rps.parse_resume_text("Jane Doe, Python engineer")


def test_validate_pdf(monkeypatch):
    storage.validate_pdf(b"%PDF-1.7 body")
    with pytest.raises(storage.InvalidResumeFile):
        storage.validate_pdf(b"PK\x03\x04 zip")
    monkeypatch.setattr(storage.settings, "max_resume_upload_mb", 1)
    with pytest.raises(storage.ResumeFileTooLarge):
        storage.validate_pdf(b"%PDF" + b"A" * (1024 * 1024))


def test_save_and_delete_stay_under_root(monkeypatch, tmp_path):
    monkeypatch.setattr(storage.settings, "resume_storage_dir", str(tmp_path))
    rel = storage.save("u1", "cv.PDF", b"%PDF-1.4")
    assert rel.startswith("u1/") and rel.endswith(".pdf")
    assert (tmp_path / rel).read_bytes() == b"%PDF-1.4"
    assert storage.delete(rel) is True
    assert storage.delete(rel) is False
    assert storage.delete("../outside.pdf") is False
    assert storage.delete(None) is False


def test_research_company_prompt(monkeypatch):
    seen = {}

    def _pplx(system, user, temperature=0.2):
        seen["user"] = user
        return "## ACME"

    monkeypatch.setattr(crs, "call_perplexity", _pplx)
    assert crs.research_company("ACME", "fintech") == "## ACME"
    assert '"ACME" (Context: fintech)' in seen["user"]
    assert "(Context" not in crs.build_prompt("ACME")


def test_analyze_resume_combines_both_sources(monkeypatch):
    monkeypatch.setattr(ras, "call_groq", lambda *a, **k: json.dumps({
        "recommended_roles": ["Staff Engineer"],
        "skill_gaps": ["Kubernetes"],
        "strengths": ["Python"],
        "readiness_score": 72,
    }))
    monkeypatch.setattr(ras, "call_perplexity", lambda *a, **k: "Get the CKA.")
    out = ras.analyze_resume("resume", "Backend Engineer")
    assert out["analysis"]["readiness_score"] == 72
    assert out["marketInsights"] == "Get the CKA."


def test_analyze_resume_degrades_per_source(monkeypatch):
    def _pplx_fail(*a, **k):
        raise LLMCallError("pplx down")

    monkeypatch.setattr(ras, "call_groq", lambda *a, **k: "not json")
    monkeypatch.setattr(ras, "call_perplexity", _pplx_fail)
    out = ras.analyze_resume("resume")
    assert out["analysis"] == {"error": "Failed to parse analysis", "raw": "not json"}
    assert out["marketInsights"] == ras.NO_MARKET_INSIGHTS


def test_market_query_default_role():
    assert "software engineer" in ras.market_query(None)
