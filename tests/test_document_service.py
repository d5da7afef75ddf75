import pytest

import jobhunter.services.document_service as ds
from jobhunter.schemas.resume import Education, ResumeData, WorkExperience


def _resume():
    return ResumeData(
        summary="Backend engineer",
        extracted_skills=["Python", "Postgres"],
        work_experience=[
            WorkExperience(company="ACME", title="Senior Engineer"),
            WorkExperience(company="OldCo", title="Engineer"),
        ],
        education=[Education(institution="State University", degree="BS")],
        certifications=["AWS SA"],
    )


def test_focus_instruction_lists_keywords_and_target():
    text = ds.focus_instruction(["Kubernetes", " ", "Terraform"])
    assert "Kubernetes, Terraform" in text
    assert "at least 92%" in text
    assert ds.focus_instruction(None) == ""
    assert ds.focus_instruction(["", "  "]) == ""


def test_resume_prompt_includes_full_history_and_focus():
    system, user = ds.build_prompts(_resume(), "Need Python", "resume", ["Kafka"], job_title="Staff Engineer")
    assert "ATS resume optimizer" in system
    assert "Kafka" in system
    assert user.startswith("Job Title: Staff Engineer")
    assert "OldCo" in user
    assert "AWS SA" in user


def test_cover_letter_prompt_uses_most_recent_role_only():
    system, user = ds.build_prompts(_resume(), "Need Python", "cover_letter")
    assert "cover letter writer" in system
    assert "CRITICAL" not in system
    assert "Recent Experience:" in user
    assert "ACME" in user
    assert "OldCo" not in user


def test_build_prompts_rejects_unknown_type():
    with pytest.raises(ValueError):
        ds.build_prompts(_resume(), "jd", "portfolio")


def test_generate_document_strips_fence(monkeypatch):
    seen = {}

    def _groq(system, user, **kwargs):
        seen.update(kwargs)
        return "```markdown\nJane Doe\nBackend Engineer\n```"

    monkeypatch.setattr(ds, "call_groq", _groq)
    out = ds.generate_document(_resume(), "jd", "resume")
    assert out == "Jane Doe\nBackend Engineer"
    assert seen["temperature"] == 0.7
    assert seen["max_tokens"] == 2000
