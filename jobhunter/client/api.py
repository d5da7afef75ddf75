"""HTTP client for the JobHunter API, used by the client-side stores."""
import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)


class ApiError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class ApiClient:
    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        session: requests.Session | None = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def request(self, method: str, path: str, **kwargs) -> Any:
        """Send a request; any non-2xx status or an `error` field in the body raises ApiError."""
        kwargs.setdefault("timeout", self.timeout)
        try:
            r = self.session.request(method, f"{self.base_url}{path}", **kwargs)
        except requests.RequestException as e:
            raise ApiError(f"Request failed: {e}") from e
        try:
            payload = r.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and payload.get("error"):
            raise ApiError(str(payload["error"]), status_code=r.status_code, payload=payload)
        if not r.ok:
            raise ApiError(f"HTTP {r.status_code}", status_code=r.status_code, payload=payload)
        return payload

    def get(self, path: str, **kwargs) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, json: Any = None, **kwargs) -> Any:
        return self.request("POST", path, json=json, **kwargs)

    def put(self, path: str, json: Any = None, **kwargs) -> Any:
        return self.request("PUT", path, json=json, **kwargs)

    def patch(self, path: str, json: Any = None, **kwargs) -> Any:
        return self.request("PATCH", path, json=json, **kwargs)

    def delete(self, path: str, **kwargs) -> Any:
        return self.request("DELETE", path, **kwargs)

    # Profile
    def get_profile(self) -> dict:
        return self.get("/profile")

    def get_preferences(self) -> dict | None:
        try:
            return self.get("/preferences")
        except ApiError as e:
            if e.status_code == 404:
                return None
            raise

    # Jobs
    def search_jobs(self, filters: dict) -> dict:
        return self.post("/jobs/search", json=filters)

    def deep_search(self, filters: dict, resume_text: str, preferences: dict | None = None) -> dict:
        return self.post(
            "/jobs/deep-search",
            json={"filters": filters, "resumeText": resume_text, "preferences": preferences or {}},
        )

    def list_saved_jobs(self) -> list[dict]:
        return self.get("/saved-jobs")

    def save_job(self, job: dict) -> dict:
        return self.post("/saved-jobs", json=job)

    def update_saved_job(self, job_id: str, fields: dict) -> dict:
        return self.patch(f"/saved-jobs/{job_id}", json=fields)

    def update_saved_job_status(self, job_id: str, status: str) -> dict:
        return self.patch(f"/saved-jobs/{job_id}/status", json={"status": status})

    def delete_saved_job(self, job_id: str) -> dict:
        return self.delete(f"/saved-jobs/{job_id}")

    # Resumes
    def list_resumes(self) -> list[dict]:
        return self.get("/resumes")

    def set_primary_resume(self, resume_id: str) -> dict:
        return self.post(f"/resumes/{resume_id}/primary")

    def delete_resume(self, resume_id: str) -> dict:
        return self.delete(f"/resumes/{resume_id}")

    # Career
    def list_career_items(self) -> list[dict]:
        return self.get("/career/items")

    def add_career_item(self, item: dict) -> dict:
        return self.post("/career/items", json=item)

    def update_career_item_status(self, item_id: str, status: str) -> dict:
        return self.patch(f"/career/items/{item_id}", json={"status": status})

    def delete_career_item(self, item_id: str) -> dict:
        return self.delete(f"/career/items/{item_id}")

    def list_analyses(self) -> list[dict]:
        return self.get("/career/analyses")

    def add_analysis(self, analysis_data: dict, resume_id: str | None = None) -> dict:
        return self.post("/career/analyses", json={"analysis_data": analysis_data, "resume_id": resume_id})

    def analyze_resume(self, resume_text: str, current_role: str | None = None) -> dict:
        return self.post("/ai/analyze-resume", json={"resumeText": resume_text, "currentRole": current_role})
