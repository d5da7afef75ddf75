"""
Client-side state containers. Each store owns a plain `state` dict, talks to
the API through an injected ApiClient and reports failures through an
injected `notify(level, message)` callback.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Callable
from uuid import uuid4

from jobhunter.client.api import ApiClient, ApiError
from jobhunter.client.optimistic import StoreSyncError, optimistic_update
from jobhunter.services.application_pipeline import plan_transition

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]

MAX_SAVED_JOBS = 100
MAX_RECENT_ANALYSES = 5


def log_notify(level: str, message: str) -> None:
    logger.log(logging.ERROR if level == "error" else logging.INFO, message)


def _find(items: list[dict], item_id: str) -> dict | None:
    return next((i for i in items if i.get("id") == item_id), None)


class UserStore:
    def __init__(self, api: ApiClient, notify: Notifier = log_notify):
        self.api = api
        self.notify = notify
        self.state: dict[str, Any] = {
            "profile": None,
            "preferences": None,
            "is_authenticated": False,
            "is_loading": False,
        }

    def fetch_user_data(self) -> None:
        """Load profile and preferences side by side; a failure keeps what was already loaded."""
        self.state["is_loading"] = True
        try:
            with ThreadPoolExecutor(max_workers=2) as executor:
                profile_future = executor.submit(self.api.get_profile)
                prefs_future = executor.submit(self.api.get_preferences)
                profile = profile_future.result()
                prefs = prefs_future.result()
            if profile:
                self.state["profile"] = profile
                self.state["is_authenticated"] = True
            if prefs:
                self.state["preferences"] = prefs
        except ApiError as e:
            logger.error("Error fetching user data: %s", e)
        finally:
            self.state["is_loading"] = False

    def logout(self) -> None:
        self.state.update({"profile": None, "preferences": None, "is_authenticated": False})


class JobsStore:
    def __init__(self, api: ApiClient, notify: Notifier = log_notify, max_saved_jobs: int = MAX_SAVED_JOBS):
        self.api = api
        self.notify = notify
        self.max_saved_jobs = max_saved_jobs
        self.state: dict[str, Any] = {"saved_jobs": [], "search_results": [], "is_searching": False}

    @property
    def saved_jobs(self) -> list[dict]:
        return self.state["saved_jobs"]

    def fetch(self) -> bool:
        try:
            self.state["saved_jobs"] = self.api.list_saved_jobs()
        except ApiError as e:
            self.notify("error", f"Failed to load saved jobs: {e}")
            return False
        return True

    def search(self, filters: dict) -> list[dict]:
        self.state["is_searching"] = True
        try:
            data = self.api.search_jobs(filters)
            self.state["search_results"] = data.get("results") or []
        except ApiError as e:
            self.notify("error", str(e))
            self.state["search_results"] = []
        finally:
            self.state["is_searching"] = False
        return self.state["search_results"]

    def deep_search(self, filters: dict, resume_text: str, preferences: dict | None = None) -> list[dict]:
        self.state["is_searching"] = True
        try:
            data = self.api.deep_search(filters, resume_text, preferences)
            self.state["search_results"] = data.get("results") or []
        except ApiError as e:
            self.notify("error", str(e))
            self.state["search_results"] = []
        finally:
            self.state["is_searching"] = False
        return self.state["search_results"]

    def find_saved(self, external_job_id: str | None) -> dict | None:
        if not external_job_id:
            return None
        return next((j for j in self.saved_jobs if j.get("external_job_id") == external_job_id), None)

    def save(self, job: dict) -> dict | None:
        """Save a listing. At the cap, or when it is already saved, nothing is sent."""
        existing = self.find_saved(job.get("external_job_id"))
        if existing is not None:
            self.notify("info", "Job already saved")
            return existing
        if len(self.saved_jobs) >= self.max_saved_jobs:
            self.notify(
                "error",
                f"You have reached the limit of {self.max_saved_jobs} saved jobs. Remove some before saving more.",
            )
            return None
        try:
            saved = self.api.save_job(job)
        except ApiError as e:
            self.notify("error", f"Failed to save job: {e}")
            return None
        self.saved_jobs.append(saved)
        self.notify("success", "Job saved")
        return saved

    def unsave(self, job_id: str) -> bool:
        def _apply(state):
            state["saved_jobs"] = [j for j in state["saved_jobs"] if j.get("id") != job_id]

        try:
            optimistic_update(self.state, _apply, lambda: self.api.delete_saved_job(job_id))
        except StoreSyncError as e:
            self.notify("error", f"Failed to remove job: {e}")
            return False
        return True

    def move(self, job_id: str, status: str) -> bool:
        """Move a job to another pipeline stage: local first, then remote, re-fetch on success."""
        job = _find(self.saved_jobs, job_id)
        if job is None:
            self.notify("error", "Job not found")
            return False
        updates = plan_transition(job, status, now=datetime.now(timezone.utc))
        if not updates:
            return True
        local = {k: v.isoformat() if isinstance(v, datetime) else v for k, v in updates.items()}

        def _apply(state):
            target = _find(state["saved_jobs"], job_id)
            if target is not None:
                target.update(local)

        try:
            optimistic_update(self.state, _apply, lambda: self.api.update_saved_job_status(job_id, status))
        except StoreSyncError as e:
            self.notify("error", f"Failed to update status: {e}")
            return False
        self.notify("success", f"Moved to {status}")
        self.fetch()
        return True

    def update(self, job_id: str, fields: dict) -> bool:
        def _apply(state):
            target = _find(state["saved_jobs"], job_id)
            if target is not None:
                target.update(fields)

        try:
            optimistic_update(self.state, _apply, lambda: self.api.update_saved_job(job_id, fields))
        except StoreSyncError as e:
            self.notify("error", f"Failed to update job: {e}")
            return False
        return True


class ResumeStore:
    def __init__(self, api: ApiClient, notify: Notifier = log_notify):
        self.api = api
        self.notify = notify
        self.state: dict[str, Any] = {"resumes": [], "primary_resume": None, "is_uploading": False}

    def set_resumes(self, resumes: list[dict]) -> None:
        self.state["resumes"] = resumes
        self.state["primary_resume"] = next((r for r in resumes if r.get("is_primary")), None) or (
            resumes[0] if resumes else None
        )

    def fetch(self) -> bool:
        try:
            self.set_resumes(self.api.list_resumes())
        except ApiError as e:
            self.notify("error", f"Failed to load resumes: {e}")
            return False
        return True

    def add(self, resume: dict) -> None:
        self.state["resumes"].append(resume)
        if resume.get("is_primary") or self.state["primary_resume"] is None:
            self.state["primary_resume"] = resume

    def set_primary(self, resume_id: str) -> bool:
        if _find(self.state["resumes"], resume_id) is None:
            self.notify("error", "Resume not found")
            return False

        def _apply(state):
            for r in state["resumes"]:
                r["is_primary"] = r.get("id") == resume_id
            state["primary_resume"] = _find(state["resumes"], resume_id)

        try:
            optimistic_update(self.state, _apply, lambda: self.api.set_primary_resume(resume_id))
        except StoreSyncError as e:
            self.notify("error", f"Failed to set primary resume: {e}")
            return False
        self.notify("success", "Primary resume updated")
        return True

    def delete(self, resume_id: str) -> bool:
        def _apply(state):
            state["resumes"] = [r for r in state["resumes"] if r.get("id") != resume_id]
            primary = state["primary_resume"]
            if primary is None or primary.get("id") == resume_id:
                state["primary_resume"] = state["resumes"][0] if state["resumes"] else None

        try:
            optimistic_update(self.state, _apply, lambda: self.api.delete_resume(resume_id))
        except StoreSyncError as e:
            self.notify("error", f"Failed to delete resume: {e}")
            return False
        return True


class CareerStore:
    def __init__(self, api: ApiClient, notify: Notifier = log_notify):
        self.api = api
        self.notify = notify
        self.state: dict[str, Any] = {"items": [], "analyses": [], "is_loading": False}

    @staticmethod
    def _key(item: dict) -> tuple[str, str]:
        return item.get("type", ""), (item.get("title") or "").strip().lower()

    def fetch_items(self) -> bool:
        self.state["is_loading"] = True
        try:
            self.state["items"] = self.api.list_career_items()
            return True
        except ApiError as e:
            logger.error("Error fetching career items: %s", e)
            return False
        finally:
            self.state["is_loading"] = False

    def add_item(self, item: dict) -> dict | None:
        """Add a role, certification or skill unless one with the same type and title exists."""
        key = self._key(item)
        existing = next((i for i in self.state["items"] if self._key(i) == key), None)
        if existing is not None:
            self.notify("info", f"{item.get('title')} is already in your plan")
            return existing
        try:
            created = self.api.add_career_item(item)
        except ApiError as e:
            self.notify("error", f"Failed to add item: {e}")
            return None
        self.state["items"].insert(0, created)
        return created

    def update_item_status(self, item_id: str, status: str) -> bool:
        def _apply(state):
            target = _find(state["items"], item_id)
            if target is not None:
                target["status"] = status

        try:
            optimistic_update(self.state, _apply, lambda: self.api.update_career_item_status(item_id, status))
        except StoreSyncError as e:
            self.notify("error", f"Failed to update status: {e}")
            return False
        return True

    def delete_item(self, item_id: str) -> bool:
        def _apply(state):
            state["items"] = [i for i in state["items"] if i.get("id") != item_id]

        try:
            optimistic_update(self.state, _apply, lambda: self.api.delete_career_item(item_id))
        except StoreSyncError as e:
            self.notify("error", f"Failed to delete item: {e}")
            return False
        return True

    def fetch_analyses(self) -> bool:
        try:
            self.state["analyses"] = self.api.list_analyses()[:MAX_RECENT_ANALYSES]
        except ApiError as e:
            logger.error("Error fetching analyses: %s", e)
            return False
        return True

    def add_analysis(self, analysis_data: dict, resume_id: str | None = None) -> dict:
        """Persist an analysis; when the write fails keep it locally under a generated id."""
        try:
            saved = self.api.add_analysis(analysis_data, resume_id=resume_id)
        except ApiError as e:
            logger.error("Error saving analysis: %s", e)
            saved = {
                "id": str(uuid4()),
                "resume_id": resume_id,
                "analysis_data": analysis_data,
                "created_at": datetime.now(timezone.utc).isoformat(),
            }
        self.state["analyses"] = [saved, *self.state["analyses"]][:MAX_RECENT_ANALYSES]
        return saved

    def analyze(self, resume_text: str, current_role: str | None = None, resume_id: str | None = None) -> dict | None:
        try:
            result = self.api.analyze_resume(resume_text, current_role)
        except ApiError as e:
            self.notify("error", f"Analysis failed: {e}")
            return None
        return self.add_analysis(result, resume_id=resume_id)
