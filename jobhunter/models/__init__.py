from jobhunter.models.user_profile import UserProfile
from jobhunter.models.job_preferences import JobPreferences
from jobhunter.models.saved_job import SavedJob
from jobhunter.models.resume import Resume
from jobhunter.models.generated_document import GeneratedDocument
from jobhunter.models.job_alert import JobAlert
from jobhunter.models.career_item import CareerItem
from jobhunter.models.resume_analysis import ResumeAnalysis

__all__ = [
    "UserProfile",
    "JobPreferences",
    "SavedJob",
    "Resume",
    "GeneratedDocument",
    "JobAlert",
    "CareerItem",
    "ResumeAnalysis",
]
