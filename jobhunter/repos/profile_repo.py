from sqlalchemy.orm import Session

from jobhunter.models.user_profile import UserProfile
from jobhunter.models.job_preferences import JobPreferences
from jobhunter.core.security import generate_id

_PROFILE_FIELDS = ("full_name", "email", "phone", "location", "linkedin_url", "portfolio_url")
_PREFERENCE_FIELDS = (
    "target_roles",
    "target_industries",
    "location",
    "remote_preference",
    "salary_min",
    "salary_max",
    "search_radius_miles",
    "use_global_filters",
)


def get_by_id(db: Session, user_id: str) -> UserProfile | None:
    return db.query(UserProfile).filter(UserProfile.id == user_id).first()


def get_or_create(db: Session, user_id: str, email: str | None = None) -> UserProfile:
    """Profiles are created lazily on first authenticated access."""
    profile = get_by_id(db, user_id)
    if profile:
        return profile
    profile = UserProfile(id=user_id, email=email)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def update(db: Session, user_id: str, data: dict) -> UserProfile | None:
    profile = get_by_id(db, user_id)
    if not profile:
        return None
    for field in _PROFILE_FIELDS:
        if field in data and data[field] is not None:
            setattr(profile, field, data[field])
    db.commit()
    db.refresh(profile)
    return profile


def get_preferences(db: Session, user_id: str) -> JobPreferences | None:
    return db.query(JobPreferences).filter(JobPreferences.user_id == user_id).first()


def upsert_preferences(db: Session, user_id: str, data: dict) -> JobPreferences:
    prefs = get_preferences(db, user_id)
    if not prefs:
        prefs = JobPreferences(id=generate_id(), user_id=user_id)
        db.add(prefs)
    for field in _PREFERENCE_FIELDS:
        if field in data:
            setattr(prefs, field, data[field])
    db.commit()
    db.refresh(prefs)
    return prefs
