from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, model_validator

from jobhunter.schemas.common import RemotePreference


class UserProfileUpdate(BaseModel):
    full_name: str | None = Field(default=None, max_length=200)
    email: EmailStr | None = None
    phone: str | None = None
    location: str | None = None
    linkedin_url: str | None = None
    portfolio_url: str | None = None


class UserProfileResponse(BaseModel):
    id: str
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    linkedin_url: str | None = None
    portfolio_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class JobPreferencesUpdate(BaseModel):
    target_roles: list[str] = Field(default_factory=list)
    target_industries: list[str] = Field(default_factory=list)
    location: str | None = None
    remote_preference: RemotePreference = "any"
    salary_min: int | None = Field(default=None, ge=0)
    salary_max: int | None = Field(default=None, ge=0)
    search_radius_miles: int = Field(default=25, ge=0, le=500)
    use_global_filters: bool = True

    @model_validator(mode="after")
    def salary_range_valid(self):
        if self.salary_min is not None and self.salary_max is not None and self.salary_min > self.salary_max:
            raise ValueError("salary_min cannot exceed salary_max")
        return self


class JobPreferencesResponse(JobPreferencesUpdate):
    id: str
    user_id: str

    class Config:
        from_attributes = True
