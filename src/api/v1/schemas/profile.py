"""Pydantic schemas for Profile API."""

from datetime import datetime
from uuid import UUID

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from domain.entities.profile import DifficultyLevel, ProfileVisibility, Theme

_http_url = TypeAdapter(AnyHttpUrl)

_URL_FIELDS = ("website", "linkedin_url", "twitter_url")


class ProfileUpdateRequest(BaseModel):
    """Schema for a user-initiated profile edit.

    ``github_url`` is not accepted here: it is populated by GitHub sync only,
    and unknown fields are rejected.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, min_length=1, max_length=100)
    bio: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=100)
    website: str | None = None
    linkedin_url: str | None = None
    twitter_url: str | None = None

    @field_validator(*_URL_FIELDS)
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        # "" is allowed and means "clear this field"
        if v:
            _http_url.validate_python(v)
        return v


class PreferencesUpdateRequest(BaseModel):
    """Schema for a partial preferences update."""

    model_config = ConfigDict(extra="forbid")

    theme: Theme | None = None
    default_difficulty: DifficultyLevel | None = None
    email_updates: bool | None = None
    progress_reminders: bool | None = None
    new_smells: bool | None = None
    weekly_digest: bool | None = None
    profile_visibility: ProfileVisibility | None = None
    show_progress: bool | None = None
    allow_analytics: bool | None = None


class PreferencesResponse(BaseModel):
    """Schema for user preferences."""

    model_config = ConfigDict(from_attributes=True)

    theme: Theme
    default_difficulty: DifficultyLevel
    email_updates: bool
    progress_reminders: bool
    new_smells: bool
    weekly_digest: bool
    profile_visibility: ProfileVisibility
    show_progress: bool
    allow_analytics: bool


class ProfileResponse(BaseModel):
    """Schema for a user profile."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "email": "jane@example.com",
                "name": "Jane Doe",
                "image": "https://avatars.githubusercontent.com/u/1",
                "bio": "Refactoring enthusiast",
                "location": "Berlin",
                "website": "https://example.com",
                "github_url": "https://github.com/jdoe",
                "linkedin_url": None,
                "twitter_url": "https://twitter.com/jdoe",
                "created_at": "2026-01-28T10:00:00",
                "updated_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    email: str
    name: str | None = None
    image: str | None = None
    bio: str | None = None
    location: str | None = None
    website: str | None = None
    github_url: str | None = None
    linkedin_url: str | None = None
    twitter_url: str | None = None
    created_at: datetime
    updated_at: datetime


class ProfileWithPreferencesResponse(ProfileResponse):
    """Schema for a profile bundled with preferences."""

    preferences: PreferencesResponse


class ProfileDetailResponse(BaseModel):
    """Schema for single profile."""

    data: ProfileResponse


class ProfileWithPreferencesDetailResponse(BaseModel):
    """Schema for profile + preferences."""

    data: ProfileWithPreferencesResponse


class PreferencesDetailResponse(BaseModel):
    """Schema for single preferences object."""

    data: PreferencesResponse


class ProfileSyncResponse(BaseModel):
    """Schema for GitHub sync result."""

    message: str
    synced: bool
    data: ProfileResponse
