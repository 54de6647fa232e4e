"""Profile domain entities."""

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID, uuid4


def normalize_optional_text(value: str | None) -> str | None:
    """Treat an empty string from a client as "clear this field"."""
    if value == "":
        return None
    return value


@dataclass
class UserProfile:
    """Domain entity for a user profile.

    ``github_url`` is derived from the identity provider only; it is never
    part of a user-initiated edit.
    """

    id: UUID = field(default_factory=uuid4)
    email: str = ""
    name: str | None = None
    image: str | None = None
    bio: str | None = None
    location: str | None = None
    website: str | None = None
    github_url: str | None = None
    linkedin_url: str | None = None
    twitter_url: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at


@dataclass(frozen=True, slots=True)
class ProfileEdit:
    """A user-initiated partial profile change.

    Fields left at ``None`` are not touched. ``""`` clears a field.
    There is deliberately no ``github_url`` here.
    """

    name: str | None = None
    bio: str | None = None
    location: str | None = None
    website: str | None = None
    linkedin_url: str | None = None
    twitter_url: str | None = None
    provided: frozenset[str] = frozenset()

    @classmethod
    def from_changes(cls, changes: dict[str, str | None]) -> "ProfileEdit":
        """Build an edit from only the fields the client actually sent."""
        return cls(**changes, provided=frozenset(changes))

    def normalized(self) -> dict[str, str | None]:
        """Return the provided fields with empty strings normalized to None."""
        return {
            f.name: normalize_optional_text(getattr(self, f.name))
            for f in fields(self)
            if f.name != "provided" and f.name in self.provided
        }


class Theme(StrEnum):
    LIGHT = "light"
    DARK = "dark"
    AUTO = "auto"


class DifficultyLevel(StrEnum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ProfileVisibility(StrEnum):
    PUBLIC = "public"
    PRIVATE = "private"


@dataclass
class UserPreferences:
    """Domain entity for per-user preferences (one-to-one with profile)."""

    user_id: UUID
    theme: Theme = Theme.AUTO
    default_difficulty: DifficultyLevel = DifficultyLevel.BEGINNER
    email_updates: bool = True
    progress_reminders: bool = False
    new_smells: bool = True
    weekly_digest: bool = True
    profile_visibility: ProfileVisibility = ProfileVisibility.PUBLIC
    show_progress: bool = True
    allow_analytics: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def apply(self, changes: dict[str, Any]) -> None:
        """Apply a partial set of preference changes in place."""
        for name, value in changes.items():
            if name in ("user_id", "created_at", "updated_at"):
                continue
            if not hasattr(self, name):
                raise ValueError(f"Unknown preference: {name}")
            setattr(self, name, value)


@dataclass(frozen=True, slots=True)
class ProfileWithPreferences:
    """Read-only value object: a profile bundled with its preferences."""

    profile: UserProfile
    preferences: UserPreferences
