"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import UserPreferences, UserProfile


class IProfileRepository(Protocol):
    """Repository interface for UserProfile and UserPreferences records."""

    async def get(self, id: UUID) -> UserProfile | None:
        """Get a profile by user ID."""
        ...

    async def update(self, profile: UserProfile) -> UserProfile:
        """Persist the full editable field set of an existing profile."""
        ...

    async def get_preferences(self, user_id: UUID) -> UserPreferences | None:
        """Get the preferences row for a user, if one exists."""
        ...

    async def save_preferences(self, preferences: UserPreferences) -> UserPreferences:
        """Create or update the preferences row for a user."""
        ...
