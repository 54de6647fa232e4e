"""SQLAlchemy implementation of Profile repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import (
    DifficultyLevel,
    ProfileVisibility,
    Theme,
    UserPreferences,
    UserProfile,
)
from infrastructure.database.models import ProfileModel, UserPreferencesModel

# Every column a profile update may write; id, email and image are managed
# by account registration.
_PROFILE_FIELDS = (
    "name",
    "bio",
    "location",
    "website",
    "github_url",
    "linkedin_url",
    "twitter_url",
)

_PREFERENCE_FIELDS = (
    "theme",
    "default_difficulty",
    "email_updates",
    "progress_reminders",
    "new_smells",
    "weekly_digest",
    "profile_visibility",
    "show_progress",
    "allow_analytics",
)


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> UserProfile | None:
        """Get a profile by user ID."""
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def update(self, profile: UserProfile) -> UserProfile:
        """Write the full field set in a single UPDATE.

        Unchanged values produce no UPDATE, so updated_at is left alone.
        """
        stmt = select(ProfileModel).where(ProfileModel.id == profile.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Profile {profile.id} not found")

        for name in _PROFILE_FIELDS:
            setattr(model, name, getattr(profile, name))

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get_preferences(self, user_id: UUID) -> UserPreferences | None:
        """Get the preferences row for a user."""
        stmt = select(UserPreferencesModel).where(UserPreferencesModel.user_id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._preferences_to_entity(model) if model else None

    async def save_preferences(self, preferences: UserPreferences) -> UserPreferences:
        """Insert or update the preferences row."""
        stmt = select(UserPreferencesModel).where(
            UserPreferencesModel.user_id == preferences.user_id
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            model = UserPreferencesModel(
                user_id=preferences.user_id,
                created_at=preferences.created_at,
            )
            self._session.add(model)

        for name in _PREFERENCE_FIELDS:
            value = getattr(preferences, name)
            setattr(model, name, value.value if hasattr(value, "value") else value)

        await self._session.flush()
        await self._session.refresh(model)
        return self._preferences_to_entity(model)

    def _to_entity(self, model: ProfileModel) -> UserProfile:
        """Convert ORM model to domain entity."""
        return UserProfile(
            id=model.id,
            email=model.email,
            name=model.name,
            image=model.image,
            bio=model.bio,
            location=model.location,
            website=model.website,
            github_url=model.github_url,
            linkedin_url=model.linkedin_url,
            twitter_url=model.twitter_url,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _preferences_to_entity(self, model: UserPreferencesModel) -> UserPreferences:
        """Convert ORM model to domain entity."""
        return UserPreferences(
            user_id=model.user_id,
            theme=Theme(model.theme),
            default_difficulty=DifficultyLevel(model.default_difficulty),
            email_updates=model.email_updates,
            progress_reminders=model.progress_reminders,
            new_smells=model.new_smells,
            weekly_digest=model.weekly_digest,
            profile_visibility=ProfileVisibility(model.profile_visibility),
            show_progress=model.show_progress,
            allow_analytics=model.allow_analytics,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
