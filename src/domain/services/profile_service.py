"""Profile service layer: reads, user edits, and GitHub sync."""

from dataclasses import dataclass
from typing import Any, Callable
from uuid import UUID

import structlog

from core.exceptions import UserNotFoundError
from domain.entities.identity import FellBackToLocal, SyncOutcome
from domain.entities.profile import (
    ProfileEdit,
    ProfileWithPreferences,
    UserPreferences,
    UserProfile,
)
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.profile_reconciler import reconcile
from infrastructure.identity.provider import IIdentityProvider

logger = structlog.get_logger()

SYNCED_MESSAGE = "Profile synced successfully from GitHub"
FELL_BACK_MESSAGE = "GitHub unavailable, profile re-affirmed from stored data"


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Outcome of a GitHub sync: the persisted profile and which branch ran."""

    profile: UserProfile
    outcome: SyncOutcome
    message: str

    @property
    def synced(self) -> bool:
        return not isinstance(self.outcome, FellBackToLocal)


class ProfileService:
    """Service layer for the user's own profile."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        identity_provider: IIdentityProvider,
    ) -> None:
        self._uow_factory = uow_factory
        self._identity_provider = identity_provider

    async def get_profile(self, user_id: UUID) -> ProfileWithPreferences:
        """Get the profile together with preferences (defaults if none stored)."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)
            if not profile:
                raise UserNotFoundError(str(user_id))

            preferences = await uow.profiles.get_preferences(user_id)
            if preferences is None:
                preferences = UserPreferences(user_id=user_id)

            return ProfileWithPreferences(profile=profile, preferences=preferences)

    async def update_profile(self, user_id: UUID, edit: ProfileEdit) -> UserProfile:
        """Apply a user-initiated edit. Never touches github_url."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)
            if not profile:
                raise UserNotFoundError(str(user_id))

            for name, value in edit.normalized().items():
                setattr(profile, name, value)

            updated = await uow.profiles.update(profile)
            await uow.commit()
            return updated

    async def update_preferences(
        self, user_id: UUID, changes: dict[str, Any]
    ) -> UserPreferences:
        """Partially update preferences, creating the row on first write."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)
            if not profile:
                raise UserNotFoundError(str(user_id))

            preferences = await uow.profiles.get_preferences(user_id)
            if preferences is None:
                preferences = UserPreferences(user_id=user_id)
            preferences.apply(changes)

            saved = await uow.profiles.save_preferences(preferences)
            await uow.commit()
            return saved

    async def sync_profile(
        self, user_id: UUID, session_name: str | None = None
    ) -> SyncResult:
        """Reconcile the stored profile against GitHub.

        Provider failures are absorbed: the stored values are re-affirmed and
        the result reports ``FellBackToLocal``.
        """
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)
            if not profile:
                raise UserNotFoundError(str(user_id))

        # No connection is held while waiting on GitHub.
        fetched = await self._identity_provider.fetch_profile()
        update = reconcile(profile, fetched, session_name=session_name)

        async with self._uow_factory() as uow:
            updated = await uow.profiles.update(update.apply_to(profile))
            await uow.commit()

        if isinstance(update.outcome, FellBackToLocal):
            logger.warning(
                "profile_sync_fell_back",
                user_id=str(user_id),
                reason=update.outcome.reason.value,
            )
            message = FELL_BACK_MESSAGE
        else:
            logger.info(
                "profile_synced",
                user_id=str(user_id),
                login=update.outcome.snapshot.login,
            )
            message = SYNCED_MESSAGE

        return SyncResult(profile=updated, outcome=update.outcome, message=message)
