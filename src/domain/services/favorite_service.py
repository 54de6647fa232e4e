"""Favorite ledger: at most one favorite edge per (user, smell)."""

from typing import Callable, List
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import AlreadyFavoritedError, SmellNotFoundError, UserNotFoundError
from domain.entities.favorite import (
    Favorite,
    FavoriteAction,
    FavoriteWithSmell,
    ToggleResult,
)
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

ADDED_MESSAGE = "Added to favorites"
REMOVED_MESSAGE = "Removed from favorites"


class FavoriteService:
    """Service layer for a user's favorite smells."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_favorites(self, user_id: UUID) -> List[FavoriteWithSmell]:
        """Get the user's favorites, most recently added first."""
        async with self._uow_factory() as uow:
            return await uow.favorites.list_for_user(user_id)  # type: ignore[no-any-return]

    async def add(self, user_id: UUID, smell_id: str) -> FavoriteWithSmell:
        """Add a favorite.

        The existence check is a fast path only; the unique constraint on
        (user_id, smell_id) decides races. A foreign-key failure means the
        smell disappeared after it was looked up.
        """
        async with self._uow_factory() as uow:
            if not await uow.profiles.get(user_id):
                raise UserNotFoundError(str(user_id))

            existing = await uow.favorites.get(user_id, smell_id)
            if existing:
                raise AlreadyFavoritedError(smell_id)

            smell = await uow.smells.get_summary(smell_id)
            if not smell:
                raise SmellNotFoundError(smell_id)

            try:
                created = await uow.favorites.create(
                    Favorite(user_id=user_id, smell_id=smell_id)
                )
                await uow.commit()
            except IntegrityError as exc:
                await uow.rollback()
                # Only constraint violations this ledger owns are translated.
                orig = str(exc.orig).lower() if exc.orig else ""
                if "unique" in orig or "duplicate" in orig:
                    logger.info(
                        "favorite_add_lost_race", user_id=str(user_id), smell_id=smell_id
                    )
                    raise AlreadyFavoritedError(smell_id) from exc
                if "foreign key" in orig:
                    raise SmellNotFoundError(smell_id) from exc
                raise

        logger.info("favorite_added", user_id=str(user_id), smell_id=smell_id)
        return FavoriteWithSmell(favorite=created, smell=smell)

    async def remove(self, user_id: UUID, smell_id: str) -> None:
        """Remove a favorite. Removing an absent edge is not an error."""
        async with self._uow_factory() as uow:
            removed = await uow.favorites.delete(user_id, smell_id)
            await uow.commit()

        logger.info(
            "favorite_removed",
            user_id=str(user_id),
            smell_id=smell_id,
            existed=removed,
        )

    async def toggle(
        self, user_id: UUID, smell_id: str, action: FavoriteAction
    ) -> ToggleResult:
        """Dispatch an add/remove request."""
        if action == FavoriteAction.ADD:
            favorite = await self.add(user_id, smell_id)
            return ToggleResult(message=ADDED_MESSAGE, favorite=favorite)

        await self.remove(user_id, smell_id)
        return ToggleResult(message=REMOVED_MESSAGE)
