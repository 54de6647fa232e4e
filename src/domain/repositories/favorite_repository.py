"""Favorite repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.favorite import Favorite, FavoriteWithSmell


class IFavoriteRepository(Protocol):
    """Repository interface for favorite edges."""

    async def get(self, user_id: UUID, smell_id: str) -> Favorite | None:
        """Get the edge for a (user, smell) pair."""
        ...

    async def list_for_user(self, user_id: UUID) -> list[FavoriteWithSmell]:
        """Get a user's favorites with smell projections, newest first."""
        ...

    async def create(self, favorite: Favorite) -> Favorite:
        """Insert a new edge.

        Raises:
            IntegrityError: If the unique (user, smell) constraint or a
                foreign key fires.
        """
        ...

    async def delete(self, user_id: UUID, smell_id: str) -> bool:
        """Delete the edge for a pair; returns whether a row was removed."""
        ...
