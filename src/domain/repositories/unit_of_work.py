"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.favorite_repository import IFavoriteRepository
from domain.repositories.profile_repository import IProfileRepository
from domain.repositories.smell_repository import ISmellRepository


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions."""

    profiles: IProfileRepository
    favorites: IFavoriteRepository
    smells: ISmellRepository

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...
