"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from domain.services.favorite_service import FavoriteService
from domain.services.profile_service import ProfileService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.identity.github_client import GitHubIdentityClient


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_identity_client() -> GitHubIdentityClient:
    """Get GitHub identity client instance."""
    return GitHubIdentityClient()


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory(), identity_provider=get_identity_client())


@lru_cache
def get_favorite_service() -> FavoriteService:
    """Get Favorite service instance."""
    return FavoriteService(get_uow_factory())
