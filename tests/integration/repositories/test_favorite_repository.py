"""Integration tests for the SQLAlchemy favorite repository."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import AlreadyFavoritedError, SmellNotFoundError, UserNotFoundError
from domain.entities.favorite import Favorite, SmellSummary
from domain.services.favorite_service import FavoriteService
from infrastructure.auth.provider import TokenUser
from infrastructure.database.repositories.sqlalchemy_favorite_repo import (
    SQLAlchemyFavoriteRepository,
)
from infrastructure.database.repositories.sqlalchemy_smell_repo import (
    SQLAlchemySmellRepository,
)
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


@pytest.mark.asyncio
@pytest.mark.usefixtures("seeded_db")
async def test_unique_constraint_rejects_second_edge(
    session_factory: async_sessionmaker[AsyncSession], test_user: TokenUser
):
    async with SQLAlchemyUnitOfWork(session_factory) as uow:
        await uow.favorites.create(Favorite(user_id=test_user.id, smell_id="item-42"))
        await uow.commit()

    async with SQLAlchemyUnitOfWork(session_factory) as uow:
        with pytest.raises(IntegrityError):
            await uow.favorites.create(Favorite(user_id=test_user.id, smell_id="item-42"))

    async with session_factory() as session:
        rows = await SQLAlchemyFavoriteRepository(session).list_for_user(test_user.id)
    assert len(rows) == 1


# --- FavoriteService.add against the real constraints ---


def _service(session_factory: async_sessionmaker[AsyncSession]) -> FavoriteService:
    return FavoriteService(lambda: SQLAlchemyUnitOfWork(session_factory))


@pytest.mark.asyncio
@pytest.mark.usefixtures("seeded_db")
async def test_add_losing_race_is_already_favorited(
    session_factory: async_sessionmaker[AsyncSession],
    test_user: TokenUser,
    monkeypatch: pytest.MonkeyPatch,
):
    service = _service(session_factory)
    await service.add(test_user.id, "item-42")

    # Both requests passed the existence check before either inserted.
    async def _not_seen(self, user_id, smell_id):
        return None

    monkeypatch.setattr(SQLAlchemyFavoriteRepository, "get", _not_seen)

    with pytest.raises(AlreadyFavoritedError):
        await service.add(test_user.id, "item-42")

    assert len(await service.list_favorites(test_user.id)) == 1


@pytest.mark.asyncio
@pytest.mark.usefixtures("seeded_db")
async def test_add_for_user_without_profile_is_not_found(
    session_factory: async_sessionmaker[AsyncSession],
    count_favorites,
):
    with pytest.raises(UserNotFoundError):
        await _service(session_factory).add(uuid4(), "item-42")

    assert await count_favorites() == 0


@pytest.mark.asyncio
@pytest.mark.usefixtures("seeded_db")
async def test_add_smell_vanished_before_insert_is_not_found(
    session_factory: async_sessionmaker[AsyncSession],
    test_user: TokenUser,
    count_favorites,
    monkeypatch: pytest.MonkeyPatch,
):
    # The lookup still sees the smell, but the row is gone at insert time.
    async def _stale_summary(self, smell_id):
        return SmellSummary(
            id=smell_id,
            title="Deleted Smell",
            category="bloaters",
            description="Removed from the catalog",
            difficulty="beginner",
        )

    monkeypatch.setattr(SQLAlchemySmellRepository, "get_summary", _stale_summary)

    with pytest.raises(SmellNotFoundError):
        await _service(session_factory).add(test_user.id, "deleted-smell")

    assert await count_favorites() == 0


@pytest.mark.asyncio
@pytest.mark.usefixtures("seeded_db")
async def test_list_is_newest_first_with_smell(
    session_factory: async_sessionmaker[AsyncSession], test_user: TokenUser
):
    added = datetime(2026, 2, 1)
    async with session_factory() as session:
        repo = SQLAlchemyFavoriteRepository(session)
        await repo.create(
            Favorite(user_id=test_user.id, smell_id="feature-envy", created_at=added)
        )
        await repo.create(
            Favorite(
                user_id=test_user.id, smell_id="item-42", created_at=added + timedelta(hours=1)
            )
        )
        await session.commit()

        rows = await repo.list_for_user(test_user.id)

    assert [row.smell.id for row in rows] == ["item-42", "feature-envy"]
    assert rows[0].smell.title == "Long Method"
    assert rows[0].smell.tags == ["refactoring", "readability"]


@pytest.mark.asyncio
@pytest.mark.usefixtures("seeded_db")
async def test_delete_reports_whether_edge_existed(
    session_factory: async_sessionmaker[AsyncSession], test_user: TokenUser
):
    async with session_factory() as session:
        repo = SQLAlchemyFavoriteRepository(session)
        await repo.create(Favorite(user_id=test_user.id, smell_id="item-42"))

        assert await repo.delete(test_user.id, "item-42") is True
        assert await repo.delete(test_user.id, "item-42") is False
        assert await repo.get(test_user.id, "item-42") is None
