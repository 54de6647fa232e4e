"""SQLAlchemy implementation of Favorite repository."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.favorite import Favorite, FavoriteWithSmell
from infrastructure.database.models import SmellModel, UserSmellModel
from infrastructure.database.repositories.sqlalchemy_smell_repo import to_summary


class SQLAlchemyFavoriteRepository:
    """SQLAlchemy implementation of IFavoriteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: UUID, smell_id: str) -> Favorite | None:
        """Get the edge for a (user, smell) pair."""
        stmt = select(UserSmellModel).where(
            UserSmellModel.user_id == user_id,
            UserSmellModel.smell_id == smell_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_for_user(self, user_id: UUID) -> list[FavoriteWithSmell]:
        """Get a user's favorites joined with their smells, newest first."""
        stmt = (
            select(UserSmellModel, SmellModel)
            .join(SmellModel, UserSmellModel.smell_id == SmellModel.id)
            .where(UserSmellModel.user_id == user_id)
            .order_by(UserSmellModel.created_at.desc(), UserSmellModel.id)
        )
        result = await self._session.execute(stmt)
        return [
            FavoriteWithSmell(favorite=self._to_entity(edge), smell=to_summary(smell))
            for edge, smell in result.tuples()
        ]

    async def create(self, favorite: Favorite) -> Favorite:
        """Insert a new edge.

        Duplicates and dangling references surface as IntegrityError on flush.
        """
        model = self._to_model(favorite)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def delete(self, user_id: UUID, smell_id: str) -> bool:
        """Delete the edge for a pair if present."""
        stmt = delete(UserSmellModel).where(
            UserSmellModel.user_id == user_id,
            UserSmellModel.smell_id == smell_id,
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    def _to_entity(self, model: UserSmellModel) -> Favorite:
        """Convert ORM model to domain entity."""
        return Favorite(
            id=model.id,
            user_id=model.user_id,
            smell_id=model.smell_id,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Favorite) -> UserSmellModel:
        """Convert domain entity to ORM model."""
        return UserSmellModel(
            id=entity.id,
            user_id=entity.user_id,
            smell_id=entity.smell_id,
            created_at=entity.created_at,
        )
