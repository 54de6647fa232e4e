"""SQLAlchemy read access to the smell catalog."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.favorite import SmellSummary
from infrastructure.database.models import SmellModel


def to_summary(model: SmellModel) -> SmellSummary:
    """Project a smell row down to its display fields."""
    return SmellSummary(
        id=model.id,
        title=model.title,
        category=model.category,
        description=model.description,
        difficulty=model.difficulty,
        tags=list(model.tags or []),
        created_at=model.created_at,
    )


class SQLAlchemySmellRepository:
    """SQLAlchemy implementation of ISmellRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_summary(self, smell_id: str) -> SmellSummary | None:
        """Get the display projection of a smell."""
        stmt = select(SmellModel).where(SmellModel.id == smell_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return to_summary(model) if model else None
