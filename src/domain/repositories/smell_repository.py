"""Smell catalog repository protocol (read-only)."""

from typing import Protocol

from domain.entities.favorite import SmellSummary


class ISmellRepository(Protocol):
    """Read access to the externally owned smell catalog."""

    async def get_summary(self, smell_id: str) -> SmellSummary | None:
        """Get the display projection of a smell."""
        ...
