"""Favorite edge and smell projection entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4


@dataclass(frozen=True, slots=True)
class SmellSummary:
    """Display projection of a catalog smell (not the full record)."""

    id: str
    title: str
    category: str
    description: str
    difficulty: str
    tags: list[str] = field(default_factory=list)
    created_at: datetime | None = None


@dataclass
class Favorite:
    """Domain entity for a user's favorite smell.

    At most one edge exists per (user_id, smell_id).
    """

    user_id: UUID
    smell_id: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True, slots=True)
class FavoriteWithSmell:
    """Read-only value object: a favorite edge with its smell projection."""

    favorite: Favorite
    smell: SmellSummary


class FavoriteAction(StrEnum):
    ADD = "add"
    REMOVE = "remove"


@dataclass(frozen=True, slots=True)
class ToggleResult:
    """Result of a toggle request; ``favorite`` is set only on add."""

    message: str
    favorite: FavoriteWithSmell | None = None
