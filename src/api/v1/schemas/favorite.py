"""Pydantic schemas for Favorites API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.favorite import FavoriteAction


class SmellSummaryResponse(BaseModel):
    """Display projection of a smell."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    category: str
    description: str
    difficulty: str
    tags: list[str] = []
    created_at: datetime | None = None


class FavoriteResponse(BaseModel):
    """Schema for a favorite entry."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "456e4567-e89b-12d3-a456-426614174000",
                "smell": {
                    "id": "long-method",
                    "title": "Long Method",
                    "category": "bloaters",
                    "description": "A method that has grown too large",
                    "difficulty": "beginner",
                    "tags": ["refactoring"],
                },
                "added_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    smell: SmellSummaryResponse
    added_at: datetime


class FavoriteListResponse(BaseModel):
    """Schema for list of favorites."""

    data: list[FavoriteResponse]


class FavoriteToggleRequest(BaseModel):
    """Schema for adding or removing a favorite."""

    smell_id: str = Field(..., min_length=1, max_length=64)
    action: FavoriteAction


class FavoriteToggleResponse(BaseModel):
    """Schema for toggle confirmation."""

    message: str
    favorite: FavoriteResponse | None = None
