"""Favorites API routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_favorite_service
from api.v1.schemas.favorite import (
    FavoriteListResponse,
    FavoriteResponse,
    FavoriteToggleRequest,
    FavoriteToggleResponse,
    SmellSummaryResponse,
)
from core.rate_limit import limiter
from domain.entities.favorite import FavoriteWithSmell
from domain.services.favorite_service import FavoriteService

router = APIRouter(prefix="/users/me/favorites", tags=["favorites"])


def _to_response(item: FavoriteWithSmell) -> FavoriteResponse:
    return FavoriteResponse(
        id=item.favorite.id,
        smell=SmellSummaryResponse.model_validate(item.smell),
        added_at=item.favorite.created_at,
    )


@router.get(
    "",
    response_model=FavoriteListResponse,
    summary="List favorite smells",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_favorites(
    request: Request,
    user: CurrentUser,
    service: FavoriteService = Depends(get_favorite_service),
) -> FavoriteListResponse:
    """Get the authenticated user's favorites, most recently added first."""
    favorites = await service.list_favorites(user.id)
    return FavoriteListResponse(data=[_to_response(item) for item in favorites])


@router.post(
    "",
    response_model=FavoriteToggleResponse,
    summary="Add or remove a favorite",
    responses={
        200: {"description": "Favorite added or removed"},
        404: {"description": "Smell not found"},
        409: {"description": "Smell is already a favorite"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def toggle_favorite(
    request: Request,
    body: FavoriteToggleRequest,
    user: CurrentUser,
    service: FavoriteService = Depends(get_favorite_service),
) -> FavoriteToggleResponse:
    """Add (``action=add``) or remove (``action=remove``) a favorite.

    Removing a smell that is not a favorite succeeds.
    """
    result = await service.toggle(user.id, body.smell_id, body.action)
    return FavoriteToggleResponse(
        message=result.message,
        favorite=_to_response(result.favorite) if result.favorite else None,
    )
