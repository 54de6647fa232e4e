"""Profile API routes."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_profile_service
from api.v1.schemas.profile import (
    PreferencesDetailResponse,
    PreferencesResponse,
    PreferencesUpdateRequest,
    ProfileDetailResponse,
    ProfileResponse,
    ProfileSyncResponse,
    ProfileUpdateRequest,
    ProfileWithPreferencesDetailResponse,
    ProfileWithPreferencesResponse,
)
from core.rate_limit import limiter
from domain.entities.profile import ProfileEdit
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/users/me", tags=["profile"])


@router.get(
    "/profile",
    response_model=ProfileWithPreferencesDetailResponse,
    summary="Get own profile",
    responses={
        200: {"description": "Profile with preferences"},
        404: {"description": "Profile not found"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileWithPreferencesDetailResponse:
    """Get the authenticated user's profile and preferences."""
    result = await service.get_profile(user.id)
    return ProfileWithPreferencesDetailResponse(
        data=ProfileWithPreferencesResponse(
            **asdict(result.profile),
            preferences=PreferencesResponse.model_validate(result.preferences),
        )
    )


@router.patch(
    "/profile",
    response_model=ProfileDetailResponse,
    summary="Update own profile",
    responses={
        200: {"description": "Profile updated successfully"},
        404: {"description": "Profile not found"},
        422: {"description": "Invalid field value or github_url supplied"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_profile(
    request: Request,
    body: ProfileUpdateRequest,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Update name, bio, location, website, LinkedIn or Twitter URL.

    Send ``""`` to clear an optional field.
    """
    edit = ProfileEdit.from_changes(body.model_dump(exclude_unset=True))
    profile = await service.update_profile(user.id, edit)
    return ProfileDetailResponse(data=ProfileResponse.model_validate(profile))


@router.patch(
    "/preferences",
    response_model=PreferencesDetailResponse,
    summary="Update own preferences",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_preferences(
    request: Request,
    body: PreferencesUpdateRequest,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> PreferencesDetailResponse:
    """Partially update preferences; missing fields keep their values."""
    preferences = await service.update_preferences(
        user.id, body.model_dump(exclude_unset=True, exclude_none=True)
    )
    return PreferencesDetailResponse(data=PreferencesResponse.model_validate(preferences))


@router.post(
    "/profile/sync-github",
    response_model=ProfileSyncResponse,
    summary="Sync profile from GitHub",
    responses={
        200: {"description": "Profile synced, or re-affirmed if GitHub is unavailable"},
        404: {"description": "Profile not found"},
    },
)
@limiter.limit("5/minute")  # type: ignore[untyped-decorator]
async def sync_github_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileSyncResponse:
    """Refresh profile fields from GitHub.

    GitHub failures do not fail the request; stored values are kept and
    ``synced`` is false.
    """
    result = await service.sync_profile(user.id, session_name=user.display_name)
    return ProfileSyncResponse(
        message=result.message,
        synced=result.synced,
        data=ProfileResponse.model_validate(result.profile),
    )
