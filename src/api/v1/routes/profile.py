"""Profile API routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_profile_service
from api.v1.schemas.profile import ProfileResponse, ProfileUpsert
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.profile_service import ProfileService

router = APIRouter(tags=["profile"])


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get my profile",
    responses={
        200: {"description": "The caller's profile"},
        404: {"description": "Profile not created yet"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_me(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get the caller's profile."""
    profile = await service.get_profile(user.id)
    return ProfileResponse.from_entity(profile)


@router.post(
    "/profile",
    response_model=ProfileResponse,
    summary="Create or update my profile",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def upsert_profile(
    request: Request,
    body: ProfileUpsert,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Create the caller's profile or overwrite it with the submitted fields."""
    profile = await service.upsert_profile(user.id, **body.model_dump())
    return ProfileResponse.from_entity(profile)
