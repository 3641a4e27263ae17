"""Entitlements API routes."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_entitlement_service
from api.v1.schemas.entitlements import EntitlementsBody, EntitlementsResponse
from core.rate_limit import READ_LIMIT, limiter
from domain.services.entitlement_service import EntitlementService

router = APIRouter(prefix="/me/entitlements", tags=["entitlements"])


@router.get(
    "",
    response_model=EntitlementsResponse,
    summary="Get my tier and entitlements",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_entitlements(
    request: Request,
    user: CurrentUser,
    service: EntitlementService = Depends(get_entitlement_service),
) -> EntitlementsResponse:
    """Get the caller's subscription tier and the feature limits it unlocks."""
    tier, entitlements = await service.get_for_user(user.id)
    return EntitlementsResponse(
        tier=tier,
        entitlements=EntitlementsBody(**asdict(entitlements)),
    )
