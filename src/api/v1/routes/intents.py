"""Intent API routes."""

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_entitlement_service, get_intent_service
from api.v1.schemas.intent import IntentResponse, IntentUpdate, NearbyMatchResponse
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.intent import IntentType
from domain.services.entitlement_service import EntitlementService
from domain.services.intent_service import IntentService

me_intent_router = APIRouter(prefix="/me/intent", tags=["intents"])
router = APIRouter(prefix="/intents", tags=["intents"])


@me_intent_router.get(
    "",
    response_model=IntentResponse | None,
    summary="Get my intent",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_intent(
    request: Request,
    user: CurrentUser,
    service: IntentService = Depends(get_intent_service),
) -> IntentResponse | None:
    """Get the caller's current intent, or null if never declared."""
    intent = await service.get_intent(user.id)
    return IntentResponse.from_entity(intent) if intent else None


@me_intent_router.post(
    "",
    response_model=IntentResponse,
    summary="Set my intent",
    responses={
        200: {"description": "Intent saved"},
        422: {"description": "Invalid intent"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def set_my_intent(
    request: Request,
    body: IntentUpdate,
    user: CurrentUser,
    service: IntentService = Depends(get_intent_service),
) -> IntentResponse:
    """Declare the caller's intent. Does not change vibe room membership."""
    intent = await service.set_intent(user.id, body.intent)
    return IntentResponse.from_entity(intent)


@router.get(
    "/nearby",
    response_model=list[NearbyMatchResponse],
    summary="Find nearby users with an intent",
    responses={
        200: {"description": "Matches in the caller's city, newest first"},
        422: {"description": "Invalid intent"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def find_nearby(
    request: Request,
    user: CurrentUser,
    intent: IntentType | None = Query(None),
    service: IntentService = Depends(get_intent_service),
    entitlements: EntitlementService = Depends(get_entitlement_service),
) -> list[NearbyMatchResponse]:
    """Find users in the caller's city and country sharing a fresh intent.

    No intent (or NONE) yields an empty list. The result size is capped by
    the caller's tier.
    """
    if intent is None or intent is IntentType.NONE:
        return []

    limit = await entitlements.nearby_limit(user.id)
    matches = await service.find_nearby(user.id, intent, limit)
    return [NearbyMatchResponse.from_entity(m) for m in matches]
