"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.entitlements import router as entitlements_router
from api.v1.routes.intents import me_intent_router
from api.v1.routes.intents import router as intents_router
from api.v1.routes.profile import router as profile_router
from api.v1.routes.vibe_rooms import router as vibe_rooms_router

router = APIRouter()
router.include_router(profile_router)
router.include_router(me_intent_router)
router.include_router(intents_router)
router.include_router(entitlements_router)
router.include_router(vibe_rooms_router)
