"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.services.entitlement_service import EntitlementService
from domain.services.intent_service import IntentService
from domain.services.profile_service import ProfileService
from domain.services.vibe_room_service import VibeRoomService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory())


@lru_cache
def get_intent_service() -> IntentService:
    """Get Intent service instance."""
    return IntentService(
        get_uow_factory(),
        freshness_window=settings.intent_freshness_window,
    )


@lru_cache
def get_vibe_room_service() -> VibeRoomService:
    """Get Vibe Room service instance."""
    return VibeRoomService(get_uow_factory())


@lru_cache
def get_entitlement_service() -> EntitlementService:
    """Get Entitlement service instance."""
    return EntitlementService(get_uow_factory())
