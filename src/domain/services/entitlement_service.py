"""Entitlement lookup service."""

from collections.abc import Callable
from uuid import UUID

from domain.entities.entitlements import (
    FeatureEntitlements,
    SubscriptionTier,
    get_entitlements_for_tier,
    resolve_tier,
)
from domain.repositories.unit_of_work import IUnitOfWork


class EntitlementService:
    """Resolves a user's tier and entitlements from their subscription, per call."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_for_user(
        self, user_id: UUID
    ) -> tuple[SubscriptionTier, FeatureEntitlements]:
        async with self._uow_factory() as uow:
            snapshot = await uow.subscriptions.get_active(user_id)

        tier = resolve_tier(snapshot)
        return tier, get_entitlements_for_tier(tier)

    async def nearby_limit(self, user_id: UUID) -> int:
        """Maximum number of nearby results the user may see."""
        _, entitlements = await self.get_for_user(user_id)
        return entitlements.max_nearby_intents_results
