"""Intent Directory: current intent per user and nearby matching."""

from collections.abc import Callable
from datetime import datetime, timedelta
from uuid import UUID

import structlog

from core.exceptions import InvalidNearbyLimitError
from domain.entities.intent import IntentType, NearbyMatch, UserIntent, latest_per_user
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

DEFAULT_FRESHNESS_WINDOW = timedelta(hours=4)


class IntentService:
    """Service layer for declaring intents and finding nearby users.

    Declaring an intent never touches vibe room membership; callers that want
    to move rooms must leave and join explicitly.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        freshness_window: timedelta = DEFAULT_FRESHNESS_WINDOW,
        clock: Callable[[], datetime] = datetime.utcnow,
    ) -> None:
        self._uow_factory = uow_factory
        self._freshness_window = freshness_window
        self._clock = clock

    async def set_intent(self, user_id: UUID, intent: IntentType) -> UserIntent:
        """Create or overwrite the user's intent, stamping it with the current time."""
        async with self._uow_factory() as uow:
            saved = await uow.intents.upsert(user_id, intent, self._clock())
            await uow.commit()

        logger.info("intent_set", user_id=str(user_id), intent=intent.value)
        return saved

    async def get_intent(self, user_id: UUID) -> UserIntent | None:
        """Get the user's current intent, if they ever declared one."""
        async with self._uow_factory() as uow:
            return await uow.intents.get(user_id)

    async def find_nearby(
        self, requester_id: UUID, intent: IntentType, limit: int
    ) -> list[NearbyMatch]:
        """Find other users in the requester's locality sharing a fresh intent.

        Returns an empty list when the requester has no city or country, or when
        ``intent`` is NONE. Result order is not part of the contract.

        Raises:
            InvalidNearbyLimitError: If ``limit`` is not positive.
        """
        if limit <= 0:
            raise InvalidNearbyLimitError(limit)
        if not intent.is_active:
            return []

        async with self._uow_factory() as uow:
            locality = await uow.profiles.get_locality(requester_id)
            if locality is None:
                logger.debug("nearby_skipped_no_locality", user_id=str(requester_id))
                return []

            cutoff = self._clock() - self._freshness_window
            matches = await uow.intents.find_matching(
                intent=intent,
                locality=locality,
                since=cutoff,
                exclude_user_id=requester_id,
                limit=limit,
            )

        # One intent row per user is a storage invariant; dedup anyway.
        matches = [m for m in latest_per_user(matches) if m.intent.user_id != requester_id]
        return matches[:limit]
