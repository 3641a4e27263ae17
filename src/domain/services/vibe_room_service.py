"""Vibe Room Registry: one active room per locality and intent."""

from collections.abc import Callable
from datetime import datetime
from uuid import UUID

import structlog

from core.exceptions import AlreadyInVibeRoomError, VibeRoomConflictError
from domain.entities.intent import IntentType
from domain.entities.profile import Locality
from domain.entities.vibe_room import VibeRoom, VibeRoomWithMembers
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class VibeRoomService:
    """Service layer for vibe room membership.

    A user is in at most one room at a time. Membership is independent of the
    user's declared intent: joining, leaving and switching rooms are always
    explicit calls.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        clock: Callable[[], datetime] = datetime.utcnow,
    ) -> None:
        self._uow_factory = uow_factory
        self._clock = clock

    async def find_or_create_room(
        self, user_id: UUID, intent: IntentType
    ) -> VibeRoomWithMembers | None:
        """Join the active room for the user's locality and intent, creating it if needed.

        Returns None for intent NONE or when the user has no locality. Joining
        the same room again refreshes ``last_seen_at``.

        Raises:
            AlreadyInVibeRoomError: If the user is a member of a different room.
        """
        if not intent.is_active:
            return None

        async with self._uow_factory() as uow:
            locality = await uow.profiles.get_locality(user_id)
            if locality is None:
                return None

            room = await uow.vibe_rooms.get_active(locality, intent)

            membership = await uow.vibe_rooms.get_membership(user_id)
            if membership and (room is None or membership.room_id != room.id):
                raise AlreadyInVibeRoomError(str(membership.room_id))

            if room is None:
                room = await self._create_room(uow, locality, intent)

            await uow.vibe_rooms.upsert_member(room.id, user_id, self._clock())
            await uow.commit()

            logger.info(
                "vibe_room_joined",
                user_id=str(user_id),
                room_id=str(room.id),
                rejoin=membership is not None,
            )
            return await self._materialize(uow, room.id)

    async def join(
        self, user_id: UUID, intent: IntentType
    ) -> VibeRoomWithMembers | None:
        """Join a vibe room for the given intent."""
        return await self.find_or_create_room(user_id, intent)

    async def leave(self, user_id: UUID) -> None:
        """Leave whichever room the user is in. No-op if not a member."""
        async with self._uow_factory() as uow:
            removed = await uow.vibe_rooms.remove_member(user_id)
            await uow.commit()

        if removed:
            logger.info("vibe_room_left", user_id=str(user_id))

    async def get_active_room(self, user_id: UUID) -> VibeRoomWithMembers | None:
        """Get the room the user is currently in, with members."""
        async with self._uow_factory() as uow:
            membership = await uow.vibe_rooms.get_membership(user_id)
            if membership is None:
                return None
            return await self._materialize(uow, membership.room_id)

    async def get_room(self, room_id: UUID) -> VibeRoomWithMembers | None:
        """Get a room with its members."""
        async with self._uow_factory() as uow:
            return await self._materialize(uow, room_id)

    # --- Internal helpers ---

    async def _create_room(
        self, uow: IUnitOfWork, locality: Locality, intent: IntentType
    ) -> VibeRoom:
        """Create the room, or pick up the one a concurrent request just created."""
        try:
            room = await uow.vibe_rooms.create(VibeRoom.open(locality, intent))
        except VibeRoomConflictError:
            logger.info(
                "vibe_room_create_conflict",
                city=locality.city,
                country=locality.country,
                intent=intent.value,
            )
            await uow.rollback()
            existing = await uow.vibe_rooms.get_active(locality, intent)
            if existing is None:
                raise
            return existing

        logger.info(
            "vibe_room_created",
            room_id=str(room.id),
            city=room.city,
            country=room.country,
            intent=intent.value,
        )
        return room

    async def _materialize(
        self, uow: IUnitOfWork, room_id: UUID
    ) -> VibeRoomWithMembers | None:
        """Load a room, its members and their profiles.

        Profiles are fetched in one batch; members without a profile keep
        ``profile=None``.
        """
        room = await uow.vibe_rooms.get(room_id)
        if room is None:
            return None

        members = await uow.vibe_rooms.get_members(room_id)
        if not members:
            return VibeRoomWithMembers(room=room, members=[])

        user_ids = list(dict.fromkeys(m.user_id for m in members))
        profiles = await uow.profiles.get_many(user_ids)
        profiles_by_id = {p.id: p for p in profiles}

        for member in members:
            member.profile = profiles_by_id.get(member.user_id)

        return VibeRoomWithMembers(room=room, members=members)
