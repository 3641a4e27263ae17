"""SQLAlchemy implementation of VibeRoom repository."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import VibeRoomConflictError
from domain.entities.intent import IntentType
from domain.entities.profile import Locality
from domain.entities.vibe_room import VibeRoom, VibeRoomMember
from infrastructure.database.models import VibeRoomMemberModel, VibeRoomModel
from infrastructure.database.upsert import upsert_row


class SQLAlchemyVibeRoomRepository:
    """SQLAlchemy implementation of IVibeRoomRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, room_id: UUID) -> VibeRoom | None:
        """Get a room by ID."""
        stmt = select(VibeRoomModel).where(VibeRoomModel.id == room_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_active(
        self, locality: Locality, intent: IntentType
    ) -> VibeRoom | None:
        """Get the active room for a locality and intent."""
        stmt = select(VibeRoomModel).where(
            VibeRoomModel.city == locality.city,
            VibeRoomModel.country == locality.country,
            VibeRoomModel.intent == intent.value,
            VibeRoomModel.is_active.is_(True),
        )
        result = await self._session.execute(stmt)
        model = result.scalars().first()
        return self._to_entity(model) if model else None

    async def create(self, room: VibeRoom) -> VibeRoom:
        """Create a room, mapping a uniqueness violation to VibeRoomConflictError.

        The session must be rolled back by the caller after a conflict.
        """
        model = self._to_model(room)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            raise VibeRoomConflictError(room.city, room.country, room.intent.value) from e
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get_membership(self, user_id: UUID) -> VibeRoomMember | None:
        """Get the user's membership row, whichever room it is in."""
        stmt = select(VibeRoomMemberModel).where(VibeRoomMemberModel.user_id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalars().first()
        return self._member_to_entity(model) if model else None

    async def get_members(self, room_id: UUID) -> list[VibeRoomMember]:
        """Get all memberships of a room in join order."""
        stmt = (
            select(VibeRoomMemberModel)
            .where(VibeRoomMemberModel.room_id == room_id)
            .order_by(VibeRoomMemberModel.joined_at)
        )
        result = await self._session.execute(stmt)
        return [self._member_to_entity(model) for model in result.scalars()]

    async def upsert_member(
        self, room_id: UUID, user_id: UUID, seen_at: datetime
    ) -> VibeRoomMember:
        """Insert a membership or refresh last_seen_at on an existing one.

        Keyed on (room_id, user_id); joined_at is never overwritten.
        """
        model = await upsert_row(
            self._session,
            VibeRoomMemberModel,
            values={
                "room_id": room_id,
                "user_id": user_id,
                "joined_at": seen_at,
                "last_seen_at": seen_at,
            },
            conflict_keys=["room_id", "user_id"],
            update_keys=["last_seen_at"],
        )
        return self._member_to_entity(model)

    async def remove_member(self, user_id: UUID) -> bool:
        """Delete the user's membership, keyed by user ID only."""
        stmt = delete(VibeRoomMemberModel).where(VibeRoomMemberModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    def _to_entity(self, model: VibeRoomModel) -> VibeRoom:
        """Convert ORM model to domain entity."""
        return VibeRoom(
            id=model.id,
            city=model.city,
            country=model.country,
            intent=IntentType(model.intent),
            is_active=model.is_active,
            created_at=model.created_at,
        )

    def _to_model(self, entity: VibeRoom) -> VibeRoomModel:
        """Convert domain entity to ORM model."""
        return VibeRoomModel(
            id=entity.id,
            city=entity.city,
            country=entity.country,
            intent=entity.intent.value,
            is_active=entity.is_active,
            created_at=entity.created_at,
        )

    def _member_to_entity(self, model: VibeRoomMemberModel) -> VibeRoomMember:
        """Convert member ORM model to domain entity."""
        return VibeRoomMember(
            room_id=model.room_id,
            user_id=model.user_id,
            joined_at=model.joined_at,
            last_seen_at=model.last_seen_at,
        )
