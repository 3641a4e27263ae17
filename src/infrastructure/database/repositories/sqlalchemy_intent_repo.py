"""SQLAlchemy implementation of Intent repository."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.intent import IntentType, NearbyMatch, UserIntent
from domain.entities.profile import Locality
from infrastructure.database.models import ProfileModel, UserIntentModel
from infrastructure.database.repositories.sqlalchemy_profile_repo import profile_to_entity
from infrastructure.database.upsert import upsert_row


class SQLAlchemyIntentRepository:
    """SQLAlchemy implementation of IIntentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: UUID) -> UserIntent | None:
        """Get a user's current intent."""
        stmt = select(UserIntentModel).where(UserIntentModel.user_id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def upsert(
        self, user_id: UUID, intent: IntentType, updated_at: datetime
    ) -> UserIntent:
        """Create or overwrite the intent row for a user, keyed on user_id."""
        model = await upsert_row(
            self._session,
            UserIntentModel,
            values={"user_id": user_id, "intent": intent.value, "updated_at": updated_at},
            conflict_keys=["user_id"],
            update_keys=["intent", "updated_at"],
        )
        return self._to_entity(model)

    async def find_matching(
        self,
        intent: IntentType,
        locality: Locality,
        since: datetime,
        exclude_user_id: UUID,
        limit: int,
    ) -> list[NearbyMatch]:
        """Find other users with the intent in the locality, updated at or after ``since``.

        Single inner join against profiles; newest intents first.
        """
        stmt = (
            select(UserIntentModel, ProfileModel)
            .join(ProfileModel, ProfileModel.id == UserIntentModel.user_id)
            .where(
                UserIntentModel.intent == intent.value,
                UserIntentModel.updated_at >= since,
                UserIntentModel.user_id != exclude_user_id,
                ProfileModel.location_city == locality.city,
                ProfileModel.location_country == locality.country,
            )
            .order_by(UserIntentModel.updated_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [
            NearbyMatch(profile=profile_to_entity(profile), intent=self._to_entity(row))
            for row, profile in result.all()
        ]

    def _to_entity(self, model: UserIntentModel) -> UserIntent:
        """Convert ORM model to domain entity."""
        return UserIntent(
            user_id=model.user_id,
            intent=IntentType(model.intent),
            updated_at=model.updated_at,
        )
