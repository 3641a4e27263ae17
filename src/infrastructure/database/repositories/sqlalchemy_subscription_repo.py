"""SQLAlchemy implementation of Subscription repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.entitlements import SubscriptionSnapshot
from infrastructure.database.models import SubscriptionPlanModel, UserSubscriptionModel

ACTIVE_STATUS = "ACTIVE"


class SQLAlchemySubscriptionRepository:
    """SQLAlchemy implementation of ISubscriptionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_active(self, user_id: UUID) -> SubscriptionSnapshot | None:
        """Get the user's ACTIVE subscription with the latest period end."""
        stmt = (
            select(UserSubscriptionModel, SubscriptionPlanModel.slug)
            .join(
                SubscriptionPlanModel,
                SubscriptionPlanModel.id == UserSubscriptionModel.plan_id,
            )
            .where(
                UserSubscriptionModel.user_id == user_id,
                UserSubscriptionModel.status == ACTIVE_STATUS,
            )
            .order_by(UserSubscriptionModel.current_period_end.desc().nulls_last())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        row = result.first()
        if row is None:
            return None

        subscription, slug = row
        return SubscriptionSnapshot(
            user_id=subscription.user_id,
            status=subscription.status,
            plan_slug=slug,
            current_period_end=subscription.current_period_end,
        )
