"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.intent_repository import IIntentRepository
from domain.repositories.profile_repository import IProfileRepository
from domain.repositories.subscription_repository import ISubscriptionRepository
from domain.repositories.vibe_room_repository import IVibeRoomRepository


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions."""

    profiles: IProfileRepository
    intents: IIntentRepository
    vibe_rooms: IVibeRoomRepository
    subscriptions: ISubscriptionRepository

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...
