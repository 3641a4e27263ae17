"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import datetime, timedelta
from pathlib import Path
from uuid import UUID, uuid4

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base, ProfileModel, UserIntentModel


# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed test user ID for consistency
TEST_USER_ID = uuid4()


class FakeClock:
    """Controllable replacement for datetime.utcnow."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime.utcnow()

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


@pytest.fixture(scope="session")
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
    )
    yield engine
    await engine.dispose()


@pytest.fixture(scope="session")
async def setup_database(engine: AsyncEngine) -> AsyncGenerator[None, None]:
    """Create all tables once per session."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(scope="session")
async def session_factory(
    engine: AsyncEngine, setup_database: None
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Create session factory."""
    factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    yield factory


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def clock() -> FakeClock:
    """A clock shared by the services of one test."""
    return FakeClock()


@pytest.fixture
def city() -> str:
    """A city name unique to the test, so tests never see each other's users."""
    return f"London-{uuid4().hex[:8]}"


@pytest.fixture
def test_user() -> TokenUser:
    """Create a test user with fixed ID."""
    return TokenUser(
        id=TEST_USER_ID,
        email="test@example.com",
        display_name="Test User",
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def auth_token(auth_provider: JWTAuthProvider, test_user: TokenUser) -> str:
    """Create auth token for test user."""
    return str(auth_provider.create_token(test_user))


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def seed_profile(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[..., Awaitable[UUID]]:
    """Insert a profile (and optionally an intent) directly into the database."""

    async def _seed(
        city: str | None,
        country: str | None = "UK",
        display_name: str = "Someone",
        user_id: UUID | None = None,
        intent: str | None = None,
        intent_updated_at: datetime | None = None,
    ) -> UUID:
        user_id = user_id or uuid4()
        async with session_factory() as session:
            session.add(
                ProfileModel(
                    id=user_id,
                    display_name=display_name,
                    gender="",
                    location_city=city,
                    location_country=country,
                )
            )
            if intent is not None:
                session.add(
                    UserIntentModel(
                        user_id=user_id,
                        intent=intent,
                        updated_at=intent_updated_at or datetime.utcnow(),
                    )
                )
            await session.commit()
        return user_id

    return _seed


@pytest.fixture
async def client_for(
    session_factory: async_sessionmaker[AsyncSession],
    clock: FakeClock,
) -> AsyncGenerator[Callable[[UUID], AsyncClient], None]:
    """
    Build authenticated test clients, one per user.

    Every client:
    - Uses the shared in-memory SQLite database
    - Overrides auth to return the given user
    - Wires services to the test session factory and the test clock
    """
    from api.dependencies.auth import get_current_user
    from api.v1.dependencies import (
        get_entitlement_service,
        get_intent_service,
        get_profile_service,
        get_vibe_room_service,
    )
    from domain.services.entitlement_service import EntitlementService
    from domain.services.intent_service import IntentService
    from domain.services.profile_service import ProfileService
    from domain.services.vibe_room_service import VibeRoomService
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    clients: list[AsyncClient] = []

    def _build(user_id: UUID) -> AsyncClient:
        app = create_app()

        async def override_get_user() -> TokenUser:
            return TokenUser(id=user_id)

        app.dependency_overrides[get_current_user] = override_get_user
        app.dependency_overrides[get_profile_service] = lambda: ProfileService(test_uow_factory)
        app.dependency_overrides[get_intent_service] = lambda: IntentService(
            test_uow_factory, clock=clock
        )
        app.dependency_overrides[get_vibe_room_service] = lambda: VibeRoomService(
            test_uow_factory, clock=clock
        )
        app.dependency_overrides[get_entitlement_service] = lambda: EntitlementService(
            test_uow_factory
        )

        c = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(c)
        return c

    yield _build

    for c in clients:
        await c.aclose()
