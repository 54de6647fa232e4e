"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any
from uuid import uuid4

# Disable rate limiting and GitHub access in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["GITHUB_TOKEN"] = ""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event, func, select
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities.identity import (
    IdentityFailure,
    IdentityFailureKind,
    IdentitySnapshot,
)
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base, ProfileModel, SmellModel, UserSmellModel


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory, fresh per test)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_USER_ID = uuid4()

SEED_SMELLS = [
    {
        "id": "item-42",
        "title": "Long Method",
        "category": "bloaters",
        "description": "A method that has grown too large to understand at a glance",
        "difficulty": "beginner",
        "tags": ["refactoring", "readability"],
    },
    {
        "id": "feature-envy",
        "title": "Feature Envy",
        "category": "couplers",
        "description": "A method more interested in another class than its own",
        "difficulty": "intermediate",
        "tags": ["coupling"],
    },
]


class StubIdentityProvider:
    """Identity provider returning a preset result; counts calls."""

    def __init__(self, result: IdentitySnapshot | IdentityFailure) -> None:
        self.result = result
        self.calls = 0

    async def fetch_profile(self) -> IdentitySnapshot | IdentityFailure:
        self.calls += 1
        return self.result


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create test database engine with all tables."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)

    # Enforce foreign keys like PostgreSQL does
    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session_factory(
    engine: AsyncEngine,
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
def test_user() -> TokenUser:
    """Create a test user with fixed ID."""
    return TokenUser(
        id=TEST_USER_ID,
        email="test@example.com",
        display_name="Test User",
    )


@pytest.fixture
async def seeded_db(
    session_factory: async_sessionmaker[AsyncSession], test_user: TokenUser
) -> None:
    """Insert the test user's profile and a small smell catalog."""
    created = datetime(2026, 1, 1)
    async with session_factory() as session:
        session.add(
            ProfileModel(
                id=test_user.id,
                email=test_user.email,
                name="Stored Name",
                bio="hello",
                location="Lisbon",
                website="https://stored.example",
                github_url="https://github.com/stored",
                linkedin_url="https://linkedin.com/in/stored",
                twitter_url=None,
                created_at=created,
                updated_at=created,
            )
        )
        for offset, smell in enumerate(SEED_SMELLS):
            session.add(SmellModel(**smell, created_at=created + timedelta(days=offset)))
        await session.commit()


@pytest.fixture
def identity_provider() -> StubIdentityProvider:
    """Identity provider that reports GitHub as unreachable by default."""
    return StubIdentityProvider(IdentityFailure(IdentityFailureKind.PROVIDER_UNREACHABLE))


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


def _build_app(
    session_factory: async_sessionmaker[AsyncSession],
    identity_provider: StubIdentityProvider,
    auth_provider: JWTAuthProvider,
) -> Any:
    """App wired to the test database, stub identity provider and test JWTs."""
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import get_favorite_service, get_profile_service
    from domain.services.favorite_service import FavoriteService
    from domain.services.profile_service import ProfileService
    from infrastructure.database.session import get_async_session
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    app = create_app()

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    async def test_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_async_session] = test_session
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(
        test_uow_factory, identity_provider=identity_provider
    )
    app.dependency_overrides[get_favorite_service] = lambda: FavoriteService(
        test_uow_factory
    )
    return app


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    seeded_db: None,
    identity_provider: StubIdentityProvider,
    auth_provider: JWTAuthProvider,
) -> AsyncGenerator[AsyncClient, None]:
    """Test client without credentials (backed by the seeded test database)."""
    app = _build_app(session_factory, identity_provider, auth_provider)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def authenticated_client(
    session_factory: async_sessionmaker[AsyncSession],
    seeded_db: None,
    identity_provider: StubIdentityProvider,
    auth_provider: JWTAuthProvider,
    auth_headers: dict[str, str],
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create authenticated test client.

    This client:
    - Uses an in-memory SQLite database seeded with the test profile and smells
    - Sends a real HS256 session token for the test user
    - Uses a stub GitHub identity provider (see ``identity_provider``)
    """
    app = _build_app(session_factory, identity_provider, auth_provider)
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test", headers=auth_headers
    ) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def count_favorites(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], Awaitable[int]]:
    """Return a coroutine function counting all favorite edges."""

    async def _count() -> int:
        async with session_factory() as session:
            result = await session.execute(
                select(func.count()).select_from(UserSmellModel)
            )
            return int(result.scalar() or 0)

    return _count
