"""
Shared test fixtures for the vaccination API test suite.

Every test gets a fresh in-memory SQLite database (aiosqlite) and an httpx
AsyncClient wired to the app with the DB dependency overridden.
"""

import os
import sys
from typing import AsyncGenerator

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Override environment BEFORE importing application modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["SECRET_KEY"] = "test-secret-key-for-the-suite-only"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from vaccination_api.api.v1.deps import get_db, get_token_service
from vaccination_api.core.security import TokenService, get_password_hash
from vaccination_api.db.base import Base
from vaccination_api.main import app
from vaccination_api.models.user import User, UserRole
from vaccination_api.repositories.user_repo import UserRepository


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Create all tables on a private in-memory engine, drop them after."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Return a raw database session for direct queries in tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def user_repo(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
async def async_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app."""

    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def token_service() -> TokenService:
    """The token service the app itself signs and verifies with."""
    return get_token_service()


@pytest.fixture
def make_user(db_session: AsyncSession):
    """Insert a user straight into the database, bypassing registration."""

    async def _make_user(**overrides) -> User:
        fields = {
            "name": "Test User",
            "email": "user@test.com",
            "password": get_password_hash("password123"),
            "cpf": "00000000000",
            "role": UserRole.EMPLOYEE,
        }
        fields.update(overrides)
        user = User(**fields)
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _make_user
