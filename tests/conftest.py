import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("JWT_EXPIRATION", "3600")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ECHO_SQL", "false")

from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from src.app import app
from src.database import Base, get_db_session
from src.models.user import User
from tests.helpers import create_user, make_auth_headers


# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session on a fresh in-memory database."""
    engine = create_async_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    testing_session_local = async_sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with testing_session_local() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def override_get_db(db_session: AsyncSession):
    """Override the get_db_session dependency."""
    def _override_get_db():
        return db_session
    return _override_get_db


@pytest.fixture
async def async_client(override_get_db):
    """Create an async test client."""
    app.dependency_overrides[get_db_session] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test user."""
    return await create_user(db_session, "user1")


@pytest.fixture
async def test_user_2(db_session: AsyncSession) -> User:
    """Create a second test user."""
    return await create_user(db_session, "user2")


@pytest.fixture
async def test_user_3(db_session: AsyncSession) -> User:
    """Create a third test user."""
    return await create_user(db_session, "user3")


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    """Create authorization headers for test user."""
    return make_auth_headers(test_user)


@pytest.fixture
def auth_headers_2(test_user_2: User) -> dict:
    """Create authorization headers for second test user."""
    return make_auth_headers(test_user_2)


@pytest.fixture
def auth_headers_3(test_user_3: User) -> dict:
    """Create authorization headers for third test user."""
    return make_auth_headers(test_user_3)
