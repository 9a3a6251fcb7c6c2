"""
Pytest configuration and shared fixtures for backend tests.
"""

import sys
from pathlib import Path

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

import pytest
from datetime import UTC, datetime, timedelta
from typing import AsyncGenerator, Callable
from uuid import uuid4

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Import after path is set
from api.dependencies import get_token_codec
from core.domain import IdentityClaim
from core.security import IdentityTokenCodec
from infrastructure.database import get_db
from infrastructure.database.models import Article, ArticleStatus, Base, User


# Database URL for testing (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def db_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def codec() -> IdentityTokenCodec:
    """The same codec the application verifies with."""
    return get_token_codec()


@pytest.fixture
def token_headers(codec: IdentityTokenCodec) -> Callable[[str], dict]:
    """Build bearer headers for an arbitrary email."""

    def _headers(email: str) -> dict:
        return {"Authorization": f"Bearer {codec.issue(IdentityClaim(email=email))}"}

    return _headers


async def _create_user(session: AsyncSession, **fields) -> User:
    user = User(id=str(uuid4()), **fields)
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
async def reader(db_session: AsyncSession) -> User:
    """Regular user with no subscription."""
    return await _create_user(
        db_session,
        email="reader@example.com",
        name="Regular Reader",
        photo_url="https://img.example.com/reader.png",
    )


@pytest.fixture
async def admin_user(db_session: AsyncSession) -> User:
    """User with the admin flag."""
    return await _create_user(db_session, email="admin@example.com", name="Site Admin", is_admin=True)


@pytest.fixture
async def subscriber(db_session: AsyncSession) -> User:
    """User with an entitlement that runs for a few more days."""
    return await _create_user(
        db_session,
        email="subscriber@example.com",
        name="Paying Subscriber",
        premium_expiry=datetime.now(UTC) + timedelta(days=5),
    )


@pytest.fixture
async def lapsed_subscriber(db_session: AsyncSession) -> User:
    """User whose entitlement ran out a minute ago and was never cleared."""
    return await _create_user(
        db_session,
        email="lapsed@example.com",
        name="Lapsed Subscriber",
        premium_expiry=datetime.now(UTC) - timedelta(minutes=1),
    )


@pytest.fixture
def reader_headers(reader: User, token_headers) -> dict:
    return token_headers(reader.email)


@pytest.fixture
def admin_headers(admin_user: User, token_headers) -> dict:
    return token_headers(admin_user.email)


@pytest.fixture
def subscriber_headers(subscriber: User, token_headers) -> dict:
    return token_headers(subscriber.email)


@pytest.fixture
def make_article(db_session: AsyncSession):
    """
    Factory for articles stored directly in the database.

    Articles default to approved, free and authored by someone outside the
    user fixtures. Each call is created one minute after the previous one
    so newest-first ordering is deterministic.
    """
    counter = {"n": 0}

    async def _make(**overrides) -> Article:
        counter["n"] += 1
        fields = {
            "id": str(uuid4()),
            "title": f"Article {counter['n']}",
            "body": "Lorem ipsum dolor sit amet.",
            "publisher": "Daily Planet",
            "tags": ["News"],
            "author_email": "staff@example.com",
            "author_name": "Staff Writer",
            "status": ArticleStatus.APPROVED.value,
            "is_premium": False,
            "view_count": 0,
            "created_at": datetime(2026, 1, 1, tzinfo=UTC) + timedelta(minutes=counter["n"]),
        }
        fields.update(overrides)
        article = Article(**fields)
        db_session.add(article)
        await db_session.commit()
        await db_session.refresh(article)
        return article

    return _make


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for testing."""
    # Import app here to avoid circular imports
    from main import app

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    # Reset rate limiter state between tests to prevent cross-test 429s
    app.state.limiter.reset()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
