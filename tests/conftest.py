"""Shared test fixtures."""
from __future__ import annotations

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.security import hash_password
from app.db.base import create_tables
from app.db.session import close_db, get_session_factory, init_db
from app.models.user import User
from app.services.seeding import seed_questions

TEST_PASSWORD = "CorrectHorse1"


@pytest.fixture(scope="session")
def password_hash() -> str:
    """bcrypt is slow; hash the shared test password once."""
    return hash_password(TEST_PASSWORD)


@pytest_asyncio.fixture
async def database(tmp_path, monkeypatch) -> AsyncGenerator[None, None]:
    """Fresh SQLite database per test, schema created and questions seeded."""
    monkeypatch.setenv("TRIVIA_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setenv("TRIVIA_LOG_FORMAT", "console")
    get_settings.cache_clear()

    settings = get_settings()
    await init_db(settings.database_url)
    await create_tables()
    async with get_session_factory()() as db:
        await seed_questions(db, settings.question_bank_path)

    yield

    await close_db()
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def client(database) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP test client bound to the app (lifespan is handled by `database`)."""
    from app.main import create_app

    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def db_session(database) -> AsyncGenerator[AsyncSession, None]:
    """Direct database session for setup and assertions."""
    async with get_session_factory()() as session:
        yield session


@pytest.fixture
def make_user(db_session: AsyncSession, password_hash: str):
    """Insert a user straight into the database."""

    async def _make_user(username: str, rank_points: int | None = 0, email: str | None = None) -> User:
        user = User(
            username=username,
            email=email,
            hashed_password=password_hash,
            rank_points=rank_points,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def mock_email_service(monkeypatch):
    """Mock the email service to prevent actual email sending."""
    mock_service = MagicMock()
    mock_service.send_template = AsyncMock(return_value=True)
    mock_service.send_email = AsyncMock(return_value=True)

    monkeypatch.setattr("app.routers.auth.get_email_service", lambda *a, **kw: mock_service)
    return mock_service
