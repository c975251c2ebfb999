"""Shared fixtures: throwaway SQLite database, API client, auth helpers."""
import logging

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import bookshelf.models  # noqa: F401
from bookshelf.database import Base, get_db
from bookshelf.main import app
from bookshelf.services.auth_service import AuthService

USERNAME = "admin"
PASSWORD = "password"


@pytest.fixture
async def engine(tmp_path):
    """Fresh SQLite database file per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker):
    """Create test client bound to the test database."""

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def user(session_maker):
    async with session_maker() as session:
        created = await AuthService(session).create_user(USERNAME, PASSWORD)
        await session.commit()
    return created


@pytest.fixture
async def token(client, user) -> str:
    response = await client.post(
        "/login",
        json={"username": USERNAME, "password": PASSWORD},
    )
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture
def auth_headers(token) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def log_records(caplog):
    """Collect this test's ``bookshelf`` log records.

    The app logger does not propagate, so the capture handler is attached
    to it directly for the duration of the test.
    """
    logger = logging.getLogger("bookshelf")
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger="bookshelf")
    yield caplog
    logger.removeHandler(caplog.handler)


@pytest.fixture
def make_book():
    """Factory for a valid book payload with optional overrides."""

    def _make(**overrides) -> dict:
        book = {
            "title": "The Pragmatic Programmer",
            "author": "David Thomas",
            "published": 1999,
            "isbn": "978-0-201-61622-4",
            "genre": "Software",
            "description": "From journeyman to master",
            "pages": 352,
            "publisher": "Addison-Wesley",
        }
        book.update(overrides)
        return book

    return _make
