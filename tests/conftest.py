"""Shared test fixtures: in-memory SQLite store and an HTTP client per test."""
import os

# api.main builds an app from the environment at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from collections.abc import AsyncGenerator, Callable  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from api.main import create_app  # noqa: E402
from core.config import Settings  # noqa: E402
from db.session import get_async_session  # noqa: E402
from models import Base, Bookmark  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def make_bookmarks() -> list[dict]:
    """Rows inserted with explicit ids so tests can address them directly."""
    return [
        {
            "id": 1,
            "title": "Thinkful",
            "url": "https://www.thinkful.com",
            "description": "Think outside the classroom",
            "rating": 5,
        },
        {
            "id": 2,
            "title": "Google",
            "url": "https://www.google.com",
            "description": "Where we find everything else",
            "rating": 4,
        },
        {
            "id": 3,
            "title": "MDN",
            "url": "https://developer.mozilla.org",
            "description": "The only place to find web documentation",
            "rating": 5,
        },
        {
            "id": 4,
            "title": "Python",
            "url": "https://www.python.org",
            "description": None,
            "rating": 3,
        },
    ]


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """
    Fresh in-memory database per test.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """A session for calling the service layer directly."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def seed_bookmarks(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable:
    """Insert rows (defaults to ``make_bookmarks()``) and commit them."""

    async def _seed(rows: list[dict] | None = None) -> list[dict]:
        rows = make_bookmarks() if rows is None else rows
        async with session_factory() as session:
            session.add_all([Bookmark(**row) for row in rows])
            await session.commit()
        return rows

    return _seed


@pytest.fixture
def settings() -> Settings:
    """Non-production settings that never read a local .env file."""
    return Settings(_env_file=None, database_url=TEST_DATABASE_URL, environment="test")


@pytest.fixture
def make_app(session_factory: async_sessionmaker[AsyncSession]) -> Callable[[Settings], FastAPI]:
    """Build an app whose sessions come from the test engine."""

    def _make_app(app_settings: Settings) -> FastAPI:
        app = create_app(app_settings)

        async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
            async with session_factory() as session:
                try:
                    yield session
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise

        app.dependency_overrides[get_async_session] = override_get_async_session
        return app

    return _make_app


def make_client(app: FastAPI) -> AsyncClient:
    """HTTP client that returns 500 responses instead of re-raising app errors."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
async def client(
    make_app: Callable[[Settings], FastAPI], settings: Settings,
) -> AsyncGenerator[AsyncClient]:
    """Client for the app in non-production mode."""
    async with make_client(make_app(settings)) as ac:
        yield ac


@pytest.fixture
async def production_client(
    make_app: Callable[[Settings], FastAPI],
) -> AsyncGenerator[AsyncClient]:
    """Client for the app in production mode."""
    production_settings = Settings(
        _env_file=None, database_url=TEST_DATABASE_URL, environment="production",
    )
    async with make_client(make_app(production_settings)) as ac:
        yield ac
