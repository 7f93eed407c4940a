import random

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from musicbingo.db.database import get_session
from musicbingo.main import app
from musicbingo.models.card import BingoCard
from musicbingo.models.db import Base
from musicbingo.services.marker import grid_from_names


def make_pool(size: int) -> list[str]:
    """Distinct artist names: 'Artist 01', 'Artist 02', ..."""
    return [f"Artist {i:02d}" for i in range(1, size + 1)]


def make_card(card_number: int, names: list[str], marker_position: int | None = None) -> BingoCard:
    return BingoCard(card_number=card_number, grid=grid_from_names(names, marker_position))


@pytest.fixture
def pool_36() -> list[str]:
    """Smallest legal pool: exactly one grid's worth of artists."""
    return make_pool(36)


@pytest.fixture
def pool_40() -> list[str]:
    return make_pool(40)


@pytest.fixture
def card_factory():
    """Build a BingoCard from a number and a list of cell texts."""
    return make_card


@pytest.fixture
def pool_factory():
    """Build a pool of distinct artist names of the given size."""
    return make_pool


@pytest.fixture
def rng() -> random.Random:
    """Seeded randomness for reproducible generation."""
    return random.Random(1234)


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture
async def client(async_engine):
    """Provide an async test client with overridden database session."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
