"""
Pytest fixtures for test database, client, and seeded records.

Tests run against an in-memory SQLite database shared through a StaticPool.
Tables are created and dropped around every test for isolation. Redis is
disabled here; test_cache.py swaps in fakeredis where caching is under test.
"""

import os

# Must be set before eventplanner reads its settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["REDIS_ENABLED"] = "false"

from datetime import date, timedelta
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from eventplanner.main import app
from eventplanner.db.base import Base
from eventplanner.db.session import get_db
from eventplanner.models import Event, Guest, Vendor

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

test_engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables, yield session, then drop tables for isolation."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the DB dependency with the test session."""

    async def override_get_db():
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def event_data():
    """Factory for a valid create-event body; keyword overrides replace fields."""

    def make(**overrides) -> dict:
        payload = {
            "name": "Summer Gala",
            "date": (date.today() + timedelta(days=30)).isoformat(),
            "time": "7:00 PM",
            "location": "Grand Hall",
            "budget": 15000,
        }
        payload.update(overrides)
        return payload

    return make


@pytest_asyncio.fixture
async def test_event(db_session: AsyncSession) -> Event:
    """An upcoming event with no guests or vendors."""
    event = Event(
        name="Summer Gala",
        date=date.today() + timedelta(days=30),
        time="7:00 PM",
        location="Grand Hall",
        budget=15000,
        guest_count=0,
        vendor_count=0,
    )
    db_session.add(event)
    await db_session.commit()
    await db_session.refresh(event)
    return event


@pytest_asyncio.fixture
async def past_event(db_session: AsyncSession) -> Event:
    event = Event(
        name="Spring Picnic",
        date=date.today() - timedelta(days=10),
        time="Noon",
        location="Riverside Park",
        status="completed",
        guest_count=0,
        vendor_count=0,
    )
    db_session.add(event)
    await db_session.commit()
    await db_session.refresh(event)
    return event


@pytest_asyncio.fixture
async def test_guest(db_session: AsyncSession, test_event: Event) -> Guest:
    guest = Guest(event_id=test_event.id, name="Amy Pond", email="amy@example.com")
    db_session.add(guest)
    test_event.guest_count = 1
    await db_session.commit()
    await db_session.refresh(guest)
    return guest


@pytest_asyncio.fixture
async def test_vendor(db_session: AsyncSession, test_event: Event) -> Vendor:
    vendor = Vendor(
        event_id=test_event.id,
        name="Bloom Florals",
        category="florist",
        phone="555-0100",
        quoted_price=1200,
    )
    db_session.add(vendor)
    test_event.vendor_count = 1
    await db_session.commit()
    await db_session.refresh(vendor)
    return vendor
