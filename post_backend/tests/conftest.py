"""
Centralized Test Configuration.
"""

import os

# Keep the application engine off PostgreSQL while tests import the app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import Pool, StaticPool

from post_backend.app.main import app
from post_backend.app.db.session import get_db, Base
from post_backend.app.domain.parcels.parcel_service import ParcelService
from post_backend.app.domain.pricing.price_calculator import PriceCalculatorRegistry
from post_backend.app.models.client import Client
from post_backend.app.models.employee import Employee
from post_backend.app.models.enums import EmployeePosition
from post_backend.app.models.post_office import PostOffice

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@event.listens_for(Pool, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable foreign key constraints for SQLite."""
    if 'sqlite' in str(type(dbapi_conn)).lower():
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


@pytest.fixture(scope="session", autouse=True)
def apply_overrides():
    """Route every request to the in-memory database."""
    async def override_get_db():
        async with TestingSessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides = {}


@pytest.fixture(autouse=True)
async def setup_database():
    """Create tables before each test function and drop after."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client():
    """Async client for testing."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_session():
    async with TestingSessionLocal() as session:
        yield session


@pytest.fixture
def parcel_service(db_session):
    """Parcel service with the standard tariff table and predictable tracking numbers."""
    counter = iter(range(1, 10_000))
    return ParcelService(
        db=db_session,
        price_calculators=PriceCalculatorRegistry(),
        generate_tracking_number=lambda: f"TRK-{next(counter):05d}",
    )


@pytest.fixture
async def post_network(db_session):
    """
    Two post offices, two clients and a clerk at the first office.
    
    Returns a dict of IDs.
    """
    kyiv = PostOffice(name="Kyiv Central", city="Kyiv", postcode="01001", street="Khreshchatyk 22")
    lviv = PostOffice(name="Lviv Main", city="Lviv", postcode="79000", street="Slovatskoho 1")
    alice = Client(first_name="Alice", last_name="Smith", email="alice@test.com", phone="+380991234567")
    bob = Client(first_name="Bob", last_name="Jones", email="bob@test.com", phone="0991234568")
    db_session.add_all([kyiv, lviv, alice, bob])
    await db_session.flush()

    clerk = Employee(first_name="Olena", last_name="Koval", position=EmployeePosition.CLERK, post_office_id=kyiv.id)
    db_session.add(clerk)
    await db_session.commit()

    return {
        "origin_id": kyiv.id,
        "destination_id": lviv.id,
        "sender_id": alice.id,
        "recipient_id": bob.id,
        "clerk_id": clerk.id,
    }
