"""
Shared test fixtures.

Uses an in-memory SQLite database (via aiosqlite) so tests run without
Docker / PostgreSQL.  Each test gets a fresh engine with the production
schema, a few seeded users and an HTTP client wired to that database.
"""

import os

# must be set before towtrack.config is imported
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from datetime import datetime, timezone
from decimal import Decimal
from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from towtrack.api.app import create_app
from towtrack.api.dependencies import get_db
from towtrack.domain.entities import Actor
from towtrack.domain.enums import UserRole
from towtrack.infrastructure.database import Base
from towtrack.infrastructure.models import ClientModel, TripModel, UserModel
from towtrack.infrastructure.repositories import (
    ClientRepository,
    TripRepository,
    UserRepository,
)


# ── Test DB (SQLite in-memory) ────────────────────────────────────────

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


def auth(user: UserModel) -> dict[str, str]:
    """Identity headers the gateway would forward for *user*."""
    return {"X-User-Subject": user.external_id}


def actor_for(user: UserModel) -> Actor:
    return Actor(id=user.id, role=UserRole(user.role))


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        TEST_DB_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def users(session_factory) -> dict[str, UserModel]:
    """One admin and two drivers, committed."""
    async with session_factory() as session:
        repo = UserRepository(session)
        admin = await repo.create(
            external_id="sub-admin",
            email="admin@example.com",
            first_name="Ada",
            last_name="Admin",
            role=UserRole.ADMIN,
        )
        driver = await repo.create(
            external_id="sub-driver-1",
            email="dan@example.com",
            first_name="Dan",
            last_name="Driver",
            role=UserRole.DRIVER,
        )
        other = await repo.create(
            external_id="sub-driver-2",
            email="olga@example.com",
            first_name="Olga",
            last_name="Other",
            role=UserRole.DRIVER,
        )
        await session.commit()
    return {"admin": admin, "driver": driver, "other": other}


@pytest_asyncio.fixture
async def make_client(session_factory):
    """Factory: insert a client row and return it."""

    async def _make(name: str = "Acme Motors", rate: str = "2.00", **fields) -> ClientModel:
        async with session_factory() as session:
            client = await ClientRepository(session).create(
                name=name, rate_per_km=Decimal(rate), **fields
            )
            await session.commit()
        return client

    return _make


@pytest_asyncio.fixture
async def make_trip(session_factory):
    """Factory: insert a trip row directly, bypassing the service rules."""

    async def _make(driver: UserModel, **fields) -> TripModel:
        fields.setdefault("license_plate", "AA-0001")
        fields.setdefault("distance_km", Decimal("10.00"))
        fields.setdefault("trip_date", datetime.now(timezone.utc))
        async with session_factory() as session:
            trip = await TripRepository(session).create(driver_id=driver.id, **fields)
            await session.commit()
        return trip

    return _make


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    app = create_app()

    async def _override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
