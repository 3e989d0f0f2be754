"""
Seed script -- populates the database with sample data for a demo.

Run after migrations:
    python seed.py

Creates:
  - 1 admin and 2 drivers
  - 3 clients with different per-km rates (one inactive)
  - 6 trips across every status, priced through the normal cost engine

Nothing runs on application start; seeding is always an explicit step.
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from towtrack.domain.entities import Actor
from towtrack.domain.enums import ClientStatus, ReviewAction, TripStatus, UserRole
from towtrack.infrastructure.database import async_session_factory, engine
from towtrack.infrastructure.models import UserModel
from towtrack.infrastructure.repositories import ClientRepository, UserRepository
from towtrack.services.trips import TripService

logger = logging.getLogger("seed")


USERS = [
    {
        "external_id": "seed-admin",
        "email": "admin@towtrack.example",
        "first_name": "Anna",
        "last_name": "Ozola",
        "role": UserRole.ADMIN,
    },
    {
        "external_id": "seed-driver-1",
        "email": "janis@towtrack.example",
        "first_name": "Janis",
        "last_name": "Berzins",
        "vehicle_name": "MAN TGL 12.250",
        "role": UserRole.DRIVER,
    },
    {
        "external_id": "seed-driver-2",
        "email": "liga@towtrack.example",
        "first_name": "Liga",
        "last_name": "Kalnina",
        "vehicle_name": "Iveco Daily 70C",
        "role": UserRole.DRIVER,
    },
]

CLIENTS = [
    {
        "name": "Baltic Insurance",
        "contact_email": "claims@baltic-insurance.example",
        "rate_per_km": Decimal("1.50"),
    },
    {
        "name": "Riga Auto Centre",
        "contact_phone": "+371 2000 0000",
        "rate_per_km": Decimal("2.25"),
    },
    {
        "name": "Old Fleet Ltd",
        "rate_per_km": Decimal("1.10"),
        "status": ClientStatus.INACTIVE,
    },
]

# (driver index, client index or None, plate, km, status, days ago)
TRIPS = [
    (1, 0, "AB-1234", "12.50", TripStatus.APPROVED, 20),
    (1, 1, "KL-5521", "48.00", TripStatus.SUBMITTED, 3),
    (1, None, "MN-0042", "7.20", TripStatus.DRAFT, 0),
    (2, 0, "HG-9090", "33.30", TripStatus.SUBMITTED, 1),
    (2, 1, "ZX-7777", "5.00", TripStatus.APPROVED, 40),
    (2, 2, "PR-3141", "101.75", TripStatus.DRAFT, 9),
]


async def seed(session: AsyncSession) -> bool:
    """Insert the demo data; returns ``False`` if users already exist."""
    existing = await session.execute(select(func.count()).select_from(UserModel))
    if existing.scalar():
        logger.info("Database already seeded. Skipping.")
        return False

    # ── Users ─────────────────────────────────────────────────────
    user_repo = UserRepository(session)
    users = [await user_repo.create(**u) for u in USERS]
    logger.info("Created %d users", len(users))

    # ── Clients ───────────────────────────────────────────────────
    client_repo = ClientRepository(session)
    clients = [await client_repo.create(**c) for c in CLIENTS]
    logger.info("Created %d clients", len(clients))

    # ── Trips ─────────────────────────────────────────────────────
    service = TripService(session)
    admin = Actor(id=users[0].id, role=UserRole.ADMIN)
    now = datetime.now(timezone.utc)
    for driver_idx, client_idx, plate, km, status, days_ago in TRIPS:
        driver = users[driver_idx]
        trip = await service.create_trip(
            Actor(id=driver.id, role=UserRole.DRIVER),
            {
                "client_id": clients[client_idx].id if client_idx is not None else None,
                "manual_client_name": "Walk-in customer" if client_idx is None else None,
                "license_plate": plate,
                "distance_km": Decimal(km),
                "trip_date": now - timedelta(days=days_ago),
                "status": TripStatus.SUBMITTED
                if status is TripStatus.APPROVED
                else status,
            },
        )
        if status is TripStatus.APPROVED:
            await service.review_trip(trip.id, admin, ReviewAction.APPROVE)
    logger.info("Created %d trips", len(TRIPS))
    return True


async def main():
    logging.basicConfig(level=logging.INFO)
    logger.info("Seeding database...")
    async with async_session_factory() as session:
        if await seed(session):
            await session.commit()
            logger.info("Seed complete!")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
