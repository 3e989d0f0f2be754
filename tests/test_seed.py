"""The opt-in demo seed."""

from decimal import Decimal

import pytest
from sqlalchemy import select

from seed import seed
from towtrack.domain.enums import TripStatus
from towtrack.infrastructure.models import TripModel


@pytest.mark.asyncio
async def test_seed_populates_priced_trips(db_session):
    assert await seed(db_session) is True
    await db_session.commit()

    trips = (await db_session.execute(select(TripModel))).scalars().all()
    by_plate = {t.license_plate: t for t in trips}
    assert len(trips) == 6
    assert by_plate["AB-1234"].cost_calculated == Decimal("18.75")
    assert by_plate["PR-3141"].cost_calculated == Decimal("111.93")
    assert by_plate["MN-0042"].cost_calculated is None
    assert by_plate["AB-1234"].status == TripStatus.APPROVED
    assert by_plate["KL-5521"].status == TripStatus.SUBMITTED


@pytest.mark.asyncio
async def test_seed_is_skipped_when_users_exist(users, db_session):
    assert await seed(db_session) is False
    trips = (await db_session.execute(select(TripModel))).scalars().all()
    assert trips == []
