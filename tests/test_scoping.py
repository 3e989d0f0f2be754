"""Visibility rules and the trip filter query."""

from decimal import Decimal

import pytest

from towtrack.domain.entities import Actor, TripFilters
from towtrack.domain.enums import TripStatus, UserRole
from towtrack.domain.scoping import owner_for, scope_filters
from towtrack.infrastructure.repositories import TripRepository
from tests.conftest import actor_for

DRIVER = Actor(id=2, role=UserRole.DRIVER)
ADMIN = Actor(id=1, role=UserRole.ADMIN)


class TestScopeFilters:
    def test_driver_forced_to_own_trips(self):
        scoped = scope_filters(DRIVER, TripFilters(driver_id=3, status=TripStatus.DRAFT))
        assert scoped.driver_id == 2
        assert scoped.status == TripStatus.DRAFT

    def test_driver_without_filters(self):
        assert scope_filters(DRIVER).driver_id == 2

    def test_admin_filters_untouched(self):
        filters = TripFilters(driver_id=3)
        assert scope_filters(ADMIN, filters) is filters

    def test_admin_without_filters_sees_all(self):
        assert scope_filters(ADMIN) == TripFilters()

    def test_owner_for(self):
        assert owner_for(DRIVER) == 2
        assert owner_for(ADMIN) is None


class TestTripQueries:
    @pytest.mark.asyncio
    async def test_filters_are_and_combined(self, users, make_trip, db_session):
        driver, other, admin = users["driver"], users["other"], users["admin"]
        wanted = await make_trip(driver, status=TripStatus.SUBMITTED)
        await make_trip(driver, status=TripStatus.DRAFT)
        await make_trip(other, status=TripStatus.SUBMITTED)

        trips = await TripRepository(db_session).list_for(
            actor_for(admin),
            TripFilters(driver_id=driver.id, status=TripStatus.SUBMITTED),
        )
        assert [t.id for t in trips] == [wanted.id]

    @pytest.mark.asyncio
    async def test_distance_range(self, users, make_trip, db_session):
        driver, admin = users["driver"], users["admin"]
        await make_trip(driver, distance_km=Decimal("5.00"))
        mid = await make_trip(driver, distance_km=Decimal("25.00"))
        await make_trip(driver, distance_km=Decimal("80.00"))

        trips = await TripRepository(db_session).list_for(
            actor_for(admin),
            TripFilters(min_distance=Decimal("10"), max_distance=Decimal("50")),
        )
        assert [t.id for t in trips] == [mid.id]

    @pytest.mark.asyncio
    async def test_driver_never_sees_other_drivers(self, users, make_trip, db_session):
        driver, other = users["driver"], users["other"]
        await make_trip(other, status=TripStatus.SUBMITTED)
        own = await make_trip(driver)

        trips = await TripRepository(db_session).list_for(
            actor_for(driver), TripFilters(driver_id=other.id)
        )
        assert [t.id for t in trips] == [own.id]

    @pytest.mark.asyncio
    async def test_limit(self, users, make_trip, db_session):
        for _ in range(3):
            await make_trip(users["driver"])
        trips = await TripRepository(db_session).list_for(
            actor_for(users["admin"]), TripFilters(limit=2)
        )
        assert len(trips) == 2

    @pytest.mark.asyncio
    async def test_get_by_id_hides_foreign_trips(self, users, make_trip, db_session):
        trip = await make_trip(users["other"])
        repo = TripRepository(db_session)
        assert await repo.get_by_id(trip.id, owner_id=users["driver"].id) is None
        assert (await repo.get_by_id(trip.id)).id == trip.id
