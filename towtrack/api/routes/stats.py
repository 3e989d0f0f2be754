"""
Dashboard statistics
====================

GET /api/v1/stats/driver -- the caller's own counters
GET /api/v1/stats/admin  -- company-wide month / week overview (admin)
GET /api/v1/analytics    -- all-time totals and six-month trends (admin)

Aggregation happens in :mod:`towtrack.domain.reporting`; these handlers only
load the rows.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from towtrack.api.dependencies import get_actor, get_db, require_admin
from towtrack.api.middleware import limiter
from towtrack.api.schemas import (
    AdminStatsResponse,
    AnalyticsResponse,
    DriverStatsResponse,
)
from towtrack.config import settings
from towtrack.domain import reporting
from towtrack.domain.entities import Actor, TripFilters
from towtrack.infrastructure.repositories import (
    ClientRepository,
    TripRepository,
    UserRepository,
)

router = APIRouter(tags=["stats"])


@router.get("/stats/driver", response_model=DriverStatsResponse)
@limiter.limit(settings.rate_limit)
async def driver_stats(
    request: Request,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    # always the caller's own trips, admins included
    trips = await TripRepository(db).list_for(actor, TripFilters(driver_id=actor.id))
    return reporting.driver_stats(trips)


@router.get("/stats/admin", response_model=AdminStatsResponse)
@limiter.limit(settings.rate_limit)
async def admin_stats(
    request: Request,
    actor: Actor = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    trips = await TripRepository(db).list_all()
    return reporting.admin_stats(trips)


@router.get("/analytics", response_model=AnalyticsResponse)
@limiter.limit(settings.rate_limit)
async def analytics(
    request: Request,
    actor: Actor = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    trips = await TripRepository(db).list_all()
    active_clients = await ClientRepository(db).count_active()
    total_drivers = await UserRepository(db).count_drivers()
    return reporting.analytics(trips, active_clients, total_drivers)
