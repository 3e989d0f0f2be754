"""
Trip endpoints
==============

GET   /api/v1/trips                -- trips visible to the caller
GET   /api/v1/trips/all            -- every trip, filterable (admin)
GET   /api/v1/trips/{trip_id}      -- one trip
POST  /api/v1/trips                -- log a trip (draft or submitted)
PATCH /api/v1/trips/{trip_id}      -- partial update, cost recomputed
PATCH /api/v1/trips/{trip_id}/review -- approve / reject (admin)
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from towtrack.api.dependencies import get_actor, get_db, require_admin, trip_filters
from towtrack.api.middleware import limiter
from towtrack.api.schemas import (
    TripCreateRequest,
    TripResponse,
    TripReviewRequest,
    TripUpdateRequest,
)
from towtrack.config import settings
from towtrack.domain.entities import Actor, TripFilters
from towtrack.services.trips import TripService

router = APIRouter(prefix="/trips", tags=["trips"])


@router.get(
    "",
    response_model=list[TripResponse],
    summary="List trips visible to the caller",
    description=(
        "Drivers see only their own trips whatever `driverId` says; "
        "admins see all.  Accepts the same filters as `/trips/all`."
    ),
)
@limiter.limit(settings.rate_limit)
async def list_trips(
    request: Request,
    filters: TripFilters = Depends(trip_filters),
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await TripService(db).list_trips(actor, filters)


@router.get(
    "/all",
    response_model=list[TripResponse],
    summary="List all trips with filters (admin)",
)
@limiter.limit(settings.rate_limit)
async def list_all_trips(
    request: Request,
    filters: TripFilters = Depends(trip_filters),
    actor: Actor = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await TripService(db).list_trips(actor, filters)


@router.get("/{trip_id}", response_model=TripResponse, summary="Get one trip")
@limiter.limit(settings.rate_limit)
async def get_trip(
    request: Request,
    trip_id: int,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await TripService(db).get_trip(trip_id, actor)


@router.post(
    "",
    status_code=201,
    response_model=TripResponse,
    summary="Log a trip",
    responses={422: {"description": "Invalid field or unknown client."}},
)
@limiter.limit(settings.rate_limit)
async def create_trip(
    request: Request,
    body: TripCreateRequest,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await TripService(db).create_trip(actor, body.model_dump())


@router.patch(
    "/{trip_id}",
    response_model=TripResponse,
    summary="Update a trip",
    description=(
        "Drivers may edit their own draft or submitted trips; approved and "
        "rejected trips are locked for them.  Cost is recomputed whenever "
        "the distance or the client changes."
    ),
)
@limiter.limit(settings.rate_limit)
async def update_trip(
    request: Request,
    trip_id: int,
    body: TripUpdateRequest,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await TripService(db).update_trip(
        trip_id, actor, body.model_dump(exclude_unset=True)
    )


@router.patch(
    "/{trip_id}/review",
    response_model=TripResponse,
    summary="Approve or reject a submitted trip (admin)",
)
@limiter.limit(settings.rate_limit)
async def review_trip(
    request: Request,
    trip_id: int,
    body: TripReviewRequest,
    actor: Actor = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await TripService(db).review_trip(
        trip_id, actor, body.action, body.admin_notes
    )
