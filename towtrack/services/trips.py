"""
Trip lifecycle service
======================

Runs every trip mutation as one read-compute-write sequence inside the
caller's session (one transaction per request):

1. Load the trip, scoped to the actor (other drivers' trips are 404).
2. Check the status machine for the actor.
3. Resolve the client rate and recompute ``cost_calculated`` whenever the
   distance or the client is part of the change.
4. Write and refresh.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from towtrack.config import settings
from towtrack.domain import lifecycle
from towtrack.domain.entities import Actor, TripFilters
from towtrack.domain.enums import ReviewAction, TripStatus
from towtrack.domain.errors import AuthorizationError, NotFoundError, ValidationError
from towtrack.domain.pricing import compute_cost, resolve_rate, to_decimal
from towtrack.domain.scoping import owner_for
from towtrack.infrastructure.models import TripModel
from towtrack.infrastructure.repositories import ClientRepository, TripRepository

logger = logging.getLogger(__name__)

# Fields only an admin may write through a trip update
ADMIN_ONLY_FIELDS = frozenset({"admin_notes"})

# Fields that feed the cost formula
COST_FIELDS = frozenset({"distance_km", "client_id"})


class TripService:
    def __init__(self, session: AsyncSession):
        self.trips = TripRepository(session)
        self.clients = ClientRepository(session)

    async def list_trips(
        self, actor: Actor, filters: Optional[TripFilters] = None
    ) -> list[TripModel]:
        return await self.trips.list_for(actor, filters)

    async def get_trip(
        self, trip_id: int, actor: Actor, for_update: bool = False
    ) -> TripModel:
        trip = await self.trips.get_by_id(
            trip_id, owner_id=owner_for(actor), for_update=for_update
        )
        if trip is None:
            raise NotFoundError("Trip", trip_id)
        return trip

    async def _price(self, distance_km: Any, client_id: Optional[int]) -> Optional[Decimal]:
        client = await self.clients.get_by_id(client_id) if client_id is not None else None
        return compute_cost(distance_km, resolve_rate(client_id, client))

    async def _check_client(self, client_id: Optional[int]) -> None:
        if client_id is not None and await self.clients.get_by_id(client_id) is None:
            raise ValidationError(f"Client {client_id} does not exist", field="client_id")

    async def create_trip(self, actor: Actor, data: dict[str, Any]) -> TripModel:
        """Create a trip owned by *actor*; ``data`` comes from an allow-listed DTO."""
        fields = dict(data)
        fields["status"] = lifecycle.initial_status(fields.get("status"))
        fields["distance_km"] = to_decimal(fields["distance_km"], "distance_km")
        if not fields.get("trip_date"):
            fields["trip_date"] = datetime.now(timezone.utc)

        await self._check_client(fields.get("client_id"))
        fields["cost_calculated"] = await self._price(
            fields["distance_km"], fields.get("client_id")
        )

        trip = await self.trips.create(driver_id=actor.id, **fields)
        logger.info(
            "Trip %s created by user %s (status=%s, cost=%s)",
            trip.id,
            actor.id,
            trip.status.value,
            trip.cost_calculated,
        )
        return trip

    async def update_trip(
        self, trip_id: int, actor: Actor, changes: dict[str, Any]
    ) -> TripModel:
        """Apply a partial update; cost is recomputed when distance or client change."""
        trip = await self.get_trip(trip_id, actor, for_update=True)
        lifecycle.ensure_editable(trip.status, actor)

        if actor.is_driver and ADMIN_ONLY_FIELDS & changes.keys():
            raise AuthorizationError("Drivers cannot set admin notes")

        fields = dict(changes)
        if "status" in fields:
            fields["status"] = lifecycle.next_status(trip.status, fields["status"], actor)
            rejecting = fields["status"] == TripStatus.REJECTED
            if rejecting and trip.status != TripStatus.REJECTED:
                lifecycle.ensure_rejection_reason(
                    fields.get("admin_notes", trip.admin_notes),
                    settings.require_rejection_reason,
                )
        if "distance_km" in fields:
            fields["distance_km"] = to_decimal(fields["distance_km"], "distance_km")

        if COST_FIELDS & fields.keys():
            client_id = fields.get("client_id", trip.client_id)
            await self._check_client(fields.get("client_id"))
            fields["cost_calculated"] = await self._price(
                fields.get("distance_km", trip.distance_km), client_id
            )

        trip = await self.trips.update(trip, **fields)
        logger.info("Trip %s updated by user %s: %s", trip.id, actor.id, sorted(changes))
        return trip

    async def review_trip(
        self,
        trip_id: int,
        actor: Actor,
        action: ReviewAction,
        admin_notes: Optional[str] = None,
    ) -> TripModel:
        """Approve or reject a submitted trip."""
        if not actor.is_admin:
            raise AuthorizationError("Only admins can review trips")
        trip = await self.get_trip(trip_id, actor, for_update=True)
        status = lifecycle.review_status(
            trip.status,
            action,
            admin_notes,
            require_reason=settings.require_rejection_reason,
        )
        fields: dict[str, Any] = {"status": status}
        if admin_notes is not None:
            fields["admin_notes"] = admin_notes
        trip = await self.trips.update(trip, **fields)
        logger.info("Trip %s %s by admin %s", trip.id, status.value, actor.id)
        return trip
