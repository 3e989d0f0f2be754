"""
Trip Cost Engine
================

Formula
-------
Cost = round_half_up(Distance_KM x Rate_Per_KM, 2)

* **Rate_Per_KM** comes from the client linked to the trip.  Trips with a
  manual client name (no ``client_id``) have no rate and therefore no
  computed cost; the driver records a cash amount instead.
* All arithmetic is ``Decimal`` so repeated edits never drift.

Complexity: O(1) per calculation.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Protocol, Union

from .errors import ValidationError

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

Number = Union[Decimal, int, float, str]


class RatedClient(Protocol):
    rate_per_km: Decimal


def to_decimal(value: Number, field: str = "value") -> Decimal:
    """Coerce *value* to ``Decimal`` without going through binary floats."""
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"{field} must be a number", field=field) from exc


def quantize_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def resolve_rate(
    client_id: Optional[int], client: Optional[RatedClient]
) -> Optional[Decimal]:
    """Return the per-km rate for a trip, or ``None`` if none applies.

    *client* is the already-loaded row for *client_id* (``None`` when the
    lookup found nothing).  A dangling reference resolves to ``None``.
    """
    if client_id is None:
        return None
    if client is None:
        logger.warning("Trip references missing client %s; cost left blank", client_id)
        return None
    return to_decimal(client.rate_per_km, "rate_per_km")


def compute_cost(distance_km: Number, rate: Optional[Number]) -> Optional[Decimal]:
    """``distance_km * rate`` rounded half-up to cents; ``None`` without a rate."""
    distance = to_decimal(distance_km, "distance_km")
    if distance < 0:
        raise ValidationError("distance_km must be >= 0", field="distance_km")
    if rate is None:
        return None
    return quantize_money(distance * to_decimal(rate, "rate_per_km"))


def trip_revenue(
    cash_amount: Optional[Decimal], cost_calculated: Optional[Decimal]
) -> Decimal:
    """Amount billed for a trip: cash entered by the driver wins over cost."""
    if cash_amount is not None:
        return to_decimal(cash_amount)
    if cost_calculated is not None:
        return to_decimal(cost_calculated)
    return Decimal("0")
