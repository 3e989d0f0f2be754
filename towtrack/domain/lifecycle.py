"""
Trip status machine.

States: draft <-> submitted -> {approved, rejected}.

* Drivers create trips in ``draft`` or ``submitted`` and may move between
  those two while they own the trip.  Once a trip is approved or rejected
  it is locked for the driver.
* Admins review ``submitted`` trips and otherwise keep general edit rights
  in every state.
"""

from __future__ import annotations

from typing import Optional

from .entities import Actor
from .enums import (
    DRIVER_EDITABLE,
    DRIVER_TRANSITIONS,
    REVIEW_OUTCOME,
    REVIEW_TRANSITIONS,
    ReviewAction,
    TripStatus,
)
from .errors import AuthorizationError, InvalidStateTransition, ValidationError


def initial_status(requested: Optional[TripStatus]) -> TripStatus:
    """Status a new trip starts in; drivers pick draft or submitted."""
    status = TripStatus(requested) if requested else TripStatus.DRAFT
    if status not in DRIVER_EDITABLE:
        raise ValidationError(
            f"A new trip must be draft or submitted, not {status.value}",
            field="status",
        )
    return status


def ensure_editable(current: TripStatus, actor: Actor) -> None:
    """Raise unless *actor* may mutate a trip currently in *current*."""
    if actor.is_admin:
        return
    if TripStatus(current) not in DRIVER_EDITABLE:
        raise AuthorizationError(
            f"Cannot edit a trip that is already {TripStatus(current).value}"
        )


def ensure_rejection_reason(
    admin_notes: Optional[str], require_reason: bool = True
) -> None:
    """Raise if a trip is being rejected without a reason while one is required."""
    if require_reason and not (admin_notes or "").strip():
        raise ValidationError("A rejection reason is required", field="admin_notes")


def next_status(current: TripStatus, target: TripStatus, actor: Actor) -> TripStatus:
    """Validate an edit-driven status change and return the new status."""
    current, target = TripStatus(current), TripStatus(target)
    ensure_editable(current, actor)
    if actor.is_admin:
        return target
    if target not in DRIVER_TRANSITIONS[current]:
        raise AuthorizationError(
            f"Drivers cannot move a trip from {current.value} to {target.value}"
        )
    return target


def review_status(
    current: TripStatus,
    action: ReviewAction,
    admin_notes: Optional[str] = None,
    require_reason: bool = True,
) -> TripStatus:
    """Return the status a review produces, or raise if it is not allowed."""
    current, action = TripStatus(current), ReviewAction(action)
    target = REVIEW_OUTCOME[action]
    if target not in REVIEW_TRANSITIONS[current]:
        raise InvalidStateTransition(
            f"Only submitted trips can be reviewed (trip is {current.value})"
        )
    if action == ReviewAction.REJECT:
        ensure_rejection_reason(admin_notes, require_reason)
    return target
