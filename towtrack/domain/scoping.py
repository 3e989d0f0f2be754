"""Who may see which trips."""

from __future__ import annotations

from typing import Optional

from .entities import Actor, TripFilters


def scope_filters(actor: Actor, filters: Optional[TripFilters] = None) -> TripFilters:
    """Restrict *filters* to what *actor* may read.

    Admins get the filters as supplied.  Drivers always get their own id as
    the owner filter, whatever ``driver_id`` the caller passed.
    """
    filters = filters or TripFilters()
    if actor.is_admin:
        return filters
    return filters.with_owner(actor.id)


def owner_for(actor: Actor) -> Optional[int]:
    """Owner restriction for single-record reads (``None`` = unrestricted)."""
    return None if actor.is_admin else actor.id
