"""
Domain value objects shared by services and repositories.

``Actor`` is the authenticated caller as the rule core sees it; the ORM
``UserModel`` is translated into one at the API boundary so that the
lifecycle and scoping rules never touch the database.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Optional

from .enums import TripStatus, UserRole


@dataclass(frozen=True)
class Actor:
    id: int
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_driver(self) -> bool:
        return self.role == UserRole.DRIVER


@dataclass(frozen=True)
class TripFilters:
    """AND-combined predicates over the trips table."""

    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    driver_id: Optional[int] = None
    client_id: Optional[int] = None
    status: Optional[TripStatus] = None
    min_distance: Optional[Decimal] = None
    max_distance: Optional[Decimal] = None
    limit: Optional[int] = None

    def with_owner(self, driver_id: int) -> "TripFilters":
        return replace(self, driver_id=driver_id)
