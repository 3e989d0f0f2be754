"""Pydantic request / response schemas for the REST API.

JSON uses camelCase (``distanceKm``); snake_case field names are accepted
on input too.  Request models forbid unknown keys, so protected columns
(``id``, ``driverId``, ``costCalculated``, timestamps) can never be written
by a client.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import ClassVar, Optional

from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel

from towtrack.domain.enums import ClientStatus, ReviewAction, TripStatus, UserRole

_REQUEST_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "extra": "forbid",
}
_RESPONSE_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "from_attributes": True,
}

Money = Optional[Decimal]


class _PartialUpdate(BaseModel):
    """Partial update: omitted fields stay, but some columns may not be nulled."""

    NOT_NULL: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_nulls(self):
        for name in self.model_fields_set & self.NOT_NULL:
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


# ── Requests ──────────────────────────────────────────────────────────


class TripCreateRequest(BaseModel):
    client_id: Optional[int] = None
    manual_client_name: Optional[str] = Field(None, max_length=255)
    trip_number: Optional[str] = Field(None, max_length=50)
    vehicle_make: Optional[str] = Field(None, max_length=100)
    vehicle_model: Optional[str] = Field(None, max_length=100)
    vehicle_color: Optional[str] = Field(None, max_length=50)
    vehicle_description: Optional[str] = None
    cargo_name: Optional[str] = Field(None, max_length=255)
    weight_category: Optional[str] = Field(None, max_length=50)
    license_plate: str = Field(..., min_length=1, max_length=20)
    distance_km: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    duration_hours: Money = Field(None, ge=0, max_digits=10, decimal_places=2)
    pickup_location: Optional[str] = None
    dropoff_location: Optional[str] = None
    is_outside_riga: bool = False
    is_riga_suburbs: bool = False
    has_dolly: bool = False
    dolly_type: Optional[int] = Field(None, ge=0)
    has_roadside_assistance: bool = False
    has_night_work: bool = False
    payment_type: Optional[str] = Field(None, max_length=50)
    cash_amount: Money = Field(None, ge=0, max_digits=10, decimal_places=2)
    extra_costs: Money = Field(None, ge=0, max_digits=10, decimal_places=2)
    extra_costs_description: Optional[str] = None
    payment_notes: Optional[str] = None
    trip_date: Optional[datetime] = None
    notes: Optional[str] = None
    status: TripStatus = Field(
        TripStatus.DRAFT,
        description="draft to save, submitted to send for review.",
    )

    model_config = _REQUEST_CONFIG


class TripUpdateRequest(_PartialUpdate):
    client_id: Optional[int] = None
    manual_client_name: Optional[str] = Field(None, max_length=255)
    trip_number: Optional[str] = Field(None, max_length=50)
    vehicle_make: Optional[str] = Field(None, max_length=100)
    vehicle_model: Optional[str] = Field(None, max_length=100)
    vehicle_color: Optional[str] = Field(None, max_length=50)
    vehicle_description: Optional[str] = None
    cargo_name: Optional[str] = Field(None, max_length=255)
    weight_category: Optional[str] = Field(None, max_length=50)
    license_plate: Optional[str] = Field(None, min_length=1, max_length=20)
    distance_km: Money = Field(None, ge=0, max_digits=10, decimal_places=2)
    duration_hours: Money = Field(None, ge=0, max_digits=10, decimal_places=2)
    pickup_location: Optional[str] = None
    dropoff_location: Optional[str] = None
    is_outside_riga: Optional[bool] = None
    is_riga_suburbs: Optional[bool] = None
    has_dolly: Optional[bool] = None
    dolly_type: Optional[int] = Field(None, ge=0)
    has_roadside_assistance: Optional[bool] = None
    has_night_work: Optional[bool] = None
    payment_type: Optional[str] = Field(None, max_length=50)
    cash_amount: Money = Field(None, ge=0, max_digits=10, decimal_places=2)
    extra_costs: Money = Field(None, ge=0, max_digits=10, decimal_places=2)
    extra_costs_description: Optional[str] = None
    payment_notes: Optional[str] = None
    trip_date: Optional[datetime] = None
    notes: Optional[str] = None
    status: Optional[TripStatus] = None
    admin_notes: Optional[str] = Field(None, description="Admin only.")

    model_config = _REQUEST_CONFIG

    NOT_NULL: ClassVar[frozenset[str]] = frozenset(
        {
            "license_plate",
            "distance_km",
            "trip_date",
            "status",
            "is_outside_riga",
            "is_riga_suburbs",
            "has_dolly",
            "has_roadside_assistance",
            "has_night_work",
        }
    )


class TripReviewRequest(BaseModel):
    action: ReviewAction
    admin_notes: Optional[str] = Field(None, max_length=2000)

    model_config = _REQUEST_CONFIG


class ClientCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    contact_email: Optional[str] = Field(None, max_length=255)
    contact_phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    rate_per_km: Money = Field(None, ge=0, max_digits=10, decimal_places=2)
    status: ClientStatus = ClientStatus.ACTIVE
    notes: Optional[str] = None

    model_config = _REQUEST_CONFIG


class ClientUpdateRequest(_PartialUpdate):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    contact_email: Optional[str] = Field(None, max_length=255)
    contact_phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    rate_per_km: Money = Field(None, ge=0, max_digits=10, decimal_places=2)
    status: Optional[ClientStatus] = None
    notes: Optional[str] = None

    model_config = _REQUEST_CONFIG

    NOT_NULL: ClassVar[frozenset[str]] = frozenset({"name", "rate_per_km", "status"})


class ProfileUpdateRequest(BaseModel):
    first_name: Optional[str] = Field(None, max_length=120)
    last_name: Optional[str] = Field(None, max_length=120)
    vehicle_name: Optional[str] = Field(None, max_length=120)

    model_config = _REQUEST_CONFIG


# ── Responses ─────────────────────────────────────────────────────────


class UserResponse(BaseModel):
    id: int
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    vehicle_name: Optional[str] = None
    role: UserRole
    created_at: Optional[datetime] = None

    model_config = _RESPONSE_CONFIG


class ClientResponse(BaseModel):
    id: int
    name: str
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    address: Optional[str] = None
    rate_per_km: Decimal
    status: ClientStatus
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = _RESPONSE_CONFIG


class TripResponse(BaseModel):
    id: int
    driver_id: int
    client_id: Optional[int] = None
    manual_client_name: Optional[str] = None
    trip_number: Optional[str] = None
    vehicle_make: Optional[str] = None
    vehicle_model: Optional[str] = None
    vehicle_color: Optional[str] = None
    vehicle_description: Optional[str] = None
    cargo_name: Optional[str] = None
    weight_category: Optional[str] = None
    license_plate: str
    distance_km: Decimal
    duration_hours: Money = None
    pickup_location: Optional[str] = None
    dropoff_location: Optional[str] = None
    is_outside_riga: bool
    is_riga_suburbs: bool
    has_dolly: bool
    dolly_type: Optional[int] = None
    has_roadside_assistance: bool
    has_night_work: bool
    payment_type: Optional[str] = None
    cash_amount: Money = None
    extra_costs: Money = None
    extra_costs_description: Optional[str] = None
    payment_notes: Optional[str] = None
    trip_date: datetime
    notes: Optional[str] = None
    admin_notes: Optional[str] = None
    cost_calculated: Money = None
    status: TripStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    driver: Optional[UserResponse] = None
    client: Optional[ClientResponse] = None

    model_config = _RESPONSE_CONFIG


class DriverStatsResponse(BaseModel):
    trips_today: int
    trips_this_week: int
    total_km_this_week: float
    pending_reports: int

    model_config = _RESPONSE_CONFIG


class ClientRevenue(BaseModel):
    name: str
    trips: int
    revenue: float

    model_config = _RESPONSE_CONFIG


class DayCount(BaseModel):
    date: str
    count: int


class StatusCount(BaseModel):
    status: str
    count: int


class AdminStatsResponse(BaseModel):
    total_trips_month: int
    total_km_month: float
    total_revenue_month: float
    active_drivers: int
    pending_reports: int
    approved_this_week: int
    top_clients: list[ClientRevenue]
    trips_by_day: list[DayCount]
    trips_by_status: list[StatusCount]

    model_config = _RESPONSE_CONFIG


class MonthRevenue(BaseModel):
    month: str
    revenue: float


class MonthDistance(BaseModel):
    month: str
    distance: float


class DriverTrips(BaseModel):
    driver: str
    trips: int


class ClientTrips(BaseModel):
    client: str
    trips: int
    revenue: float


class AnalyticsResponse(BaseModel):
    total_trips_all_time: int
    total_km_all_time: float
    total_revenue_all_time: float
    average_trip_distance: float
    average_trip_cost: float
    total_clients: int
    total_drivers: int
    revenue_by_month: list[MonthRevenue]
    distance_by_month: list[MonthDistance]
    trips_by_driver: list[DriverTrips]
    trips_by_client: list[ClientTrips]

    model_config = _RESPONSE_CONFIG


class HealthResponse(BaseModel):
    status: str = "ok"
