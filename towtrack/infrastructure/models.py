"""
SQLAlchemy ORM models  (maps to PostgreSQL).

Tables
------
* ``users``    -- drivers and admins, keyed to the identity provider subject
* ``clients``  -- billing counterparties with a per-km rate
* ``trips``    -- one logged towing job each

Indexes
-------
* **B-Tree** on ``trips.driver_id``, ``trips.client_id``, ``trips.status``
  and ``trips.trip_date`` -- the columns every trip listing filters or
  sorts on.
"""

from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from .database import Base
from towtrack.domain.enums import ClientStatus, TripStatus, UserRole


def _values(enum_cls):
    # persist the lowercase values, not the member names
    return [member.value for member in enum_cls]


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    external_id = Column(String(255), unique=True, nullable=False)
    email = Column(String(255), unique=True, nullable=True)
    first_name = Column(String(120), nullable=True)
    last_name = Column(String(120), nullable=True)
    profile_image_url = Column(String(512), nullable=True)
    vehicle_name = Column(String(120), nullable=True)
    role = Column(
        Enum(UserRole, name="user_role", values_callable=_values),
        default=UserRole.DRIVER,
        nullable=False,
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class ClientModel(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    contact_email = Column(String(255), nullable=True)
    contact_phone = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)
    rate_per_km = Column(Numeric(10, 2), nullable=False, default=Decimal("1.50"))
    status = Column(
        Enum(ClientStatus, name="client_status", values_callable=_values),
        default=ClientStatus.ACTIVE,
        nullable=False,
    )
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class TripModel(Base):
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, autoincrement=True)
    driver_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=True)
    manual_client_name = Column(String(255), nullable=True)
    trip_number = Column(String(50), nullable=True)

    # Towed vehicle / cargo
    vehicle_make = Column(String(100), nullable=True)
    vehicle_model = Column(String(100), nullable=True)
    vehicle_color = Column(String(50), nullable=True)
    vehicle_description = Column(Text, nullable=True)
    cargo_name = Column(String(255), nullable=True)
    weight_category = Column(String(50), nullable=True)
    license_plate = Column(String(20), nullable=False)

    distance_km = Column(Numeric(10, 2), nullable=False)
    duration_hours = Column(Numeric(10, 2), nullable=True)
    pickup_location = Column(Text, nullable=True)
    dropoff_location = Column(Text, nullable=True)

    # Regional flags
    is_outside_riga = Column(Boolean, default=False, nullable=False)
    is_riga_suburbs = Column(Boolean, default=False, nullable=False)

    # Add-on services
    has_dolly = Column(Boolean, default=False, nullable=False)
    dolly_type = Column(Integer, nullable=True)
    has_roadside_assistance = Column(Boolean, default=False, nullable=False)
    has_night_work = Column(Boolean, default=False, nullable=False)

    # Payment
    payment_type = Column(String(50), nullable=True)
    cash_amount = Column(Numeric(10, 2), nullable=True)
    extra_costs = Column(Numeric(10, 2), nullable=True)
    extra_costs_description = Column(Text, nullable=True)
    payment_notes = Column(Text, nullable=True)

    trip_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    notes = Column(Text, nullable=True)
    admin_notes = Column(Text, nullable=True)
    cost_calculated = Column(Numeric(10, 2), nullable=True)
    status = Column(
        Enum(TripStatus, name="trip_status", values_callable=_values),
        default=TripStatus.DRAFT,
        nullable=False,
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    driver = relationship(UserModel, lazy="selectin")
    client = relationship(ClientModel, lazy="selectin")

    __table_args__ = (
        Index("idx_trips_driver", "driver_id"),
        Index("idx_trips_client", "client_id"),
        Index("idx_trips_status", "status"),
        Index("idx_trips_trip_date", "trip_date"),
    )
