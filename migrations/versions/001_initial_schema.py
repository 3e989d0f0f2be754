"""Initial schema: users, clients and trips.

Revision ID: 001
Create Date: 2026-10-17
"""

from alembic import op
import sqlalchemy as sa


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # ── users ─────────────────────────────────────────────────────────
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("external_id", sa.String(255), unique=True, nullable=False),
        sa.Column("email", sa.String(255), unique=True, nullable=True),
        sa.Column("first_name", sa.String(120), nullable=True),
        sa.Column("last_name", sa.String(120), nullable=True),
        sa.Column("profile_image_url", sa.String(512), nullable=True),
        sa.Column("vehicle_name", sa.String(120), nullable=True),
        sa.Column(
            "role",
            sa.Enum("driver", "admin", name="user_role"),
            server_default="driver",
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )

    # ── clients ───────────────────────────────────────────────────────
    op.create_table(
        "clients",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("contact_email", sa.String(255), nullable=True),
        sa.Column("contact_phone", sa.String(50), nullable=True),
        sa.Column("address", sa.Text, nullable=True),
        sa.Column(
            "rate_per_km",
            sa.Numeric(10, 2),
            server_default="1.50",
            nullable=False,
        ),
        sa.Column(
            "status",
            sa.Enum("active", "inactive", name="client_status"),
            server_default="active",
            nullable=False,
        ),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )

    # ── trips ─────────────────────────────────────────────────────────
    op.create_table(
        "trips",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "driver_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False
        ),
        sa.Column(
            "client_id", sa.Integer, sa.ForeignKey("clients.id"), nullable=True
        ),
        sa.Column("manual_client_name", sa.String(255), nullable=True),
        sa.Column("trip_number", sa.String(50), nullable=True),
        sa.Column("vehicle_make", sa.String(100), nullable=True),
        sa.Column("vehicle_model", sa.String(100), nullable=True),
        sa.Column("vehicle_color", sa.String(50), nullable=True),
        sa.Column("vehicle_description", sa.Text, nullable=True),
        sa.Column("cargo_name", sa.String(255), nullable=True),
        sa.Column("weight_category", sa.String(50), nullable=True),
        sa.Column("license_plate", sa.String(20), nullable=False),
        sa.Column("distance_km", sa.Numeric(10, 2), nullable=False),
        sa.Column("duration_hours", sa.Numeric(10, 2), nullable=True),
        sa.Column("pickup_location", sa.Text, nullable=True),
        sa.Column("dropoff_location", sa.Text, nullable=True),
        sa.Column("is_outside_riga", sa.Boolean, server_default=sa.false(), nullable=False),
        sa.Column("is_riga_suburbs", sa.Boolean, server_default=sa.false(), nullable=False),
        sa.Column("has_dolly", sa.Boolean, server_default=sa.false(), nullable=False),
        sa.Column("dolly_type", sa.Integer, nullable=True),
        sa.Column(
            "has_roadside_assistance",
            sa.Boolean,
            server_default=sa.false(),
            nullable=False,
        ),
        sa.Column("has_night_work", sa.Boolean, server_default=sa.false(), nullable=False),
        sa.Column("payment_type", sa.String(50), nullable=True),
        sa.Column("cash_amount", sa.Numeric(10, 2), nullable=True),
        sa.Column("extra_costs", sa.Numeric(10, 2), nullable=True),
        sa.Column("extra_costs_description", sa.Text, nullable=True),
        sa.Column("payment_notes", sa.Text, nullable=True),
        sa.Column(
            "trip_date",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("admin_notes", sa.Text, nullable=True),
        sa.Column("cost_calculated", sa.Numeric(10, 2), nullable=True),
        sa.Column(
            "status",
            sa.Enum("draft", "submitted", "approved", "rejected", name="trip_status"),
            server_default="draft",
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index("idx_trips_driver", "trips", ["driver_id"])
    op.create_index("idx_trips_client", "trips", ["client_id"])
    op.create_index("idx_trips_status", "trips", ["status"])
    op.create_index("idx_trips_trip_date", "trips", ["trip_date"])


def downgrade() -> None:
    op.drop_table("trips")
    op.drop_table("clients")
    op.drop_table("users")
    op.execute("DROP TYPE IF EXISTS trip_status")
    op.execute("DROP TYPE IF EXISTS client_status")
    op.execute("DROP TYPE IF EXISTS user_role")
