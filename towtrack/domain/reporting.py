"""
Dashboard statistics and analytics.

Pure aggregation over already-loaded trips so the numbers can be unit
tested without a database.  Trips are duck-typed: anything exposing the
``TripModel`` attributes (and optionally ``driver`` / ``client``
relationships) works.

Revenue of a trip is its cash amount when the driver entered one, else its
computed cost, else zero.  Weeks start on Monday.  Timestamps are compared
as naive UTC.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Any, Iterable, Optional

from .enums import TripStatus
from .pricing import trip_revenue

ZERO = Decimal("0")


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _now(now: Optional[datetime]) -> datetime:
    return _naive_utc(now or datetime.now(timezone.utc))


def _start_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.min)


def _start_of_week(value: datetime) -> datetime:
    return _start_of_day(value) - timedelta(days=value.weekday())


def _month_start(day: date, months_back: int) -> datetime:
    index = day.year * 12 + (day.month - 1) - months_back
    return datetime(index // 12, index % 12 + 1, 1)


def _next_month(start: datetime) -> datetime:
    return _month_start(start.date(), -1)


def _distance(trip: Any) -> Decimal:
    return Decimal(str(trip.distance_km)) if trip.distance_km is not None else ZERO


def _revenue(trip: Any) -> Decimal:
    return trip_revenue(trip.cash_amount, trip.cost_calculated)


def driver_display_name(driver: Any) -> str:
    if driver is None:
        return "Unknown"
    if driver.first_name:
        return f"{driver.first_name} {driver.last_name or ''}".strip()
    return driver.email or "Unknown"


def _in_range(trip: Any, start: datetime, end: Optional[datetime] = None) -> bool:
    when = _naive_utc(trip.trip_date)
    return when >= start and (end is None or when < end)


def driver_stats(trips: Iterable[Any], now: Optional[datetime] = None) -> dict:
    """Dashboard numbers for one driver's own trips."""
    trips = list(trips)
    current = _now(now)
    today = _start_of_day(current)
    week = _start_of_week(current)

    this_week = [t for t in trips if _in_range(t, week)]
    return {
        "trips_today": sum(
            1 for t in trips if _in_range(t, today, today + timedelta(days=1))
        ),
        "trips_this_week": len(this_week),
        "total_km_this_week": float(sum((_distance(t) for t in this_week), ZERO)),
        "pending_reports": sum(
            1
            for t in trips
            if TripStatus(t.status) in (TripStatus.DRAFT, TripStatus.SUBMITTED)
        ),
    }


def _client_breakdown(trips: Iterable[Any]) -> dict[str, dict]:
    stats: dict[str, dict] = defaultdict(lambda: {"trips": 0, "revenue": ZERO})
    for t in trips:
        client = getattr(t, "client", None)
        if client is None:
            continue
        stats[client.name]["trips"] += 1
        stats[client.name]["revenue"] += _revenue(t)
    return stats


def admin_stats(trips: Iterable[Any], now: Optional[datetime] = None) -> dict:
    """Company-wide numbers for the current month and week."""
    trips = list(trips)
    current = _now(now)
    month_start = _month_start(current.date(), 0)
    week = _start_of_week(current)
    month_trips = [t for t in trips if _in_range(t, month_start)]

    clients = _client_breakdown(month_trips)
    top_clients = sorted(
        ({"name": name, **s} for name, s in clients.items()),
        key=lambda c: c["trips"],
        reverse=True,
    )[:5]

    trips_by_day = []
    for offset in range(6, -1, -1):
        day_start = _start_of_day(current) - timedelta(days=offset)
        trips_by_day.append(
            {
                "date": day_start.strftime("%a"),
                "count": sum(
                    1
                    for t in trips
                    if _in_range(t, day_start, day_start + timedelta(days=1))
                ),
            }
        )

    statuses = Counter(TripStatus(t.status).value for t in trips)

    return {
        "total_trips_month": len(month_trips),
        "total_km_month": float(sum((_distance(t) for t in month_trips), ZERO)),
        "total_revenue_month": float(sum((_revenue(t) for t in month_trips), ZERO)),
        "active_drivers": len({t.driver_id for t in month_trips}),
        "pending_reports": statuses.get(TripStatus.SUBMITTED.value, 0),
        "approved_this_week": sum(
            1
            for t in trips
            if TripStatus(t.status) == TripStatus.APPROVED
            and t.updated_at is not None
            and _naive_utc(t.updated_at) >= week
        ),
        "top_clients": [
            {"name": c["name"], "trips": c["trips"], "revenue": float(c["revenue"])}
            for c in top_clients
        ],
        "trips_by_day": trips_by_day,
        "trips_by_status": [
            {"status": status, "count": count} for status, count in statuses.items()
        ],
    }


def analytics(
    trips: Iterable[Any],
    active_clients: int,
    total_drivers: int,
    now: Optional[datetime] = None,
) -> dict:
    """All-time totals plus six-month trends and top drivers / clients."""
    trips = list(trips)
    current = _now(now)

    total_km = sum((_distance(t) for t in trips), ZERO)
    total_revenue = sum((_revenue(t) for t in trips), ZERO)
    count = len(trips)

    revenue_by_month, distance_by_month = [], []
    for months_back in range(5, -1, -1):
        start = _month_start(current.date(), months_back)
        end = _next_month(start)
        in_month = [t for t in trips if _in_range(t, start, end)]
        label = start.strftime("%b")
        revenue_by_month.append(
            {"month": label, "revenue": float(sum((_revenue(t) for t in in_month), ZERO))}
        )
        distance_by_month.append(
            {"month": label, "distance": float(sum((_distance(t) for t in in_month), ZERO))}
        )

    by_driver = Counter(driver_display_name(getattr(t, "driver", None)) for t in trips)
    clients = _client_breakdown(trips)
    by_client = sorted(
        ({"client": name, **s} for name, s in clients.items()),
        key=lambda c: c["revenue"],
        reverse=True,
    )[:10]

    return {
        "total_trips_all_time": count,
        "total_km_all_time": float(total_km),
        "total_revenue_all_time": float(total_revenue),
        "average_trip_distance": float(total_km / count) if count else 0.0,
        "average_trip_cost": float(total_revenue / count) if count else 0.0,
        "total_clients": active_clients,
        "total_drivers": total_drivers,
        "revenue_by_month": revenue_by_month,
        "distance_by_month": distance_by_month,
        "trips_by_driver": [
            {"driver": name, "trips": n} for name, n in by_driver.most_common(10)
        ],
        "trips_by_client": [
            {"client": c["client"], "trips": c["trips"], "revenue": float(c["revenue"])}
            for c in by_client
        ],
    }
