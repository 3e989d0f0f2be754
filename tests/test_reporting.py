"""Dashboard statistics and analytics aggregation."""

from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

from towtrack.domain import reporting
from towtrack.domain.enums import TripStatus

# Wednesday; the week started on Monday 2026-10-12
NOW = datetime(2026, 10, 14, 12, 0)

DAN = SimpleNamespace(first_name="Dan", last_name="Driver", email="dan@example.com")
OLGA = SimpleNamespace(first_name=None, last_name=None, email="olga@example.com")
ACME = SimpleNamespace(name="Acme")
BOLT = SimpleNamespace(name="Bolt")


def _trip(**fields):
    defaults = {
        "distance_km": Decimal("10.00"),
        "cash_amount": None,
        "cost_calculated": None,
        "status": TripStatus.DRAFT,
        "driver_id": 1,
        "driver": DAN,
        "client": None,
        "trip_date": NOW,
        "updated_at": None,
    }
    defaults.update(fields)
    return SimpleNamespace(**defaults)


def _fleet():
    return [
        _trip(
            trip_date=datetime(2026, 10, 14, 9),
            client=ACME,
            cost_calculated=Decimal("20.00"),
            status=TripStatus.APPROVED,
            updated_at=datetime(2026, 10, 13, 16),
        ),
        _trip(
            trip_date=datetime(2026, 10, 2, 9),
            driver_id=2,
            driver=OLGA,
            client=ACME,
            cost_calculated=Decimal("10.00"),
            cash_amount=Decimal("50.00"),
            status=TripStatus.SUBMITTED,
        ),
        _trip(
            trip_date=datetime(2026, 10, 5, 9),
            driver_id=2,
            driver=OLGA,
            client=BOLT,
            distance_km=Decimal("30.00"),
            cost_calculated=Decimal("30.00"),
            status=TripStatus.SUBMITTED,
        ),
        _trip(
            trip_date=datetime(2026, 9, 20, 9),
            driver_id=3,
            driver=None,
            client=BOLT,
            cost_calculated=Decimal("99.00"),
            status=TripStatus.APPROVED,
            updated_at=datetime(2026, 9, 21, 9),
        ),
    ]


class TestDriverDisplayName:
    def test_full_name(self):
        assert reporting.driver_display_name(DAN) == "Dan Driver"

    def test_falls_back_to_email(self):
        assert reporting.driver_display_name(OLGA) == "olga@example.com"

    def test_unknown(self):
        assert reporting.driver_display_name(None) == "Unknown"


class TestDriverStats:
    def test_counts(self):
        trips = [
            _trip(trip_date=datetime(2026, 10, 14, 9), status=TripStatus.DRAFT),
            _trip(
                trip_date=datetime(2026, 10, 12, 8),
                distance_km=Decimal("20.00"),
                status=TripStatus.APPROVED,
            ),
            # Sunday, previous week
            _trip(trip_date=datetime(2026, 10, 11, 23), status=TripStatus.SUBMITTED),
        ]
        stats = reporting.driver_stats(trips, now=NOW)
        assert stats == {
            "trips_today": 1,
            "trips_this_week": 2,
            "total_km_this_week": 30.0,
            "pending_reports": 2,
        }

    def test_no_trips(self):
        stats = reporting.driver_stats([], now=NOW)
        assert stats["trips_this_week"] == 0
        assert stats["total_km_this_week"] == 0.0


class TestAdminStats:
    def test_month_totals(self):
        stats = reporting.admin_stats(_fleet(), now=NOW)
        assert stats["total_trips_month"] == 3
        assert stats["total_km_month"] == 50.0
        # cash wins over computed cost
        assert stats["total_revenue_month"] == 100.0
        assert stats["active_drivers"] == 2
        assert stats["pending_reports"] == 2
        assert stats["approved_this_week"] == 1

    def test_top_clients(self):
        stats = reporting.admin_stats(_fleet(), now=NOW)
        assert stats["top_clients"] == [
            {"name": "Acme", "trips": 2, "revenue": 70.0},
            {"name": "Bolt", "trips": 1, "revenue": 30.0},
        ]

    def test_last_seven_days(self):
        days = reporting.admin_stats(_fleet(), now=NOW)["trips_by_day"]
        assert len(days) == 7
        assert days[-1] == {"date": "Wed", "count": 1}

    def test_status_breakdown(self):
        by_status = {
            s["status"]: s["count"]
            for s in reporting.admin_stats(_fleet(), now=NOW)["trips_by_status"]
        }
        assert by_status == {"approved": 2, "submitted": 2}


class TestAnalytics:
    def test_totals_and_averages(self):
        result = reporting.analytics(_fleet(), active_clients=2, total_drivers=3, now=NOW)
        assert result["total_trips_all_time"] == 4
        assert result["total_km_all_time"] == 60.0
        assert result["total_revenue_all_time"] == 199.0
        assert result["average_trip_distance"] == 15.0
        assert result["average_trip_cost"] == 49.75
        assert result["total_clients"] == 2
        assert result["total_drivers"] == 3

    def test_six_month_trend(self):
        result = reporting.analytics(_fleet(), 2, 3, now=NOW)
        months = [m["month"] for m in result["revenue_by_month"]]
        assert months == ["May", "Jun", "Jul", "Aug", "Sep", "Oct"]
        assert result["revenue_by_month"][-1]["revenue"] == 100.0
        assert result["revenue_by_month"][-2]["revenue"] == 99.0
        assert result["distance_by_month"][-1]["distance"] == 50.0

    def test_breakdowns(self):
        result = reporting.analytics(_fleet(), 2, 3, now=NOW)
        assert result["trips_by_driver"][0] == {"driver": "olga@example.com", "trips": 2}
        assert result["trips_by_client"] == [
            {"client": "Bolt", "trips": 2, "revenue": 129.0},
            {"client": "Acme", "trips": 2, "revenue": 70.0},
        ]

    def test_empty(self):
        result = reporting.analytics([], 0, 0, now=NOW)
        assert result["average_trip_cost"] == 0.0
        assert result["trips_by_client"] == []
