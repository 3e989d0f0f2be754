"""Unit tests for the trip cost engine."""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from towtrack.domain.errors import ValidationError
from towtrack.domain.pricing import (
    compute_cost,
    quantize_money,
    resolve_rate,
    to_decimal,
    trip_revenue,
)


class TestComputeCost:
    def test_distance_times_rate(self):
        assert compute_cost(Decimal("10"), Decimal("2.00")) == Decimal("20.00")

    def test_no_rate_means_no_cost(self):
        assert compute_cost(Decimal("10"), None) is None

    def test_rounds_half_up_to_cents(self):
        # 101.75 * 1.10 = 111.925
        assert compute_cost(Decimal("101.75"), Decimal("1.10")) == Decimal("111.93")

    def test_zero_distance(self):
        assert compute_cost(Decimal("0"), Decimal("1.50")) == Decimal("0.00")

    def test_accepts_strings_and_floats_without_drift(self):
        assert compute_cost("0.1", 0.2) == Decimal("0.02")
        assert compute_cost(15, "2.00") == Decimal("30.00")

    def test_negative_distance_rejected(self):
        with pytest.raises(ValidationError) as exc:
            compute_cost(Decimal("-1"), Decimal("2.00"))
        assert exc.value.field == "distance_km"

    def test_negative_distance_rejected_even_without_rate(self):
        with pytest.raises(ValidationError):
            compute_cost(Decimal("-0.01"), None)


class TestResolveRate:
    def test_no_client_id(self):
        assert resolve_rate(None, None) is None

    def test_client_rate(self):
        client = SimpleNamespace(rate_per_km=Decimal("1.50"))
        assert resolve_rate(7, client) == Decimal("1.50")

    def test_dangling_reference_resolves_to_none(self, caplog):
        with caplog.at_level("WARNING"):
            assert resolve_rate(99, None) is None
        assert "99" in caplog.text


class TestHelpers:
    def test_to_decimal_rejects_garbage(self):
        with pytest.raises(ValidationError) as exc:
            to_decimal("ten", "distance_km")
        assert exc.value.field == "distance_km"

    def test_quantize_money(self):
        assert quantize_money(Decimal("2.345")) == Decimal("2.35")
        assert quantize_money(Decimal("2.344")) == Decimal("2.34")

    def test_revenue_prefers_cash(self):
        assert trip_revenue(Decimal("50.00"), Decimal("20.00")) == Decimal("50.00")

    def test_revenue_falls_back_to_cost(self):
        assert trip_revenue(None, Decimal("20.00")) == Decimal("20.00")

    def test_revenue_keeps_zero_cash(self):
        assert trip_revenue(Decimal("0.00"), Decimal("20.00")) == Decimal("0.00")

    def test_revenue_defaults_to_zero(self):
        assert trip_revenue(None, None) == Decimal("0")
