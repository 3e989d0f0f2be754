"""Excel / PDF report rendering."""

import io
from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

from openpyxl import load_workbook

from towtrack.domain.enums import TripStatus
from towtrack.reports.excel import COLUMNS, SHEET_TITLE, generate_trip_report_excel
from towtrack.reports.pdf import generate_trip_report_pdf

DRIVER = SimpleNamespace(first_name="Dan", last_name="Driver", email="dan@example.com")


def _trip(**fields):
    defaults = {
        "trip_date": datetime(2026, 10, 14, 9, 30),
        "driver": DRIVER,
        "client": SimpleNamespace(name="Acme"),
        "manual_client_name": None,
        "vehicle_make": "Volvo",
        "vehicle_model": "V70",
        "vehicle_color": "Blue",
        "cargo_name": None,
        "license_plate": "AB-1234",
        "pickup_location": "Riga",
        "dropoff_location": "Jurmala",
        "distance_km": Decimal("12.50"),
        "cost_calculated": Decimal("18.75"),
        "status": TripStatus.APPROVED,
        "notes": None,
    }
    defaults.update(fields)
    return SimpleNamespace(**defaults)


def _sheet(trips):
    wb = load_workbook(io.BytesIO(generate_trip_report_excel(trips)))
    return wb[SHEET_TITLE]


class TestExcelExport:
    def test_header_and_row(self):
        ws = _sheet([_trip()])
        assert [c.value for c in ws[1]] == COLUMNS
        row = [c.value for c in ws[2]]
        assert row[:6] == ["2026-10-14", "Dan Driver", "Acme", "Volvo V70", "Blue", "AB-1234"]
        assert row[8] == 12.5
        assert row[9] == 18.75
        assert row[10] == "Approved"
        assert row[11] == "-"

    def test_totals_row(self):
        ws = _sheet([_trip(), _trip(distance_km=Decimal("7.50"), cost_calculated=None)])
        totals = [c.value for c in ws[ws.max_row]]
        assert totals[0] == "Total"
        assert totals[COLUMNS.index("Distance (km)")] == 20.0
        assert totals[COLUMNS.index("Cost")] == 18.75

    def test_manual_client_and_missing_cost(self):
        ws = _sheet([_trip(client=None, manual_client_name="Walk-in", cost_calculated=None)])
        row = [c.value for c in ws[2]]
        assert row[2] == "Walk-in"
        assert row[9] == "-"

    def test_formula_injection_neutralised(self):
        ws = _sheet([_trip(notes="=HYPERLINK(\"http://evil\")", pickup_location="+371")])
        row = [c.value for c in ws[2]]
        assert row[COLUMNS.index("Notes")] == "'=HYPERLINK(\"http://evil\")"
        assert row[COLUMNS.index("Pickup")] == "'+371"

    def test_empty_report_has_header_and_totals(self):
        ws = _sheet([])
        assert ws.max_row == 2
        assert ws.freeze_panes == "A2"


class TestPdfExport:
    def test_renders_pdf(self):
        pdf = generate_trip_report_pdf(
            [_trip(), _trip(driver=None, client=None, cost_calculated=None)],
            generated_at=datetime(2026, 10, 17, 8, 0),
        )
        assert pdf.startswith(b"%PDF")
        assert len(pdf) > 1000

    def test_renders_empty_report(self):
        assert generate_trip_report_pdf([]).startswith(b"%PDF")
