"""
Trip report -- styled Excel workbook (openpyxl).

One sheet, a bold header row, auto-fitted columns and a totals row.  Text
cells are neutralised against formula injection before they are written.
"""

from __future__ import annotations

import io
from decimal import Decimal
from typing import Any, Iterable

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from towtrack.config import settings
from towtrack.domain.reporting import driver_display_name

SHEET_TITLE = "Trip Reports"

COLUMNS = [
    "Trip Date",
    "Driver",
    "Client",
    "Vehicle",
    "Color",
    "License Plate",
    "Pickup",
    "Drop-off",
    "Distance (km)",
    "Cost",
    "Status",
    "Notes",
]

_HEADER_FILL = PatternFill(start_color="1E40AF", end_color="1E40AF", fill_type="solid")
_HEADER_FONT = Font(name="Arial", bold=True, color="FFFFFF", size=11)
_TOTAL_FONT = Font(name="Arial", bold=True, size=11)
_TOTAL_FILL = PatternFill(start_color="D9E2F3", end_color="D9E2F3", fill_type="solid")
_THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)
_NUMBER_FORMAT = "#,##0.00"

# Excel treats cells starting with these as formulas
_FORMULA_PREFIXES = ("=", "+", "-", "@", "\t", "\r")


def _sanitize_text(value: Any) -> Any:
    if isinstance(value, str) and value and value[0] in _FORMULA_PREFIXES:
        return f"'{value}"
    return value


def _text(value: Any) -> Any:
    # blank cells render as a dash
    return _sanitize_text(value) if value not in (None, "") else "-"


def client_label(trip: Any) -> str:
    client = getattr(trip, "client", None)
    if client is not None:
        return client.name
    return trip.manual_client_name or "-"


def vehicle_label(trip: Any) -> str:
    label = " ".join(p for p in (trip.vehicle_make, trip.vehicle_model) if p)
    return label or trip.cargo_name or "-"


def status_label(trip: Any) -> str:
    value = getattr(trip.status, "value", trip.status)
    return value.capitalize()


def trip_row(trip: Any) -> list[Any]:
    cost = trip.cost_calculated
    return [
        trip.trip_date.strftime("%Y-%m-%d"),
        driver_display_name(getattr(trip, "driver", None)),
        _sanitize_text(client_label(trip)),
        _sanitize_text(vehicle_label(trip)),
        _text(trip.vehicle_color),
        _sanitize_text(trip.license_plate),
        _text(trip.pickup_location),
        _text(trip.dropoff_location),
        float(trip.distance_km),
        float(cost) if cost is not None else "-",
        status_label(trip),
        _text(trip.notes),
    ]


def _auto_fit_columns(ws: Any) -> None:
    for col_cells in ws.columns:
        longest = max(
            (len(str(cell.value)) for cell in col_cells if cell.value is not None),
            default=0,
        )
        ws.column_dimensions[get_column_letter(col_cells[0].column)].width = min(
            max(longest + 4, 15), 50
        )


def generate_trip_report_excel(trips: Iterable[Any]) -> bytes:
    """Render *trips* into an XLSX file and return its bytes."""
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    ws.append(COLUMNS)
    for col in range(1, len(COLUMNS) + 1):
        cell = ws.cell(row=1, column=col)
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
        cell.border = _THIN_BORDER
        cell.alignment = Alignment(horizontal="center", vertical="center")

    total_distance = Decimal("0")
    total_cost = Decimal("0")
    for trip in trips:
        ws.append(trip_row(trip))
        total_distance += Decimal(str(trip.distance_km))
        if trip.cost_calculated is not None:
            total_cost += Decimal(str(trip.cost_calculated))
        for cell in ws[ws.max_row]:
            cell.border = _THIN_BORDER
            if isinstance(cell.value, float):
                cell.number_format = _NUMBER_FORMAT

    distance_col = COLUMNS.index("Distance (km)") + 1
    cost_col = COLUMNS.index("Cost") + 1
    total_row = ws.max_row + 1
    ws.cell(row=total_row, column=1, value="Total")
    ws.cell(row=total_row, column=distance_col, value=float(total_distance))
    ws.cell(row=total_row, column=cost_col, value=float(total_cost))
    for col in range(1, len(COLUMNS) + 1):
        cell = ws.cell(row=total_row, column=col)
        cell.font = _TOTAL_FONT
        cell.fill = _TOTAL_FILL
        cell.border = _THIN_BORDER
    ws.cell(row=total_row, column=cost_col).number_format = (
        f'#,##0.00 "{settings.currency_symbol}"'
    )

    ws.freeze_panes = "A2"
    _auto_fit_columns(ws)

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
