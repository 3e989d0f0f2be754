"""Trip report as a landscape A4 PDF (reportlab platypus)."""

from __future__ import annotations

import io
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Iterable, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from towtrack.config import settings
from towtrack.domain.reporting import driver_display_name
from towtrack.reports.excel import client_label, status_label, vehicle_label

HEADERS = ["Date", "Driver", "Client", "Vehicle", "Plate", "Distance", "Cost", "Status"]

_HEADER_BLUE = colors.Color(30 / 255, 64 / 255, 175 / 255)


def _short_driver(driver: Any) -> str:
    if driver is not None and driver.first_name:
        initial = f" {driver.last_name[0]}." if driver.last_name else ""
        return f"{driver.first_name}{initial}"
    if driver is not None and driver.email:
        return driver.email.split("@")[0]
    return driver_display_name(driver)


def _money(value: Decimal) -> str:
    return f"{settings.currency_symbol}{value:.2f}"


def generate_trip_report_pdf(
    trips: Iterable[Any], generated_at: Optional[datetime] = None
) -> bytes:
    """Render a summary plus one table row per trip; returns the PDF bytes."""
    trips = list(trips)
    generated_at = generated_at or datetime.now(timezone.utc)
    styles = getSampleStyleSheet()

    total_distance = sum((Decimal(str(t.distance_km)) for t in trips), Decimal("0"))
    total_revenue = sum(
        (Decimal(str(t.cost_calculated)) for t in trips if t.cost_calculated is not None),
        Decimal("0"),
    )

    rows = [HEADERS]
    for trip in trips:
        rows.append(
            [
                trip.trip_date.strftime("%Y-%m-%d"),
                _short_driver(getattr(trip, "driver", None)),
                client_label(trip),
                vehicle_label(trip),
                trip.license_plate,
                f"{Decimal(str(trip.distance_km)):.1f} km",
                _money(Decimal(str(trip.cost_calculated)))
                if trip.cost_calculated is not None
                else "-",
                status_label(trip),
            ]
        )

    table = Table(rows, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), _HEADER_BLUE),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 8),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.whitesmoke]),
                ("ALIGN", (5, 1), (6, -1), "RIGHT"),
            ]
        )
    )

    story = [
        Paragraph(settings.report_title, styles["Title"]),
        Paragraph("Trip Report", styles["Heading2"]),
        Paragraph(f"Generated: {generated_at:%Y-%m-%d %H:%M} UTC", styles["Normal"]),
        Spacer(1, 6 * mm),
        Paragraph("Summary", styles["Heading3"]),
        Paragraph(f"Total Trips: {len(trips)}", styles["Normal"]),
        Paragraph(f"Total Distance: {total_distance:.1f} km", styles["Normal"]),
        Paragraph(f"Total Revenue: {_money(total_revenue)}", styles["Normal"]),
        Spacer(1, 6 * mm),
        table,
    ]

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        title=f"{settings.report_title} - Trip Report",
        leftMargin=12 * mm,
        rightMargin=12 * mm,
        topMargin=12 * mm,
        bottomMargin=12 * mm,
    )
    doc.build(story)
    return buffer.getvalue()
