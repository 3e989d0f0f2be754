"""
Report exports (admin)
======================

GET /api/v1/reports/export/excel -- styled XLSX of the filtered trips
GET /api/v1/reports/export/pdf   -- landscape PDF of the filtered trips

Both accept the same query filters as ``GET /trips/all``.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from towtrack.api.dependencies import get_db, require_admin, trip_filters
from towtrack.api.middleware import limiter
from towtrack.config import settings
from towtrack.domain.entities import Actor, TripFilters
from towtrack.reports.excel import generate_trip_report_excel
from towtrack.reports.pdf import generate_trip_report_pdf
from towtrack.services.trips import TripService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _attachment(extension: str) -> dict[str, str]:
    filename = f"trip-report-{datetime.now(timezone.utc):%Y-%m-%d}.{extension}"
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


@router.get("/export/excel", summary="Export trips as Excel (admin)")
@limiter.limit(settings.rate_limit)
async def export_excel(
    request: Request,
    filters: TripFilters = Depends(trip_filters),
    actor: Actor = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    trips = await TripService(db).list_trips(actor, filters)
    logger.info("Admin %s exported %d trips to Excel", actor.id, len(trips))
    return Response(
        content=generate_trip_report_excel(trips),
        media_type=XLSX_MEDIA_TYPE,
        headers=_attachment("xlsx"),
    )


@router.get("/export/pdf", summary="Export trips as PDF (admin)")
@limiter.limit(settings.rate_limit)
async def export_pdf(
    request: Request,
    filters: TripFilters = Depends(trip_filters),
    actor: Actor = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    trips = await TripService(db).list_trips(actor, filters)
    logger.info("Admin %s exported %d trips to PDF", actor.id, len(trips))
    return Response(
        content=generate_trip_report_pdf(trips),
        media_type="application/pdf",
        headers=_attachment("pdf"),
    )
