"""
FastAPI application factory.

* Registers routes for trips, clients, users, stats, reports and admin.
* Maps domain errors (``TowTrackError``) to JSON responses.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from towtrack.api.middleware import limiter
from towtrack.api.routes import admin, clients, reports, stats, trips, users
from towtrack.config import settings
from towtrack.domain.errors import TowTrackError

logger = logging.getLogger(__name__)


async def _domain_error_handler(request: Request, exc: TowTrackError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info(
            "%s %s -> %d: %s",
            request.method,
            request.url.path,
            exc.status_code,
            exc.message,
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def create_app() -> FastAPI:
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(
        title="TowTrack API",
        description=(
            "Trip reporting for a towing company.  Drivers log trips, "
            "admins review them, manage clients and export reports."
        ),
        version="1.0.0",
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_exception_handler(TowTrackError, _domain_error_handler)

    # Routers
    app.include_router(users.auth_router, prefix="/api/v1")
    app.include_router(users.router, prefix="/api/v1")
    app.include_router(clients.router, prefix="/api/v1")
    app.include_router(trips.router, prefix="/api/v1")
    app.include_router(stats.router, prefix="/api/v1")
    app.include_router(reports.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
