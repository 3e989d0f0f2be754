"""FastAPI dependency injection helpers."""

from __future__ import annotations

import logging
from datetime import datetime, time, timedelta
from decimal import Decimal
from typing import Optional

from fastapi import Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from towtrack.config import settings
from towtrack.domain.entities import Actor, TripFilters
from towtrack.domain.enums import TripStatus, UserRole
from towtrack.domain.errors import AuthorizationError, NotAuthenticatedError
from towtrack.infrastructure.database import async_session_factory
from towtrack.infrastructure.models import UserModel
from towtrack.infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)


async def get_db() -> AsyncSession:  # type: ignore[misc]
    """Yield an async DB session; commit on success, rollback on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> UserModel:
    """Resolve the caller from the identity headers set by the gateway.

    Unknown subjects are provisioned as drivers when
    ``settings.auto_provision_users`` is on.  A new subject whose email
    already belongs to a user is linked to that user instead.
    """
    subject = request.headers.get(settings.auth_subject_header)
    if not subject:
        logger.info("Rejected request without %s header", settings.auth_subject_header)
        raise NotAuthenticatedError("Not authenticated")

    repo = UserRepository(db)
    user = await repo.get_by_external_id(subject)
    if user is not None:
        return user

    if not settings.auto_provision_users:
        logger.warning("Rejected unknown subject %r", subject)
        raise NotAuthenticatedError("Unknown user")

    email = request.headers.get(settings.auth_email_header)
    if email:
        user = await repo.get_by_email(email)
        if user is not None:
            logger.info(
                "Linked subject %r to user %s (was %r)", subject, user.id, user.external_id
            )
            return await repo.update(user, external_id=subject)

    user = await repo.create(external_id=subject, email=email, role=UserRole.DRIVER)
    logger.info("Provisioned driver %s for subject %r", user.id, subject)
    return user


async def get_actor(user: UserModel = Depends(get_current_user)) -> Actor:
    return Actor(id=user.id, role=UserRole(user.role))


async def require_admin(actor: Actor = Depends(get_actor)) -> Actor:
    if not actor.is_admin:
        raise AuthorizationError("Admin access required")
    return actor


def _end_of_day(value: Optional[datetime]) -> Optional[datetime]:
    # a bare date as end bound includes that whole day
    if value is not None and value.time() == time.min:
        return value + timedelta(days=1) - timedelta(microseconds=1)
    return value


async def trip_filters(
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    driver_id: Optional[int] = Query(None, alias="driverId"),
    client_id: Optional[int] = Query(None, alias="clientId"),
    status: Optional[TripStatus] = Query(None),
    min_distance: Optional[Decimal] = Query(None, alias="minDistance", ge=0),
    max_distance: Optional[Decimal] = Query(None, alias="maxDistance", ge=0),
    limit: Optional[int] = Query(None, ge=1, le=1000),
) -> TripFilters:
    return TripFilters(
        start_date=start_date,
        end_date=_end_of_day(end_date),
        driver_id=driver_id,
        client_id=client_id,
        status=status,
        min_distance=min_distance,
        max_distance=max_distance,
        limit=limit,
    )
