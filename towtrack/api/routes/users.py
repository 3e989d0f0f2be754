"""
User endpoints
==============

GET   /api/v1/auth/user      -- the signed-in user (provisioned on first call)
PATCH /api/v1/users/me       -- update own profile
GET   /api/v1/users/drivers  -- list drivers (admin)
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from towtrack.api.dependencies import get_current_user, get_db, require_admin
from towtrack.api.middleware import limiter
from towtrack.api.schemas import ProfileUpdateRequest, UserResponse
from towtrack.config import settings
from towtrack.domain.entities import Actor
from towtrack.infrastructure.models import UserModel
from towtrack.infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)

auth_router = APIRouter(prefix="/auth", tags=["auth"])
router = APIRouter(prefix="/users", tags=["users"])


@auth_router.get("/user", response_model=UserResponse, summary="Current user")
@limiter.limit(settings.rate_limit)
async def current_user(
    request: Request,
    user: UserModel = Depends(get_current_user),
):
    return user


@router.patch("/me", response_model=UserResponse, summary="Update own profile")
@limiter.limit(settings.rate_limit)
async def update_profile(
    request: Request,
    body: ProfileUpdateRequest,
    user: UserModel = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    changes = body.model_dump(exclude_unset=True)
    user = await UserRepository(db).update(user, **changes)
    logger.info("User %s updated profile: %s", user.id, sorted(changes))
    return user


@router.get(
    "/drivers",
    response_model=list[UserResponse],
    summary="List drivers (admin)",
)
@limiter.limit(settings.rate_limit)
async def list_drivers(
    request: Request,
    actor: Actor = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await UserRepository(db).get_drivers()
