"""
Client endpoints
================

Reads are open to every signed-in user (drivers pick a client when logging
a trip); writes are admin only.
"""

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from towtrack.api.dependencies import get_actor, get_db, require_admin
from towtrack.api.middleware import limiter
from towtrack.api.schemas import (
    ClientCreateRequest,
    ClientResponse,
    ClientUpdateRequest,
)
from towtrack.config import settings
from towtrack.domain.entities import Actor
from towtrack.services.clients import ClientService

router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("", response_model=list[ClientResponse], summary="List clients")
@limiter.limit(settings.rate_limit)
async def list_clients(
    request: Request,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await ClientService(db).list_clients()


@router.get("/{client_id}", response_model=ClientResponse, summary="Get one client")
@limiter.limit(settings.rate_limit)
async def get_client(
    request: Request,
    client_id: int,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await ClientService(db).get_client(client_id)


@router.post(
    "",
    status_code=201,
    response_model=ClientResponse,
    summary="Create a client (admin)",
)
@limiter.limit(settings.rate_limit)
async def create_client(
    request: Request,
    body: ClientCreateRequest,
    actor: Actor = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await ClientService(db).create_client(actor, body.model_dump())


@router.patch(
    "/{client_id}",
    response_model=ClientResponse,
    summary="Update a client (admin)",
    description="Rate changes do not reprice existing trips.",
)
@limiter.limit(settings.rate_limit)
async def update_client(
    request: Request,
    client_id: int,
    body: ClientUpdateRequest,
    actor: Actor = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await ClientService(db).update_client(
        client_id, actor, body.model_dump(exclude_unset=True)
    )


@router.delete(
    "/{client_id}",
    status_code=204,
    summary="Delete a client (admin)",
    responses={409: {"description": "Trips still reference this client."}},
)
@limiter.limit(settings.rate_limit)
async def delete_client(
    request: Request,
    client_id: int,
    actor: Actor = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await ClientService(db).delete_client(client_id, actor)
    return Response(status_code=204)
