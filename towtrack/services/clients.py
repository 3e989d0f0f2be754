"""Client management: admin-only writes and the delete guard."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from towtrack.config import settings
from towtrack.domain.entities import Actor
from towtrack.domain.errors import AuthorizationError, ConflictError, NotFoundError
from towtrack.infrastructure.models import ClientModel
from towtrack.infrastructure.repositories import ClientRepository

logger = logging.getLogger(__name__)


def _require_admin(actor: Actor) -> None:
    if not actor.is_admin:
        raise AuthorizationError("Only admins can manage clients")


class ClientService:
    def __init__(self, session: AsyncSession):
        self.clients = ClientRepository(session)

    async def list_clients(self) -> list[ClientModel]:
        return await self.clients.get_all()

    async def get_client(self, client_id: int) -> ClientModel:
        client = await self.clients.get_by_id(client_id)
        if client is None:
            raise NotFoundError("Client", client_id)
        return client

    async def create_client(self, actor: Actor, data: dict[str, Any]) -> ClientModel:
        _require_admin(actor)
        fields = dict(data)
        if fields.get("rate_per_km") is None:
            fields["rate_per_km"] = settings.default_rate_per_km
        client = await self.clients.create(**fields)
        logger.info("Client %s (%s) created by admin %s", client.id, client.name, actor.id)
        return client

    async def update_client(
        self, client_id: int, actor: Actor, changes: dict[str, Any]
    ) -> ClientModel:
        _require_admin(actor)
        client = await self.get_client(client_id)
        return await self.clients.update(client, **changes)

    async def delete_client(self, client_id: int, actor: Actor) -> None:
        """Delete a client unless any trip still references it."""
        _require_admin(actor)
        await self.get_client(client_id)
        dependents = await self.clients.count_trips(client_id)
        if dependents:
            logger.warning(
                "Refusing to delete client %s: %d trips reference it",
                client_id,
                dependents,
            )
            raise ConflictError(
                "Cannot delete client with associated trips", dependents=dependents
            )
        await self.clients.delete(client_id)
        logger.info("Client %s deleted by admin %s", client_id, actor.id)
