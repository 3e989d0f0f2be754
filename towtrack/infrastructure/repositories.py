"""
Repository Pattern -- abstracts DB access so domain logic stays DB-agnostic.

Each repository receives an ``AsyncSession`` (unit-of-work) and exposes
domain-relevant queries only.  Mutations flush and refresh so that
server-generated columns (ids, timestamps) are loaded before the session
is handed back to async code.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import ClientModel, TripModel, UserModel
from towtrack.domain.entities import Actor, TripFilters
from towtrack.domain.enums import ClientStatus, UserRole
from towtrack.domain.scoping import scope_filters


class UserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, **fields: Any) -> UserModel:
        user = UserModel(**fields)
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: UserModel, **fields: Any) -> UserModel:
        for name, value in fields.items():
            setattr(user, name, value)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: int) -> Optional[UserModel]:
        return await self.session.get(UserModel, user_id)

    async def get_by_external_id(self, external_id: str) -> Optional[UserModel]:
        result = await self.session.execute(
            select(UserModel).where(UserModel.external_id == external_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[UserModel]:
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        return result.scalar_one_or_none()

    async def get_drivers(self) -> list[UserModel]:
        result = await self.session.execute(
            select(UserModel)
            .where(UserModel.role == UserRole.DRIVER)
            .order_by(UserModel.id)
        )
        return list(result.scalars().all())

    async def count_drivers(self) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(UserModel)
            .where(UserModel.role == UserRole.DRIVER)
        )
        return result.scalar() or 0


class ClientRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, **fields: Any) -> ClientModel:
        client = ClientModel(**fields)
        self.session.add(client)
        await self.session.flush()
        await self.session.refresh(client)
        return client

    async def update(self, client: ClientModel, **fields: Any) -> ClientModel:
        for name, value in fields.items():
            setattr(client, name, value)
        await self.session.flush()
        await self.session.refresh(client)
        return client

    async def get_by_id(self, client_id: int) -> Optional[ClientModel]:
        return await self.session.get(ClientModel, client_id)

    async def get_all(self) -> list[ClientModel]:
        result = await self.session.execute(
            select(ClientModel).order_by(
                ClientModel.created_at.desc(), ClientModel.id.desc()
            )
        )
        return list(result.scalars().all())

    async def count_active(self) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(ClientModel)
            .where(ClientModel.status == ClientStatus.ACTIVE)
        )
        return result.scalar() or 0

    async def count_trips(self, client_id: int) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(TripModel)
            .where(TripModel.client_id == client_id)
        )
        return result.scalar() or 0

    async def delete(self, client_id: int) -> None:
        await self.session.execute(
            delete(ClientModel).where(ClientModel.id == client_id)
        )


class TripRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def filtered_query(filters: TripFilters) -> Select:
        """AND-combine every supplied filter; newest trips first."""
        query = select(TripModel)
        if filters.start_date is not None:
            query = query.where(TripModel.trip_date >= filters.start_date)
        if filters.end_date is not None:
            query = query.where(TripModel.trip_date <= filters.end_date)
        if filters.driver_id is not None:
            query = query.where(TripModel.driver_id == filters.driver_id)
        if filters.client_id is not None:
            query = query.where(TripModel.client_id == filters.client_id)
        if filters.status is not None:
            query = query.where(TripModel.status == filters.status)
        if filters.min_distance is not None:
            query = query.where(TripModel.distance_km >= filters.min_distance)
        if filters.max_distance is not None:
            query = query.where(TripModel.distance_km <= filters.max_distance)
        query = query.order_by(TripModel.trip_date.desc(), TripModel.id.desc())
        if filters.limit is not None:
            query = query.limit(filters.limit)
        return query

    @classmethod
    def scoped_query(cls, actor: Actor, filters: Optional[TripFilters] = None) -> Select:
        """Trips *actor* may read, narrowed by *filters*."""
        return cls.filtered_query(scope_filters(actor, filters))

    async def list_for(
        self, actor: Actor, filters: Optional[TripFilters] = None
    ) -> list[TripModel]:
        result = await self.session.execute(self.scoped_query(actor, filters))
        return list(result.scalars().all())

    async def list_all(self) -> list[TripModel]:
        result = await self.session.execute(self.filtered_query(TripFilters()))
        return list(result.scalars().all())

    async def get_by_id(
        self,
        trip_id: int,
        owner_id: Optional[int] = None,
        for_update: bool = False,
    ) -> Optional[TripModel]:
        """Fetch one trip; with *owner_id* set, other drivers' trips are invisible."""
        query = select(TripModel).where(TripModel.id == trip_id)
        if owner_id is not None:
            query = query.where(TripModel.driver_id == owner_id)
        if for_update:
            # SELECT ... FOR UPDATE to serialise concurrent edits of one trip
            query = query.with_for_update(of=TripModel)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def create(self, **fields: Any) -> TripModel:
        trip = TripModel(**fields)
        self.session.add(trip)
        await self.session.flush()
        await self.session.refresh(trip)
        return trip

    async def update(self, trip: TripModel, **fields: Any) -> TripModel:
        for name, value in fields.items():
            setattr(trip, name, value)
        await self.session.flush()
        await self.session.refresh(trip)
        return trip
