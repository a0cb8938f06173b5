from typing import Iterable
from uuid import UUID

from catalog.models.base import dump_ids
from catalog.models.event import Event
from catalog.repositories.base import SoftDeleteStore


class EventStore(SoftDeleteStore):
    model = Event
    kind = "Event"

    async def find_active_by_identity(self, name: str, type_: str) -> Event | None:
        result = await self.db.execute(
            self._active().where(Event.name == name, Event.type == type_)
        )
        return result.scalar_one_or_none()

    async def create(
            self,
            name: str,
            type_: str,
            description: str,
            property_ids: Iterable[UUID] = ()
    ) -> Event:
        event = Event(
            name=name,
            type=type_,
            description=description,
            property_ids=dump_ids(property_ids)
        )
        return await self._add(event)

    async def update(
            self,
            record_id: UUID,
            name: str | None = None,
            type_: str | None = None,
            description: str | None = None
    ) -> Event:
        """Apply only the given fields"""
        event = await self.find_by_id(record_id)
        if name is not None:
            event.name = name
        if type_ is not None:
            event.type = type_
        if description is not None:
            event.description = description
        return await self._commit(event)

    async def update_description(self, record_id: UUID, description: str) -> Event:
        return await self.update(record_id, description=description)

    async def update_property_ids(self, record_id: UUID, ids: Iterable[UUID]) -> Event:
        event = await self.find_by_id(record_id)
        # Reassign rather than mutate so the JSON column is flagged dirty
        event.property_ids = dump_ids(ids)
        return await self._commit(event)

    def _conflict_message(self, record) -> str:
        return f"Event with name '{record.name}' and type '{record.type}' already exists"
