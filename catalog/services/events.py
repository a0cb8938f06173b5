from typing import Iterable, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from catalog.core.config import settings
from catalog.core.errors import BadRequestError, ConflictError, NotFoundError
from catalog.models.base import load_ids
from catalog.models.event import Event
from catalog.repositories.event_store import EventStore
from catalog.repositories.property_store import PropertyStore
from catalog.schemas.common import DeleteResponse
from catalog.schemas.event import EventResponse, EventCreate, EventUpdate
from catalog.schemas.property import PropertyCreate
from catalog.services.identity import IdentityResolver, merge_ids
from catalog.services.properties import PropertyReconciler, validate_property
from catalog.services.soft_delete import CatalogKind, SoftDeleteFilter

logger = structlog.get_logger()


class EventReconciler:
    """
    Maps event definitions onto event ids.

    A newly created event gets its properties resolved before the row is
    inserted. A reused event keeps its stored property list unless the caller
    asks for the submitted properties to be merged in.
    """

    def __init__(self, events: EventStore, properties: PropertyStore, event_types: Iterable[str]):
        self.events = events
        self.resolver = IdentityResolver(events)
        self.property_reconciler = PropertyReconciler(properties)
        self.event_types = list(event_types)

    def validate_type(self, type_: str) -> None:
        if type_ not in self.event_types:
            raise BadRequestError(
                f"Invalid event type '{type_}'. Must be one of: {', '.join(self.event_types)}"
            )

    def validate(self, definition: EventCreate) -> None:
        if not definition.name or not definition.type or not definition.description:
            raise BadRequestError("Event name, type, and description are required")

        self.validate_type(definition.type)

        for prop in definition.properties or []:
            validate_property(prop, definition.name)

    async def reconcile_new_event(self, definition: EventCreate, merge_properties: bool = False) -> UUID:
        """Resolve or create the event; returns its id"""
        self.validate(definition)
        property_definitions = definition.properties or []

        async def prepare():
            property_ids = await self.property_reconciler.reconcile(property_definitions, definition.name)
            return {"property_ids": merge_ids(property_ids)}

        resolution = await self.resolver.resolve(definition.name, definition.type, definition.description, prepare=prepare)

        if resolution.was_created:
            logger.info("event_created", id=str(resolution.id), name=definition.name, type=definition.type)
        else:
            logger.info("event_reused", id=str(resolution.id), name=definition.name, type=definition.type)
            if merge_properties and property_definitions:
                await self.merge_event_properties(resolution.id, property_definitions)

        return resolution.id

    async def reconcile_known_event(self, event: Event, definition: EventCreate) -> None:
        """Refresh an event the caller already references: description, then properties"""
        self.validate(definition)

        if event.description != definition.description:
            await self.events.update_description(event.id, definition.description)
            logger.info("event_description_updated", id=str(event.id))

        if definition.properties:
            await self.merge_event_properties(event.id, definition.properties)

    async def merge_event_properties(self, event_id: UUID, definitions: Sequence[PropertyCreate]) -> None:
        """Union the resolved definitions into the stored list: existing ids first, then new ones"""
        event = await self.events.find_by_id(event_id)
        new_ids = await self.property_reconciler.reconcile(definitions, event.name)

        current = load_ids(event.property_ids)
        merged = merge_ids(current, new_ids)

        if merged != current:
            await self.events.update_property_ids(event_id, merged)
            logger.info("event_properties_merged", id=str(event_id), added=len(merged) - len(current))


class EventService:
    """Direct create/read/update/delete of catalog events"""

    def __init__(self, db: AsyncSession, event_types: Iterable[str] | None = None):
        self.events = EventStore(db)
        self.properties = PropertyStore(db)
        self.reconciler = EventReconciler(
            self.events,
            self.properties,
            settings.event_types if event_types is None else event_types
        )
        self.soft_delete_filter = SoftDeleteFilter({CatalogKind.PROPERTY: self.properties})

    async def create_event(self, definition: EventCreate) -> EventResponse:
        self.reconciler.validate(definition)

        if await self.events.find_active_by_identity(definition.name, definition.type):
            raise ConflictError(f"Event with name '{definition.name}' and type '{definition.type}' already exists")

        property_ids = await self.reconciler.property_reconciler.reconcile(definition.properties or [], definition.name)
        event = await self.events.create(definition.name, definition.type, definition.description, merge_ids(property_ids))

        logger.info("event_created", id=str(event.id), name=event.name, type=event.type)
        return await self.to_response(event)

    async def list_events(self) -> list[EventResponse]:
        return [await self.to_response(e) for e in await self.events.list_active()]

    async def get_event(self, event_id: UUID) -> EventResponse:
        return await self.to_response(await self._get_active(event_id))

    async def update_event(self, event_id: UUID, data: EventUpdate) -> EventResponse:
        event = await self._get_active(event_id)

        for field in ("name", "type", "description"):
            if getattr(data, field) == "":
                raise BadRequestError(f"Event {field} must be a non-empty string")
        if data.type is not None:
            self.reconciler.validate_type(data.type)
        for prop in data.properties or []:
            validate_property(prop, data.name or event.name)

        new_name = data.name or event.name
        new_type = data.type or event.type
        if (new_name, new_type) != (event.name, event.type):
            duplicate = await self.events.find_active_by_identity(new_name, new_type)
            if duplicate is not None and duplicate.id != event_id:
                raise ConflictError(f"Event with name '{new_name}' and type '{new_type}' already exists")

        changes = {
            "name": data.name if data.name != event.name else None,
            "type_": data.type if data.type != event.type else None,
            "description": data.description if data.description != event.description else None,
        }
        if any(value is not None for value in changes.values()):
            event = await self.events.update(event_id, **changes)
            logger.info("event_updated", id=str(event_id))

        if data.properties:
            await self.reconciler.merge_event_properties(event_id, data.properties)

        return await self.to_response(event)

    async def delete_event(self, event_id: UUID) -> DeleteResponse:
        await self._get_active(event_id)
        await self.events.soft_delete(event_id)
        return DeleteResponse(message="Event deleted successfully")

    async def to_response(self, event: Event) -> EventResponse:
        """Build the read view; tombstoned properties are left out"""
        property_ids = await self.soft_delete_filter.filter_active(
            CatalogKind.PROPERTY, load_ids(event.property_ids)
        )
        return EventResponse.model_validate(event).model_copy(update={"property_ids": property_ids})

    async def _get_active(self, event_id: UUID) -> Event:
        event = await self.events.find_active_by_id(event_id)
        if event is None:
            raise NotFoundError("Event not found")
        return event
