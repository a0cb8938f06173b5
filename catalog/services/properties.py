from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from catalog.core.errors import BadRequestError, ConflictError, NotFoundError
from catalog.models.property import PropertyType
from catalog.repositories.property_store import PropertyStore
from catalog.schemas.common import DeleteResponse
from catalog.schemas.property import PropertyResponse, PropertyCreate, PropertyUpdate
from catalog.services.identity import IdentityResolver

logger = structlog.get_logger()


def validate_property(definition: PropertyCreate, event_name: str | None = None) -> None:
    """Raise BadRequestError unless name, type and description are usable"""
    context = f" for event '{event_name}'" if event_name else ""

    if not definition.name or not definition.type or not definition.description:
        raise BadRequestError(f"Property name, type, and description are required{context}")

    if definition.type not in PropertyType.values():
        raise BadRequestError(
            f"Invalid property type '{definition.type}'{context}. "
            f"Must be one of: {', '.join(PropertyType.values())}"
        )


class PropertyReconciler:
    """Maps property definitions onto property ids, creating what is missing"""

    def __init__(self, properties: PropertyStore):
        self.resolver = IdentityResolver(properties)

    async def reconcile(self, definitions: Sequence[PropertyCreate], event_name: str | None = None) -> list[UUID]:
        """
        Resolve each definition in input order.

        All definitions are validated before the first write. Repeated definitions resolve to
        the same id and repeat in the output; callers needing set semantics
        deduplicate themselves.
        """
        for definition in definitions:
            validate_property(definition, event_name)

        property_ids = []
        for definition in definitions:
            resolution = await self.resolver.resolve(definition.name, definition.type, definition.description)
            property_ids.append(resolution.id)

        return property_ids


class PropertyService:
    """Direct create/read/update/delete of catalog properties"""

    def __init__(self, db: AsyncSession):
        self.properties = PropertyStore(db)

    async def create_property(self, definition: PropertyCreate) -> PropertyResponse:
        validate_property(definition)

        if await self.properties.find_active_by_identity(definition.name, definition.type):
            raise ConflictError(f"Property with name '{definition.name}' and type '{definition.type}' already exists")

        prop = await self.properties.create(definition.name, definition.type, definition.description)
        logger.info("property_created", id=str(prop.id), name=prop.name, type=prop.type)
        return PropertyResponse.model_validate(prop)

    async def list_properties(self) -> list[PropertyResponse]:
        return [PropertyResponse.model_validate(p) for p in await self.properties.list_active()]

    async def get_property(self, property_id: UUID) -> PropertyResponse:
        return PropertyResponse.model_validate(await self._get_active(property_id))

    async def update_property(self, property_id: UUID, data: PropertyUpdate) -> PropertyResponse:
        prop = await self._get_active(property_id)

        if data.description is not None:
            if not data.description:
                raise BadRequestError("Description must be a non-empty string")
            if data.description != prop.description:
                prop = await self.properties.update_description(property_id, data.description)
                logger.info("property_updated", id=str(property_id))

        return PropertyResponse.model_validate(prop)

    async def delete_property(self, property_id: UUID) -> DeleteResponse:
        await self._get_active(property_id)
        await self.properties.soft_delete(property_id)
        return DeleteResponse(message="Property deleted successfully")

    async def _get_active(self, property_id: UUID):
        prop = await self.properties.find_active_by_id(property_id)
        if prop is None:
            raise NotFoundError("Property not found")
        return prop
