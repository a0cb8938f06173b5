from uuid import UUID

from catalog.models.property import Property
from catalog.repositories.base import SoftDeleteStore


class PropertyStore(SoftDeleteStore):
    model = Property
    kind = "Property"

    async def find_active_by_identity(self, name: str, type_: str) -> Property | None:
        result = await self.db.execute(
            self._active().where(Property.name == name, Property.type == type_)
        )
        return result.scalar_one_or_none()

    async def create(self, name: str, type_: str, description: str) -> Property:
        return await self._add(Property(name=name, type=type_, description=description))

    async def update_description(self, record_id: UUID, description: str) -> Property:
        record = await self.find_by_id(record_id)
        record.description = description
        return await self._commit(record)

    def _conflict_message(self, record) -> str:
        return f"Property with name '{record.name}' and type '{record.type}' already exists"
