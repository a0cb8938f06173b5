from enum import Enum
from typing import Mapping, Sequence
from uuid import UUID

from catalog.repositories.base import SoftDeleteStore


class CatalogKind(str, Enum):
    PROPERTY = "property"
    EVENT = "event"


class SoftDeleteFilter:
    """Drops references to absent or tombstoned records from stored id lists"""

    def __init__(self, stores: Mapping[CatalogKind, SoftDeleteStore]):
        self.stores = stores

    async def filter_active(self, kind: CatalogKind, ids: Sequence[UUID]) -> list[UUID]:
        """Return the ids whose record is active, in input order"""
        if not ids:
            return []
        records = await self.stores[kind].find_active_by_ids(set(ids))
        active = {record.id for record in records}
        return [record_id for record_id in ids if record_id in active]
