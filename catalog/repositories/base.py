from typing import Iterable, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from catalog.core.errors import ConflictError
from catalog.models.base import utcnow

logger = structlog.get_logger()


class SoftDeleteStore:
    """
    CRUD access to one catalog table where deletes only set the tombstone.

    Every write commits immediately; a unique-index violation on commit is
    rolled back and surfaced as ConflictError.
    """

    model = None
    kind = "Record"

    def __init__(self, db: AsyncSession):
        self.db = db

    def _active(self):
        return select(self.model).where(self.model.deleted_at.is_(None))

    async def find_by_id(self, record_id: UUID):
        """Lookup ignoring the tombstone"""
        return await self.db.get(self.model, record_id)

    async def find_active_by_id(self, record_id: UUID):
        result = await self.db.execute(self._active().where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def find_active_by_ids(self, ids: Iterable[UUID]) -> list:
        ids = list(ids)
        if not ids:
            return []
        result = await self.db.execute(self._active().where(self.model.id.in_(ids)))
        return list(result.scalars().all())

    async def list_active(self, newest_first: bool = True) -> Sequence:
        order = self.model.created_at.desc() if newest_first else self.model.created_at.asc()
        result = await self.db.execute(self._active().order_by(order))
        return result.scalars().all()

    async def soft_delete(self, record_id: UUID) -> None:
        record = await self.find_by_id(record_id)
        record.deleted_at = utcnow()
        await self._commit(record)
        logger.info("record_soft_deleted", kind=self.kind, id=str(record_id))

    async def _add(self, record):
        self.db.add(record)
        return await self._commit(record)

    async def _commit(self, record):
        try:
            await self.db.commit()
        except IntegrityError as e:
            # Read the identity before rollback expires the instance
            message = self._conflict_message(record)
            await self.db.rollback()
            logger.warning("unique_constraint_violated", kind=self.kind, error=str(e.orig))
            raise ConflictError(message)
        return record

    def _conflict_message(self, record) -> str:
        return f"{self.kind} '{record.name}' already exists"
