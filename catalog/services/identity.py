from typing import Any, Awaitable, Callable, Iterable, NamedTuple, Optional
from uuid import UUID

import structlog

from catalog.core.errors import ConflictError

logger = structlog.get_logger()


class Resolution(NamedTuple):
    """Outcome of resolving a (name, type) identity"""

    id: UUID
    was_created: bool


class IdentityResolver:
    """
    Resolve-or-create for catalog entities identified by (name, type).

    Works against any store exposing find_active_by_identity() and create().
    The outcome is tri-state: an existing record is reused when its description
    matches, a ConflictError is raised when it does not, and a new record is
    created when none is active. Two concurrent creations of the same identity
    are settled by the store's unique index, which makes the loser's insert
    raise ConflictError as well.
    """

    def __init__(self, store):
        self.store = store

    async def resolve(
            self,
            name: str,
            type_: str,
            description: str,
            prepare: Optional[Callable[[], Awaitable[dict[str, Any]]]] = None
    ) -> Resolution:
        """
        Args:
            prepare: awaited only when the record must be created; returns
                extra keyword arguments for the store's create()
        """
        existing = await self.store.find_active_by_identity(name, type_)

        if existing is not None:
            if existing.description != description:
                raise ConflictError(
                    f"{self.store.kind} '{name}' of type '{type_}' already exists with a different description"
                )
            return Resolution(existing.id, False)

        extra = await prepare() if prepare is not None else {}
        record = await self.store.create(name, type_, description, **extra)

        logger.info("catalog_record_created", kind=self.store.kind, name=name, type=type_, id=str(record.id))
        return Resolution(record.id, True)


def merge_ids(*id_lists: Iterable[UUID]) -> list[UUID]:
    """Union of the given lists, first-seen order, duplicates removed"""
    merged: dict[UUID, None] = {}
    for ids in id_lists:
        for record_id in ids:
            merged.setdefault(record_id, None)
    return list(merged)
