# SQLAlchemy declarative base and shared soft-delete columns

from datetime import datetime, timezone
from typing import Iterable
from uuid import UUID

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base

Base = declarative_base()

ACTIVE_ROWS = "deleted_at IS NULL"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """Creation/update timestamps plus the soft-delete tombstone"""

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


# Identifier lists live in JSON columns as strings
def dump_ids(ids: Iterable[UUID]) -> list[str]:
    return [str(i) for i in ids]


def load_ids(values: Iterable[str] | None) -> list[UUID]:
    return [UUID(str(v)) for v in values or []]
