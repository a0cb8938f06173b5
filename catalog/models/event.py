# SQLAlchemy models

from sqlalchemy import Column, String, Text, JSON, Index, text
from sqlalchemy.dialects.postgresql import UUID
import uuid

from catalog.models.base import ACTIVE_ROWS, Base, TimestampMixin


class Event(TimestampMixin, Base):
    __tablename__ = "events"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    type = Column(String(64), nullable=False)
    description = Column(Text, nullable=False)
    property_ids = Column(JSON, nullable=False, default=list)

    __table_args__ = (
        Index(
            'uq_events_active_identity', 'name', 'type',
            unique=True,
            postgresql_where=text(ACTIVE_ROWS),
            sqlite_where=text(ACTIVE_ROWS),
        ),
        Index('idx_events_created', 'created_at'),
    )
