# SQLAlchemy models

from sqlalchemy import Column, String, Text, JSON, Index, text
from sqlalchemy.dialects.postgresql import UUID
import uuid

from catalog.models.base import ACTIVE_ROWS, Base, TimestampMixin


class TrackingPlan(TimestampMixin, Base):
    __tablename__ = "tracking_plans"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    event_ids = Column(JSON, nullable=False, default=list)

    __table_args__ = (
        # A deleted plan's name may be reused
        Index(
            'uq_tracking_plans_active_name', 'name',
            unique=True,
            postgresql_where=text(ACTIVE_ROWS),
            sqlite_where=text(ACTIVE_ROWS),
        ),
        Index('idx_tracking_plans_created', 'created_at'),
    )
