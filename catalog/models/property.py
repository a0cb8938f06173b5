# SQLAlchemy models

from sqlalchemy import Column, String, Text, Index, text
from sqlalchemy.dialects.postgresql import UUID
import enum
import uuid

from catalog.models.base import ACTIVE_ROWS, Base, TimestampMixin


class PropertyType(str, enum.Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class Property(TimestampMixin, Base):
    __tablename__ = "properties"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    type = Column(String(32), nullable=False)
    description = Column(Text, nullable=False)

    __table_args__ = (
        # (name, type) is unique among active rows only
        Index(
            'uq_properties_active_identity', 'name', 'type',
            unique=True,
            postgresql_where=text(ACTIVE_ROWS),
            sqlite_where=text(ACTIVE_ROWS),
        ),
        Index('idx_properties_created', 'created_at'),
    )
