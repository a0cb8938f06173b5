# Pydantic schemas

from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from uuid import UUID

from catalog.schemas.common import strip_text
from catalog.schemas.property import PropertyCreate


class EventCreate(BaseModel):
    """An event as submitted: on its own or nested inside a tracking plan"""

    name: str | None = None
    type: str | None = None
    description: str | None = None
    properties: list[PropertyCreate] | None = None

    @field_validator('name', 'type', 'description')
    @classmethod
    def strip_whitespace(cls, v: str | None) -> str | None:
        return strip_text(v)

    @property
    def identity(self) -> tuple[str | None, str | None]:
        return self.name, self.type


class EventUpdate(BaseModel):
    """Partial update; properties are merged into the existing set"""

    name: str | None = None
    type: str | None = None
    description: str | None = None
    properties: list[PropertyCreate] | None = None

    @field_validator('name', 'type', 'description')
    @classmethod
    def strip_whitespace(cls, v: str | None) -> str | None:
        return strip_text(v)


class EventResponse(BaseModel):
    """Response schema for event operations"""

    id: UUID
    name: str
    type: str
    description: str
    property_ids: list[UUID] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
