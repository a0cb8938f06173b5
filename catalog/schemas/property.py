# Pydantic schemas

from pydantic import BaseModel, field_validator
from datetime import datetime
from uuid import UUID

from catalog.schemas.common import strip_text


class PropertyCreate(BaseModel):
    """A property as submitted: on its own or nested inside an event"""

    name: str | None = None
    type: str | None = None
    description: str | None = None

    @field_validator('name', 'type', 'description')
    @classmethod
    def strip_whitespace(cls, v: str | None) -> str | None:
        return strip_text(v)


class PropertyUpdate(BaseModel):
    """Only the description of a property can change"""

    description: str | None = None

    @field_validator('description')
    @classmethod
    def strip_whitespace(cls, v: str | None) -> str | None:
        return strip_text(v)


class PropertyResponse(BaseModel):
    """Response schema for property operations"""

    id: UUID
    name: str
    type: str
    description: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
