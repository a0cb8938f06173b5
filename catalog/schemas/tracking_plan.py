# Pydantic schemas

from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from uuid import UUID

from catalog.schemas.common import strip_text
from catalog.schemas.event import EventCreate


class TrackingPlanCreate(BaseModel):
    """Schema for creating a tracking plan with its nested events"""

    name: str | None = None
    description: str | None = None
    events: list[EventCreate] | None = None

    @field_validator('name', 'description')
    @classmethod
    def strip_whitespace(cls, v: str | None) -> str | None:
        return strip_text(v)


class TrackingPlanUpdate(BaseModel):
    """
    Partial update of a tracking plan.

    Submitted events are merged into the plan; existing references are never removed.
    """

    name: str | None = None
    description: str | None = None
    events: list[EventCreate] | None = None

    @field_validator('name', 'description')
    @classmethod
    def strip_whitespace(cls, v: str | None) -> str | None:
        return strip_text(v)


class TrackingPlanResponse(BaseModel):
    """Response schema for tracking plan operations"""

    id: UUID
    name: str
    description: str
    event_ids: list[UUID] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
