from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from catalog.core.database import get_db
from catalog.core.errors import CatalogError, InternalError
from catalog.schemas.common import DeleteResponse
from catalog.schemas.event import EventResponse, EventCreate, EventUpdate
from catalog.services.events import EventService

logger = structlog.get_logger()
router = APIRouter(prefix="/events", tags=["events"])


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(definition: EventCreate, db: AsyncSession = Depends(get_db)):
    """
    Create an event together with its properties.

    - **name**, **type**, **description** are required
    - **properties**: existing properties are reused when name, type and
      description match; a description mismatch fails with 409
    """
    try:
        return await EventService(db).create_event(definition)
    except CatalogError:
        raise
    except Exception as e:
        logger.error("event_create_failed", error=str(e))
        raise InternalError("Failed to create event")


@router.get("", response_model=list[EventResponse])
async def list_events(db: AsyncSession = Depends(get_db)):
    """List active events, newest first"""
    try:
        return await EventService(db).list_events()
    except CatalogError:
        raise
    except Exception as e:
        logger.error("event_list_failed", error=str(e))
        raise InternalError("Failed to fetch events")


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: UUID, db: AsyncSession = Depends(get_db)):
    try:
        return await EventService(db).get_event(event_id)
    except CatalogError:
        raise
    except Exception as e:
        logger.error("event_fetch_failed", id=str(event_id), error=str(e))
        raise InternalError("Failed to fetch event")


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(event_id: UUID, data: EventUpdate, db: AsyncSession = Depends(get_db)):
    """
    Update an event.

    Submitted properties are added to the event; existing ones are kept.
    """
    try:
        return await EventService(db).update_event(event_id, data)
    except CatalogError:
        raise
    except Exception as e:
        logger.error("event_update_failed", id=str(event_id), error=str(e))
        raise InternalError("Failed to update event")


@router.delete("/{event_id}", response_model=DeleteResponse)
async def delete_event(event_id: UUID, db: AsyncSession = Depends(get_db)):
    try:
        return await EventService(db).delete_event(event_id)
    except CatalogError:
        raise
    except Exception as e:
        logger.error("event_delete_failed", id=str(event_id), error=str(e))
        raise InternalError("Failed to delete event")
