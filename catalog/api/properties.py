from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from catalog.core.database import get_db
from catalog.core.errors import CatalogError, InternalError
from catalog.schemas.common import DeleteResponse
from catalog.schemas.property import PropertyResponse, PropertyCreate, PropertyUpdate
from catalog.services.properties import PropertyService

logger = structlog.get_logger()
router = APIRouter(prefix="/properties", tags=["properties"])


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
async def create_property(definition: PropertyCreate, db: AsyncSession = Depends(get_db)):
    """
    Create a property.

    - **name**, **type** (string, number, boolean), **description** are required
    - Fails with 409 if an active property with the same name and type exists
    """
    try:
        return await PropertyService(db).create_property(definition)
    except CatalogError:
        raise
    except Exception as e:
        logger.error("property_create_failed", error=str(e))
        raise InternalError("Failed to create property")


@router.get("", response_model=list[PropertyResponse])
async def list_properties(db: AsyncSession = Depends(get_db)):
    """List active properties, newest first"""
    try:
        return await PropertyService(db).list_properties()
    except CatalogError:
        raise
    except Exception as e:
        logger.error("property_list_failed", error=str(e))
        raise InternalError("Failed to fetch properties")


@router.get("/{property_id}", response_model=PropertyResponse)
async def get_property(property_id: UUID, db: AsyncSession = Depends(get_db)):
    try:
        return await PropertyService(db).get_property(property_id)
    except CatalogError:
        raise
    except Exception as e:
        logger.error("property_fetch_failed", id=str(property_id), error=str(e))
        raise InternalError("Failed to fetch property")


@router.put("/{property_id}", response_model=PropertyResponse)
async def update_property(property_id: UUID, data: PropertyUpdate, db: AsyncSession = Depends(get_db)):
    """Update a property's description; name and type are fixed"""
    try:
        return await PropertyService(db).update_property(property_id, data)
    except CatalogError:
        raise
    except Exception as e:
        logger.error("property_update_failed", id=str(property_id), error=str(e))
        raise InternalError("Failed to update property")


@router.delete("/{property_id}", response_model=DeleteResponse)
async def delete_property(property_id: UUID, db: AsyncSession = Depends(get_db)):
    """Soft-delete a property; events referencing it stop listing it"""
    try:
        return await PropertyService(db).delete_property(property_id)
    except CatalogError:
        raise
    except Exception as e:
        logger.error("property_delete_failed", id=str(property_id), error=str(e))
        raise InternalError("Failed to delete property")
