from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from catalog.core.database import get_db
from catalog.core.errors import CatalogError, InternalError
from catalog.schemas.common import DeleteResponse
from catalog.schemas.tracking_plan import TrackingPlanCreate, TrackingPlanResponse, TrackingPlanUpdate
from catalog.services.tracking_plans import TrackingPlanService

logger = structlog.get_logger()
router = APIRouter(prefix="/plans", tags=["tracking plans"])


@router.post("", response_model=TrackingPlanResponse, status_code=status.HTTP_201_CREATED)
async def create_tracking_plan(data: TrackingPlanCreate, db: AsyncSession = Depends(get_db)):
    """
    Create a tracking plan from nested event and property definitions.

    - **name**: unique among active plans
    - **events**: at least one; each is reused or created in the catalog

    Events and properties created before a failing one stay in the catalog.
    """
    try:
        return await TrackingPlanService(db).create_tracking_plan(data)
    except CatalogError:
        raise
    except Exception as e:
        logger.error("tracking_plan_create_failed", error=str(e))
        raise InternalError("Failed to create tracking plan")


@router.get("", response_model=list[TrackingPlanResponse])
async def list_tracking_plans(db: AsyncSession = Depends(get_db)):
    """List active tracking plans, newest first"""
    try:
        return await TrackingPlanService(db).list_tracking_plans()
    except CatalogError:
        raise
    except Exception as e:
        logger.error("tracking_plan_list_failed", error=str(e))
        raise InternalError("Failed to fetch tracking plans")


@router.get("/{plan_id}", response_model=TrackingPlanResponse)
async def get_tracking_plan(plan_id: UUID, db: AsyncSession = Depends(get_db)):
    try:
        return await TrackingPlanService(db).get_tracking_plan(plan_id)
    except CatalogError:
        raise
    except Exception as e:
        logger.error("tracking_plan_fetch_failed", id=str(plan_id), error=str(e))
        raise InternalError("Failed to fetch tracking plan")


@router.put("/{plan_id}", response_model=TrackingPlanResponse)
async def update_tracking_plan(plan_id: UUID, data: TrackingPlanUpdate, db: AsyncSession = Depends(get_db)):
    """
    Update a tracking plan.

    - **events** are merged in: known events are refreshed, new ones added,
      none removed
    """
    try:
        return await TrackingPlanService(db).update_tracking_plan(plan_id, data)
    except CatalogError:
        raise
    except Exception as e:
        logger.error("tracking_plan_update_failed", id=str(plan_id), error=str(e))
        raise InternalError("Failed to update tracking plan")


@router.delete("/{plan_id}", response_model=DeleteResponse)
async def delete_tracking_plan(plan_id: UUID, db: AsyncSession = Depends(get_db)):
    """Soft-delete a tracking plan; its events are left untouched"""
    try:
        return await TrackingPlanService(db).delete_tracking_plan(plan_id)
    except CatalogError:
        raise
    except Exception as e:
        logger.error("tracking_plan_delete_failed", id=str(plan_id), error=str(e))
        raise InternalError("Failed to delete tracking plan")
