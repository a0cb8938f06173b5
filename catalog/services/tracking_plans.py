from typing import Iterable, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from catalog.core.config import settings
from catalog.core.errors import BadRequestError, ConflictError, NotFoundError
from catalog.models.base import load_ids
from catalog.models.tracking_plan import TrackingPlan
from catalog.repositories.event_store import EventStore
from catalog.repositories.property_store import PropertyStore
from catalog.repositories.tracking_plan_store import TrackingPlanStore
from catalog.schemas.common import DeleteResponse
from catalog.schemas.event import EventCreate
from catalog.schemas.tracking_plan import TrackingPlanCreate, TrackingPlanResponse, TrackingPlanUpdate
from catalog.services.events import EventReconciler
from catalog.services.identity import merge_ids
from catalog.services.soft_delete import CatalogKind, SoftDeleteFilter

logger = structlog.get_logger()


class TrackingPlanService:
    """
    Top-level reconciliation of tracking plans.

    A plan goes absent -> active -> deleted, and deleted is terminal: an update
    only ever sees active plans. Nested events and properties are written to the
    shared catalog as they are resolved, so a failure part-way through leaves the
    records created so far in place while the plan itself is not written.
    """

    def __init__(self, db: AsyncSession, event_types: Iterable[str] | None = None):
        self.plans = TrackingPlanStore(db)
        self.events = EventStore(db)
        self.properties = PropertyStore(db)
        self.event_reconciler = EventReconciler(
            self.events,
            self.properties,
            settings.event_types if event_types is None else event_types
        )
        self.soft_delete_filter = SoftDeleteFilter({CatalogKind.EVENT: self.events})

    async def create_tracking_plan(self, data: TrackingPlanCreate) -> TrackingPlanResponse:
        if not data.name or not data.description:
            raise BadRequestError("Missing required fields: name and description are required")

        if not data.events:
            raise BadRequestError("At least one event is required to create a tracking plan")

        if await self.plans.find_active_by_name(data.name):
            raise ConflictError(f"Tracking plan with name '{data.name}' already exists")

        for definition in data.events:
            self.event_reconciler.validate(definition)

        # Input order, no deduplication: a repeated definition resolves to the same id twice
        event_ids = []
        for definition in data.events:
            event_ids.append(await self.event_reconciler.reconcile_new_event(definition))

        plan = await self.plans.create(data.name, data.description, event_ids)

        logger.info("tracking_plan_created", id=str(plan.id), name=plan.name, events=len(event_ids))
        return await self.to_response(plan)

    async def list_tracking_plans(self) -> list[TrackingPlanResponse]:
        return [await self.to_response(p) for p in await self.plans.list_active()]

    async def get_tracking_plan(self, plan_id: UUID) -> TrackingPlanResponse:
        return await self.to_response(await self._get_active(plan_id))

    async def update_tracking_plan(self, plan_id: UUID, data: TrackingPlanUpdate) -> TrackingPlanResponse:
        plan = await self._get_active(plan_id)

        if data.name == "" or data.description == "":
            raise BadRequestError("Tracking plan name and description must be non-empty strings")

        if data.name is not None and data.name != plan.name:
            if await self.plans.find_active_by_name(data.name):
                raise ConflictError(f"Tracking plan with name '{data.name}' already exists")

        stored_ids = load_ids(plan.event_ids)
        event_ids = await self.soft_delete_filter.filter_active(CatalogKind.EVENT, stored_ids)

        if data.events:
            submitted = {}
            for definition in data.events:
                self.event_reconciler.validate(definition)
                description = submitted.setdefault(definition.identity, definition.description)
                if description != definition.description:
                    raise ConflictError(
                        f"Event '{definition.name}' of type '{definition.type}' "
                        f"is submitted with conflicting descriptions"
                    )

            event_ids = await self._merge_events(event_ids, data.events)

        # Dangling references to deleted events are dropped on every update
        if event_ids != stored_ids:
            plan = await self.plans.update_event_ids(plan_id, event_ids)

        name = data.name if data.name != plan.name else None
        description = data.description if data.description != plan.description else None
        if name is not None or description is not None:
            plan = await self.plans.update(plan_id, name=name, description=description)

        logger.info("tracking_plan_updated", id=str(plan_id))
        return await self.to_response(plan)

    async def _merge_events(self, current_ids: list[UUID], definitions: Sequence[EventCreate]) -> list[UUID]:
        """
        Resolve the submitted events against the plan's active references.

        The result is the current list followed by any newly referenced events.
        """
        current_events = {
            (event.name, event.type): event
            for event in await self.events.find_active_by_ids(current_ids)
        }

        resolved_ids = []
        for definition in definitions:
            known = current_events.get(definition.identity)
            if known is not None:
                await self.event_reconciler.reconcile_known_event(known, definition)
                resolved_ids.append(known.id)
            else:
                resolved_ids.append(
                    await self.event_reconciler.reconcile_new_event(definition, merge_properties=True)
                )

        return merge_ids(current_ids, resolved_ids)

    async def delete_tracking_plan(self, plan_id: UUID) -> DeleteResponse:
        await self._get_active(plan_id)
        await self.plans.soft_delete(plan_id)

        logger.info("tracking_plan_deleted", id=str(plan_id))
        return DeleteResponse(message="Tracking plan deleted successfully")

    async def to_response(self, plan: TrackingPlan) -> TrackingPlanResponse:
        """Build the read view; tombstoned events are left out"""
        event_ids = await self.soft_delete_filter.filter_active(CatalogKind.EVENT, load_ids(plan.event_ids))
        return TrackingPlanResponse.model_validate(plan).model_copy(update={"event_ids": event_ids})

    async def _get_active(self, plan_id: UUID) -> TrackingPlan:
        plan = await self.plans.find_active_by_id(plan_id)
        if plan is None:
            raise NotFoundError("Tracking plan not found")
        return plan
