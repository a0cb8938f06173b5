from typing import Iterable
from uuid import UUID

from catalog.models.base import dump_ids
from catalog.models.tracking_plan import TrackingPlan
from catalog.repositories.base import SoftDeleteStore


class TrackingPlanStore(SoftDeleteStore):
    model = TrackingPlan
    kind = "Tracking plan"

    async def find_active_by_name(self, name: str) -> TrackingPlan | None:
        result = await self.db.execute(self._active().where(TrackingPlan.name == name))
        return result.scalar_one_or_none()

    async def create(self, name: str, description: str, event_ids: Iterable[UUID]) -> TrackingPlan:
        plan = TrackingPlan(name=name, description=description, event_ids=dump_ids(event_ids))
        return await self._add(plan)

    async def update(
            self,
            record_id: UUID,
            name: str | None = None,
            description: str | None = None
    ) -> TrackingPlan:
        plan = await self.find_by_id(record_id)
        if name is not None:
            plan.name = name
        if description is not None:
            plan.description = description
        return await self._commit(plan)

    async def update_event_ids(self, record_id: UUID, ids: Iterable[UUID]) -> TrackingPlan:
        plan = await self.find_by_id(record_id)
        plan.event_ids = dump_ids(ids)
        return await self._commit(plan)

    def _conflict_message(self, record) -> str:
        return f"Tracking plan with name '{record.name}' already exists"
