from typing import Any, Iterable

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from catalog.core.errors import BadRequestError, ConflictError
from catalog.schemas.tracking_plan import TrackingPlanCreate
from catalog.services.tracking_plans import TrackingPlanService

logger = structlog.get_logger()


class ImportService:
    """Service for bulk-importing tracking plans through the reconciliation engine"""

    def __init__(self, db: AsyncSession):
        self.plans = TrackingPlanService(db)

    async def import_tracking_plans(self, payloads: Iterable[dict[str, Any]]) -> dict[str, int]:
        """
        Create each plan in turn; a rejected plan does not stop the import.

        Returns:
            dict with 'created', 'conflicts' and 'invalid' counts
        """
        counts = {"created": 0, "conflicts": 0, "invalid": 0}

        for index, payload in enumerate(payloads, 1):
            try:
                data = TrackingPlanCreate.model_validate(payload)
                await self.plans.create_tracking_plan(data)
                counts["created"] += 1
            except ConflictError as e:
                logger.warning("tracking_plan_import_conflict", index=index, error=e.message)
                counts["conflicts"] += 1
            except BadRequestError as e:
                logger.warning("tracking_plan_import_invalid", index=index, error=e.message)
                counts["invalid"] += 1
            except ValidationError as e:
                logger.warning("tracking_plan_import_invalid", index=index, error=str(e))
                counts["invalid"] += 1

        logger.info("tracking_plans_imported", **counts)
        return counts
