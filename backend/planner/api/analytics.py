"""Analytics endpoints."""

from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Query

from planner.api.deps import PLANNER_DEP
from planner.schemas.analytics import EfficiencyRead
from planner.services.planner import PlannerService
from planner.services.view_ranges import AnalyticsTimeframe

RUNTIME_ANNOTATION_TYPES = (PlannerService, date, UUID, AnalyticsTimeframe)

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/efficiency", response_model=EfficiencyRead)
async def get_efficiency(
    owner_id: UUID,
    timeframe: AnalyticsTimeframe,
    reference_date: date | None = Query(default=None, alias="date"),
    planner: PlannerService = PLANNER_DEP,
) -> EfficiencyRead:
    """Return the completed/total ratio for tasks in the timeframe ending today."""
    return await planner.get_efficiency(owner_id, timeframe, reference_date)
