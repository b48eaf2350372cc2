"""Task endpoints: create, list for a planner view, and guarded update."""

from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Query, status

from planner.api.deps import PLANNER_DEP
from planner.models.tasks import TaskStatus
from planner.schemas.errors import ErrorResponse
from planner.schemas.tasks import TaskCreate, TaskListResponse, TaskRead, TaskUpdate
from planner.services.planner import PlannerService
from planner.services.view_ranges import PlannerView

RUNTIME_ANNOTATION_TYPES = (PlannerService, date, UUID, TaskStatus, PlannerView)

router = APIRouter(prefix="/tasks", tags=["tasks"])

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    status.HTTP_403_FORBIDDEN: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    status.HTTP_422_UNPROCESSABLE_CONTENT: {"model": ErrorResponse},
}


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_422_UNPROCESSABLE_CONTENT: {"model": ErrorResponse}},
)
async def create_task(
    payload: TaskCreate,
    planner: PlannerService = PLANNER_DEP,
) -> TaskRead:
    """Create a task; status is derived (PENDING may become OVERDUE) before saving."""
    task = await planner.create_task(payload)
    return TaskRead.model_validate(task, from_attributes=True)


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    owner_id: UUID,
    view: PlannerView,
    anchor_date: date = Query(alias="date"),
    task_status: TaskStatus | None = Query(default=None, alias="status"),
    planner: PlannerService = PLANNER_DEP,
) -> TaskListResponse:
    """List tasks overlapping the view window, including projected monthly tasks."""
    return await planner.list_tasks_for_view(owner_id, view, anchor_date, task_status)


@router.patch("/{task_id}", response_model=TaskRead, responses=_ERROR_RESPONSES)
@router.put("/{task_id}", response_model=TaskRead, responses=_ERROR_RESPONSES)
async def update_task(
    task_id: UUID,
    payload: TaskUpdate,
    planner: PlannerService = PLANNER_DEP,
) -> TaskRead:
    """Update a task owned by the caller.

    Monthly tasks reject title, description, date, color, or cadence changes
    when `source_view` is DAILY or WEEKLY.
    """
    task = await planner.update_task(task_id, payload)
    return TaskRead.model_validate(task, from_attributes=True)
