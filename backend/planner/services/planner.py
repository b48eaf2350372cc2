"""Planner engine: create, list-for-view, update, and efficiency operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from planner.core.errors import PlannerError, TaskValidationError
from planner.core.logging import get_logger
from planner.core.time import utcnow
from planner.models.tasks import Task
from planner.schemas.analytics import EfficiencyRead
from planner.schemas.tasks import TaskListResponse
from planner.services.efficiency import aggregate
from planner.services.mutation_guard import (
    authorize_update,
    validate_parent_task,
    validate_task_invariants,
)
from planner.services.overdue import derive_status
from planner.services.projection import annotate
from planner.services.view_ranges import (
    coerce_timeframe,
    coerce_view,
    resolve_timeframe_window,
    resolve_view_window,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date, datetime
    from uuid import UUID

    from planner.models.tasks import TaskStatus
    from planner.schemas.tasks import TaskCreate, TaskUpdate
    from planner.services.task_store import TaskStore
    from planner.services.view_ranges import AnalyticsTimeframe, PlannerView

logger = get_logger(__name__)


class PlannerService:
    """Engine facade over an injected `TaskStore`.

    `clock` supplies "now" for overdue derivation and default analytics
    reference dates.
    """

    def __init__(
        self,
        store: TaskStore,
        *,
        clock: Callable[[], datetime] = utcnow,
        derive_status_on_read: bool = False,
        strict_parent_linkage: bool = False,
    ) -> None:
        self.store = store
        self.clock = clock
        self.derive_status_on_read = derive_status_on_read
        self.strict_parent_linkage = strict_parent_linkage

    async def _check_parent(
        self,
        parent_task_id: UUID | None,
        *,
        owner_id: UUID,
        task_id: UUID | None = None,
    ) -> None:
        if not self.strict_parent_linkage or parent_task_id is None:
            return
        parent = await self.store.get(parent_task_id)
        validate_parent_task(parent, owner_id=owner_id, task_id=task_id)

    async def create_task(self, payload: TaskCreate) -> Task:
        """Validate and persist a new task with its status derived."""
        validate_task_invariants(
            cadence=payload.cadence,
            start_date=payload.start_date,
            end_date=payload.end_date,
            parent_task_id=payload.parent_task_id,
        )
        await self._check_parent(payload.parent_task_id, owner_id=payload.owner_id)

        now = self.clock()
        task = Task(**payload.model_dump(), created_at=now, updated_at=now)
        task.status = derive_status(task, now)
        created = await self.store.insert(task)
        logger.info(
            "planner.task.created",
            extra={
                "task_id": str(created.id),
                "owner_id": str(created.owner_id),
                "cadence": created.cadence.value,
                "status": created.status.value,
            },
        )
        return created

    async def list_tasks_for_view(
        self,
        owner_id: UUID,
        view: PlannerView | str,
        anchor: date | datetime,
        status: TaskStatus | None = None,
    ) -> TaskListResponse:
        """Return tasks overlapping the view window, decorated for that view."""
        requested_view = coerce_view(view)
        window = resolve_view_window(requested_view, anchor)
        if not self.derive_status_on_read:
            tasks = await self.store.list_overlapping(
                owner_id,
                start=window.start,
                end=window.end,
                status=status,
            )
            projected = annotate(tasks, requested_view)
        else:
            # Derive on the read copies first so the status filter sees fresh values.
            tasks = await self.store.list_overlapping(owner_id, start=window.start, end=window.end)
            now = self.clock()
            projected = annotate(tasks, requested_view)
            for item in projected:
                item.status = derive_status(item, now)
            if status is not None:
                projected = [item for item in projected if item.status == status]
        logger.debug(
            "planner.tasks.listed",
            extra={
                "owner_id": str(owner_id),
                "view": requested_view.value,
                "window_start": window.start.isoformat(),
                "window_end": window.end.isoformat(),
                "count": len(projected),
            },
        )
        return TaskListResponse(total=len(projected), tasks=projected)

    async def update_task(self, task_id: UUID, payload: TaskUpdate) -> Task:
        """Apply a guarded patch to a task and persist it with status re-derived."""
        requested_patch = payload.patch_fields()
        existing = await self.store.get(task_id)
        try:
            patch = authorize_update(
                existing,
                payload.owner_id,
                payload.source_view,
                requested_patch,
            )
        except PlannerError as err:
            logger.info(
                "planner.task.update_rejected",
                extra={
                    "code": err.code,
                    "task_id": str(task_id),
                    "owner_id": str(payload.owner_id),
                    "source_view": payload.source_view.value if payload.source_view else None,
                    "fields": sorted(requested_patch),
                },
            )
            raise
        if not patch:
            raise TaskValidationError("No fields to update.")
        task = cast("Task", existing)

        parent_task_id = patch.get("parent_task_id", task.parent_task_id)
        validate_task_invariants(
            cadence=patch.get("cadence", task.cadence),
            start_date=patch.get("start_date", task.start_date),
            end_date=patch.get("end_date", task.end_date),
            parent_task_id=parent_task_id,
        )
        if "parent_task_id" in patch:
            await self._check_parent(
                patch["parent_task_id"],
                owner_id=task.owner_id,
                task_id=task.id,
            )

        for key, value in patch.items():
            setattr(task, key, value)
        now = self.clock()
        task.status = derive_status(task, now)
        task.updated_at = now
        updated = await self.store.replace(task)
        logger.info(
            "planner.task.updated",
            extra={
                "task_id": str(updated.id),
                "fields": sorted(patch),
                "status": updated.status.value,
            },
        )
        return updated

    async def get_efficiency(
        self,
        owner_id: UUID,
        timeframe: AnalyticsTimeframe | str,
        reference: date | datetime | None = None,
    ) -> EfficiencyRead:
        """Compute the completion ratio for tasks overlapping the timeframe."""
        resolved = coerce_timeframe(timeframe)
        window = resolve_timeframe_window(resolved, reference or self.clock())
        tasks = await self.store.list_overlapping(owner_id, start=window.start, end=window.end)
        summary = aggregate(tasks)
        return EfficiencyRead(
            timeframe=resolved,
            total=summary.total,
            completed=summary.completed,
            efficiency=summary.efficiency,
        )
