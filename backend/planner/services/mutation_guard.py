"""Ownership, immutability, and invariant checks for task writes.

Every task update passes through `authorize_update` before it reaches the
store. Monthly tasks are the single stored record behind every daily and
weekly projection of them, so edits coming from those narrower views may only
touch non-core fields such as `status`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from planner.core.errors import (
    TaskConflictError,
    TaskForbiddenError,
    TaskNotFoundError,
    TaskValidationError,
)
from planner.models.tasks import TaskCadence
from planner.services.view_ranges import PlannerView, coerce_view

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime
    from uuid import UUID

    from planner.models.tasks import Task

MONTHLY_CORE_FIELDS = frozenset(
    {
        "title",
        "description",
        "start_date",
        "end_date",
        "color_category",
        "cadence",
    },
)
CONTROL_FIELDS = frozenset({"owner_id", "source_view"})
SUB_VIEWS = frozenset({PlannerView.DAILY, PlannerView.WEEKLY})


def validate_task_invariants(
    *,
    cadence: TaskCadence,
    start_date: datetime,
    end_date: datetime,
    parent_task_id: UUID | None,
) -> None:
    """Check the date range and parent-linkage rules shared by create and update."""
    if start_date > end_date:
        raise TaskValidationError("start_date must be earlier than or equal to end_date.")
    if parent_task_id is None:
        return
    if cadence == TaskCadence.MONTHLY:
        raise TaskValidationError("Monthly task cannot reference a parent_task_id.")
    if cadence != TaskCadence.DAILY:
        raise TaskValidationError("Only daily tasks can reference a parent task.")


def validate_parent_task(
    parent: Task | None,
    *,
    owner_id: UUID,
    task_id: UUID | None = None,
) -> None:
    """Check that a parent reference points at a MONTHLY task of the same owner."""
    if parent is None:
        raise TaskValidationError("Parent task does not exist.")
    if task_id is not None and parent.id == task_id:
        raise TaskValidationError("A task cannot be its own parent.")
    if parent.owner_id != owner_id:
        raise TaskValidationError("Parent task must belong to the same owner.")
    if parent.cadence != TaskCadence.MONTHLY:
        raise TaskValidationError("Parent task must be a monthly task.")


def touches_core_fields(patch: Mapping[str, object]) -> bool:
    return not MONTHLY_CORE_FIELDS.isdisjoint(patch)


def authorize_update(
    existing: Task | None,
    requester_owner_id: UUID,
    source_view: PlannerView | str | None,
    patch: Mapping[str, Any],
) -> dict[str, Any]:
    """Validate an update request and return the patch with control keys removed.

    Raises `TaskNotFoundError` for a missing task, `TaskForbiddenError` when the
    requester does not own it, and `TaskConflictError` when a daily or weekly
    context tries to change a monthly task's core details.
    """
    if existing is None:
        raise TaskNotFoundError
    if existing.owner_id != requester_owner_id:
        raise TaskForbiddenError
    view = coerce_view(source_view) if source_view is not None else None
    if existing.cadence == TaskCadence.MONTHLY and view in SUB_VIEWS and touches_core_fields(patch):
        raise TaskConflictError
    return {key: value for key, value in patch.items() if key not in CONTROL_FIELDS}
