"""Overdue status derivation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from planner.models.tasks import TaskStatus

if TYPE_CHECKING:
    from datetime import datetime

    from planner.models.tasks import Task
    from planner.schemas.tasks import TaskRead


def derive_status(task: Task | TaskRead, now: datetime) -> TaskStatus:
    """Return OVERDUE for an unfinished task whose end date has passed."""
    if task.status != TaskStatus.COMPLETED and task.end_date < now:
        return TaskStatus.OVERDUE
    return task.status
