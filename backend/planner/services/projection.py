"""View-relative decoration of query results."""

from __future__ import annotations

from typing import TYPE_CHECKING

from planner.models.tasks import TaskCadence
from planner.schemas.tasks import ProjectedTaskRead
from planner.services.view_ranges import PlannerView, coerce_view

if TYPE_CHECKING:
    from collections.abc import Iterable

    from planner.models.tasks import Task


def annotate(tasks: Iterable[Task], requested_view: PlannerView | str) -> list[ProjectedTaskRead]:
    """Attach projection flags to each task without touching the stored rows.

    A monthly task listed in a daily or weekly view is flagged as projected so
    clients can render it inline while treating its core details as read-only.
    """
    view = coerce_view(requested_view)
    return [
        ProjectedTaskRead.model_validate(
            {
                **task.model_dump(),
                "is_projected_from_monthly": (
                    task.cadence == TaskCadence.MONTHLY and view is not PlannerView.MONTHLY
                ),
                "requested_view": view,
            },
        )
        for task in tasks
    ]
