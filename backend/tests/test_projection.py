# ruff: noqa

from __future__ import annotations

from datetime import datetime
from uuid import uuid4

import pytest

from planner.core.errors import InvalidViewKindError
from planner.models.tasks import TaskCadence
from planner.services.projection import annotate
from planner.services.view_ranges import PlannerView

from fakes import make_task

OWNER = uuid4()


def _task(cadence: TaskCadence):
    return make_task(
        owner_id=OWNER,
        cadence=cadence,
        start_date=datetime(2024, 3, 1),
        end_date=datetime(2024, 3, 31, 23, 59, 59),
    )


@pytest.mark.parametrize("view", [PlannerView.DAILY, PlannerView.WEEKLY])
def test_monthly_task_is_projected_into_narrower_views(view: PlannerView) -> None:
    [item] = annotate([_task(TaskCadence.MONTHLY)], view)

    assert item.is_projected_from_monthly is True
    assert item.requested_view is view


def test_monthly_task_is_native_in_monthly_view() -> None:
    [item] = annotate([_task(TaskCadence.MONTHLY)], PlannerView.MONTHLY)

    assert item.is_projected_from_monthly is False
    assert item.requested_view is PlannerView.MONTHLY


@pytest.mark.parametrize("cadence", [TaskCadence.DAILY, TaskCadence.WEEKLY])
@pytest.mark.parametrize("view", list(PlannerView))
def test_non_monthly_tasks_are_never_projected(cadence: TaskCadence, view: PlannerView) -> None:
    [item] = annotate([_task(cadence)], view)

    assert item.is_projected_from_monthly is False


def test_annotate_preserves_order_and_fields_without_mutating_input() -> None:
    tasks = [_task(TaskCadence.DAILY), _task(TaskCadence.MONTHLY)]
    original = [task.model_dump() for task in tasks]

    items = annotate(tasks, "DAILY")

    assert [item.id for item in items] == [task.id for task in tasks]
    assert items[1].title == tasks[1].title
    assert items[1].start_date == tasks[1].start_date
    assert [task.model_dump() for task in tasks] == original


def test_annotate_rejects_unknown_view() -> None:
    with pytest.raises(InvalidViewKindError):
        annotate([_task(TaskCadence.DAILY)], "QUARTERLY")
