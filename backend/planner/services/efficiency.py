"""Completion-ratio aggregation for analytics timeframes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from planner.models.tasks import TaskStatus

if TYPE_CHECKING:
    from collections.abc import Iterable

    from planner.models.tasks import Task


@dataclass(frozen=True)
class EfficiencySummary:
    total: int
    completed: int
    efficiency: float


def efficiency_percentage(*, completed: int, total: int) -> float:
    """Return completed/total as a percentage rounded to two decimals (0 if empty)."""
    if total <= 0:
        return 0.0
    return round(completed / total * 100, 2)


def aggregate(tasks: Iterable[Task]) -> EfficiencySummary:
    """Count tasks and completed tasks and derive the efficiency percentage."""
    total = 0
    completed = 0
    for task in tasks:
        total += 1
        if task.status == TaskStatus.COMPLETED:
            completed += 1
    return EfficiencySummary(
        total=total,
        completed=completed,
        efficiency=efficiency_percentage(completed=completed, total=total),
    )
