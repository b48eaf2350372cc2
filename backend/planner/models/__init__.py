"""Model exports for SQLAlchemy/SQLModel metadata discovery."""

from planner.models.tasks import Task, TaskCadence, TaskStatus

__all__ = [
    "Task",
    "TaskCadence",
    "TaskStatus",
]
