"""Task model shared by the daily, weekly, and monthly planner views."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime, Index
from sqlmodel import Field, SQLModel

from planner.core.time import utcnow

RUNTIME_ANNOTATION_TYPES = (datetime,)

TITLE_MAX_LENGTH = 140
DESCRIPTION_MAX_LENGTH = 2000
COLOR_CATEGORY_MAX_LENGTH = 50
DEFAULT_COLOR_CATEGORY = "default"


class TaskCadence(str, Enum):
    """Granularity a task was planned at."""

    MONTHLY = "MONTHLY"
    WEEKLY = "WEEKLY"
    DAILY = "DAILY"


class TaskStatus(str, Enum):
    """Execution state of a task."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    OVERDUE = "OVERDUE"


class Task(SQLModel, table=True):
    """Owner-scoped task spanning an inclusive start/end date range.

    Monthly tasks are the single stored record for month-long work; daily and
    weekly views show them through overlap queries instead of copies.
    """

    __tablename__ = "tasks"  # pyright: ignore[reportAssignmentType]
    __table_args__ = (
        Index("ix_tasks_owner_range", "owner_id", "start_date", "end_date"),
        Index("ix_tasks_owner_cadence_status", "owner_id", "cadence", "status"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    owner_id: UUID = Field(index=True)

    title: str = Field(max_length=TITLE_MAX_LENGTH)
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)
    cadence: TaskCadence = Field(default=TaskCadence.DAILY)
    status: TaskStatus = Field(default=TaskStatus.PENDING)
    # Naive UTC throughout; see `planner.core.time`.
    start_date: datetime = Field(sa_column=Column(DateTime(), nullable=False))
    end_date: datetime = Field(sa_column=Column(DateTime(), nullable=False))
    color_category: str = Field(
        default=DEFAULT_COLOR_CATEGORY,
        max_length=COLOR_CATEGORY_MAX_LENGTH,
    )
    parent_task_id: UUID | None = Field(default=None, index=True)

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(), nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(), nullable=False),
    )
