"""Schemas for task create/update/list payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Self
from uuid import UUID

from pydantic import Field, field_validator, model_validator
from sqlmodel import SQLModel

from planner.core.time import to_naive_utc
from planner.models.tasks import DEFAULT_COLOR_CATEGORY, TaskCadence, TaskStatus
from planner.schemas.common import ColorCategoryStr, DescriptionStr, TitleStr
from planner.services.view_ranges import PlannerView

RUNTIME_ANNOTATION_TYPES = (datetime, UUID, TaskCadence, TaskStatus, PlannerView)

# Fields that may be patched; everything else in an update is a control parameter.
TASK_PATCH_FIELDS = frozenset(
    {
        "title",
        "description",
        "cadence",
        "status",
        "start_date",
        "end_date",
        "color_category",
        "parent_task_id",
    },
)
_NULLABLE_PATCH_FIELDS = frozenset({"parent_task_id"})


class TaskCreate(SQLModel):
    """Payload for creating a task."""

    owner_id: UUID
    title: TitleStr
    description: DescriptionStr = ""
    cadence: TaskCadence
    status: TaskStatus = TaskStatus.PENDING
    start_date: datetime
    end_date: datetime
    color_category: ColorCategoryStr = DEFAULT_COLOR_CATEGORY
    parent_task_id: UUID | None = None

    @field_validator("start_date", "end_date")
    @classmethod
    def _naive_utc(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class TaskUpdate(SQLModel):
    """Payload for updating a task.

    `owner_id` identifies the requester and `source_view` the view the edit
    came from; neither is written to the task.
    """

    owner_id: UUID
    source_view: PlannerView | None = None

    title: TitleStr | None = None
    description: DescriptionStr | None = None
    cadence: TaskCadence | None = None
    status: TaskStatus | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    color_category: ColorCategoryStr | None = None
    parent_task_id: UUID | None = None

    @field_validator("start_date", "end_date")
    @classmethod
    def _naive_utc(cls, value: datetime | None) -> datetime | None:
        if value is None:
            return None
        return to_naive_utc(value)

    @model_validator(mode="after")
    def _reject_null_fields(self) -> Self:
        for name in sorted(self.model_fields_set & TASK_PATCH_FIELDS - _NULLABLE_PATCH_FIELDS):
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null.")
        return self

    def patch_fields(self) -> dict[str, Any]:
        """Return only the task fields the client explicitly sent."""
        return self.model_dump(include=set(TASK_PATCH_FIELDS), exclude_unset=True)


class TaskRead(SQLModel):
    """Task payload returned by read endpoints."""

    id: UUID
    owner_id: UUID
    title: str
    description: str
    cadence: TaskCadence
    status: TaskStatus
    start_date: datetime
    end_date: datetime
    color_category: str
    parent_task_id: UUID | None = None
    created_at: datetime
    updated_at: datetime


class ProjectedTaskRead(TaskRead):
    """Task as seen through a specific planner view."""

    is_projected_from_monthly: bool = Field(
        description=(
            "True when a MONTHLY task is shown inside a DAILY or WEEKLY view. "
            "Its core details are read-only from that view."
        ),
    )
    requested_view: PlannerView


class TaskListResponse(SQLModel):
    """Tasks visible in a view window, in display order."""

    total: int
    tasks: list[ProjectedTaskRead] = Field(default_factory=list)

