"""Task persistence port and its SQLModel-backed implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from sqlmodel import col, select

from planner.core.logging import get_logger
from planner.models.tasks import Task

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from sqlmodel.ext.asyncio.session import AsyncSession

    from planner.models.tasks import TaskStatus

logger = get_logger(__name__)


class TaskStore(Protocol):
    """Storage operations the planner engine depends on."""

    async def list_overlapping(
        self,
        owner_id: UUID,
        *,
        start: datetime,
        end: datetime,
        status: TaskStatus | None = None,
    ) -> list[Task]:
        """Return owner tasks whose [start_date, end_date] intersects [start, end].

        Results are ordered by (start_date, end_date, created_at, id) ascending;
        `id` only breaks ties between rows created in the same instant.
        """
        ...

    async def get(self, task_id: UUID) -> Task | None: ...

    async def insert(self, task: Task) -> Task: ...

    async def replace(self, task: Task) -> Task: ...


class SqlTaskStore:
    """`TaskStore` over a request-scoped async SQLModel session.

    Every write commits once, so a single task update is persisted atomically.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_overlapping(
        self,
        owner_id: UUID,
        *,
        start: datetime,
        end: datetime,
        status: TaskStatus | None = None,
    ) -> list[Task]:
        statement = select(Task).where(
            col(Task.owner_id) == owner_id,
            col(Task.start_date) <= end,
            col(Task.end_date) >= start,
        )
        if status is not None:
            statement = statement.where(col(Task.status) == status)
        statement = statement.order_by(
            col(Task.start_date).asc(),
            col(Task.end_date).asc(),
            col(Task.created_at).asc(),
            col(Task.id).asc(),
        )
        return list(await self.session.exec(statement))

    async def get(self, task_id: UUID) -> Task | None:
        return await self.session.get(Task, task_id)

    async def insert(self, task: Task) -> Task:
        self.session.add(task)
        await self.session.commit()
        await self.session.refresh(task)
        logger.debug("planner.store.inserted", extra={"task_id": str(task.id)})
        return task

    async def replace(self, task: Task) -> Task:
        self.session.add(task)
        await self.session.commit()
        await self.session.refresh(task)
        logger.debug("planner.store.replaced", extra={"task_id": str(task.id)})
        return task
