"""Reusable FastAPI dependencies wiring the planner engine to a request.

Routes get a `PlannerService` bound to a request-scoped SQL session. Tests
override `get_task_store` (or `get_planner_service`) to run against an
in-memory store.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends

from planner.core.config import settings
from planner.db.session import get_session
from planner.services.planner import PlannerService
from planner.services.task_store import SqlTaskStore, TaskStore

if TYPE_CHECKING:
    from sqlmodel.ext.asyncio.session import AsyncSession

SESSION_DEP = Depends(get_session)


def get_task_store(session: AsyncSession = SESSION_DEP) -> TaskStore:
    """Return the SQL-backed task store for this request."""
    return SqlTaskStore(session)


TASK_STORE_DEP = Depends(get_task_store)


def get_planner_service(store: TaskStore = TASK_STORE_DEP) -> PlannerService:
    """Build the planner engine with the configured behavior flags."""
    return PlannerService(
        store,
        derive_status_on_read=settings.derive_status_on_read,
        strict_parent_linkage=settings.strict_parent_linkage,
    )


PLANNER_DEP = Depends(get_planner_service)
