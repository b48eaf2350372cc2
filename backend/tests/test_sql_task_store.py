# ruff: noqa

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import date, datetime, timedelta
from uuid import UUID, uuid4

import pytest
from sqlalchemy import DateTime
from sqlmodel.ext.asyncio.session import AsyncSession

from planner.db.session import build_engine, create_schema
from planner.models.tasks import Task, TaskCadence, TaskStatus
from planner.schemas.tasks import TaskCreate, TaskUpdate
from planner.services.planner import PlannerService
from planner.services.task_store import SqlTaskStore
from planner.services.view_ranges import AnalyticsTimeframe, PlannerView

from fakes import FixedClock, make_task

OWNER = uuid4()
OTHER_OWNER = uuid4()


@asynccontextmanager
async def _sqlite_store():
    engine = build_engine("sqlite:///:memory:")
    await create_schema(engine)
    try:
        async with AsyncSession(engine, expire_on_commit=False) as session:
            yield SqlTaskStore(session)
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_list_overlapping_filters_by_owner_and_window() -> None:
    inside = make_task(owner_id=OWNER, start_date=datetime(2024, 3, 15, 9), end_date=datetime(2024, 3, 15, 10))
    monthly = make_task(
        owner_id=OWNER,
        cadence=TaskCadence.MONTHLY,
        start_date=datetime(2024, 3, 1),
        end_date=datetime(2024, 3, 31, 23, 59, 59),
    )
    before = make_task(owner_id=OWNER, start_date=datetime(2024, 3, 14), end_date=datetime(2024, 3, 14, 23))
    after = make_task(owner_id=OWNER, start_date=datetime(2024, 3, 16), end_date=datetime(2024, 3, 16, 1))
    foreign = make_task(
        owner_id=OTHER_OWNER, start_date=datetime(2024, 3, 15), end_date=datetime(2024, 3, 15, 1)
    )

    async with _sqlite_store() as store:
        for task in (inside, monthly, before, after, foreign):
            await store.insert(task)

        tasks = await store.list_overlapping(
            OWNER,
            start=datetime(2024, 3, 15),
            end=datetime(2024, 3, 15, 23, 59, 59, 999000),
        )

    assert [task.id for task in tasks] == [monthly.id, inside.id]


@pytest.mark.asyncio
async def test_list_overlapping_includes_boundary_touching_tasks() -> None:
    ends_at_start = make_task(
        owner_id=OWNER, start_date=datetime(2024, 3, 14, 20), end_date=datetime(2024, 3, 15)
    )
    starts_at_end = make_task(
        owner_id=OWNER,
        start_date=datetime(2024, 3, 15, 23, 59, 59, 999000),
        end_date=datetime(2024, 3, 16, 2),
    )

    async with _sqlite_store() as store:
        await store.insert(ends_at_start)
        await store.insert(starts_at_end)

        tasks = await store.list_overlapping(
            OWNER,
            start=datetime(2024, 3, 15),
            end=datetime(2024, 3, 15, 23, 59, 59, 999000),
        )

    assert {task.id for task in tasks} == {ends_at_start.id, starts_at_end.id}


@pytest.mark.asyncio
async def test_list_overlapping_orders_by_start_end_then_created_at() -> None:
    base = datetime(2024, 3, 15, 8)
    later_created = make_task(
        owner_id=OWNER,
        start_date=base,
        end_date=base + timedelta(hours=1),
        created_at=datetime(2024, 3, 2),
    )
    earlier_created = make_task(
        owner_id=OWNER,
        start_date=base,
        end_date=base + timedelta(hours=1),
        created_at=datetime(2024, 3, 1),
    )
    shorter = make_task(owner_id=OWNER, start_date=base, end_date=base + timedelta(minutes=30))

    async with _sqlite_store() as store:
        for task in (later_created, earlier_created, shorter):
            await store.insert(task)

        tasks = await store.list_overlapping(
            OWNER, start=datetime(2024, 3, 15), end=datetime(2024, 3, 16)
        )

    assert [task.id for task in tasks] == [shorter.id, earlier_created.id, later_created.id]


@pytest.mark.asyncio
async def test_list_overlapping_applies_status_filter() -> None:
    done = make_task(
        owner_id=OWNER,
        status=TaskStatus.COMPLETED,
        start_date=datetime(2024, 3, 15, 8),
        end_date=datetime(2024, 3, 15, 9),
    )
    pending = make_task(owner_id=OWNER, start_date=datetime(2024, 3, 15, 10), end_date=datetime(2024, 3, 15, 11))

    async with _sqlite_store() as store:
        await store.insert(done)
        await store.insert(pending)

        tasks = await store.list_overlapping(
            OWNER,
            start=datetime(2024, 3, 15),
            end=datetime(2024, 3, 16),
            status=TaskStatus.COMPLETED,
        )

    assert [task.id for task in tasks] == [done.id]


@pytest.mark.asyncio
async def test_get_and_replace_round_trip() -> None:
    task = make_task(owner_id=OWNER, start_date=datetime(2024, 3, 15), end_date=datetime(2024, 3, 15, 1))

    async with _sqlite_store() as store:
        await store.insert(task)
        assert await store.get(uuid4()) is None

        stored = await store.get(task.id)
        assert stored is not None
        stored.status = TaskStatus.COMPLETED
        await store.replace(stored)

        reloaded = await store.get(task.id)

    assert reloaded is not None
    assert reloaded.status == TaskStatus.COMPLETED
    assert reloaded.owner_id == OWNER


def test_task_datetime_columns_store_naive_values() -> None:
    for name in ("start_date", "end_date", "created_at", "updated_at"):
        column_type = Task.__table__.c[name].type
        assert type(column_type) is DateTime
        assert column_type.timezone is False


@pytest.mark.asyncio
async def test_list_overlapping_breaks_identical_timestamps_by_id() -> None:
    moment = datetime(2024, 3, 15, 8)
    first = make_task(
        id=UUID(int=1), owner_id=OWNER, start_date=moment, end_date=moment, created_at=moment
    )
    second = make_task(
        id=UUID(int=2), owner_id=OWNER, start_date=moment, end_date=moment, created_at=moment
    )

    async with _sqlite_store() as store:
        await store.insert(second)
        await store.insert(first)

        tasks = await store.list_overlapping(
            OWNER, start=datetime(2024, 3, 15), end=datetime(2024, 3, 16)
        )

    assert [task.id for task in tasks] == [first.id, second.id]


@pytest.mark.asyncio
async def test_planner_service_round_trip_on_sql_store() -> None:
    async with _sqlite_store() as store:
        service = PlannerService(store, clock=FixedClock(datetime(2030, 3, 10, 12)))
        created = await service.create_task(
            TaskCreate(
                owner_id=OWNER,
                title="Read 4 books",
                cadence=TaskCadence.MONTHLY,
                start_date=datetime(2030, 3, 1),
                end_date=datetime(2030, 3, 31, 23, 59, 59),
            )
        )

        listed = await service.list_tasks_for_view(OWNER, PlannerView.DAILY, date(2030, 3, 15))
        updated = await service.update_task(
            created.id,
            TaskUpdate(owner_id=OWNER, source_view=PlannerView.DAILY, status=TaskStatus.COMPLETED),
        )
        efficiency = await service.get_efficiency(
            OWNER, AnalyticsTimeframe.MONTHLY, date(2030, 3, 15)
        )

    assert created.status == TaskStatus.PENDING
    assert [item.id for item in listed.tasks] == [created.id]
    assert listed.tasks[0].is_projected_from_monthly is True
    assert updated.status == TaskStatus.COMPLETED
    assert (efficiency.total, efficiency.completed, efficiency.efficiency) == (1, 1, 100.0)
