"""Create the tasks table shared by all planner views.

Revision ID: 5e1c7a9d2b40
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "5e1c7a9d2b40"
down_revision = None
branch_labels = None
depends_on = None

TASK_CADENCE = sa.Enum("MONTHLY", "WEEKLY", "DAILY", name="taskcadence")
TASK_STATUS = sa.Enum("PENDING", "COMPLETED", "OVERDUE", name="taskstatus")


def upgrade() -> None:
    """Create tasks with owner/range and owner/cadence/status indexes."""
    op.create_table(
        "tasks",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=140), nullable=False),
        sa.Column("description", sa.String(length=2000), nullable=False),
        sa.Column("cadence", TASK_CADENCE, nullable=False),
        sa.Column("status", TASK_STATUS, nullable=False),
        sa.Column("start_date", sa.DateTime(), nullable=False),
        sa.Column("end_date", sa.DateTime(), nullable=False),
        sa.Column("color_category", sa.String(length=50), nullable=False),
        sa.Column("parent_task_id", sa.Uuid(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_tasks_owner_id"), "tasks", ["owner_id"])
    op.create_index(op.f("ix_tasks_parent_task_id"), "tasks", ["parent_task_id"])
    op.create_index("ix_tasks_owner_range", "tasks", ["owner_id", "start_date", "end_date"])
    op.create_index(
        "ix_tasks_owner_cadence_status",
        "tasks",
        ["owner_id", "cadence", "status"],
    )


def downgrade() -> None:
    """Drop the tasks table and its enum types."""
    op.drop_index("ix_tasks_owner_cadence_status", table_name="tasks")
    op.drop_index("ix_tasks_owner_range", table_name="tasks")
    op.drop_index(op.f("ix_tasks_parent_task_id"), table_name="tasks")
    op.drop_index(op.f("ix_tasks_owner_id"), table_name="tasks")
    op.drop_table("tasks")
    TASK_STATUS.drop(op.get_bind(), checkfirst=True)
    TASK_CADENCE.drop(op.get_bind(), checkfirst=True)
