"""Schemas for analytics responses."""

from __future__ import annotations

from pydantic import Field
from sqlmodel import SQLModel

from planner.services.view_ranges import AnalyticsTimeframe

RUNTIME_ANNOTATION_TYPES = (AnalyticsTimeframe,)


class EfficiencyRead(SQLModel):
    """Completion ratio over tasks overlapping an analytics timeframe."""

    timeframe: AnalyticsTimeframe
    total: int = Field(ge=0)
    completed: int = Field(ge=0)
    efficiency: float = Field(
        ge=0,
        le=100,
        description="Completed share of total as a percentage, rounded to 2 decimals.",
        examples=[33.33],
    )
