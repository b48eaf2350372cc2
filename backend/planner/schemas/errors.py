"""Structured error payload schemas used by API responses."""

from __future__ import annotations

from pydantic import Field
from sqlmodel import SQLModel


class ErrorResponse(SQLModel):
    """Error body shared by every failing endpoint."""

    detail: str | dict[str, object] | list[object] = Field(
        description="Safe, human-readable error message or validation error list.",
        examples=[
            "Monthly task core details cannot be edited from a daily/weekly context.",
        ],
    )
    code: str | None = Field(
        default=None,
        description="Machine-readable error code for planner domain errors.",
        examples=["conflict", "forbidden", "not_found", "validation_error"],
    )
    request_id: str | None = Field(
        default=None,
        description="Request correlation identifier injected by middleware.",
    )
