"""Domain errors raised by the planner engine.

Each error carries a safe, human-readable message plus the HTTP status and
machine-readable code the API layer reports. Anything that is not a
`PlannerError` is treated as an internal failure and never reaches clients
verbatim.
"""

from __future__ import annotations

from fastapi import status


class PlannerError(Exception):
    """Base class for expected, caller-recoverable planner failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "planner_error"
    default_message: str = "Request could not be processed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class TaskValidationError(PlannerError):
    """Input is malformed or violates a task invariant."""

    status_code = status.HTTP_422_UNPROCESSABLE_CONTENT
    code = "validation_error"
    default_message = "Task payload is invalid."


class TaskNotFoundError(PlannerError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Task not found."


class TaskForbiddenError(PlannerError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    default_message = "You are not allowed to modify this task."


class TaskConflictError(PlannerError):
    """Update would break the monthly single-source-of-truth rule."""

    status_code = status.HTTP_409_CONFLICT
    code = "conflict"
    default_message = "Monthly task core details cannot be edited from a daily/weekly context."


class InvalidViewKindError(PlannerError):
    status_code = status.HTTP_422_UNPROCESSABLE_CONTENT
    code = "invalid_view_kind"
    default_message = "Unknown planner view."


class InvalidTimeframeKindError(PlannerError):
    status_code = status.HTTP_422_UNPROCESSABLE_CONTENT
    code = "invalid_timeframe_kind"
    default_message = "Unknown analytics timeframe."
