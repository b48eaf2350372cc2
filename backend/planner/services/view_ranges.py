"""Date windows for planner views and analytics timeframes.

Views cover full calendar spans (a whole day, a Sunday-to-Saturday week, a
whole month). Analytics timeframes start at the same boundary but stop at the
end of the reference day, so "weekly" and "monthly" are partial spans ending
today.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum

from planner.core.errors import InvalidTimeframeKindError, InvalidViewKindError

START_OF_DAY = time(0, 0, 0)
END_OF_DAY = time(23, 59, 59, 999000)


class PlannerView(str, Enum):
    """Lens a client uses to look at the task store."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"


class AnalyticsTimeframe(str, Enum):
    """Window granularity for efficiency analytics."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class DateWindow:
    """Inclusive datetime window."""

    start: datetime
    end: datetime


def coerce_view(kind: PlannerView | str) -> PlannerView:
    try:
        return PlannerView(kind)
    except ValueError as err:
        raise InvalidViewKindError(f"Unknown planner view: {kind!r}.") from err


def coerce_timeframe(kind: AnalyticsTimeframe | str) -> AnalyticsTimeframe:
    try:
        return AnalyticsTimeframe(kind)
    except ValueError as err:
        raise InvalidTimeframeKindError(f"Unknown analytics timeframe: {kind!r}.") from err


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _week_start(day: date) -> date:
    # weekday(): Monday == 0 ... Sunday == 6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def _month_start(day: date) -> date:
    return day.replace(day=1)


def _month_end(day: date) -> date:
    _, last_day = calendar.monthrange(day.year, day.month)
    return day.replace(day=last_day)


def _window(first_day: date, last_day: date) -> DateWindow:
    return DateWindow(
        start=datetime.combine(first_day, START_OF_DAY),
        end=datetime.combine(last_day, END_OF_DAY),
    )


def resolve_view_window(kind: PlannerView | str, anchor: date | datetime) -> DateWindow:
    """Return the full calendar window a view shows for the anchor date."""
    view = coerce_view(kind)
    day = _as_date(anchor)
    if view is PlannerView.DAILY:
        return _window(day, day)
    if view is PlannerView.WEEKLY:
        first_day = _week_start(day)
        return _window(first_day, first_day + timedelta(days=6))
    return _window(_month_start(day), _month_end(day))


def resolve_timeframe_window(
    kind: AnalyticsTimeframe | str,
    reference: date | datetime,
) -> DateWindow:
    """Return the analytics window ending at the close of the reference day."""
    timeframe = coerce_timeframe(kind)
    day = _as_date(reference)
    if timeframe is AnalyticsTimeframe.DAILY:
        return _window(day, day)
    if timeframe is AnalyticsTimeframe.WEEKLY:
        return _window(_week_start(day), day)
    return _window(_month_start(day), day)
