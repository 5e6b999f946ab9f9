"""Per-period statistics for charts.

Provides day-by-day and month-by-month distance and duration series, and
activity counts per run type over a timeframe.
"""

import calendar
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

from rundiary.activities.collection import RunCollection
from rundiary.activities.models import Run, RunType

from .runs_set import RunsSet


class Timeframe(Enum):
    """Chart timeframes, valued by length in days."""

    DAYS7 = 7
    DAYS30 = 30
    MONTHS12 = 365

    @property
    def days(self) -> int:
        return self.value

    @property
    def display_name(self) -> str:
        if self is Timeframe.MONTHS12:
            return "12 Months"
        return f"{self.value} Days"

    @classmethod
    def from_display_name(cls, token: str) -> "Timeframe":
        for member in cls:
            if member.display_name == token:
                return member
        raise ValueError(f"Unknown timeframe: {token!r}")


class Metric(Enum):
    """Quantity plotted in a period series."""

    DISTANCE = "distance"
    DURATION = "duration"


@dataclass(frozen=True)
class PeriodPoint:
    """One bar of a period chart."""

    label: str
    value: float


@dataclass(frozen=True)
class TypeCount:
    """Number of activities of one run type."""

    run_type: RunType
    count: int


def _metric_value(run: Run, metric: Metric) -> float:
    if metric is Metric.DISTANCE:
        return run.total_distance()
    return run.total_duration_seconds() / 60.0


def months_start(today: date) -> date:
    """First day of the twelve-month window ending with today's month."""
    if today.month == 12:
        return date(today.year, 1, 1)
    return date(today.year - 1, today.month + 1, 1)


def period_series(
    runs: Iterable[Run],
    timeframe: Timeframe,
    metric: Metric,
    today: date | None = None,
) -> list[PeriodPoint]:
    """Build the series plotted for a timeframe, oldest point first.

    Args:
        runs: Activities to aggregate
        timeframe: Span of the chart
        metric: Distance in km or duration in minutes
        today: Reference day, defaults to the current date

    Returns:
        One point per day (weekday labels for 7 days, day offsets for
        30 days) or one point per calendar month for 12 months
    """
    today = today or date.today()
    runs = list(runs)

    if timeframe is Timeframe.MONTHS12:
        begin = months_start(today)
        totals: dict[tuple[int, int], float] = {}
        for run in runs:
            if run.date >= begin:
                key = (run.date.year, run.date.month)
                totals[key] = totals.get(key, 0.0) + _metric_value(run, metric)

        points = []
        year, month = begin.year, begin.month
        for _ in range(12):
            points.append(PeriodPoint(calendar.month_name[month], totals.get((year, month), 0.0)))
            year, month = (year + 1, 1) if month == 12 else (year, month + 1)
        return points

    daily: dict[date, float] = {}
    for run in runs:
        daily[run.date] = daily.get(run.date, 0.0) + _metric_value(run, metric)

    if timeframe is Timeframe.DAYS7:
        days = [today - timedelta(days=offset) for offset in range(timeframe.days - 1, -1, -1)]
        return [PeriodPoint(day.strftime("%A"), daily.get(day, 0.0)) for day in days]

    return [
        PeriodPoint(str(offset), daily.get(today + timedelta(days=offset), 0.0))
        for offset in range(-timeframe.days, 1)
    ]


def type_breakdown(
    collection: RunCollection,
    timeframe: Timeframe,
    today: date | None = None,
) -> list[TypeCount]:
    """Count activities per run type within a timeframe.

    Returns:
        Counts sorted by run type display name
    """
    today = today or date.today()
    if timeframe is Timeframe.MONTHS12:
        begin = months_start(today)
    else:
        begin = today - timedelta(days=timeframe.days)

    view = RunsSet(collection, begin, today)
    try:
        counts = Counter(run.run_type for run in view.runs if run.run_type is not None)
    finally:
        view.close()

    return [
        TypeCount(run_type=run_type, count=counts[run_type])
        for run_type in sorted(counts, key=lambda t: t.display_name)
    ]


__all__ = [
    "Metric",
    "PeriodPoint",
    "Timeframe",
    "TypeCount",
    "months_start",
    "period_series",
    "type_breakdown",
]
