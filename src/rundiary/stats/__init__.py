"""Statistics module for the running diary.

Provides live date-windowed aggregates and per-period chart series.
"""

from .periods import Metric, PeriodPoint, Timeframe, TypeCount, period_series, type_breakdown
from .runs_set import NO_AVERAGE, NO_LATEST_DATE, NO_OLDEST_DATE, RunsSet, RunsSummary, in_window

__all__ = [
    "NO_AVERAGE",
    "NO_LATEST_DATE",
    "NO_OLDEST_DATE",
    "Metric",
    "PeriodPoint",
    "RunsSet",
    "RunsSummary",
    "Timeframe",
    "TypeCount",
    "in_window",
    "period_series",
    "type_breakdown",
]
