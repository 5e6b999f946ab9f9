"""Tests for per-period statistics."""

from datetime import date, timedelta

import pytest

from rundiary.activities.collection import RunCollection
from rundiary.activities.models import Run, RunType, Segment
from rundiary.stats.periods import (
    Metric,
    Timeframe,
    months_start,
    period_series,
    type_breakdown,
)

TODAY = date(2024, 6, 12)  # a Wednesday


def make_run(run_date: date, distance: float = 5.0, minutes: int = 30, run_type: RunType = RunType.EASY_RUN) -> Run:
    return Run(
        label=None,
        run_type=run_type,
        date=run_date,
        segments=[Segment(timedelta(minutes=minutes), distance)],
    )


class TestTimeframe:
    """Tests for Timeframe names."""

    def test_display_names(self) -> None:
        """Names shown in the timeframe selector."""
        assert [t.display_name for t in Timeframe] == ["7 Days", "30 Days", "12 Months"]

    def test_from_display_name(self) -> None:
        """Lookup by display name."""
        assert Timeframe.from_display_name("30 Days") is Timeframe.DAYS30
        with pytest.raises(ValueError):
            Timeframe.from_display_name("1 Week")


class TestPeriodSeries:
    """Tests for chart series."""

    def test_seven_days_by_weekday(self) -> None:
        """One bar per day, oldest first, labelled by weekday."""
        runs = [make_run(TODAY), make_run(TODAY), make_run(TODAY - timedelta(days=6), 3.0)]
        series = period_series(runs, Timeframe.DAYS7, Metric.DISTANCE, TODAY)

        assert len(series) == 7
        assert series[0].label == "Thursday"
        assert series[-1].label == "Wednesday"
        assert series[-1].value == 10.0
        assert series[0].value == 3.0
        assert sum(point.value for point in series) == 13.0

    def test_seven_days_ignores_older_runs(self) -> None:
        """A run a week ago is outside the chart."""
        runs = [make_run(TODAY - timedelta(days=7))]
        series = period_series(runs, Timeframe.DAYS7, Metric.DISTANCE, TODAY)
        assert all(point.value == 0.0 for point in series)

    def test_thirty_days_by_offset(self) -> None:
        """Offsets run from -30 to 0."""
        runs = [make_run(TODAY - timedelta(days=30), minutes=45)]
        series = period_series(runs, Timeframe.DAYS30, Metric.DURATION, TODAY)

        assert len(series) == 31
        assert series[0].label == "-30"
        assert series[-1].label == "0"
        assert series[0].value == 45.0

    def test_twelve_months(self) -> None:
        """Twelve calendar months ending with the current one."""
        runs = [
            make_run(date(2023, 7, 1), 4.0),
            make_run(date(2023, 6, 30), 100.0),
            make_run(date(2024, 6, 1), 6.0),
            make_run(date(2024, 6, 11), 2.0),
        ]
        series = period_series(runs, Timeframe.MONTHS12, Metric.DISTANCE, TODAY)

        assert len(series) == 12
        assert series[0].label == "July"
        assert series[0].value == 4.0
        assert series[-1].label == "June"
        assert series[-1].value == 8.0

    def test_twelve_months_in_december(self) -> None:
        """December charts the current calendar year."""
        assert months_start(date(2024, 12, 5)) == date(2024, 1, 1)
        series = period_series([], Timeframe.MONTHS12, Metric.DISTANCE, date(2024, 12, 5))
        assert [point.label for point in series][:2] == ["January", "February"]
        assert series[-1].label == "December"


class TestTypeBreakdown:
    """Tests for per-type counts."""

    def test_counts_in_window(self) -> None:
        """Counts per type, sorted by display name."""
        collection = RunCollection(
            [
                make_run(TODAY, run_type=RunType.RACE),
                make_run(TODAY - timedelta(days=1), run_type=RunType.EASY_RUN),
                make_run(TODAY - timedelta(days=2), run_type=RunType.EASY_RUN),
                make_run(TODAY - timedelta(days=40), run_type=RunType.HILLS),
            ]
        )
        breakdown = type_breakdown(collection, Timeframe.DAYS7, TODAY)

        assert [(entry.run_type, entry.count) for entry in breakdown] == [
            (RunType.EASY_RUN, 2),
            (RunType.RACE, 1),
        ]

    def test_breakdown_view_detached(self) -> None:
        """The temporary view does not keep following the collection."""
        collection = RunCollection()
        type_breakdown(collection, Timeframe.DAYS30, TODAY)
        assert collection._listeners == []
