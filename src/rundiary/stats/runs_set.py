"""Date-windowed live view over the run collection.

A RunsSet keeps the runs of one date window and the aggregate statistics
derived from them, recomputed synchronously on every collection change.
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta

from rundiary.activities.collection import CollectionChange, RunCollection
from rundiary.activities.models import Run

logger = logging.getLogger(__name__)

# Reported by empty views, never a real activity date
NO_OLDEST_DATE = date.min
NO_LATEST_DATE = date.max
NO_AVERAGE = -1


@dataclass(frozen=True)
class RunsSummary:
    """Aggregate statistics of a RunsSet at one point in time."""

    count: int
    total_distance: float
    total_duration: int  # seconds
    average_distance: float
    average_duration: int  # seconds
    average_evaluation: float
    oldest_date: date
    latest_date: date

    @property
    def is_empty(self) -> bool:
        return self.count == 0


def in_window(run: Run, date_from: date, date_to: date) -> bool:
    """Test window membership with a one-day buffer before the window.

    A run belongs when from - 1 day <= run.date < to + 1 day. Ordinals keep
    the date.min / date.max bounds from overflowing.
    """
    day = run.date.toordinal()
    return date_from.toordinal() - 1 <= day < date_to.toordinal() + 1


class RunsSet:
    """Live subset of a RunCollection restricted to a date window.

    The subset is ordered most recent first. Aggregates are plain read-only
    attributes refreshed after each change of the underlying collection.
    """

    def __init__(
        self,
        collection: RunCollection,
        date_from: date = date.min,
        date_to: date = date.max,
    ) -> None:
        """Initialize the view and subscribe to collection changes.

        Args:
            collection: Master run collection
            date_from: First day of the window (inclusive)
            date_to: Last day of the window (inclusive)
        """
        self._collection = collection
        self._from = date_from
        self._to = date_to
        runs = [run for run in collection if self.contains(run)]
        runs.sort(key=lambda run: run.date, reverse=True)
        self._summary = self._compute(runs)
        self._runs: list[Run] = runs
        collection.subscribe(self._on_change)

    @classmethod
    def recent(cls, collection: RunCollection, days: int, today: date | None = None) -> "RunsSet":
        """Create the view of the last `days` days up to and including today."""
        today = today or date.today()
        return cls(collection, today - timedelta(days=days), today)

    @property
    def date_from(self) -> date:
        return self._from

    @property
    def date_to(self) -> date:
        return self._to

    @property
    def runs(self) -> tuple[Run, ...]:
        return tuple(self._runs)

    def __len__(self) -> int:
        return len(self._runs)

    def contains(self, run: Run) -> bool:
        return in_window(run, self._from, self._to)

    def summary(self) -> RunsSummary:
        return self._summary

    @property
    def count(self) -> int:
        return self._summary.count

    @property
    def total_distance(self) -> float:
        return self._summary.total_distance

    @property
    def total_duration(self) -> int:
        return self._summary.total_duration

    @property
    def average_distance(self) -> float:
        return self._summary.average_distance

    @property
    def average_duration(self) -> int:
        return self._summary.average_duration

    @property
    def average_evaluation(self) -> float:
        return self._summary.average_evaluation

    @property
    def oldest_date(self) -> date:
        return self._summary.oldest_date

    @property
    def latest_date(self) -> date:
        return self._summary.latest_date

    def close(self) -> None:
        """Stop following the collection."""
        self._collection.unsubscribe(self._on_change)

    def _on_change(self, change: CollectionChange) -> None:
        removed_ids = {run.run_id for run in change.removed if self.contains(run)}
        runs = [run for run in self._runs if run.run_id not in removed_ids]
        runs.extend(run for run in change.added if self.contains(run))
        runs.sort(key=lambda run: run.date, reverse=True)
        # members and aggregates are swapped together or not at all
        self._summary = self._compute(runs)
        self._runs = runs
        logger.debug(f"RunsSet {self._from}..{self._to} recomputed: {self._summary.count} runs")

    def _compute(self, runs: list[Run]) -> RunsSummary:
        count = len(runs)
        total_distance = sum(run.total_distance() for run in runs)
        total_duration = sum(run.total_duration_seconds() for run in runs)

        rated = [run.evaluation for run in runs if run.is_rated]
        average_evaluation = sum(rated) / len(rated) if rated else NO_AVERAGE

        if count == 0:
            return RunsSummary(
                count=0,
                total_distance=0.0,
                total_duration=0,
                average_distance=NO_AVERAGE,
                average_duration=NO_AVERAGE,
                average_evaluation=average_evaluation,
                oldest_date=NO_OLDEST_DATE,
                latest_date=NO_LATEST_DATE,
            )

        dates = [run.date for run in runs]
        return RunsSummary(
            count=count,
            total_distance=total_distance,
            total_duration=total_duration,
            average_distance=total_distance / count,
            average_duration=total_duration // count,
            average_evaluation=average_evaluation,
            oldest_date=min(dates),
            latest_date=max(dates),
        )


__all__ = [
    "NO_AVERAGE",
    "NO_LATEST_DATE",
    "NO_OLDEST_DATE",
    "RunsSet",
    "RunsSummary",
    "in_window",
]
