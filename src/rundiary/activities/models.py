"""Data models for run activities.

Defines the Run and Segment entities, the closed RunType and Terrain sets,
and the sentinel values used for fields that were not recorded.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from enum import Enum

from rundiary.errors import IncompleteDataError

# Sentinels kept literally in the save file and in exposed aggregates
NOT_RECORDED = -1
NOT_RATED = -1
ELEVATION_NOT_RECORDED = -(2**31)
DEFAULT_SEGMENT_DISTANCE = 1.0
UNLABELED_ACTIVITY_LABEL = "Unlabeled Activity"

MAX_SEGMENT_DURATION = timedelta(hours=24)
MIN_EVALUATION = -1
MAX_EVALUATION = 10


class RunType(Enum):
    """Kind of run activity, valued by display name."""

    EASY_RUN = "Easy Run"
    LONG_RUN = "Long Run"
    STEADY_RUN = "Steady Run"
    INTERVAL_RUN = "Interval Run"
    HILLS = "Hills"
    FARTLEK = "Fartlek"
    RACE = "Race"

    @property
    def display_name(self) -> str:
        return self.value

    @classmethod
    def from_display_name(cls, token: str) -> "RunType | None":
        """Look up a member by exact display name, None if unknown."""
        for member in cls:
            if member.value == token:
                return member
        return None


class Terrain(Enum):
    """Surface the activity was run on."""

    ASPHALT = "Asphalt"
    DIRT = "Dirt"
    MIX = "Mix"

    @property
    def display_name(self) -> str:
        return self.value

    @classmethod
    def from_display_name(cls, token: str) -> "Terrain | None":
        """Look up a member by exact display name, None if unknown."""
        for member in cls:
            if member.value == token:
                return member
        return None


@dataclass
class Segment:
    """One continuous timed portion of a run.

    Attributes:
        duration: Elapsed time in whole seconds, None while still being entered
        distance: Kilometers, strictly positive
        heart_rate: Average bpm, or NOT_RECORDED
        cadence: Average steps per minute, or NOT_RECORDED
        elevation: Meters, or ELEVATION_NOT_RECORDED
    """

    duration: timedelta | None = None
    distance: float = DEFAULT_SEGMENT_DISTANCE
    heart_rate: int = NOT_RECORDED
    cadence: int = NOT_RECORDED
    elevation: int = ELEVATION_NOT_RECORDED

    @classmethod
    def blank(cls) -> "Segment":
        """Create the default segment offered for a new activity."""
        return cls()

    @property
    def duration_seconds(self) -> int | None:
        if self.duration is None:
            return None
        return int(self.duration.total_seconds())

    @property
    def heart_rate_or_none(self) -> int | None:
        return None if self.heart_rate == NOT_RECORDED else self.heart_rate

    @property
    def cadence_or_none(self) -> int | None:
        return None if self.cadence == NOT_RECORDED else self.cadence

    @property
    def elevation_or_none(self) -> int | None:
        return None if self.elevation == ELEVATION_NOT_RECORDED else self.elevation

    def copy(self) -> "Segment":
        return replace(self)


@dataclass
class Run:
    """One recorded run activity.

    Derived metrics (duration, distance, pace, heart rate) are computed on
    demand from the segments and never stored.

    Attributes:
        label: Optional free text, None renders as the unlabeled placeholder
        run_type: Kind of activity
        date: Calendar date of the activity
        segments: Ordered, non-empty list of segments
        terrain: Optional surface
        evaluation: 1-10 rating, or NOT_RATED
        note: Optional free text, may span lines
        run_id: Synthetic identifier, kept across copies, not persisted
    """

    label: str | None
    run_type: RunType | None
    date: date | None
    segments: list[Segment]
    terrain: Terrain | None = None
    evaluation: int = NOT_RATED
    note: str | None = None
    run_id: str = field(default_factory=lambda: uuid.uuid4().hex, compare=False)

    @classmethod
    def blank(cls, today: date | None = None) -> "Run":
        """Create the default activity shown when recording a new run."""
        return cls(
            label=None,
            run_type=RunType.EASY_RUN,
            date=today or date.today(),
            segments=[Segment.blank()],
        )

    @property
    def display_label(self) -> str:
        return self.label if self.label is not None else UNLABELED_ACTIVITY_LABEL

    @property
    def is_rated(self) -> bool:
        return self.evaluation != NOT_RATED

    def total_duration_seconds(self) -> int:
        """Sum of segment durations in seconds.

        Raises:
            IncompleteDataError: If any segment duration is unset
        """
        total = 0
        for index, segment in enumerate(self.segments):
            seconds = segment.duration_seconds
            if seconds is None:
                raise IncompleteDataError(
                    f"Segment {index + 1} of {self.display_label} has no duration",
                    segment_index=index,
                )
            total += seconds
        return total

    def total_duration(self) -> timedelta:
        return timedelta(seconds=self.total_duration_seconds())

    def total_distance(self) -> float:
        return sum(segment.distance for segment in self.segments)

    def pace(self) -> timedelta:
        """Time per kilometer, truncated to whole seconds.

        Raises:
            ZeroDivisionError: If the total distance is zero
        """
        return timedelta(seconds=int(self.total_duration_seconds() / self.total_distance()))

    def average_heart_rate(self) -> int:
        """Duration-weighted heart rate over segments where it was recorded.

        Returns:
            Average bpm, or NOT_RECORDED if no segment carries a heart rate
        """
        weighted = 0
        seconds = 0
        for index, segment in enumerate(self.segments):
            heart_rate = segment.heart_rate_or_none
            if heart_rate is None:
                continue
            duration = segment.duration_seconds
            if duration is None:
                raise IncompleteDataError(
                    f"Segment {index + 1} of {self.display_label} has no duration",
                    segment_index=index,
                )
            weighted += heart_rate * duration
            seconds += duration
        if seconds == 0:
            return NOT_RECORDED
        return weighted // seconds

    def copy(self) -> "Run":
        """Deep copy with independent segments and the same run_id."""
        return replace(self, segments=[segment.copy() for segment in self.segments])


__all__ = [
    "DEFAULT_SEGMENT_DISTANCE",
    "ELEVATION_NOT_RECORDED",
    "MAX_EVALUATION",
    "MAX_SEGMENT_DURATION",
    "MIN_EVALUATION",
    "NOT_RATED",
    "NOT_RECORDED",
    "UNLABELED_ACTIVITY_LABEL",
    "Run",
    "RunType",
    "Segment",
    "Terrain",
]
