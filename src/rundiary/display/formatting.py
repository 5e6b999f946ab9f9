"""Text formatting for activities and aggregates.

Renders durations, paces, sentinels and date ranges the way the diary shows
them, and parses segment durations typed as m:ss.
"""

from datetime import date, timedelta

from rundiary.activities.models import NOT_RATED, NOT_RECORDED, Run
from rundiary.errors import ValidationError
from rundiary.stats.runs_set import NO_AVERAGE, NO_OLDEST_DATE, RunsSummary

MISSING = "---"
NO_ACTIVITIES = "No Activities"


def _seconds(value: timedelta | int) -> int:
    if isinstance(value, timedelta):
        return int(value.total_seconds())
    return int(value)


def format_date(day: date) -> str:
    """Medium date style, e.g. 'Jun 1, 2024'."""
    return f"{day:%b} {day.day}, {day.year}"


def format_duration_hm(value: timedelta | int) -> str:
    """Format a duration as H:mm."""
    seconds = _seconds(value)
    return f"{seconds // 3600}:{seconds % 3600 // 60:02d}"


def format_segment_duration(value: timedelta | None) -> str:
    """Format a segment duration as m:ss, empty when unset."""
    if value is None:
        return ""
    seconds = _seconds(value)
    return f"{seconds // 60}:{seconds % 60:02d}"


def format_pace(value: timedelta) -> str:
    """Format a pace as m:ss per km, minutes not wrapped at 60."""
    seconds = _seconds(value)
    return f"{seconds // 60}:{seconds % 60:02d}"


def format_distance(km: float) -> str:
    return f"{km:.2f}"


def format_heart_rate(bpm: int) -> str:
    return MISSING if bpm == NOT_RECORDED else str(bpm)


def format_evaluation(evaluation: float) -> str:
    if evaluation == NOT_RATED:
        return f"{MISSING} / 10"
    return f"{evaluation:.1f} / 10"


def format_date_range(oldest: date, latest: date) -> str:
    """Render a view's date extremes, 'No Activities' for an empty view."""
    if oldest == NO_OLDEST_DATE:
        return NO_ACTIVITIES
    return f"{format_date(oldest)} - {format_date(latest)}"


def describe_run(run: Run) -> str:
    """One-line description of a run used in history listings."""
    return (
        f"{format_date(run.date):<12}  Distance:  {run.total_distance():5.2f} km  "
        f"Duration:  {format_duration_hm(run.total_duration())} h"
    )


def summary_lines(summary: RunsSummary) -> list[str]:
    """Render the 'In Total' and 'On Average' blocks of a summary."""
    average_distance = (
        MISSING if summary.average_distance == NO_AVERAGE else format_distance(summary.average_distance)
    )
    average_duration = (
        MISSING if summary.average_duration == NO_AVERAGE else format_duration_hm(summary.average_duration)
    )
    return [
        "In Total",
        f"  Activities: {summary.count}",
        f"  Distance: {format_distance(summary.total_distance)} km",
        f"  Duration: {format_duration_hm(summary.total_duration)} h",
        "On Average",
        f"  Evaluation: {format_evaluation(summary.average_evaluation)}",
        f"  Distance: {average_distance} km",
        f"  Duration: {average_duration} h",
    ]


def parse_segment_duration(text: str) -> timedelta | None:
    """Parse a segment duration typed as m:ss.

    Returns:
        Duration, or None for empty input (segment still incomplete)

    Raises:
        ValidationError: If the text is not m:ss, is zero, or reaches 24 hours
    """
    text = text.strip()
    if not text:
        return None

    parts = text.split(":")
    if len(parts) != 2 or len(parts[1]) != 2:
        raise ValidationError("Duration must be provided in m:ss format.")
    try:
        minutes = int(parts[0])
        seconds = int(parts[1])
    except ValueError as e:
        raise ValidationError(f"Duration must be provided in m:ss format. {e}") from e

    if minutes < 0 or not 0 <= seconds < 60:
        raise ValidationError("Duration must be provided in m:ss format.")
    if minutes == 0 and seconds == 0:
        raise ValidationError("Duration must be longer than zero.")
    if minutes >= 24 * 60:
        raise ValidationError("Segment must be shorter than 24 hours.")
    return timedelta(minutes=minutes, seconds=seconds)


__all__ = [
    "MISSING",
    "NO_ACTIVITIES",
    "describe_run",
    "format_date",
    "format_date_range",
    "format_distance",
    "format_duration_hm",
    "format_evaluation",
    "format_heart_rate",
    "format_pace",
    "format_segment_duration",
    "parse_segment_duration",
    "summary_lines",
]
