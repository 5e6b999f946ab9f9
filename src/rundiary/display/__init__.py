"""Display helpers for the running diary."""

from .formatting import (
    MISSING,
    NO_ACTIVITIES,
    describe_run,
    format_date,
    format_date_range,
    format_distance,
    format_duration_hm,
    format_evaluation,
    format_heart_rate,
    format_pace,
    format_segment_duration,
    parse_segment_duration,
    summary_lines,
)

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
