"""Line-oriented codec for the diary save file.

Each run is written as a fixed sequence of lines:

    label                  (empty if absent)
    type display name
    date as epoch day
    segment count
    per segment: duration seconds, distance, heart rate, cadence, elevation
    terrain display name   (empty if absent)
    evaluation
    note                   (form-encoded UTF-8, empty if absent)

Records follow each other with no separator; the segment count tells the
reader how many segment lines come next.
"""

import logging
from collections.abc import Callable, Iterable
from datetime import date, timedelta
from typing import TextIO, TypeVar
from urllib.parse import quote_plus, unquote_plus

from rundiary.activities.models import MAX_SEGMENT_DURATION, Run, RunType, Segment, Terrain
from rundiary.errors import FormatError, IncompleteDataError

logger = logging.getLogger(__name__)

EPOCH = date(1970, 1, 1)
LINES_PER_SEGMENT = 5

T = TypeVar("T")


def encode_run(run: Run) -> list[str]:
    """Encode one run into its record lines.

    Raises:
        IncompleteDataError: If a segment duration is unset
        ValueError: If the label contains a line break
    """
    if run.label is not None and ("\n" in run.label or "\r" in run.label):
        raise ValueError(f"Label of run on {run.date} contains a line break")

    lines = [
        run.label if run.label is not None else "",
        run.run_type.display_name if run.run_type is not None else "",
        str((run.date - EPOCH).days),
        str(len(run.segments)),
    ]
    for index, segment in enumerate(run.segments):
        seconds = segment.duration_seconds
        if seconds is None:
            raise IncompleteDataError(
                f"Cannot save {run.display_label} ({run.date}): segment {index + 1} has no duration",
                segment_index=index,
            )
        lines.extend(
            [
                str(seconds),
                repr(float(segment.distance)),
                str(segment.heart_rate),
                str(segment.cadence),
                str(segment.elevation),
            ]
        )
    lines.append(run.terrain.display_name if run.terrain is not None else "")
    lines.append(str(run.evaluation))
    lines.append(quote_plus(run.note) if run.note is not None else "")
    return lines


def encode_runs(runs: Iterable[Run]) -> str:
    """Encode a whole collection into save-file text."""
    lines: list[str] = []
    for run in runs:
        lines.extend(encode_run(run))
    return "".join(f"{line}\n" for line in lines)


def write_runs(runs: Iterable[Run], stream: TextIO) -> int:
    """Write encoded runs to an open text stream.

    Returns:
        Number of runs written
    """
    count = 0
    for run in runs:
        for line in encode_run(run):
            stream.write(line)
            stream.write("\n")
        count += 1
    return count


class _LineReader:
    """Sequential access to save-file lines with line-number tracking."""

    def __init__(self, text: str) -> None:
        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        self._lines = [line[:-1] if line.endswith("\r") else line for line in lines]
        self._position = 0

    @property
    def line_number(self) -> int:
        return self._position

    def has_more(self) -> bool:
        return self._position < len(self._lines)

    def next(self, field_name: str) -> str:
        if not self.has_more():
            raise FormatError(
                f"Unexpected end of file while reading {field_name}",
                line_number=self._position + 1,
            )
        line = self._lines[self._position]
        self._position += 1
        return line

    def parse(self, field_name: str, convert: Callable[[str], T]) -> T:
        token = self.next(field_name)
        try:
            return convert(token)
        except (ValueError, OverflowError) as e:
            raise FormatError(
                f"Invalid {field_name} {token!r}: {e}", line_number=self._position
            ) from e


def _epoch_day(token: str) -> date:
    return EPOCH + timedelta(days=int(token))


def _segment_duration(token: str) -> timedelta:
    duration = timedelta(seconds=int(token))
    if not timedelta(0) <= duration < MAX_SEGMENT_DURATION:
        raise ValueError("segment duration must be within one day")
    return duration


def _segment_count(token: str) -> int:
    count = int(token)
    if count < 1:
        raise ValueError("a run needs at least one segment")
    return count


def _decode_run(reader: _LineReader, record: int) -> Run:
    label = reader.next("label")

    type_token = reader.next("type")
    run_type = RunType.from_display_name(type_token)
    if run_type is None:
        logger.warning(f"Record {record}: unknown run type {type_token!r}, stored as absent")

    run_date = reader.parse("date", _epoch_day)
    count = reader.parse("segment count", _segment_count)

    segments = []
    for _ in range(count):
        segments.append(
            Segment(
                duration=reader.parse("segment duration", _segment_duration),
                distance=reader.parse("segment distance", float),
                heart_rate=reader.parse("segment heart rate", int),
                cadence=reader.parse("segment cadence", int),
                elevation=reader.parse("segment elevation", int),
            )
        )

    terrain_token = reader.next("terrain")
    terrain = Terrain.from_display_name(terrain_token)
    if terrain is None and terrain_token:
        logger.warning(f"Record {record}: unknown terrain {terrain_token!r}, stored as absent")

    evaluation = reader.parse("evaluation", int)
    note = unquote_plus(reader.next("note"), errors="strict")

    return Run(
        label=label or None,
        run_type=run_type,
        date=run_date,
        segments=segments,
        terrain=terrain,
        evaluation=evaluation,
        note=note or None,
    )


def decode_runs(text: str) -> list[Run]:
    """Decode save-file text into runs, in file order.

    Raises:
        FormatError: On a malformed number or a truncated record
    """
    reader = _LineReader(text)
    runs: list[Run] = []
    while reader.has_more():
        try:
            runs.append(_decode_run(reader, len(runs) + 1))
        except UnicodeDecodeError as e:
            raise FormatError(f"Invalid note encoding: {e}", line_number=reader.line_number) from e
    return runs


def read_runs(stream: TextIO) -> list[Run]:
    """Decode every run from an open text stream.

    Raises:
        FormatError: If the stream content is not valid text or not a valid diary
    """
    try:
        text = stream.read()
    except UnicodeDecodeError as e:
        raise FormatError(f"Save file is not valid UTF-8: {e}") from e
    return decode_runs(text)


__all__ = [
    "decode_runs",
    "encode_run",
    "encode_runs",
    "read_runs",
    "write_runs",
]
