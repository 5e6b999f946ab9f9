"""Running diary entry point.

Usage:
    python -m rundiary [OPTIONS] COMMAND

Options:
    --config PATH      Path to YAML config file
    --profile NAME     Profile name (default, dev, test)
    --data-file PATH   Save file, overrides the configured one
    --log-level LEVEL  Logging level, overrides the configured one
    --help             Show this help message
    --version          Show version
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from . import __version__
from .activities import RunCollection, RunType, Segment, Terrain
from .config import DiaryConfig
from .config.loader import load_config
from .display.formatting import (
    format_date_range,
    format_distance,
    format_duration_hm,
    format_heart_rate,
    format_pace,
    parse_segment_duration,
    summary_lines,
)
from .editing import EditSession
from .errors import DiaryError, ValidationError
from .history import HistoryNode, NodeKind, group_by_period
from .stats import Metric, RunsSet, Timeframe, period_series, type_breakdown
from .storage import DiaryFile

logger = logging.getLogger("rundiary")


def setup_logging(level: str) -> None:
    """Configure logging based on config."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(
        prog="rundiary",
        description="Running Diary - run activities and statistics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m rundiary summary
  python -m rundiary history --types
  python -m rundiary stats --timeframe "30 Days" --metric duration
  python -m rundiary add --type "Easy Run" --segment 25:00/5.0/150

Environment:
  RUNDIARY_PROFILE    Set profile (default, dev, test)
""",
    )
    parser.add_argument("--config", type=Path, help="Path to YAML config file", metavar="PATH")
    parser.add_argument("--profile", choices=["default", "dev", "test"], help="Configuration profile")
    parser.add_argument("--data-file", type=Path, metavar="PATH", help="Save file location")
    parser.add_argument("--log-level", metavar="LEVEL", help="Logging level")
    parser.add_argument("--version", action="version", version=f"Running Diary v{__version__}")

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("summary", help="Show all-time and recent summaries")

    history = commands.add_parser("history", help="Show activities grouped by year and month")
    history.add_argument(
        "--types",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show the activity type level",
    )

    stats = commands.add_parser("stats", help="Show per-period statistics")
    stats.add_argument(
        "--timeframe",
        choices=[timeframe.display_name for timeframe in Timeframe],
        help="Chart timeframe",
    )
    stats.add_argument(
        "--metric",
        choices=[metric.value for metric in Metric] + ["type"],
        help="Plotted quantity",
    )

    commands.add_parser("check", help="Decode the save file and report its size")

    add = commands.add_parser("add", help="Record a new activity")
    add.add_argument("--label", help="Activity label")
    add.add_argument(
        "--type",
        dest="run_type",
        default=RunType.EASY_RUN.display_name,
        choices=[run_type.display_name for run_type in RunType],
        help="Activity type",
    )
    add.add_argument("--date", type=date.fromisoformat, help="Activity date (YYYY-MM-DD)")
    add.add_argument(
        "--segment",
        action="append",
        required=True,
        metavar="M:SS/KM[/HR[/CADENCE[/ELEVATION]]]",
        help="Segment duration, distance and optional measurements; repeatable",
    )
    add.add_argument("--terrain", choices=[terrain.display_name for terrain in Terrain])
    add.add_argument("--evaluation", type=int, default=-1, help="Rating 1-10")
    add.add_argument("--note", help="Free text note")

    return parser


def parse_segment(text: str) -> Segment:
    """Parse a segment given as m:ss/km[/hr[/cadence[/elevation]]]."""
    parts = text.split("/")
    if not 2 <= len(parts) <= 5:
        raise ValidationError(f"Invalid segment {text!r}")
    segment = Segment(duration=parse_segment_duration(parts[0]))
    try:
        segment.distance = float(parts[1])
        if len(parts) > 2:
            segment.heart_rate = int(parts[2])
        if len(parts) > 3:
            segment.cadence = int(parts[3])
        if len(parts) > 4:
            segment.elevation = int(parts[4])
    except ValueError as e:
        raise ValidationError(f"Invalid segment {text!r}: {e}") from e
    return segment


def print_summary(title: str, view: RunsSet) -> None:
    print(title)
    print(format_date_range(view.oldest_date, view.latest_date))
    for line in summary_lines(view.summary()):
        print(f"  {line}")


def print_recent(view: RunsSet) -> None:
    for run in view.runs:
        print(
            f"  {run.date.isoformat()}  {run.run_type.display_name if run.run_type else '':<12}  "
            f"{format_distance(run.total_distance()):>6} km  "
            f"{format_duration_hm(run.total_duration()):>6} h  "
            f"{format_pace(run.pace())} /km  "
            f"HR {format_heart_rate(run.average_heart_rate())}"
        )


def print_tree(node: HistoryNode, depth: int = 0) -> None:
    if node.kind is not NodeKind.ROOT:
        print(f"{'  ' * (depth - 1)}{node.label}")
    for child in node.children:
        print_tree(child, depth + 1)


def run_command(args: argparse.Namespace, config: DiaryConfig, collection: RunCollection, diary: DiaryFile) -> int:
    """Dispatch one CLI command against a loaded collection."""
    if args.command == "summary":
        all_runs = RunsSet(collection)
        recent = RunsSet.recent(collection, config.overview.recent_days)
        print_summary("All Activities", all_runs)
        print()
        print_summary("Recent Activities", recent)
        print_recent(recent)
        return 0

    if args.command == "history":
        show_types = config.history.show_types if args.types is None else args.types
        print_tree(group_by_period(RunsSet(collection).runs, show_types=show_types))
        return 0

    if args.command == "stats":
        timeframe = Timeframe.from_display_name(args.timeframe or config.statistics.timeframe)
        metric_name = args.metric or config.statistics.metric
        if metric_name == "type":
            for entry in type_breakdown(collection, timeframe):
                print(f"{entry.run_type.display_name:<14}{entry.count:>4}")
            return 0
        unit = "km" if Metric(metric_name) is Metric.DISTANCE else "min"
        for point in period_series(collection, timeframe, Metric(metric_name)):
            print(f"{point.label:<12}{point.value:>8.2f} {unit}")
        return 0

    if args.command == "check":
        print(f"{len(collection)} activities in {diary.path}")
        return 0

    if args.command == "add":
        session = EditSession(collection)
        session.working.label = args.label
        session.working.run_type = RunType.from_display_name(args.run_type)
        if args.date is not None:
            session.working.date = args.date
        session.working.segments = [parse_segment(text) for text in args.segment]
        session.working.terrain = Terrain.from_display_name(args.terrain) if args.terrain else None
        session.working.evaluation = args.evaluation
        session.working.note = args.note
        run = session.commit()
        diary.save()
        print(f"Recorded {run.display_label} ({run.date.isoformat()})")
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(path=args.config, profile=args.profile)
    except FileNotFoundError as e:
        print(f"Error: Config file not found: {e}", file=sys.stderr)
        return 1

    setup_logging(args.log_level or config.logging.level)
    logger.debug(f"Running Diary v{__version__}")

    collection = RunCollection()
    diary = DiaryFile(args.data_file or Path(config.storage.save_file), collection)

    try:
        diary.load()
        return run_command(args, config, collection, diary)
    except DiaryError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
