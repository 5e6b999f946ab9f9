"""Integration tests for the running diary flow.

Tests recording, saving, reloading and summarising activities end to end,
both through the library and through the command line.
"""

from datetime import date, timedelta
from pathlib import Path

import pytest

from rundiary.__main__ import main
from rundiary.activities import RunCollection
from rundiary.activities.models import Run, RunType, Segment, Terrain
from rundiary.editing import EditorRegistry
from rundiary.history import group_by_period, latest_path
from rundiary.stats import RunsSet
from rundiary.storage import DiaryFile, load_diary


class TestDiaryFlow:
    """Test the collection, views and save file working together."""

    @pytest.fixture
    def today(self) -> date:
        return date(2024, 6, 10)

    def test_record_save_reload(self, tmp_path: Path, today: date) -> None:
        """Runs recorded through editors survive a save and reload."""
        path = tmp_path / "runningdiary.dat"
        collection = RunCollection()
        everything = RunsSet(collection)
        recent = RunsSet.recent(collection, 6, today)
        registry = EditorRegistry(collection)

        # Record two runs, one outside the recent window
        for offset, minutes, distance in [(1, 30, 6.0), (20, 60, 12.0)]:
            session = registry.open_new(today)
            session.working.run_type = RunType.STEADY_RUN
            session.working.date = today - timedelta(days=offset)
            session.working.segments = [Segment(timedelta(minutes=minutes), distance, 150)]
            session.working.terrain = Terrain.DIRT
            session.working.evaluation = 8
            registry.commit(session, today)

        assert everything.count == 2
        assert everything.total_distance == 18.0
        assert recent.count == 1
        assert recent.latest_date == today - timedelta(days=1)

        DiaryFile(path, collection).save()

        # Reload into a fresh collection with a view already attached
        reloaded = RunCollection()
        view = RunsSet(reloaded)
        DiaryFile(path, reloaded).load()

        assert view.summary() == everything.summary()
        assert sorted(reloaded.runs, key=lambda run: run.date) == sorted(
            collection.runs, key=lambda run: run.date
        )

    def test_edit_updates_views(self, today: date) -> None:
        """Committing an edit moves the run between views."""
        run = Run(
            label=None,
            run_type=RunType.EASY_RUN,
            date=today - timedelta(days=30),
            segments=[Segment(timedelta(minutes=25), 5.0)],
        )
        collection = RunCollection([run])
        recent = RunsSet.recent(collection, 6, today)
        assert recent.count == 0

        registry = EditorRegistry(collection)
        session = registry.open(run)
        session.working.date = today
        registry.commit(session, today)

        assert recent.count == 1
        assert recent.total_duration == 25 * 60

        registry.delete(registry.open(collection.runs[0]))
        assert recent.count == 0
        assert recent.oldest_date == date.min

    def test_history_expands_latest_month(self, today: date) -> None:
        """The history tree opens on the newest month."""
        runs = [
            Run(None, RunType.RACE, date(2023, 11, 5), [Segment(timedelta(minutes=20), 5.0)]),
            Run(None, RunType.HILLS, today, [Segment(timedelta(minutes=40), 7.0)]),
        ]
        root = group_by_period(RunsSet(RunCollection(runs)).runs, show_types=True)
        path = latest_path(root)

        assert [node.label for node in path[1:]] == ["2024", "June"]
        assert path[-1].runs() == [runs[1]]


class TestCommandLine:
    """Test the rundiary command line."""

    def run_cli(self, data_file: Path, *args: str) -> int:
        return main(["--profile", "test", "--data-file", str(data_file), *args])

    def test_add_then_report(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Added activities show up in every report."""
        data_file = tmp_path / "runningdiary.dat"
        yesterday = (date.today() - timedelta(days=1)).isoformat()

        assert (
            self.run_cli(
                data_file,
                "add",
                "--label", "Lunch run",
                "--type", "Interval Run",
                "--date", yesterday,
                "--segment", "10:00/2.0/140",
                "--segment", "20:00/5.0/165/178/12",
                "--terrain", "Asphalt",
                "--evaluation", "8",
                "--note", "Windy",
            )
            == 0
        )
        assert "Recorded Lunch run" in capsys.readouterr().out

        stored = load_diary(data_file)
        assert len(stored) == 1
        assert stored[0].total_distance() == 7.0
        assert stored[0].note == "Windy"

        assert self.run_cli(data_file, "summary") == 0
        summary = capsys.readouterr().out
        assert "All Activities" in summary
        assert "Recent Activities" in summary
        assert "Activities: 1" in summary

        assert self.run_cli(data_file, "history", "--types") == 0
        history = capsys.readouterr().out
        assert "Interval Run" in history

        assert self.run_cli(data_file, "stats", "--metric", "type", "--timeframe", "30 Days") == 0
        assert "Interval Run" in capsys.readouterr().out

        assert self.run_cli(data_file, "check") == 0
        assert capsys.readouterr().out.startswith("1 activities in")

    def test_invalid_segment_rejected(self, tmp_path: Path) -> None:
        """A malformed segment leaves the save file untouched."""
        data_file = tmp_path / "runningdiary.dat"
        assert self.run_cli(data_file, "add", "--segment", "25:00") == 1
        assert not data_file.exists()

    def test_future_activity_rejected(self, tmp_path: Path) -> None:
        """Activities dated in the future are not recorded."""
        data_file = tmp_path / "runningdiary.dat"
        tomorrow = (date.today() + timedelta(days=1)).isoformat()
        assert self.run_cli(data_file, "add", "--date", tomorrow, "--segment", "25:00/5") == 1
        assert not data_file.exists()

    def test_malformed_file_fails(self, tmp_path: Path) -> None:
        """A corrupt save file is reported, not overwritten."""
        data_file = tmp_path / "runningdiary.dat"
        data_file.write_text("Label\nEasy Run\nnot-a-day\n", encoding="utf-8")

        assert self.run_cli(data_file, "check") == 1
        assert data_file.read_text(encoding="utf-8") == "Label\nEasy Run\nnot-a-day\n"

    def test_undecodable_file_fails(self, tmp_path: Path) -> None:
        """A save file that is not UTF-8 gives exit status 1."""
        data_file = tmp_path / "runningdiary.dat"
        data_file.write_bytes(b"\xff\xfeLabel\n")

        assert self.run_cli(data_file, "check") == 1

    def test_missing_config_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """An explicit config path must exist."""
        assert main(["--config", str(tmp_path / "nope.yaml"), "check"]) == 1
        assert "Config file not found" in capsys.readouterr().err
