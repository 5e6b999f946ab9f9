"""Unit tests for copy-on-edit sessions."""

from datetime import date, timedelta

import pytest

from rundiary.activities.collection import CollectionChange, RunCollection
from rundiary.activities.models import Run, RunType, Segment
from rundiary.editing.session import EditorRegistry, EditSession
from rundiary.errors import ValidationError

TODAY = date(2024, 6, 10)


def make_run(run_date: date = date(2024, 6, 1)) -> Run:
    return Run(
        label="Track",
        run_type=RunType.INTERVAL_RUN,
        date=run_date,
        segments=[Segment(timedelta(minutes=3), 1.0, 175)],
        evaluation=6,
    )


class TestEditSession:
    """Tests for editing a stored run."""

    def test_working_copy_is_independent(self) -> None:
        """Edits do not leak into the stored run before commit."""
        run = make_run()
        collection = RunCollection([run])
        session = EditSession(collection, run, today=TODAY)

        session.working.segments[0].distance = 2.0
        session.working.label = "Changed"

        assert run.segments[0].distance == 1.0
        assert run.label == "Track"
        assert session.is_changed()

    def test_unchanged_session(self) -> None:
        """Opening a run is not a change."""
        run = make_run()
        session = EditSession(RunCollection([run]), run, today=TODAY)
        assert not session.is_changed()

    def test_commit_replaces_atomically(self) -> None:
        """Commit swaps the old run for the new one in one change."""
        run = make_run()
        collection = RunCollection([run])
        changes: list[CollectionChange] = []
        collection.subscribe(changes.append)
        session = EditSession(collection, run, today=TODAY)
        session.working.evaluation = 9

        committed = session.commit(TODAY)

        assert len(changes) == 1
        assert changes[0].removed == (run,)
        assert changes[0].added == (committed,)
        assert collection.runs == (committed,)
        assert committed.run_id == run.run_id
        assert committed.evaluation == 9
        assert not session.is_changed()
        assert session.working is not committed

    def test_commit_new_activity(self) -> None:
        """A new session adds its run."""
        collection = RunCollection()
        session = EditSession(collection, today=TODAY)
        assert session.is_new
        assert not session.is_changed()

        session.working.segments[0].duration = timedelta(minutes=30)
        assert session.is_changed()
        committed = session.commit(TODAY)

        assert collection.runs == (committed,)
        assert committed.date == TODAY
        assert not session.is_new

    def test_empty_label_stored_as_absent(self) -> None:
        """An empty label is committed as no label."""
        collection = RunCollection()
        session = EditSession(collection, today=TODAY)
        session.working.label = ""
        session.working.segments[0].duration = timedelta(minutes=10)
        assert session.commit(TODAY).label is None

    def test_delete(self) -> None:
        """Deleting removes the original."""
        run = make_run()
        collection = RunCollection([run])
        session = EditSession(collection, run, today=TODAY)
        assert session.delete() is True
        assert len(collection) == 0

    def test_delete_new_session(self) -> None:
        """Nothing to delete for an unsaved activity."""
        session = EditSession(RunCollection(), today=TODAY)
        assert session.delete() is False

    def test_segment_helpers(self) -> None:
        """Segments can be appended and removed."""
        session = EditSession(RunCollection(), today=TODAY)
        added = session.add_segment()
        assert session.working.segments[-1] is added
        assert session.remove_segment(0) == Segment.blank()
        assert len(session.working.segments) == 1


class TestValidation:
    """Tests for commit validation."""

    def test_future_date_rejected(self) -> None:
        """Activities cannot happen in the future."""
        run = make_run()
        collection = RunCollection([run])
        session = EditSession(collection, run, today=TODAY)
        session.working.date = TODAY + timedelta(days=1)

        with pytest.raises(ValidationError, match="future"):
            session.commit(TODAY)
        assert collection.runs == (run,)

    def test_today_accepted(self) -> None:
        """Today is not in the future."""
        run = make_run()
        session = EditSession(RunCollection([run]), run, today=TODAY)
        session.working.date = TODAY
        session.validate(TODAY)

    def test_no_segments_rejected(self) -> None:
        """At least one segment is needed."""
        session = EditSession(RunCollection(), today=TODAY)
        session.working.segments = []
        with pytest.raises(ValidationError, match="segments"):
            session.validate(TODAY)

    def test_unset_duration_rejected(self) -> None:
        """Every segment needs a duration."""
        session = EditSession(RunCollection(), today=TODAY)
        with pytest.raises(ValidationError, match="durations"):
            session.validate(TODAY)

    def test_zero_distance_rejected(self) -> None:
        """Distances must be positive."""
        session = EditSession(RunCollection(), today=TODAY)
        session.working.segments[0] = Segment(timedelta(minutes=5), 0.0)
        with pytest.raises(ValidationError, match="distance"):
            session.validate(TODAY)

    def test_evaluation_range(self) -> None:
        """Evaluation stays within -1..10."""
        run = make_run()
        session = EditSession(RunCollection([run]), run, today=TODAY)
        session.working.evaluation = 11
        with pytest.raises(ValidationError, match="Evaluation"):
            session.validate(TODAY)


class TestEditorRegistry:
    """Tests for tracking open sessions."""

    def test_open_reuses_session(self) -> None:
        """Opening the same run twice gives the same session."""
        run = make_run()
        registry = EditorRegistry(RunCollection([run]))
        assert registry.open(run) is registry.open(run)
        assert len(registry) == 1

    def test_commit_rekeys_to_committed_run(self) -> None:
        """After commit the session is found under the stored run."""
        collection = RunCollection()
        registry = EditorRegistry(collection)
        session = registry.open_new(TODAY)
        session.working.segments[0].duration = timedelta(minutes=20)

        committed = registry.commit(session, TODAY)

        assert committed.run_id in registry
        assert registry.open(collection.runs[0]) is session
        assert len(registry) == 1

    def test_delete_closes_session(self) -> None:
        """Deleting removes the run and forgets the session."""
        run = make_run()
        collection = RunCollection([run])
        registry = EditorRegistry(collection)
        session = registry.open(run)

        assert registry.delete(session) is True
        assert run.run_id not in registry
        assert len(collection) == 0

    def test_unsaved(self) -> None:
        """Only changed sessions are reported as unsaved."""
        first, second = make_run(), make_run(date(2024, 6, 2))
        registry = EditorRegistry(RunCollection([first, second]))
        registry.open(first)
        changed = registry.open(second)
        changed.working.note = "edited"

        assert registry.unsaved() == [changed]
