"""Editing workflow for run activities.

An EditSession works on a deep copy of a stored run, so edits are either
committed back in one atomic replace or discarded.
"""

import logging
from datetime import date

from rundiary.activities.collection import RunCollection
from rundiary.activities.models import MAX_EVALUATION, MIN_EVALUATION, Run, Segment
from rundiary.errors import ValidationError

logger = logging.getLogger(__name__)


class EditSession:
    """Edits one run through a working copy.

    Attributes:
        working: Mutable copy shown in the editor
    """

    def __init__(
        self,
        collection: RunCollection,
        run: Run | None = None,
        today: date | None = None,
    ) -> None:
        """Initialize session.

        Args:
            collection: Master collection the run is committed to
            run: Stored run to edit, None to record a new activity
            today: Date used for the blank activity, defaults to today
        """
        self._collection = collection
        self._original = run
        self._today = today or date.today()
        self.working = run.copy() if run is not None else Run.blank(self._today)

    @property
    def original(self) -> Run | None:
        return self._original

    @property
    def is_new(self) -> bool:
        return self._original is None

    @property
    def run_id(self) -> str:
        return self.working.run_id

    @property
    def title(self) -> str:
        return self.working.display_label

    def add_segment(self) -> Segment:
        segment = Segment.blank()
        self.working.segments.append(segment)
        return segment

    def remove_segment(self, index: int) -> Segment:
        return self.working.segments.pop(index)

    def is_changed(self) -> bool:
        """Whether the working copy differs from what it was opened with."""
        reference = self._original if self._original is not None else Run.blank(self._today)
        return self._normalized() != reference

    def validate(self, today: date | None = None) -> None:
        """Check the working copy can be committed.

        Raises:
            ValidationError: Describing the first problem found
        """
        today = today or date.today()
        run = self.working

        if run.run_type is None:
            raise ValidationError("Activity type must be selected.")
        if run.date is None:
            raise ValidationError("Activity date must be filled in.")
        if run.date > today:
            raise ValidationError("Recorded activity cannot happen in future.")
        if not run.segments:
            raise ValidationError("You need to fill in run activity segments.")
        for segment in run.segments:
            if segment.duration is None:
                raise ValidationError("All segment durations must be filled in.")
            if segment.distance <= 0:
                raise ValidationError("Segment distance must be greater than zero.")
        if not MIN_EVALUATION <= run.evaluation <= MAX_EVALUATION:
            raise ValidationError(
                f"Evaluation must be between {MIN_EVALUATION} and {MAX_EVALUATION}."
            )

    def commit(self, today: date | None = None) -> Run:
        """Validate and store the working copy in the collection.

        Replaces the original run in a single collection change, then keeps
        editing a fresh copy of the committed run.

        Returns:
            The run now stored in the collection

        Raises:
            ValidationError: If the working copy is not valid
        """
        self.validate(today)
        committed = self._normalized()
        self._collection.replace(self._original, committed)
        logger.info(f"Saved activity '{committed.display_label}' ({committed.date})")

        self._original = committed
        self.working = committed.copy()
        return committed

    def delete(self) -> bool:
        """Remove the original run from the collection.

        Returns:
            True if a stored run was removed
        """
        if self._original is None:
            return False
        removed = self._collection.remove(self._original)
        if removed:
            logger.info(f"Deleted activity '{self._original.display_label}' ({self._original.date})")
        return removed

    def _normalized(self) -> Run:
        run = self.working.copy()
        if run.label == "":
            run.label = None
        return run


class EditorRegistry:
    """Open edit sessions keyed by run_id."""

    def __init__(self, collection: RunCollection) -> None:
        self._collection = collection
        self._sessions: dict[str, EditSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, run_id: object) -> bool:
        return run_id in self._sessions

    @property
    def sessions(self) -> list[EditSession]:
        return list(self._sessions.values())

    def open(self, run: Run) -> EditSession:
        """Return the session editing a run, creating it if needed."""
        session = self._sessions.get(run.run_id)
        if session is None:
            session = EditSession(self._collection, run)
            self._sessions[run.run_id] = session
        return session

    def open_new(self, today: date | None = None) -> EditSession:
        session = EditSession(self._collection, today=today)
        self._sessions[session.run_id] = session
        return session

    def commit(self, session: EditSession, today: date | None = None) -> Run:
        """Commit a session and re-key it under the committed run."""
        old_keys = [key for key, value in self._sessions.items() if value is session]
        committed = session.commit(today)
        for key in old_keys:
            del self._sessions[key]
        self._sessions[committed.run_id] = session
        return committed

    def close(self, session: EditSession) -> None:
        for key in [key for key, value in self._sessions.items() if value is session]:
            del self._sessions[key]

    def delete(self, session: EditSession) -> bool:
        removed = session.delete()
        self.close(session)
        return removed

    def unsaved(self) -> list[EditSession]:
        """Sessions with changes that would be lost on exit."""
        return [session for session in self._sessions.values() if session.is_changed()]


__all__ = ["EditSession", "EditorRegistry"]
