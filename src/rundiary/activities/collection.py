"""Master collection of run activities.

Owns the list of every recorded run and notifies subscribed views of
structural changes, synchronously, before each mutating call returns.
"""

import logging
import threading
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field

from .models import Run

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollectionChange:
    """A batch of runs added to and removed from the collection."""

    added: tuple[Run, ...] = field(default_factory=tuple)
    removed: tuple[Run, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.added and not self.removed


ChangeListener = Callable[[CollectionChange], None]


class RunCollection:
    """Mutable list of all recorded runs with change notifications.

    Runs are identified by their run_id: adding a run whose id is already
    present replaces the stored version. Runs with a segment lacking a
    duration are refused before anything is stored. Mutations are only allowed
    from the thread that created the collection.
    """

    def __init__(self, runs: Iterable[Run] | None = None) -> None:
        """Initialize collection.

        Args:
            runs: Optional initial runs (no notification is sent for them)
        """
        self._runs: list[Run] = []
        self._listeners: list[ChangeListener] = []
        self._owner_thread = threading.get_ident()
        runs = list(runs or ())
        self._check_complete(runs)
        for run in runs:
            self._put(run)

    def __len__(self) -> int:
        return len(self._runs)

    def __iter__(self) -> Iterator[Run]:
        return iter(list(self._runs))

    def __contains__(self, run: object) -> bool:
        if not isinstance(run, Run):
            return False
        return self._index_of(run.run_id) is not None

    @property
    def runs(self) -> tuple[Run, ...]:
        """Read-only snapshot of the stored runs in insertion order."""
        return tuple(self._runs)

    def get(self, run_id: str) -> Run | None:
        index = self._index_of(run_id)
        return self._runs[index] if index is not None else None

    def subscribe(self, listener: ChangeListener) -> None:
        """Register a callback invoked with every CollectionChange."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def add(self, run: Run) -> None:
        """Add a run, replacing an earlier version with the same run_id."""
        self.add_all([run])

    def add_all(self, runs: Iterable[Run]) -> None:
        """Add several runs in one change.

        Raises:
            IncompleteDataError: If a run has a segment without duration,
                before anything is stored
        """
        self._check_writer()
        runs = list(runs)
        self._check_complete(runs)
        added: list[Run] = []
        removed: list[Run] = []
        for run in runs:
            previous = self._put(run)
            if previous is not None:
                removed.append(previous)
            added.append(run)
        self._notify(CollectionChange(added=tuple(added), removed=tuple(removed)))

    def remove(self, run: Run) -> bool:
        """Remove the run with the same run_id.

        Returns:
            True if a run was removed, False if it was not stored
        """
        self._check_writer()
        index = self._index_of(run.run_id)
        if index is None:
            return False
        stored = self._runs.pop(index)
        self._notify(CollectionChange(removed=(stored,)))
        return True

    def replace(self, old: Run | None, new: Run) -> None:
        """Swap one stored run for another in a single notification.

        Args:
            old: Run being replaced, None when committing a new activity
            new: Replacement run
        """
        self._check_writer()
        self._check_complete([new])
        removed: list[Run] = []
        if old is not None:
            index = self._index_of(old.run_id)
            if index is not None:
                removed.append(self._runs.pop(index))
        previous = self._put(new)
        if previous is not None:
            removed.append(previous)
        self._notify(CollectionChange(added=(new,), removed=tuple(removed)))

    def replace_all(self, runs: Iterable[Run]) -> None:
        """Replace the whole contents, as done when loading a save file."""
        self._check_writer()
        incoming = list(runs)
        self._check_complete(incoming)
        removed = tuple(self._runs)
        self._runs = []
        for run in incoming:
            self._put(run)
        self._notify(CollectionChange(added=tuple(self._runs), removed=removed))

    def clear(self) -> None:
        self._check_writer()
        removed = tuple(self._runs)
        self._runs = []
        self._notify(CollectionChange(removed=removed))

    def _put(self, run: Run) -> Run | None:
        index = self._index_of(run.run_id)
        if index is None:
            self._runs.append(run)
            return None
        previous = self._runs[index]
        self._runs[index] = run
        return previous

    def _index_of(self, run_id: str) -> int | None:
        for index, stored in enumerate(self._runs):
            if stored.run_id == run_id:
                return index
        return None

    def _check_complete(self, runs: list[Run]) -> None:
        for run in runs:
            run.total_duration_seconds()

    def _check_writer(self) -> None:
        if threading.get_ident() != self._owner_thread:
            raise RuntimeError("RunCollection must only be mutated from its owning thread")

    def _notify(self, change: CollectionChange) -> None:
        if change.is_empty:
            return
        logger.debug(
            f"Collection changed: +{len(change.added)} -{len(change.removed)} "
            f"({len(self._runs)} runs)"
        )
        for listener in list(self._listeners):
            listener(change)


__all__ = ["ChangeListener", "CollectionChange", "RunCollection"]
