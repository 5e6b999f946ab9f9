"""Loading and saving the diary save file.

The whole collection is read or written in one scoped file operation. A load
either replaces the collection entirely or leaves it untouched.
"""

import logging
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

from rundiary.activities.collection import RunCollection
from rundiary.activities.models import Run

from .codec import read_runs, write_runs

logger = logging.getLogger(__name__)

DEFAULT_SAVE_FILE = "runningdiary.dat"


def load_diary(path: Path) -> list[Run]:
    """Read every run from a save file.

    Args:
        path: Save file location

    Returns:
        Decoded runs in file order, empty if the file does not exist

    Raises:
        FormatError: If the file content cannot be decoded
    """
    if not path.exists():
        logger.info(f"Save file not found at {path}, starting with an empty diary")
        return []

    with open(path, encoding="utf-8", newline="") as f:
        runs = read_runs(f)

    logger.debug(f"Loaded {len(runs)} runs from {path}")
    return runs


def save_diary(runs: Iterable[Run], path: Path) -> int:
    """Write every run to a save file.

    The content goes to a temporary file next to the target first, which is
    then renamed over it, so a failed save keeps the previous file.

    Returns:
        Number of runs written
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            count = write_runs(runs, f)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.debug(f"Saved {count} runs to {path}")
    return count


class DiaryFile:
    """Binds a save file path to the master run collection."""

    def __init__(self, path: Path | str, collection: RunCollection) -> None:
        """Initialize diary file.

        Args:
            path: Save file location
            collection: Collection loaded into and saved from
        """
        self._path = Path(path)
        self._collection = collection

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> int:
        """Replace the collection contents with the save file.

        The collection is only touched after the whole file decoded.

        Returns:
            Number of runs loaded

        Raises:
            FormatError: If the file is malformed (collection left unchanged)
        """
        runs = load_diary(self._path)
        self._collection.replace_all(runs)
        logger.info(f"Loaded {len(runs)} runs from {self._path}")
        return len(runs)

    def save(self) -> int:
        """Write the collection to the save file.

        Returns:
            Number of runs saved
        """
        count = save_diary(self._collection.runs, self._path)
        logger.info(f"Saved {count} runs to {self._path}")
        return count


__all__ = ["DEFAULT_SAVE_FILE", "DiaryFile", "load_diary", "save_diary"]
