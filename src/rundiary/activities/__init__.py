"""Activities module for the running diary.

Provides the run activity model and the master run collection.
"""

from .collection import ChangeListener, CollectionChange, RunCollection
from .models import (
    DEFAULT_SEGMENT_DISTANCE,
    ELEVATION_NOT_RECORDED,
    NOT_RATED,
    NOT_RECORDED,
    UNLABELED_ACTIVITY_LABEL,
    Run,
    RunType,
    Segment,
    Terrain,
)

__all__ = [
    "DEFAULT_SEGMENT_DISTANCE",
    "ELEVATION_NOT_RECORDED",
    "NOT_RATED",
    "NOT_RECORDED",
    "UNLABELED_ACTIVITY_LABEL",
    "ChangeListener",
    "CollectionChange",
    "Run",
    "RunCollection",
    "RunType",
    "Segment",
    "Terrain",
]
