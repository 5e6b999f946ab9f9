"""Running Diary - records run activities and derives live statistics.

Provides:
- Run / Segment activity model with derived metrics
- Date-windowed live aggregate views over the run collection
- Year / month / type history grouping
- Line-oriented save-file codec

Usage:
    python -m rundiary summary
    python -m rundiary --profile dev history --types
"""

__version__ = "0.1.0"

from .activities import Run, RunCollection, RunType, Segment, Terrain
from .config import DiaryConfig
from .config.loader import load_config
from .stats import RunsSet

__all__ = [
    "DiaryConfig",
    "Run",
    "RunCollection",
    "RunType",
    "RunsSet",
    "Segment",
    "Terrain",
    "__version__",
    "load_config",
]
