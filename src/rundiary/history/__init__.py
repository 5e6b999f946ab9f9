"""History module for the running diary.

Provides the year / month / type grouping of recorded activities.
"""

from .grouping import HistoryNode, NodeKind, group_by_period, latest_path

__all__ = ["HistoryNode", "NodeKind", "group_by_period", "latest_path"]
