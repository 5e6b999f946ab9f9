"""Year / month / type grouping of run activities.

Builds the tree browsed in the activity history. The tree is rebuilt from
scratch whenever the source collection changes.
"""

import calendar
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from rundiary.activities.models import Run, RunType
from rundiary.display.formatting import describe_run

UNKNOWN_TYPE_LABEL = "Unknown"
EXPANDED_DEPTH = 3


class NodeKind(Enum):
    """Level of a node in the history tree."""

    ROOT = "root"
    YEAR = "year"
    MONTH = "month"
    TYPE = "type"
    RUN = "run"


@dataclass
class HistoryNode:
    """A node of the history tree; only RUN nodes carry a run."""

    kind: NodeKind
    label: str
    run: Run | None = None
    children: list["HistoryNode"] = field(default_factory=list)

    def walk(self) -> Iterable["HistoryNode"]:
        """Yield this node and its descendants depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def runs(self) -> list[Run]:
        return [node.run for node in self.walk() if node.run is not None]


def _type_label(run_type: RunType | None) -> str:
    return run_type.display_name if run_type is not None else UNKNOWN_TYPE_LABEL


def group_by_period(runs: Iterable[Run], show_types: bool = True) -> HistoryNode:
    """Group runs into year -> month -> type -> run.

    Years and months are ordered most recent first, types by display name.
    Runs keep their relative order from the input.

    Args:
        runs: Activities to group, typically most recent first
        show_types: False to attach runs directly under their month

    Returns:
        Root node whose children are the year nodes
    """
    runs = list(runs)
    root = HistoryNode(NodeKind.ROOT, "")

    for year in sorted({run.date.year for run in runs}, reverse=True):
        year_runs = [run for run in runs if run.date.year == year]
        year_node = HistoryNode(NodeKind.YEAR, str(year))

        for month in sorted({run.date.month for run in year_runs}, reverse=True):
            month_runs = [run for run in year_runs if run.date.month == month]
            month_node = HistoryNode(NodeKind.MONTH, calendar.month_name[month])

            types = sorted({run.run_type for run in month_runs}, key=_type_label)
            for run_type in types:
                type_node = HistoryNode(NodeKind.TYPE, _type_label(run_type))
                parent = type_node if show_types else month_node
                for run in month_runs:
                    if run.run_type == run_type:
                        parent.children.append(HistoryNode(NodeKind.RUN, describe_run(run), run=run))
                if show_types:
                    month_node.children.append(type_node)

            year_node.children.append(month_node)
        root.children.append(year_node)

    return root


def latest_path(root: HistoryNode, depth: int = EXPANDED_DEPTH) -> list[HistoryNode]:
    """Nodes expanded when the history is first shown.

    Starts at the root and follows first children, stopping after `depth`
    nodes or at a leaf.
    """
    path: list[HistoryNode] = []
    node = root
    for _ in range(depth):
        path.append(node)
        if not node.children:
            break
        node = node.children[0]
    return path


__all__ = [
    "EXPANDED_DEPTH",
    "UNKNOWN_TYPE_LABEL",
    "HistoryNode",
    "NodeKind",
    "group_by_period",
    "latest_path",
]
