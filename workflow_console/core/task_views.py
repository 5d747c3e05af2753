"""Timeline and Tasks projections of a task tree.

Both views read the same tree built by ``build_task_tree``; they differ only
in which nodes they emit and how they label them:

- Timeline: root tasks hidden, collapsed subtrees folded, ``+segment`` labels.
- Tasks: root tasks shown, never folded, full-name labels.

The synthetic container at the top of the tree is not a task and is never
emitted by either view.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterator

from ..utils.datetime_utils import seconds_between
from .collapse_state import CollapseStateStore
from .models import TaskStatus
from .task_tree import TaskNode


def _preorder(start: list[TaskNode], descend) -> Iterator[TaskNode]:
    """Depth-first pre-order over ``start``; ``descend(node)`` gates children."""
    stack = list(reversed(start))
    while stack:
        node = stack.pop()
        yield node
        if node.children and descend(node):
            stack.extend(reversed(node.children))


def visible_timeline_nodes(root: TaskNode, store: CollapseStateStore) -> Iterator[TaskNode]:
    """Yield the timeline's visible nodes in pre-order.

    A node is visible when every ancestor between it and its root task is
    expanded. Root tasks are not rendered, so their own flags never hide
    anything.
    """
    first_level = [child for root_task in root.children for child in root_task.children]
    return _preorder(first_level, lambda node: store.is_expanded(node.full_name))


def all_task_nodes(root: TaskNode) -> Iterator[TaskNode]:
    """Yield every task node, root tasks included, ignoring collapse state."""
    return _preorder(root.children, lambda node: True)


@dataclass
class TimelineRow:
    path: str
    label: str
    indent: int
    status: TaskStatus | None
    has_children: bool
    expanded: bool
    started_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def duration_seconds(self) -> float | None:
        return seconds_between(self.started_at, self.updated_at)


@dataclass
class TaskRow:
    path: str
    label: str
    depth: int
    status: TaskStatus | None
    task_id: str | None = None
    parent_id: str | None = None
    is_group: bool = False
    started_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def duration_seconds(self) -> float | None:
        return seconds_between(self.started_at, self.updated_at)


class TimelineView:
    """A collapsible timeline over one attempt's task tree.

    Rows are recomputed from the tree and the store on every call, so the
    visible set is always consistent with every toggle made so far.
    """

    def __init__(
        self,
        root: TaskNode,
        store: CollapseStateStore | None = None,
        attempt_id: str | None = None,
    ) -> None:
        self.root = root
        self.store = store if store is not None else CollapseStateStore()
        self.attempt_id = attempt_id

    def nodes(self) -> list[TaskNode]:
        return list(visible_timeline_nodes(self.root, self.store))

    def rows(self) -> list[TimelineRow]:
        rows = []
        for node in visible_timeline_nodes(self.root, self.store):
            record = node.record
            rows.append(
                TimelineRow(
                    path=node.full_name,
                    label=node.label,
                    indent=node.depth - 2,
                    status=node.status,
                    has_children=bool(node.children),
                    expanded=self.store.is_expanded(node.full_name),
                    started_at=record.started_at if record else None,
                    updated_at=record.updated_at if record else None,
                )
            )
        return rows

    def click(self, path: str) -> bool:
        """Toggle the subtree under ``path``; returns the new expanded state."""
        return self.store.toggle(path)

    def update(self, root: TaskNode, attempt_id: str | None = None) -> None:
        """Swap in a freshly built tree.

        Fold state survives a refresh of the same attempt and is cleared when
        the view moves to a different one.
        """
        if attempt_id != self.attempt_id:
            self.store.reset()
        self.root = root
        self.attempt_id = attempt_id


class TasksView:
    """Flat, always-expanded listing of every task with its full name."""

    def __init__(self, root: TaskNode) -> None:
        self.root = root

    def nodes(self) -> list[TaskNode]:
        return list(all_task_nodes(self.root))

    def rows(self) -> list[TaskRow]:
        return [
            TaskRow(
                path=node.full_name,
                label=node.full_name,
                depth=node.depth,
                status=node.status,
                task_id=node.record.id if node.record else None,
                parent_id=node.record.parent_id if node.record else None,
                is_group=node.record.is_group if node.record else bool(node.children),
                started_at=node.record.started_at if node.record else None,
                updated_at=node.record.updated_at if node.record else None,
            )
            for node in all_task_nodes(self.root)
        ]
