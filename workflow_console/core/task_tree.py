"""Task tree construction from an attempt's flat task list.

Parent/child edges are inferred purely from full-name prefixes. Nodes live in
an index keyed by full name while the tree is built; each node keeps its
children in the order they were first created, so sibling order follows the
input list no matter how deep references interleave.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from .models import TaskRecord, TaskStatus
from .task_names import (
    SEPARATOR,
    MalformedTaskName,
    TaskTreeError,
    join_task_name,
    parse_task_name,
    segment_label,
)

logger = logging.getLogger(__name__)

ROOT_KEY = ""


class DuplicateTaskPath(TaskTreeError):
    """Two task records share the same full name."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"duplicate task path: {path!r}")


@dataclass(eq=False)
class TaskNode:
    """A node in the task tree.

    The synthetic root has an empty ``path`` and no record. Non-root nodes
    without a record are placeholders for ancestors the task list implied but
    never listed.
    """

    segment: str
    path: tuple[str, ...] = ()
    record: TaskRecord | None = None
    children: list["TaskNode"] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        return join_task_name(self.path)

    @property
    def label(self) -> str:
        return segment_label(self.segment) if self.path else ROOT_KEY

    @property
    def depth(self) -> int:
        return len(self.path)

    @property
    def is_root(self) -> bool:
        return not self.path

    @property
    def is_placeholder(self) -> bool:
        return bool(self.path) and self.record is None

    @property
    def status(self) -> TaskStatus | None:
        return self.record.status if self.record else None


class TaskTreeBuilder:
    """Builds a rooted TaskNode tree from ordered TaskRecords.

    The builder holds no state between calls; building the same input twice
    yields structurally identical trees.
    """

    def build(self, records: Iterable[TaskRecord]) -> TaskNode:
        root = TaskNode(segment=ROOT_KEY)
        index: dict[str, TaskNode] = {ROOT_KEY: root}

        for record in records:
            segments = parse_task_name(record.full_name)
            node = self._ensure_path(index, segments)
            if node.record is not None:
                raise DuplicateTaskPath(record.full_name)
            self._check_parent(record, node, index)
            node.record = record

        placeholders = [key for key, node in index.items() if node.is_placeholder]
        if placeholders:
            logger.warning(
                "Task tree has %d ancestor(s) with no task record: %s",
                len(placeholders),
                ", ".join(placeholders),
            )
        return root

    @staticmethod
    def _ensure_path(index: dict[str, TaskNode], segments: tuple[str, ...]) -> TaskNode:
        """Return the node for ``segments``, creating it and any missing ancestors."""
        # Deepest prefix already in the index; usually the whole path or its parent.
        depth = len(segments)
        key = join_task_name(segments)
        while key not in index:
            depth -= 1
            key = key[: len(key) - len(segments[depth]) - len(SEPARATOR)]
        parent = index[key]
        for depth in range(depth + 1, len(segments) + 1):
            key = key + SEPARATOR + segments[depth - 1]
            node = TaskNode(segment=segments[depth - 1], path=segments[:depth])
            parent.children.append(node)
            index[key] = node
            parent = node
        return parent

    @staticmethod
    def _check_parent(record: TaskRecord, node: TaskNode, index: dict[str, TaskNode]) -> None:
        """Reject records whose declared parent id contradicts the inferred parent."""
        parent = index[join_task_name(node.path[:-1])]
        if record.parent_id is not None and parent.record is not None and parent.record.id is not None:
            if parent.record.id != record.parent_id:
                raise MalformedTaskName(
                    record.full_name,
                    f"parent id {record.parent_id} does not match {parent.full_name} ({parent.record.id})",
                )
        if record.id is None:
            return
        for child in node.children:
            declared = child.record.parent_id if child.record else None
            if declared is not None and declared != record.id:
                raise MalformedTaskName(
                    child.full_name,
                    f"parent id {declared} does not match {record.full_name} ({record.id})",
                )


def build_task_tree(records: Iterable[TaskRecord]) -> TaskNode:
    """Build the task tree for one attempt and return its synthetic root."""
    return TaskTreeBuilder().build(records)


def find_node(root: TaskNode, full_name: str) -> TaskNode | None:
    """Locate a node by full name by walking segment by segment."""
    if full_name == ROOT_KEY:
        return root
    node = root
    for segment in parse_task_name(full_name):
        node = next((child for child in node.children if child.segment == segment), None)
        if node is None:
            return None
    return node


def placeholder_nodes(root: TaskNode) -> list[TaskNode]:
    """Nodes implied by some task name but never listed themselves."""
    found: list[TaskNode] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_placeholder:
            found.append(node)
        stack.extend(reversed(node.children))
    return found
