"""Task full-name parsing.

A task full name is a breadcrumb of ``+segment`` parts, e.g.
``+basic+parallel_task_foo+bar``. The leading ``+`` stands for the implicit
root and contributes no segment of its own.
"""

from __future__ import annotations

SEPARATOR = "+"


class TaskTreeError(ValueError):
    """Base class for task-tree data-integrity errors."""


class MalformedTaskName(TaskTreeError):
    """A task full name that does not follow the breadcrumb convention."""

    def __init__(self, name: str, reason: str = "malformed task name") -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"{reason}: {name!r}")


def parse_task_name(name: str) -> tuple[str, ...]:
    """Split a full task name into its ordered, non-empty segments.

    >>> parse_task_name("+a+b+c")
    ('a', 'b', 'c')

    Raises:
        MalformedTaskName: empty name, missing leading ``+`` or an empty segment.
    """
    if not isinstance(name, str) or not name:
        raise MalformedTaskName(str(name), "empty task name")
    if not name.startswith(SEPARATOR):
        raise MalformedTaskName(name, "task name must start with '+'")
    segments = tuple(name[1:].split(SEPARATOR))
    if any(not segment for segment in segments):
        raise MalformedTaskName(name, "empty segment in task name")
    return segments


def join_task_name(segments: tuple[str, ...] | list[str]) -> str:
    """Inverse of parse_task_name; the empty path maps to the root key ``""``."""
    return "".join(SEPARATOR + segment for segment in segments)


def segment_label(segment: str) -> str:
    """Display label for a single segment, as the timeline shows it."""
    return SEPARATOR + segment
