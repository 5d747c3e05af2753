"""Core logic for the workflow console."""

from .collapse_state import CollapseStateStore, toggle
from .config import ConsoleSettings
from .models import (
    Attempt,
    ProjectRef,
    Session,
    SessionListItem,
    SessionStatus,
    TaskRecord,
    TaskStatus,
    WorkflowRef,
    task_records_from_api,
)
from .session_filter import ALL, SessionsView, filter_sessions_by_status, status_filter_options
from .task_names import MalformedTaskName, TaskTreeError, join_task_name, parse_task_name
from .task_tree import DuplicateTaskPath, TaskNode, TaskTreeBuilder, build_task_tree, find_node
from .task_views import (
    TaskRow,
    TasksView,
    TimelineRow,
    TimelineView,
    all_task_nodes,
    visible_timeline_nodes,
)

__all__ = [
    "ALL",
    "Attempt",
    "CollapseStateStore",
    "ConsoleSettings",
    "DuplicateTaskPath",
    "MalformedTaskName",
    "ProjectRef",
    "Session",
    "SessionListItem",
    "SessionStatus",
    "SessionsView",
    "TaskNode",
    "TaskRecord",
    "TaskRow",
    "TaskStatus",
    "TaskTreeBuilder",
    "TaskTreeError",
    "TasksView",
    "TimelineRow",
    "TimelineView",
    "WorkflowRef",
    "all_task_nodes",
    "build_task_tree",
    "filter_sessions_by_status",
    "find_node",
    "join_task_name",
    "parse_task_name",
    "status_filter_options",
    "task_records_from_api",
    "toggle",
    "visible_timeline_nodes",
]
