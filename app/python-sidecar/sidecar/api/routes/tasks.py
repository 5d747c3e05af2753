"""
Tasks API route - flat, fully expanded task listing
"""

import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from workflow_console.core.task_tree import build_task_tree, placeholder_nodes
from workflow_console.core.task_views import TasksView

from .schemas import TaskListRequest

router = APIRouter()
logger = logging.getLogger(__name__)


class TaskRowResponse(BaseModel):
    """A task listed under its full name."""

    path: str
    label: str
    depth: int
    status: str | None = None
    taskId: str | None = None
    parentId: str | None = None
    isGroup: bool
    startedAt: str | None = None
    updatedAt: str | None = None
    durationSeconds: float | None = None


class TasksResponse(BaseModel):
    rows: list[TaskRowResponse]
    total: int
    placeholders: list[str]  # ancestors implied by task names but never listed


@router.post("")
def list_tasks(request: TaskListRequest) -> TasksResponse:
    """Render every task of an attempt, root task included."""
    try:
        root = build_task_tree(request.to_records())
    except ValueError as e:
        logger.warning("Rejected task list for attempt %s: %s", request.attemptId, e)
        raise HTTPException(status_code=422, detail=str(e))

    rows = [
        TaskRowResponse(
            path=row.path,
            label=row.label,
            depth=row.depth,
            status=row.status.value if row.status else None,
            taskId=row.task_id,
            parentId=row.parent_id,
            isGroup=row.is_group,
            startedAt=row.started_at.isoformat() if row.started_at else None,
            updatedAt=row.updated_at.isoformat() if row.updated_at else None,
            durationSeconds=row.duration_seconds,
        )
        for row in TasksView(root).rows()
    ]
    return TasksResponse(
        rows=rows,
        total=len(rows),
        placeholders=[node.full_name for node in placeholder_nodes(root)],
    )
