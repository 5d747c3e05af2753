"""
Timeline API routes - server-side timeline views with per-view fold state
"""

import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from workflow_console.core.task_names import MalformedTaskName
from workflow_console.core.task_tree import TaskNode, build_task_tree, find_node
from workflow_console.core.task_views import TimelineView

from .. import view_registry
from .schemas import TaskListRequest

router = APIRouter()
logger = logging.getLogger(__name__)


class TimelineRowResponse(BaseModel):
    """A visible node of the timeline."""

    path: str
    label: str
    indent: int
    status: str | None = None
    hasChildren: bool
    expanded: bool
    startedAt: str | None = None
    updatedAt: str | None = None
    durationSeconds: float | None = None


class TimelineResponse(BaseModel):
    """Current visible rows of one timeline view."""

    viewId: str
    attemptId: str | None = None
    rows: list[TimelineRowResponse]
    collapsed: list[str]


class ToggleRequest(BaseModel):
    path: str = Field(..., min_length=1)


def _build_tree(request: TaskListRequest) -> TaskNode:
    try:
        return build_task_tree(request.to_records())
    except ValueError as e:
        logger.warning("Rejected task list for attempt %s: %s", request.attemptId, e)
        raise HTTPException(status_code=422, detail=str(e))


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Timeline view not found")


def _in_tree(view: TimelineView, path: str) -> bool:
    try:
        return find_node(view.root, path) is not None
    except MalformedTaskName:
        return False


def _to_response(view_id: str, view: TimelineView) -> TimelineResponse:
    return TimelineResponse(
        viewId=view_id,
        attemptId=view.attempt_id,
        rows=[
            TimelineRowResponse(
                path=row.path,
                label=row.label,
                indent=row.indent,
                status=row.status.value if row.status else None,
                hasChildren=row.has_children,
                expanded=row.expanded,
                startedAt=row.started_at.isoformat() if row.started_at else None,
                updatedAt=row.updated_at.isoformat() if row.updated_at else None,
                durationSeconds=row.duration_seconds,
            )
            for row in view.rows()
        ],
        collapsed=view.store.collapsed_paths(),
    )


@router.post("/views", status_code=201)
def create_view(request: TaskListRequest) -> TimelineResponse:
    """Build a task tree and open a timeline view over it."""
    view = TimelineView(_build_tree(request), attempt_id=request.attemptId)
    view_id = view_registry.create(view)
    logger.debug("Opened timeline view %s for attempt %s", view_id, request.attemptId)
    return _to_response(view_id, view)


@router.get("/views/{view_id}")
def get_view(view_id: str) -> TimelineResponse:
    with view_registry.checkout(view_id) as view:
        if view is None:
            raise _not_found()
        return _to_response(view_id, view)


@router.put("/views/{view_id}")
def update_view(view_id: str, request: TaskListRequest) -> TimelineResponse:
    """Refresh the view with a new task list; fold state resets on attempt change."""
    root = _build_tree(request)
    with view_registry.checkout(view_id) as view:
        if view is None:
            raise _not_found()
        view.update(root, attempt_id=request.attemptId)
        return _to_response(view_id, view)


@router.post("/views/{view_id}/toggle")
def toggle_node(view_id: str, request: ToggleRequest) -> TimelineResponse:
    """Fold or unfold the subtree under a node."""
    with view_registry.checkout(view_id) as view:
        if view is None:
            raise _not_found()
        if not _in_tree(view, request.path):
            logger.debug("Toggling %s, which is not in view %s", request.path, view_id)
        view.click(request.path)
        return _to_response(view_id, view)


@router.delete("/views/{view_id}")
def close_view(view_id: str):
    if not view_registry.discard(view_id):
        raise _not_found()
    return {"closed": view_id}
