"""
Sessions API routes - status filter over an already-fetched sessions list
"""

import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from workflow_console.core.models import SessionListItem
from workflow_console.core.session_filter import ALL, filter_sessions_by_status, status_filter_options

router = APIRouter()
logger = logging.getLogger(__name__)


class SessionFilterRequest(BaseModel):
    """Sessions as the workflow server lists them, plus the selected status."""

    status: str = ALL
    sessions: list[dict] = Field(default_factory=list)


class SessionItemResponse(BaseModel):
    id: str
    projectName: str
    workflowName: str
    sessionUuid: str
    status: str
    projectId: str | None = None
    workflowId: str | None = None
    attemptId: str | None = None


class SessionListResponse(BaseModel):
    status: str
    sessions: list[SessionItemResponse]
    total: int


@router.get("/statuses")
def get_statuses() -> list[str]:
    """Options for the status select."""
    return status_filter_options()


@router.post("/filter")
def filter_sessions(request: SessionFilterRequest) -> SessionListResponse:
    try:
        items = [SessionListItem.from_api(payload) for payload in request.sessions]
    except (KeyError, TypeError) as e:
        logger.warning("Rejected sessions payload: %s", e)
        raise HTTPException(status_code=422, detail=f"Malformed session: {e}")

    filtered = filter_sessions_by_status(items, request.status)
    return SessionListResponse(
        status=request.status,
        sessions=[
            SessionItemResponse(
                id=item.id,
                projectName=item.project_name,
                workflowName=item.workflow_name,
                sessionUuid=item.session_uuid,
                status=item.status.value,
                projectId=item.project_id,
                workflowId=item.workflow_id,
                attemptId=item.attempt_id,
            )
            for item in filtered
        ],
        total=len(filtered),
    )
