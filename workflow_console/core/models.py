"""Resolved data objects consumed by the console core.

These mirror the JSON the workflow server returns for sessions, attempts and
tasks. Fetching them is someone else's job; the ``from_api`` constructors only
turn already-fetched payloads into typed values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from ..utils.datetime_utils import parse_iso


class TaskStatus(Enum):
    """Display status of a single task."""

    SUCCESS = "Success"
    FAILURE = "Failure"
    RUNNING = "Running"
    BLOCKED = "Blocked"
    PLANNED = "Planned"
    CANCELED = "Canceled"
    READY = "Ready"
    RETRY_WAITING = "Retry Waiting"

    @classmethod
    def from_state(cls, state: str) -> "TaskStatus":
        """Map a raw server task state (``success``, ``group_error``...) to a status."""
        try:
            return _TASK_STATES[state]
        except KeyError:
            raise ValueError(f"Unknown task state: {state!r}") from None


_TASK_STATES: dict[str, TaskStatus] = {
    "success": TaskStatus.SUCCESS,
    "error": TaskStatus.FAILURE,
    "group_error": TaskStatus.FAILURE,
    "running": TaskStatus.RUNNING,
    "blocked": TaskStatus.BLOCKED,
    "planned": TaskStatus.PLANNED,
    "canceled": TaskStatus.CANCELED,
    "ready": TaskStatus.READY,
    "retry_waiting": TaskStatus.RETRY_WAITING,
    "group_retry_waiting": TaskStatus.RETRY_WAITING,
}


class SessionStatus(Enum):
    """Display status of a session, taken from its latest attempt."""

    SUCCESS = "Success"
    FAILURE = "Failure"
    RUNNING = "Running"
    CANCELED = "Canceled"
    CANCELING = "Canceling"
    PENDING = "Pending"

    @classmethod
    def from_attempt(cls, done: bool, success: bool, cancel_requested: bool) -> "SessionStatus":
        if done:
            if success:
                return cls.SUCCESS
            if cancel_requested:
                return cls.CANCELED
            return cls.FAILURE
        if cancel_requested:
            return cls.CANCELING
        return cls.RUNNING

    @classmethod
    def from_attempt_payload(cls, payload: dict | None) -> "SessionStatus":
        if not payload:
            return cls.PENDING
        if not isinstance(payload, dict):
            raise TypeError(f"attempt must be an object, got {type(payload).__name__}")
        return cls.from_attempt(
            done=bool(payload.get("done")),
            success=bool(payload.get("success")),
            cancel_requested=bool(payload.get("cancelRequested")),
        )


@dataclass
class TaskRecord:
    """One flat task entry of an attempt, as listed by the server."""

    full_name: str
    status: TaskStatus
    order: int = 0
    id: str | None = None
    parent_id: str | None = None
    is_group: bool = False
    started_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_api(cls, payload: dict, order: int = 0) -> "TaskRecord":
        """Build a record from a camelCase task object."""
        return cls(
            full_name=payload["fullName"],
            status=TaskStatus.from_state(payload["state"]),
            order=order,
            id=_optional_id(payload.get("id")),
            parent_id=_optional_id(payload.get("parentId")),
            is_group=bool(payload.get("isGroup", False)),
            started_at=parse_iso(payload.get("startedAt")),
            updated_at=parse_iso(payload.get("updatedAt")),
        )


def task_records_from_api(payloads: list[dict]) -> list[TaskRecord]:
    """Convert a task list payload, keeping list position as ``order``."""
    return [TaskRecord.from_api(payload, order=index) for index, payload in enumerate(payloads)]


@dataclass(frozen=True)
class ProjectRef:
    id: str
    name: str

    @classmethod
    def from_api(cls, payload: dict) -> "ProjectRef":
        return cls(id=str(payload["id"]), name=payload["name"])


@dataclass(frozen=True)
class WorkflowRef:
    name: str
    id: str | None = None

    @classmethod
    def from_api(cls, payload: dict) -> "WorkflowRef":
        return cls(name=payload["name"], id=_optional_id(payload.get("id")))


@dataclass
class Session:
    """A logical workflow run; points at its latest attempt."""

    id: str
    project: ProjectRef
    workflow: WorkflowRef
    session_uuid: str
    session_time: datetime | None = None
    last_attempt_id: str | None = None
    last_attempt_status: SessionStatus = SessionStatus.PENDING

    @classmethod
    def from_api(cls, payload: dict) -> "Session":
        last_attempt = payload.get("lastAttempt")
        if last_attempt is not None and not isinstance(last_attempt, dict):
            raise TypeError(f"lastAttempt must be an object, got {type(last_attempt).__name__}")
        return cls(
            id=str(payload["id"]),
            project=ProjectRef.from_api(payload["project"]),
            workflow=WorkflowRef.from_api(payload["workflow"]),
            session_uuid=payload["sessionUuid"],
            session_time=parse_iso(payload.get("sessionTime")),
            last_attempt_id=_optional_id(last_attempt.get("id")) if last_attempt else None,
            last_attempt_status=SessionStatus.from_attempt_payload(last_attempt),
        )


@dataclass
class Attempt:
    """One concrete execution of a session, with its ordered task records."""

    id: str
    project: ProjectRef
    workflow: WorkflowRef
    status: SessionStatus
    session_id: str | None = None
    retry_attempt_name: str | None = None
    tasks: list[TaskRecord] = field(default_factory=list)

    @classmethod
    def from_api(cls, payload: dict, tasks: list[dict] | None = None) -> "Attempt":
        return cls(
            id=str(payload["id"]),
            project=ProjectRef.from_api(payload["project"]),
            workflow=WorkflowRef.from_api(payload["workflow"]),
            status=SessionStatus.from_attempt_payload(payload),
            session_id=_optional_id(payload.get("sessionId")),
            retry_attempt_name=payload.get("retryAttemptName"),
            tasks=task_records_from_api(tasks or []),
        )


@dataclass
class SessionListItem:
    """Row of the sessions list; ``status`` is what the status filter matches on."""

    id: str
    project_name: str
    workflow_name: str
    session_uuid: str
    status: SessionStatus
    project_id: str | None = None
    workflow_id: str | None = None
    attempt_id: str | None = None

    @classmethod
    def from_api(cls, payload: dict) -> "SessionListItem":
        session = Session.from_api(payload)
        return cls.from_session(session)

    @classmethod
    def from_session(cls, session: Session) -> "SessionListItem":
        return cls(
            id=session.id,
            project_name=session.project.name,
            workflow_name=session.workflow.name,
            session_uuid=session.session_uuid,
            status=session.last_attempt_status,
            project_id=session.project.id,
            workflow_id=session.workflow.id,
            attempt_id=session.last_attempt_id,
        )


def _optional_id(value: object) -> str | None:
    return None if value is None else str(value)
