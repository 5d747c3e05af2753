"""
Request models shared by the console routes
"""

from pydantic import BaseModel, Field

from workflow_console.core.models import TaskRecord


class TaskPayload(BaseModel):
    """A task object as the workflow server lists it."""

    id: str | None = None
    fullName: str
    state: str
    parentId: str | None = None
    isGroup: bool = False
    startedAt: str | None = None
    updatedAt: str | None = None


class TaskListRequest(BaseModel):
    """An attempt's ordered task list."""

    attemptId: str | None = None
    tasks: list[TaskPayload] = Field(default_factory=list)

    def to_records(self) -> list[TaskRecord]:
        return [TaskRecord.from_api(task.model_dump(), order=order) for order, task in enumerate(self.tasks)]
