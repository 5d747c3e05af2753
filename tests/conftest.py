"""Pytest configuration and shared fixtures."""

import pytest

from workflow_console.core.models import TaskRecord, TaskStatus, task_records_from_api


BASIC_TASK_NAMES = [
    "+basic",
    "+basic+my_task_1",
    "+basic+my_task_2",
    "+basic+any_task_name_here",
    "+basic+any_task_name_here+nested_task",
    "+basic+any_task_name_here+nested_task_2",
    "+basic+parallel_task_foo",
    "+basic+parallel_task_foo+bar",
    "+basic+parallel_task_foo+baz",
    "+basic+abc",
]

# id -> parent id for the tasks above, in the same order
_BASIC_PARENTS = [None, "1", "1", "1", "4", "4", "1", "7", "7", "1"]


def _make_records(names, status=TaskStatus.SUCCESS):
    """Plain records with no ids, in list order."""
    return [TaskRecord(full_name=name, status=status, order=i) for i, name in enumerate(names)]


@pytest.fixture
def basic_task_payloads():
    """Task list of the ``basic`` workflow as the workflow server returns it."""
    payloads = []
    for index, (name, parent_id) in enumerate(zip(BASIC_TASK_NAMES, _BASIC_PARENTS), start=1):
        payloads.append(
            {
                "id": str(index),
                "fullName": name,
                "parentId": parent_id,
                "state": "success",
                "isGroup": name in ("+basic", "+basic+any_task_name_here", "+basic+parallel_task_foo"),
                "startedAt": "2026-02-10T10:00:00Z",
                "updatedAt": "2026-02-10T10:00:%02dZ" % index,
                "retryAt": None,
                "cancelRequested": False,
            }
        )
    return payloads


@pytest.fixture
def basic_records(basic_task_payloads):
    return task_records_from_api(basic_task_payloads)


def session_payload(session_id, workflow, done=True, success=True, cancel_requested=False):
    return {
        "id": str(session_id),
        "project": {"id": "1", "name": "example"},
        "workflow": {"name": workflow, "id": "5"},
        "sessionUuid": f"00000000-0000-0000-0000-{session_id:012d}",
        "sessionTime": "2026-02-10T00:00:00+09:00",
        "lastAttempt": {
            "id": str(session_id),
            "retryAttemptName": None,
            "done": done,
            "success": success,
            "cancelRequested": cancel_requested,
            "params": {},
            "createdAt": "2026-02-10T10:00:00Z",
            "finishedAt": "2026-02-10T10:05:00Z" if done else None,
        },
    }


@pytest.fixture
def session_payloads():
    """Mixed Success/Failure sessions list."""
    return [
        session_payload(1, "basic"),
        session_payload(2, "error_task", success=False),
        session_payload(3, "generate_subtasks"),
        session_payload(4, "error_task", success=False),
    ]


@pytest.fixture
def make_records():
    """Factory for id-less records: ``make_records(["+a", "+a+b"])``."""
    return _make_records


@pytest.fixture
def basic_names():
    return list(BASIC_TASK_NAMES)
