"""Client-side status filter for the sessions list."""

from __future__ import annotations

import logging
from typing import Iterable

from .models import SessionListItem, SessionStatus

logger = logging.getLogger(__name__)

ALL = "All"


def status_filter_options() -> list[str]:
    """Values offered by the status select, ``All`` first."""
    return [ALL] + [status.value for status in SessionStatus]


def _resolve_status(status: SessionStatus | str) -> SessionStatus | None:
    if isinstance(status, SessionStatus):
        return status
    try:
        return SessionStatus(status)
    except ValueError:
        logger.debug("Unknown session status filter %r", status)
        return None


def filter_sessions_by_status(
    sessions: Iterable[SessionListItem],
    status: SessionStatus | str,
) -> list[SessionListItem]:
    """Return the sessions whose status equals ``status``, in their original order.

    ``ALL`` returns every session. An unrecognized status matches nothing.
    """
    if status == ALL:
        return list(sessions)
    selected = _resolve_status(status)
    if selected is None:
        return []
    return [session for session in sessions if session.status == selected]


class SessionsView:
    """Sessions list plus the status selection that filters it."""

    def __init__(self, sessions: list[SessionListItem], selected: SessionStatus | str = ALL) -> None:
        self.sessions = sessions
        self.selected = selected

    def select(self, status: SessionStatus | str) -> list[SessionListItem]:
        self.selected = status
        return self.visible()

    def visible(self) -> list[SessionListItem]:
        return filter_sessions_by_status(self.sessions, self.selected)
