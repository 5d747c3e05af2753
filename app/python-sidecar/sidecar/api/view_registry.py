"""In-memory registry of live timeline views.

Each view owns its own collapse state, so the registry is what keeps a
client's fold state alive between requests. Entries expire after a sliding
TTL and the oldest are evicted beyond a size cap. The registry lock guards
the mapping; each entry's own lock guards its view, so a toggle and the rows
rendered after it are never interleaved with another request on that view.
"""

import threading
import time
import uuid
from contextlib import contextmanager
from typing import Iterator

from workflow_console.core.config import ConsoleSettings
from workflow_console.core.task_views import TimelineView

_lock = threading.Lock()
# view_id -> (expires_at, view, view lock)
_store: dict[str, tuple[float, TimelineView, threading.Lock]] = {}

_settings = ConsoleSettings.from_env()


def configure(settings: ConsoleSettings) -> None:
    """Replace the TTL/size settings (used by the server entry point and tests)."""
    global _settings
    with _lock:
        _settings = settings


def _purge_expired(now: float) -> None:
    expired = [key for key, entry in _store.items() if now > entry[0]]
    for key in expired:
        del _store[key]


def create(view: TimelineView) -> str:
    """Register a view and return its new id."""
    view_id = uuid.uuid4().hex
    with _lock:
        now = time.monotonic()
        _purge_expired(now)
        while len(_store) >= _settings.max_views:
            oldest = min(_store, key=lambda key: _store[key][0])
            del _store[oldest]
        _store[view_id] = (now + _settings.view_ttl_seconds, view, threading.Lock())
    return view_id


def _lookup(view_id: str) -> tuple[TimelineView, threading.Lock] | None:
    """Return the live entry for view_id, extending its TTL, else None."""
    with _lock:
        entry = _store.get(view_id)
        if entry is None:
            return None
        expires_at, view, view_lock = entry
        now = time.monotonic()
        if now > expires_at:
            del _store[view_id]
            return None
        _store[view_id] = (now + _settings.view_ttl_seconds, view, view_lock)
        return view, view_lock


@contextmanager
def checkout(view_id: str) -> Iterator[TimelineView | None]:
    """Hold a view exclusively for the block; yields None for unknown ids."""
    entry = _lookup(view_id)
    if entry is None:
        yield None
        return
    view, view_lock = entry
    with view_lock:
        yield view


def discard(view_id: str) -> bool:
    """Drop a view and its collapse state. Returns whether it existed."""
    with _lock:
        return _store.pop(view_id, None) is not None


def clear() -> None:
    with _lock:
        _store.clear()


def count() -> int:
    with _lock:
        return len(_store)
