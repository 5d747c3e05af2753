"""Per-view expand/collapse state for the timeline."""

from __future__ import annotations


class CollapseStateStore:
    """Key-value store of expanded flags, keyed by task full name.

    Absent keys read as expanded. The store never looks at the tree; one
    instance belongs to one timeline view and dies with it.
    """

    def __init__(self) -> None:
        self._expanded: dict[str, bool] = {}

    def is_expanded(self, path: str) -> bool:
        return self._expanded.get(path, True)

    def toggle(self, path: str) -> bool:
        """Flip the flag for ``path`` and return the new expanded state."""
        expanded = not self.is_expanded(path)
        self._expanded[path] = expanded
        return expanded

    def expand(self, path: str) -> None:
        self._expanded[path] = True

    def collapse(self, path: str) -> None:
        self._expanded[path] = False

    def collapsed_paths(self) -> list[str]:
        return sorted(path for path, expanded in self._expanded.items() if not expanded)

    def reset(self) -> None:
        """Forget every entry, e.g. when the view switches to another attempt."""
        self._expanded.clear()

    def __len__(self) -> int:
        return len(self._expanded)


def toggle(store: CollapseStateStore, path: str) -> bool:
    return store.toggle(path)
