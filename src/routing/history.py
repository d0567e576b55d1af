"""
Host navigation facility.

The router only needs a "current location" register plus push/replace and
back/forward traversal. ``InMemoryHistory`` provides that for server-side
rendering and tests; a browser bridge would implement the same protocol.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class HistoryEntry:
    path: str
    state: Any = None


class InMemoryHistory:
    """A LIFO session history with a movable cursor."""
    
    def __init__(self, initial_path: str = "/"):
        self._entries: list[HistoryEntry] = [HistoryEntry(initial_path or "/")]
        self._index = 0
    
    @property
    def current_path(self) -> str:
        return self._entries[self._index].path
    
    @property
    def current_state(self) -> Any:
        return self._entries[self._index].state
    
    @property
    def length(self) -> int:
        return len(self._entries)
    
    def push(self, path: str, state: Any = None) -> None:
        """Add an entry after the cursor, dropping any forward entries."""
        del self._entries[self._index + 1:]
        self._entries.append(HistoryEntry(path, state))
        self._index += 1
    
    def replace(self, path: str, state: Any = None) -> None:
        """Overwrite the entry under the cursor."""
        self._entries[self._index] = HistoryEntry(path, state)
    
    def back(self) -> bool:
        """Move the cursor back one entry. Returns False at the start."""
        if self._index == 0:
            return False
        self._index -= 1
        return True
    
    def forward(self) -> bool:
        """Move the cursor forward one entry. Returns False at the end."""
        if self._index >= len(self._entries) - 1:
            return False
        self._index += 1
        return True
    
    def entries(self, limit: Optional[int] = None) -> list[str]:
        """Paths in the history, oldest first."""
        paths = [entry.path for entry in self._entries]
        return paths[-limit:] if limit else paths
