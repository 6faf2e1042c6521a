"""
Route entries and per-outlet history.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class RouteEntry:
    """One navigated location inside an outlet."""

    url: Optional[str]
    params: Dict[str, Any] = field(default_factory=dict)
    id: Optional[int] = None

    @property
    def component_id(self) -> Optional[Any]:
        """The ``id`` parameter of this entry, if any."""
        if self.params and "id" in self.params:
            return self.params["id"]
        return None


class OutletHistory:
    """
    Ordered history of one named outlet with a current-position cursor.

    Pushing overwrites the slot after the cursor instead of truncating, so
    entries past a back-navigation point stay physically present but are
    unreachable through cursor-relative access.
    """

    def __init__(self, name: str, entries: Optional[List[Optional[RouteEntry]]] = None, cursor: int = 0):
        self.name = name
        self.entries: List[Optional[RouteEntry]] = entries if entries is not None else []
        self.cursor = cursor

    def __repr__(self) -> str:
        return f"OutletHistory(name={self.name!r}, cursor={self.cursor}, entries={len(self.entries)})"

    def _slot(self, index: int) -> Optional[RouteEntry]:
        if 0 <= index < len(self.entries):
            return self.entries[index]
        return None

    def _write(self, index: int, entry: Optional[RouteEntry]) -> None:
        while len(self.entries) <= index:
            self.entries.append(None)
        self.entries[index] = entry

    def push_entry(self, entry: RouteEntry) -> None:
        """Advance past an occupied cursor slot, then write ``entry`` at the cursor."""
        if self._slot(self.cursor) is not None:
            self.cursor += 1
        self._write(self.cursor, entry)

    def pop_entry(self) -> Optional[RouteEntry]:
        """Step the cursor back (never below 0) and return the entry there."""
        self.cursor = self.cursor - 1 if self.cursor >= 1 else 0
        return self._slot(self.cursor)

    def discard_entry(self) -> Optional[RouteEntry]:
        """
        Remove the logical top entry and return it.

        Moves the cursor back one slot. At the first slot the entry is
        vacated instead, leaving the history logically empty.
        """
        entry = self._slot(self.cursor)
        if entry is None:
            return None
        if self.cursor >= 1:
            self.cursor -= 1
        else:
            self.entries[0] = None
        return entry

    def current_entry(self) -> Optional[RouteEntry]:
        return self._slot(self.cursor)

    def previous_entry(self) -> Optional[RouteEntry]:
        if self.cursor >= 1 and self.current_entry() is not None:
            return self._slot(self.cursor - 1)
        return None

    def current_params(self) -> Optional[Dict[str, Any]]:
        entry = self._slot(self.cursor)
        if entry is not None:
            return entry.params if entry.params is not None else None
        return None

    @property
    def depth(self) -> int:
        """Number of entries reachable from the cursor (cursor slot included)."""
        return self.cursor + 1 if self._slot(self.cursor) is not None else 0

    def reachable_entries(self) -> List[RouteEntry]:
        """Entries from the first slot up to and including the cursor."""
        if self.depth == 0:
            return []
        return [entry for entry in self.entries[: self.cursor + 1] if entry is not None]
