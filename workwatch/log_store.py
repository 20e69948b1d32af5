# SPDX-License-Identifier: MIT
"""
Ordered store of activity logs with a selection cursor.

Entries are kept in insertion order; new entries are always appended,
since the clock-out notification lists logs in the order they were written.
The selection index is either valid for the current length or None when
the store is empty.
"""

from dataclasses import replace
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from workwatch.clock import local_now
from workwatch.errors import EmptyInput, NoSelection
from workwatch.models import LogEntry, new_log_id


def _clean_text(text: str, operation: str) -> str:
    cleaned = (text or "").strip()
    if not cleaned:
        raise EmptyInput(operation)
    return cleaned


class LogStore:
    """Ordered log entries plus the index of the selected entry."""

    def __init__(self, wall_clock: Callable[[], datetime] = local_now) -> None:
        self._entries: List[LogEntry] = []
        self._selected: Optional[int] = None
        self._wall_clock = wall_clock

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def selected_index(self) -> Optional[int]:
        return self._selected

    def entries(self) -> Tuple[LogEntry, ...]:
        """Immutable snapshot of all entries in insertion order."""
        return tuple(self._entries)

    def selected(self) -> Optional[LogEntry]:
        if self._selected is None:
            return None
        return self._entries[self._selected]

    def add(self, text: str) -> LogEntry:
        """Append a new entry and select it.

        Raises:
            EmptyInput: If text is blank after stripping
        """
        entry = LogEntry(
            id=new_log_id(),
            timestamp=self._wall_clock(),
            text=_clean_text(text, "add_log"),
        )
        self._entries.append(entry)
        self._selected = len(self._entries) - 1
        return entry

    def edit_selected(self, text: str) -> LogEntry:
        """Replace the selected entry's text, keeping its id and timestamp.

        Raises:
            NoSelection: If nothing is selected
            EmptyInput: If text is blank after stripping
        """
        if self._selected is None:
            raise NoSelection("edit_log")
        cleaned = _clean_text(text, "edit_log")
        current = self._entries[self._selected]
        if current.text == cleaned:
            return current
        updated = replace(current, text=cleaned)
        self._entries[self._selected] = updated
        return updated

    def delete_selected(self) -> LogEntry:
        """Remove the selected entry.

        The selection stays at the same index, or moves to the new last
        entry when the removed entry was last.

        Raises:
            NoSelection: If nothing is selected
        """
        if self._selected is None:
            raise NoSelection("delete_log")
        index = self._selected
        removed = self._entries.pop(index)
        if self._entries:
            self._selected = min(index, len(self._entries) - 1)
        else:
            self._selected = None
        return removed

    def select_next(self) -> Optional[int]:
        """Move selection down one entry, stopping at the last."""
        if self._selected is None:
            raise NoSelection("select_next")
        self._selected = min(self._selected + 1, len(self._entries) - 1)
        return self._selected

    def select_prev(self) -> Optional[int]:
        """Move selection up one entry, stopping at the first."""
        if self._selected is None:
            raise NoSelection("select_prev")
        self._selected = max(self._selected - 1, 0)
        return self._selected

    def clear(self) -> None:
        self._entries.clear()
        self._selected = None
