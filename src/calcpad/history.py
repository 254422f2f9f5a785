"""Calculation history management."""

from collections import deque
from dataclasses import dataclass


@dataclass
class HistoryEntry:
    """A single completed calculation."""
    expression: str
    result: str

    def __str__(self) -> str:
        return f"{self.expression} = {self.result}"


class History:
    """
    Fixed-capacity calculation history, most recent first.

    Adding to a full history evicts the oldest entry.
    """

    def __init__(self, capacity: int = 5):
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self.capacity = capacity
        self._entries: deque[HistoryEntry] = deque(maxlen=capacity)

    def add(self, expression: str, result: str) -> HistoryEntry:
        """Record a calculation and return the new entry."""
        entry = HistoryEntry(expression=expression, result=result)
        self._entries.appendleft(entry)
        return entry

    def entries(self) -> list[str]:
        """Return the formatted entries, most recent first."""
        return [str(entry) for entry in self._entries]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
