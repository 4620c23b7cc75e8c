"""
history.py

In-memory session history of generated passwords.

This belongs to the calling application, not the generator: nothing in
the core writes to it. Most recent entry first, bounded, never persisted.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, List, Optional

DEFAULT_CAPACITY = 10


class SessionHistory:
    """
    Bounded, most-recent-first list of passwords.

    >>> h = SessionHistory(capacity=2)
    >>> h.push("a"); h.push("b"); h.push("c")
    >>> list(h)
    ['c', 'b']
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._items: Deque[str] = deque(maxlen=capacity)

    def push(self, password: str) -> None:
        # appendleft on a full deque drops the oldest from the right
        self._items.appendleft(password)

    def clear(self) -> None:
        self._items.clear()

    def latest(self) -> Optional[str]:
        return self._items[0] if self._items else None

    def snapshot(self) -> List[str]:
        return list(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        # entries are secrets
        return f"SessionHistory(capacity={self.capacity}, size={len(self)})"


__all__ = ["DEFAULT_CAPACITY", "SessionHistory"]
