"""Bounded store of idle objects ordered by when they were last used."""

from __future__ import annotations

from collections import deque
from time import monotonic
from typing import Deque, Generic, Tuple, TypeVar

T = TypeVar("T")


class IdleRing(Generic[T]):
    """Bounded double-ended store of idle objects with last-used times.

    The oldest object sits at the front and the newest at the back. Last-used
    times are only recorded when an idle timeout is set.
    """

    def __init__(self, capacity: int, idle_timeout: float) -> None:
        if capacity < 0:
            raise ValueError("capacity must be greater than or equal to zero")
        self._capacity = capacity
        self._idle_timeout = idle_timeout
        self._entries: Deque[Tuple[T, float]] = deque()

    @property
    def capacity(self) -> int:
        """Maximum number of objects the ring can hold."""
        return self._capacity

    def __len__(self) -> int:
        return len(self._entries)

    def oldest_idle_too_long(self) -> bool:
        """Return True if the oldest object has been idle for the timeout."""
        if not self._entries:
            raise IndexError("ring is empty")
        if self._idle_timeout <= 0:
            return False
        _, last_used = self._entries[0]
        return monotonic() - last_used >= self._idle_timeout

    def pop_oldest(self) -> T:
        """Remove and return the least recently pushed object."""
        if not self._entries:
            raise IndexError("ring is empty")
        obj, _ = self._entries.popleft()
        return obj

    def pop_newest(self) -> T:
        """Remove and return the most recently pushed object."""
        if not self._entries:
            raise IndexError("ring is empty")
        obj, _ = self._entries.pop()
        return obj

    def push_newest(self, obj: T) -> None:
        """Add an object as the newest entry."""
        if len(self._entries) >= self._capacity:
            raise OverflowError("ring is full")
        last_used = monotonic() if self._idle_timeout > 0 else 0.0
        self._entries.append((obj, last_used))