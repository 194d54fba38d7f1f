"""A thread-safe object pool with optional idle-timeout cleanup."""

from __future__ import annotations

import enum
import threading
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from time import monotonic
from typing import Callable, Deque, Generic, Iterator, Optional, TypeVar

from .config import PoolConfig
from .ring import IdleRing
from .stats import PoolStats

T = TypeVar("T")


class PoolError(Exception):
    """Base class for pool errors."""


class NewObjectError(PoolError):
    """Raised when the pool's factory fails to make a new object."""


class PoolStoppedError(PoolError):
    """Raised when the pool is stopping or has stopped."""


class _Outcome(enum.Enum):
    OBJECT = "object"
    RETRY = "retry"
    STOPPED = "stopped"


@dataclass(eq=False)
class _Waiter(Generic[T]):
    event: threading.Event = field(default_factory=threading.Event)
    outcome: _Outcome = _Outcome.OBJECT
    obj: Optional[T] = None


class Pool(Generic[T]):
    """A pool of reusable objects.

    Idle objects are handed out most recently used first. When no object is
    idle and the pool is full, callers of :meth:`get` wait and are served in
    the order they arrived. Idle objects beyond the minimum are destroyed,
    oldest first, once they have been idle for the configured timeout.
    """

    def __init__(self, config: PoolConfig[T]) -> None:
        config.check()
        assert config.new_func is not None

        self._min = config.min_size
        self._max = config.max_size
        self._idle_timeout = config.idle_timeout
        self._new_func: Callable[[], T] = config.new_func
        self._check_func = config.check_func
        self._destroy_func = config.destroy_func

        self._lock = threading.Lock()
        self._drained = threading.Condition(self._lock)
        self._count = 0
        self._idle: IdleRing[T] = IdleRing(self._max, self._idle_timeout)
        self._waiters: Deque[_Waiter[T]] = deque()
        self._stopping = False
        self._stop_event = threading.Event()

        self._created_total = 0
        self._waited_total = 0
        self._destroyed_total = 0

        for _ in range(self._min):
            try:
                obj = self._new_func()
            except Exception as exc:
                while len(self._idle):
                    self._destroy(self._idle.pop_oldest())
                    self._object_destroyed()
                raise NewObjectError(
                    f"failed to make new pool object: {exc}"
                ) from exc
            self._idle.push_newest(obj)
            self._object_created()

        if self._max > self._min and self._idle_timeout > 0:
            threading.Thread(
                target=self._cleanup_loop,
                name="objectpool-cleanup",
                daemon=True,
            ).start()

    def __enter__(self) -> "Pool[T]":
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()

    def stop(self) -> None:
        """Stop the pool, destroying idle objects and waiting for busy ones.

        Calling it again while stopping or after stopping does nothing.
        """
        with self._lock:
            if self._stopping:
                return
            self._stopping = True
            self._stop_event.set()

            for waiter in self._waiters:
                waiter.outcome = _Outcome.STOPPED
                waiter.event.set()
            self._waiters.clear()

            idle = []
            while len(self._idle):
                idle.append(self._idle.pop_oldest())
                self._object_destroyed()

        for obj in idle:
            self._destroy(obj)

        with self._drained:
            self._drained.wait_for(lambda: self._count <= 0)

    def get(self, timeout: Optional[float] = None) -> T:
        """Take an object from the pool.

        Returns the most recently used idle object if there is one, otherwise
        a new object if the pool has room, otherwise waits for one to be put
        back. ``timeout`` bounds the wait in seconds; ``None`` waits forever.

        Raises PoolStoppedError if the pool is stopping or stopped,
        NewObjectError if a new object cannot be made, and TimeoutError if
        the wait runs out.
        """
        deadline = None if timeout is None else monotonic() + timeout
        while True:
            with self._lock:
                if self._stopping:
                    raise PoolStoppedError("pool is stopping or has stopped")
                if len(self._idle):
                    return self._idle.pop_newest()
                if self._count < self._max:
                    self._object_created()
                    waiter = None
                else:
                    self._waited_total += 1
                    waiter = _Waiter()
                    self._waiters.append(waiter)

            if waiter is None:
                try:
                    return self._new_func()
                except Exception as exc:
                    with self._lock:
                        self._object_destroyed()
                    raise NewObjectError(
                        f"failed to make new pool object: {exc}"
                    ) from exc

            remaining = None if deadline is None else max(0.0, deadline - monotonic())
            waiter.event.wait(remaining)
            with self._lock:
                if not waiter.event.is_set():
                    self._waiters.remove(waiter)
                    raise TimeoutError("timed out waiting for a pool object")

            if waiter.outcome is _Outcome.RETRY:
                continue
            if waiter.outcome is _Outcome.STOPPED:
                raise PoolStoppedError("pool is stopping or has stopped")
            return waiter.obj  # type: ignore[return-value]

    def put(self, obj: T) -> None:
        """Return an object to the pool.

        If the check function raises, the object is destroyed. If the pool is
        stopping or stopped, the object is destroyed. Otherwise it goes to the
        longest waiting caller of :meth:`get`, or into the idle store.
        """
        if self._check_func is not None:
            try:
                self._check_func(obj)
            except Exception:
                with self._lock:
                    self._object_destroyed()
                    # Wake a waiter: there may be room for a new object now.
                    if self._waiters:
                        waiter = self._waiters.popleft()
                        waiter.outcome = _Outcome.RETRY
                        waiter.event.set()
                self._destroy(obj)
                return

        with self._lock:
            if self._stopping:
                self._object_destroyed()
                stopped = True
            else:
                stopped = False
                if self._waiters:
                    waiter = self._waiters.popleft()
                    waiter.outcome = _Outcome.OBJECT
                    waiter.obj = obj
                    waiter.event.set()
                else:
                    self._idle.push_newest(obj)

        if stopped:
            self._destroy(obj)

    @contextmanager
    def borrow(self, timeout: Optional[float] = None) -> Iterator[T]:
        """Take an object for the duration of a ``with`` block."""
        obj = self.get(timeout)
        try:
            yield obj
        finally:
            self.put(obj)

    def stats(self) -> PoolStats:
        """Return a snapshot of the pool's counters."""
        with self._lock:
            idle = len(self._idle)
            return PoolStats(
                created_total=self._created_total,
                waited_total=self._waited_total,
                destroyed_total=self._destroyed_total,
                count_now=self._count,
                busy_now=self._count - idle,
                idle_now=idle,
                waiting_now=len(self._waiters),
            )

    def _destroy(self, obj: T) -> None:
        if self._destroy_func is not None:
            self._destroy_func(obj)

    def _object_created(self) -> None:
        self._created_total += 1
        self._count += 1

    def _object_destroyed(self) -> None:
        self._destroyed_total += 1
        self._count -= 1
        if self._stopping:
            self._drained.notify_all()

    def _cleanup_loop(self) -> None:
        interval = self._idle_timeout / 2
        while not self._stop_event.wait(interval):
            self._cleanup_once()

    def _cleanup_once(self) -> None:
        while True:
            with self._lock:
                if (
                    self._stopping
                    or self._count <= self._min
                    or not len(self._idle)
                    or not self._idle.oldest_idle_too_long()
                ):
                    return
                obj = self._idle.pop_oldest()
                self._object_destroyed()
            self._destroy(obj)