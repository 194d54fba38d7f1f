"""Snapshot of pool statistics."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PoolStats:
    """Counters describing a pool at one moment.

    The totals count events since the pool was created; the ``*_now`` fields
    describe its current state, where ``count_now == busy_now + idle_now``.
    """

    created_total: int = 0
    waited_total: int = 0
    destroyed_total: int = 0
    count_now: int = 0
    busy_now: int = 0
    idle_now: int = 0
    waiting_now: int = 0