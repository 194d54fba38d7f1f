from unittest.mock import patch

import pytest

from objectpool.ring import IdleRing


def test_pop_newest_is_lifo():
    ring = IdleRing(3, 0.5)
    for item in ("a", "b", "c"):
        ring.push_newest(item)
    assert [ring.pop_newest() for _ in range(3)] == ["c", "b", "a"]
    assert len(ring) == 0


def test_pop_oldest_is_fifo():
    ring = IdleRing(3, 0.5)
    for item in ("a", "b", "c"):
        ring.push_newest(item)
    assert [ring.pop_oldest() for _ in range(3)] == ["a", "b", "c"]


def test_len_tracks_pushes_and_pops():
    ring = IdleRing(4, 0)
    ring.push_newest(1)
    ring.push_newest(2)
    assert len(ring) == 2
    ring.pop_oldest()
    assert len(ring) == 1


def test_mixed_pops_after_wraparound():
    ring = IdleRing(3, 0)
    ring.push_newest("a")
    ring.push_newest("b")
    ring.push_newest("c")
    assert ring.pop_oldest() == "a"
    ring.push_newest("d")
    assert ring.pop_newest() == "d"
    assert ring.pop_oldest() == "b"
    assert ring.pop_newest() == "c"


def test_push_when_full_raises():
    ring = IdleRing(2, 0)
    ring.push_newest("a")
    ring.push_newest("b")
    with pytest.raises(OverflowError, match="ring is full"):
        ring.push_newest("c")
    assert len(ring) == ring.capacity


def test_zero_capacity_rejects_push():
    ring = IdleRing(0, 0)
    with pytest.raises(OverflowError, match="ring is full"):
        ring.push_newest("a")


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        IdleRing(-1, 0)


@pytest.mark.parametrize(
    "operation",
    [IdleRing.pop_oldest, IdleRing.pop_newest, IdleRing.oldest_idle_too_long],
)
def test_empty_ring_raises(operation):
    ring = IdleRing(2, 0.5)
    with pytest.raises(IndexError) as excinfo:
        operation(ring)
    assert "ring is empty" in str(excinfo.value)
    assert len(ring) == 0
    ring.push_newest("a")
    assert ring.pop_newest() == "a"


def test_oldest_idle_too_long_uses_oldest_entry():
    timeout = 0.5
    ring = IdleRing(3, timeout)
    with patch("objectpool.ring.monotonic", return_value=100.0):
        ring.push_newest("old")
    with patch("objectpool.ring.monotonic", return_value=100.0 + timeout / 2):
        ring.push_newest("new")
        assert ring.oldest_idle_too_long() is False
    with patch("objectpool.ring.monotonic", return_value=100.0 + timeout):
        assert ring.oldest_idle_too_long() is True
        ring.pop_oldest()
        assert ring.oldest_idle_too_long() is False


def test_zero_timeout_never_idles_out():
    ring = IdleRing(2, 0)
    with patch("objectpool.ring.monotonic", return_value=100.0):
        ring.push_newest("a")
    with patch("objectpool.ring.monotonic", return_value=1_000_000.0):
        assert ring.oldest_idle_too_long() is False