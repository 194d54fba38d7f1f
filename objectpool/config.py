"""Configuration for an object pool."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class ConfigError(ValueError):
    """Raised when a pool configuration is invalid."""


@dataclass(kw_only=True)
class PoolConfig(Generic[T]):
    """Settings for a new pool.

    ``min_size`` objects are created up front and kept alive; up to
    ``max_size`` objects may exist at once. Idle objects beyond ``min_size``
    are destroyed once they have been idle for ``idle_timeout`` seconds;
    an ``idle_timeout`` of zero means objects never idle out.

    ``new_func`` creates an object and is required. ``check_func`` is called
    on an object as it is returned to the pool; if it raises, the object is
    destroyed instead of being kept. ``destroy_func`` is called on an object
    that is no longer needed.
    """

    min_size: int = 0
    max_size: int = 0
    idle_timeout: float = 0.0
    new_func: Optional[Callable[[], T]] = None
    check_func: Optional[Callable[[T], object]] = None
    destroy_func: Optional[Callable[[T], object]] = None

    def check(self) -> None:
        """Raise ConfigError if the configuration is invalid."""
        if self.min_size < 0:
            raise ConfigError("min must be greater than or equal to zero")
        if self.min_size > self.max_size:
            raise ConfigError("min must be less than or equal to max")
        if self.idle_timeout < 0:
            raise ConfigError(
                "idle timeout must be greater than or equal to zero"
            )
        # Without an idle timeout, objects above min would live until the
        # pool is stopped, which is rarely what was intended.
        if self.idle_timeout == 0 and self.min_size != self.max_size:
            raise ConfigError(
                "when idle timeout equals zero min should equal max"
            )
        if self.new_func is None:
            raise ConfigError("newFunc is required")