"""Thread-safe generic object pool with optional idle-timeout cleanup."""

__version__ = "0.1.0"
__all__ = ["config", "ring", "stats", "pool"]