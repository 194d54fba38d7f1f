import pytest

from objectpool.config import ConfigError, PoolConfig


def _new():
    return 0


def test_negative_min_rejected():
    cfg = PoolConfig(min_size=-1, max_size=5, idle_timeout=0.5, new_func=_new)
    with pytest.raises(ConfigError, match="min must be greater than or equal to zero"):
        cfg.check()


def test_min_greater_than_max_rejected():
    cfg = PoolConfig(min_size=6, max_size=5, idle_timeout=0.5, new_func=_new)
    with pytest.raises(ConfigError, match="min must be less than or equal to max"):
        cfg.check()


def test_negative_idle_timeout_rejected():
    cfg = PoolConfig(min_size=1, max_size=5, idle_timeout=-0.1, new_func=_new)
    with pytest.raises(
        ConfigError, match="idle timeout must be greater than or equal to zero"
    ):
        cfg.check()


def test_zero_timeout_requires_fixed_size():
    cfg = PoolConfig(min_size=2, max_size=5, idle_timeout=0, new_func=_new)
    with pytest.raises(
        ConfigError, match="when idle timeout equals zero min should equal max"
    ):
        cfg.check()


def test_new_func_required():
    cfg = PoolConfig(min_size=2, max_size=5, idle_timeout=0.5)
    with pytest.raises(ConfigError, match="newFunc is required"):
        cfg.check()


def test_first_failing_rule_is_reported():
    cfg = PoolConfig(min_size=-1, max_size=-2, idle_timeout=-1)
    with pytest.raises(ConfigError, match="min must be greater than or equal to zero"):
        cfg.check()


def test_config_error_is_value_error():
    cfg = PoolConfig(min_size=3, max_size=1, new_func=_new)
    with pytest.raises(ValueError):
        cfg.check()


@pytest.mark.parametrize(
    ("min_size", "max_size", "idle_timeout"),
    [(5, 5, 0.5), (3, 3, 0), (0, 10, 0.5)],
)
def test_valid_configurations_pass(min_size, max_size, idle_timeout):
    cfg = PoolConfig(
        min_size=min_size,
        max_size=max_size,
        idle_timeout=idle_timeout,
        new_func=_new,
    )
    assert cfg.check() is None
    assert (cfg.min_size, cfg.max_size) == (min_size, max_size)