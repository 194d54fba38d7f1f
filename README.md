# objectpool

A thread-safe, generic object pool for objects that are expensive to create,
such as database connections or network clients. The pool handles each
object's lifecycle from creation to destruction. It can also destroy objects
that have sat idle for too long.

It has no dependencies outside the standard library.

## Installation

```
pip install objectpool
```

## Usage

```python
from objectpool.config import PoolConfig
from objectpool.pool import Pool

config = PoolConfig(
    min_size=2,
    max_size=10,
    idle_timeout=0.5,                        # seconds; 0 means objects never idle out
    new_func=make_connection,                # required
    check_func=lambda conn: conn.ping(),     # optional; raise to reject the object
    destroy_func=lambda conn: conn.close(),  # optional
)

with Pool(config) as pool:
    with pool.borrow(timeout=1.0) as conn:
        conn.execute("SELECT 1")

    conn = pool.get()  # with no timeout, waits until an object is free
    try:
        ...
    finally:
        pool.put(conn)

    print(pool.stats())
```

`PoolConfig` takes keyword arguments only. Leaving the `with` block calls
`Pool.stop()`.

## Behaviour

### Configuration

`PoolConfig.check()` raises `objectpool.config.ConfigError`, a subclass of
`ValueError`, when:

- `min_size` is negative;
- `min_size` is greater than `max_size`;
- `idle_timeout` is negative;
- `idle_timeout` is zero and `min_size` differs from `max_size`;
- `new_func` is missing.

`Pool(config)` runs this check first.

### Creating the pool

The pool creates `min_size` objects straight away. If `new_func` raises for
one of them, the pool destroys the objects it has already made. It then
raises `NewObjectError`, chained to the original exception.

### `Pool.get(timeout=None)`

`get()` tries each of these in turn:

1. If the pool is stopping or stopped, it raises `PoolStoppedError`.
2. If there are idle objects, it returns the most recently returned one
   (LIFO).
3. If the pool has room, it calls `new_func` and returns the new object.
   If `new_func` raises, `get()` raises `NewObjectError`.
4. Otherwise it waits for an object to be returned. Waiting callers are
   served in the order they arrived. `timeout` is in seconds and `None`
   waits forever. When the wait runs out, `get()` raises `TimeoutError`.
   If the pool is stopped during the wait, it raises `PoolStoppedError`.

`Pool.borrow(timeout=None)` is a context manager. It calls `get()` on
entry and `put()` on exit.

### `Pool.put(obj)`

If `check_func` is set, `put()` calls it first. The object fails the check
only when `check_func` raises; its return value is ignored. An object that
fails is destroyed, and the longest-waiting caller of `get()` is woken to try
again, since there may be room for a new object now.

An object returned while the pool is stopping or stopped is destroyed.
Otherwise the object goes straight to the longest-waiting caller. If no one
is waiting, it goes back into the idle set.

### Idle cleanup

A background daemon thread runs only when `max_size > min_size` and
`idle_timeout > 0`. Every `idle_timeout / 2` seconds it destroys idle objects
that have been idle for at least `idle_timeout`. It starts with the least
recently used and stops when `min_size` objects remain.

### `Pool.stop()`

`stop()` wakes every waiting caller of `get()` with `PoolStoppedError` and
destroys all idle objects. It then blocks until every borrowed object has
been returned with `put()` and destroyed. Calling it again does nothing.

### `Pool.stats()`

`stats()` returns a frozen `objectpool.stats.PoolStats` with these fields:

- totals since creation: `created_total`, `waited_total`,
  `destroyed_total`;
- the current state: `count_now`, `busy_now`, `idle_now`, `waiting_now`.

`count_now` always equals `busy_now + idle_now`.

### Errors

`NewObjectError` and `PoolStoppedError` both derive from
`objectpool.pool.PoolError`.

### Idle store

`objectpool.ring.IdleRing` is the bounded store the pool keeps its idle
objects in. It records when each object was last used and supports:

- `push_newest()`, which raises `OverflowError` when the store is full;
- `pop_newest()` and `pop_oldest()`, which raise `IndexError` when it is
  empty;
- `oldest_idle_too_long()`.

## Limits

The pool is built on threads. It has no asyncio interface, and it does not
itself check objects when it hands them out; `check_func` runs only on
`put()`.

## Running the tests

```
pip install -e ".[test]"
pytest
```