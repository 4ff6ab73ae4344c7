"""
Name: Typed Pool Errors

Responsibilities:
  - Give pool misuse a clear meaning ("not initialized", "already initialized")
  - Subclass RuntimeError so generic handlers keep working
"""


class DatabasePoolError(RuntimeError):
    """Base class for connection pool errors."""


class PoolAlreadyInitializedError(DatabasePoolError):
    """init_pool() was called twice."""


class PoolNotInitializedError(DatabasePoolError):
    """The pool was used before init_pool()."""
