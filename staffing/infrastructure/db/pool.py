"""
Name: PostgreSQL Connection Pool

Responsibilities:
  - Manage connection pool lifecycle (init, get, close)
  - Configure connections with statement_timeout
  - Provide singleton pool instance

Collaborators:
  - psycopg_pool: Connection pooling
  - config: Pool settings

Constraints:
  - Singleton pattern (one pool per process)
  - Must init before use, close on shutdown

Notes:
  - ensure_pool() is the lazy, init-once entry point used by the container
  - reset_pool() exists for tests
  - Thread-safe
"""

from typing import Optional
import threading

from psycopg_pool import ConnectionPool

from ...crosscutting.logger import logger
from .errors import PoolAlreadyInitializedError, PoolNotInitializedError


# R: Singleton pool instance
_pool: Optional[ConnectionPool] = None
_pool_lock = threading.Lock()


def _configure_connection(conn) -> None:
    """
    R: Configure a connection from the pool.

    Sets statement_timeout when configured.
    """
    from ...crosscutting.config import get_settings

    timeout_ms = int(get_settings().db_statement_timeout_ms)
    if timeout_ms > 0:
        conn.execute(f"SET statement_timeout = {timeout_ms}")
        conn.commit()


def _open_pool(database_url: str, min_size: int, max_size: int) -> ConnectionPool:
    logger.info(
        "Initializing connection pool",
        extra={"min_size": min_size, "max_size": max_size},
    )
    pool = ConnectionPool(
        conninfo=database_url,
        min_size=min_size,
        max_size=max_size,
        configure=_configure_connection,
        open=True,
    )
    logger.info(
        "Connection pool initialized",
        extra={"min_size": min_size, "max_size": max_size},
    )
    return pool


def init_pool(database_url: str, min_size: int, max_size: int) -> ConnectionPool:
    """
    R: Initialize the connection pool.

    Raises:
        PoolAlreadyInitializedError: If pool already initialized
    """
    global _pool

    with _pool_lock:
        if _pool is not None:
            raise PoolAlreadyInitializedError("Connection pool already initialized")
        _pool = _open_pool(database_url, min_size, max_size)
        return _pool


def ensure_pool(database_url: str, min_size: int, max_size: int) -> ConnectionPool:
    """R: Return the pool, creating it on first use (init-once)."""
    global _pool

    with _pool_lock:
        if _pool is None:
            _pool = _open_pool(database_url, min_size, max_size)
        return _pool


def get_pool() -> ConnectionPool:
    """
    R: Get the connection pool singleton.

    Raises:
        PoolNotInitializedError: If pool not initialized
    """
    if _pool is None:
        raise PoolNotInitializedError(
            "Connection pool not initialized. Call init_pool() first."
        )
    return _pool


def close_pool() -> None:
    """
    R: Close the connection pool.

    Safe to call even if pool not initialized.
    """
    global _pool

    with _pool_lock:
        if _pool is not None:
            logger.info("Closing connection pool")
            try:
                _pool.close()
            finally:
                _pool = None
            logger.info("Connection pool closed")


def reset_pool() -> None:
    """
    R: Reset pool for testing.

    Closes existing pool if any, allowing re-initialization.
    """
    global _pool

    with _pool_lock:
        if _pool is not None:
            _pool.close()
        _pool = None
