"""Infra DB: pool + typed errors + record table schema."""

from .errors import (
    DatabasePoolError,
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
)
from .pool import close_pool, ensure_pool, get_pool, init_pool, reset_pool
from .schema import SCHEMA_STEPS, SchemaManager, apply_schema, get_schema_manager

__all__ = [
    "init_pool",
    "ensure_pool",
    "get_pool",
    "close_pool",
    "reset_pool",
    "DatabasePoolError",
    "PoolAlreadyInitializedError",
    "PoolNotInitializedError",
    "SCHEMA_STEPS",
    "SchemaManager",
    "apply_schema",
    "get_schema_manager",
]
