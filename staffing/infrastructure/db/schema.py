"""
Name: Record Table Schema

Responsibilities:
  - Define the shared app_records table and its supporting indexes
  - Ensure the schema at most once per process (memoized, thread-safe)

Collaborators:
  - infrastructure.repositories.postgres_record_store: calls ensure() first
  - scripts/init_db_schema.py: applies the same steps from the command line

Constraints:
  - Idempotent DDL only (CREATE ... IF NOT EXISTS); no migrations

Notes:
  - Expression indexes use literal JSON keys; queries must spell the key the
    same way (payload ->> 'date') for the planner to use them
  - SchemaManager is injectable; get_schema_manager() is the process default
"""

from __future__ import annotations

import threading
import time
from functools import lru_cache
from typing import List, Tuple

from ...crosscutting.logger import logger

RECORDS_TABLE = "app_records"

SCHEMA_STEPS: List[Tuple[str, str]] = [
    (
        "create_table",
        """
        CREATE TABLE IF NOT EXISTS app_records (
            resource text NOT NULL,
            id text NOT NULL,
            payload jsonb NOT NULL,
            PRIMARY KEY (resource, id)
        )
        """,
    ),
    (
        "create_resource_index",
        """
        CREATE INDEX IF NOT EXISTS app_records_resource_idx
        ON app_records (resource)
        """,
    ),
    (
        "create_shifts_date_index",
        """
        CREATE INDEX IF NOT EXISTS app_records_shifts_date_idx
        ON app_records ((payload ->> 'date'))
        WHERE resource = 'shifts'
        """,
    ),
    (
        "create_assignments_shift_index",
        """
        CREATE INDEX IF NOT EXISTS app_records_assignments_shift_idx
        ON app_records ((payload ->> 'shiftId'))
        WHERE resource = 'assignments'
        """,
    ),
    (
        "create_assignments_user_index",
        """
        CREATE INDEX IF NOT EXISTS app_records_assignments_user_idx
        ON app_records ((payload ->> 'userId'))
        WHERE resource = 'assignments'
        """,
    ),
    (
        "create_assignments_status_index",
        """
        CREATE INDEX IF NOT EXISTS app_records_assignments_status_idx
        ON app_records ((payload ->> 'status'))
        WHERE resource = 'assignments'
        """,
    ),
]


def apply_schema(conn) -> None:
    """R: Run every schema step on an open connection, logging timings."""
    started = time.perf_counter()
    for name, sql in SCHEMA_STEPS:
        step_started = time.perf_counter()
        conn.execute(sql)
        logger.info(
            "Schema step applied",
            extra={
                "step": name,
                "ms": round((time.perf_counter() - step_started) * 1000, 1),
            },
        )
    conn.commit()
    logger.info(
        "Schema ensured",
        extra={"total_ms": round((time.perf_counter() - started) * 1000, 1)},
    )


class SchemaManager:
    """
    R: Init-once guard for the record table.

    The first successful ensure() marks the schema as ready; a failed
    attempt leaves it unmarked so the next call retries.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ensured = False

    @property
    def is_ensured(self) -> bool:
        return self._ensured

    def ensure(self, pool) -> None:
        if self._ensured:
            return
        with self._lock:
            if self._ensured:
                return
            with pool.connection() as conn:
                apply_schema(conn)
            self._ensured = True

    def reset(self) -> None:
        with self._lock:
            self._ensured = False


@lru_cache
def get_schema_manager() -> SchemaManager:
    return SchemaManager()
