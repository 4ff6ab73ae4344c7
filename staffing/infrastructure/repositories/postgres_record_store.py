"""
Name: PostgreSQL Record Store

Responsibilities:
  - Implement RecordStore over the shared app_records (resource, id, payload jsonb) table
  - Seed an empty resource from its JSON file once per store instance
  - Translate field lookups into indexed equality / IN / range predicates

Collaborators:
  - psycopg / psycopg_pool: connections and Jsonb adaptation
  - infrastructure.db.schema.SchemaManager: table ensured before first query
  - infrastructure.storage.JsonTableFile: seed source
  - records: identity stamping and field validation

Constraints:
  - Field names are interpolated into SQL (so expression indexes apply) and
    are therefore validated first; UnsafeFieldNameError is raised before any
    connection is taken
  - update() is one atomic statement: (payload || set) - removed_keys

Notes:
  - jsonb ->> yields text, so lookups compare text values
  - Database failures are logged and re-raised as DatabaseError
"""

from __future__ import annotations

import threading
from typing import Any, Iterable, List, Mapping, Optional

from psycopg.types.json import Jsonb
from psycopg_pool import ConnectionPool

from ...crosscutting.exceptions import DatabaseError
from ...crosscutting.logger import logger
from ...domain.repositories import Payload
from ..db.schema import SchemaManager, get_schema_manager
from ..storage.json_table import JsonTableFile
from .records import as_text, new_record, now_iso, split_patch, validate_field_name


class PostgresRecordStore:
    """R: PostgreSQL implementation of RecordStore."""

    def __init__(
        self,
        resource: str,
        *,
        pool: Optional[ConnectionPool] = None,
        seed_table: Optional[JsonTableFile] = None,
        schema: Optional[SchemaManager] = None,
    ):
        self.resource = resource
        self._pool = pool
        self._seed_table = seed_table
        self._schema = schema or get_schema_manager()
        self._seed_lock = threading.Lock()
        self._seeded = False

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ..db.pool import get_pool

        return get_pool()

    def _ready_pool(self) -> ConnectionPool:
        pool = self._get_pool()
        self._schema.ensure(pool)
        self._seed_if_empty(pool)
        return pool

    def _seed_if_empty(self, pool: ConnectionPool) -> None:
        if self._seeded or self._seed_table is None:
            return
        with self._seed_lock:
            if self._seeded:
                return
            with pool.connection() as conn:
                row = conn.execute(
                    "SELECT count(*) FROM app_records WHERE resource = %s",
                    (self.resource,),
                ).fetchone()
                if row and int(row[0]) > 0:
                    self._seeded = True
                    return

                seed_rows = self._seed_table.read()
                for record in seed_rows:
                    conn.execute(
                        """
                        INSERT INTO app_records (resource, id, payload)
                        VALUES (%s, %s, %s)
                        ON CONFLICT (resource, id) DO NOTHING
                        """,
                        (self.resource, str(record["id"]), Jsonb(record)),
                    )
            if seed_rows:
                logger.info(
                    "Seeded resource from JSON file",
                    extra={"resource": self.resource, "count": len(seed_rows)},
                )
            self._seeded = True

    def _fetch_payloads(self, query: str, params: tuple, action: str) -> List[Payload]:
        pool = self._ready_pool()
        try:
            with pool.connection() as conn:
                rows = conn.execute(query, params).fetchall()
        except Exception as exc:
            logger.error(
                f"PostgresRecordStore: {action} failed",
                extra={"resource": self.resource, "error": str(exc)},
            )
            raise DatabaseError(f"{action} failed for {self.resource}: {exc}", original_error=exc)
        return [row[0] for row in rows]

    def load_all(self) -> List[Payload]:
        return self._fetch_payloads(
            "SELECT payload FROM app_records WHERE resource = %s",
            (self.resource,),
            "Load all",
        )

    def find_by_id(self, record_id: str) -> Optional[Payload]:
        rows = self._fetch_payloads(
            "SELECT payload FROM app_records WHERE resource = %s AND id = %s LIMIT 1",
            (self.resource, record_id),
            "Find by id",
        )
        return rows[0] if rows else None

    def create(self, data: Mapping[str, Any]) -> Payload:
        row = new_record(data)
        pool = self._ready_pool()
        try:
            with pool.connection() as conn:
                conn.execute(
                    """
                    INSERT INTO app_records (resource, id, payload)
                    VALUES (%s, %s, %s)
                    """,
                    (self.resource, row["id"], Jsonb(row)),
                )
        except Exception as exc:
            logger.error(
                "PostgresRecordStore: Create failed",
                extra={"resource": self.resource, "error": str(exc)},
            )
            raise DatabaseError(f"Create failed for {self.resource}: {exc}", original_error=exc)
        return row

    def update(self, record_id: str, patch: Mapping[str, Any]) -> Optional[Payload]:
        to_set, to_remove = split_patch(patch)
        to_set["updatedAt"] = now_iso()
        pool = self._ready_pool()
        try:
            with pool.connection() as conn:
                row = conn.execute(
                    """
                    UPDATE app_records
                    SET payload = (payload || %s::jsonb) - %s::text[]
                    WHERE resource = %s AND id = %s
                    RETURNING payload
                    """,
                    (Jsonb(to_set), to_remove, self.resource, record_id),
                ).fetchone()
        except Exception as exc:
            logger.error(
                "PostgresRecordStore: Update failed",
                extra={"resource": self.resource, "id": record_id, "error": str(exc)},
            )
            raise DatabaseError(f"Update failed for {self.resource}: {exc}", original_error=exc)
        return row[0] if row else None

    def delete(self, record_id: str) -> bool:
        pool = self._ready_pool()
        try:
            with pool.connection() as conn:
                cursor = conn.execute(
                    "DELETE FROM app_records WHERE resource = %s AND id = %s",
                    (self.resource, record_id),
                )
                deleted = cursor.rowcount
        except Exception as exc:
            logger.error(
                "PostgresRecordStore: Delete failed",
                extra={"resource": self.resource, "id": record_id, "error": str(exc)},
            )
            raise DatabaseError(f"Delete failed for {self.resource}: {exc}", original_error=exc)
        return (deleted or 0) > 0

    def find_by_field(self, field: str, value: Any) -> List[Payload]:
        validate_field_name(field)
        text = as_text(value)
        if text is None:
            return []
        return self._fetch_payloads(
            f"SELECT payload FROM app_records "
            f"WHERE resource = %s AND payload ->> '{field}' = %s",
            (self.resource, text),
            "Find by field",
        )

    def find_by_field_in(self, field: str, values: Iterable[Any]) -> List[Payload]:
        validate_field_name(field)
        texts = sorted({text for text in (as_text(v) for v in values) if text is not None})
        if not texts:
            return []
        return self._fetch_payloads(
            f"SELECT payload FROM app_records "
            f"WHERE resource = %s AND payload ->> '{field}' = ANY(%s)",
            (self.resource, texts),
            "Find by field list",
        )

    def find_by_field_range(self, field: str, start: Any, end: Any) -> List[Payload]:
        validate_field_name(field)
        return self._fetch_payloads(
            f"SELECT payload FROM app_records "
            f"WHERE resource = %s "
            f"AND payload ->> '{field}' >= %s AND payload ->> '{field}' <= %s",
            (self.resource, as_text(start), as_text(end)),
            "Find by field range",
        )

    def find_by_ids(self, record_ids: Iterable[str]) -> List[Payload]:
        ids = sorted({str(record_id) for record_id in record_ids})
        if not ids:
            return []
        return self._fetch_payloads(
            "SELECT payload FROM app_records WHERE resource = %s AND id = ANY(%s)",
            (self.resource, ids),
            "Find by ids",
        )
