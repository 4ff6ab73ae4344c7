"""
Name: JSON Table File

Responsibilities:
  - Persist one resource as a pretty-printed JSON array in a single file
  - Read without locking; treat a missing file as an empty table
  - Mutate under the write serializer + lock file with atomic replace

Collaborators:
  - infrastructure.storage.write_queue: in-process FIFO per file
  - infrastructure.storage.file_lock: cross-process exclusion
  - infrastructure.repositories.json_record_store: CRUD on top of mutate()
  - infrastructure.repositories.postgres_record_store: seed source

Constraints:
  - A file that is not valid JSON, or not a top-level array, raises
    CorruptDataError (no repair) on both read and mutate paths
  - Temp file names are unique per write: "<file>.<pid>.<hex>.tmp"

Notes:
  - Write path: lock -> read current -> mutator -> temp write -> os.replace
    -> best-effort temp cleanup -> unlock (cleanup in finally)
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar
from uuid import uuid4

from ...crosscutting.exceptions import CorruptDataError
from ...crosscutting.logger import logger
from .file_lock import (
    DEFAULT_LOCK_RETRIES,
    DEFAULT_LOCK_RETRY_DELAY_SECONDS,
    FileLock,
)
from .write_queue import WriteSerializer, get_write_serializer

R = TypeVar("R")
Rows = List[Dict[str, Any]]
Mutator = Callable[[Rows], Tuple[Rows, R]]


def dump_rows(rows: Rows) -> str:
    """R: Canonical on-disk form (2-space indent, trailing newline)."""
    return json.dumps(rows, indent=2, ensure_ascii=False) + "\n"


class JsonTableFile:
    """R: One resource file (e.g. data/shifts.json)."""

    def __init__(
        self,
        path: Path,
        *,
        serializer: Optional[WriteSerializer] = None,
        lock_retries: int = DEFAULT_LOCK_RETRIES,
        lock_retry_delay: float = DEFAULT_LOCK_RETRY_DELAY_SECONDS,
    ):
        self.path = Path(path)
        self._serializer = serializer or get_write_serializer()
        self._lock_retries = lock_retries
        self._lock_retry_delay = lock_retry_delay

    @property
    def lock_path(self) -> Path:
        return self.path.with_name(f"{self.path.name}.lock")

    def _ensure_dir(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _parse(self, content: str) -> Rows:
        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as exc:
            logger.error(
                "Resource file is not valid JSON",
                extra={"path": str(self.path), "error": str(exc)},
            )
            raise CorruptDataError(
                f"Invalid JSON in {self.path.name}: {exc}", original_error=exc
            ) from exc
        if not isinstance(parsed, list):
            logger.error("Resource file is not an array", extra={"path": str(self.path)})
            raise CorruptDataError(f"Expected array in {self.path.name}")
        return parsed

    def _read_current(self) -> Optional[Rows]:
        """R: Parsed rows, or None when the file does not exist."""
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        return self._parse(content)

    def read(self) -> Rows:
        """
        R: Current rows without taking the lock.

        A missing file is materialized as an empty array.
        """
        self._ensure_dir()
        rows = self._read_current()
        if rows is None:
            # Write back whatever is there by now; another writer may have won.
            return self.mutate(lambda current: (current, list(current)))
        return rows

    def write(self, rows: Rows) -> None:
        """R: Replace the whole table."""
        self.mutate(lambda _current: (list(rows), None))

    def mutate(self, mutator: Mutator) -> R:
        """
        R: Serialized read-compute-write of the whole table.

        Args:
            mutator: Receives current rows, returns (new_rows, result)

        Returns:
            The mutator's result
        """
        self._ensure_dir()
        return self._serializer.submit(
            str(self.path.resolve()), lambda: self._locked_mutate(mutator)
        )

    def _locked_mutate(self, mutator: Mutator) -> R:
        lock = FileLock(
            self.lock_path,
            retries=self._lock_retries,
            retry_delay=self._lock_retry_delay,
        )
        lock.acquire()
        tmp_path = self.path.with_name(
            f"{self.path.name}.{os.getpid()}.{uuid4().hex}.tmp"
        )
        try:
            current = self._read_current() or []
            rows, result = mutator(current)
            tmp_path.write_text(dump_rows(rows), encoding="utf-8")
            os.replace(tmp_path, self.path)
            return result
        finally:
            try:
                tmp_path.unlink()
            except FileNotFoundError:
                pass
            lock.release()
