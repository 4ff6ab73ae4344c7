"""
Name: Cross-Process Lock File

Responsibilities:
  - Provide mutual exclusion between processes writing the same data file
  - Bounded polling acquisition with a fatal timeout

Collaborators:
  - infrastructure.storage.json_table: wraps every mutation in a FileLock
  - crosscutting.exceptions.LockTimeoutError

Constraints:
  - Advisory only: cooperating processes must use the same lock path
  - Acquisition = exclusive create of "<data file>.lock"
  - Release tolerates the lock file already being gone

Notes:
  - Default policy: 60 attempts x 25ms (~1.5s)
  - A crashed holder leaves a stale lock file behind; it must be removed
    manually (no stale-lock detection)
"""

from __future__ import annotations

import os
import time
from pathlib import Path
from typing import Callable

from ...crosscutting.exceptions import LockTimeoutError
from ...crosscutting.logger import logger

DEFAULT_LOCK_RETRIES = 60
DEFAULT_LOCK_RETRY_DELAY_SECONDS = 0.025


class FileLock:
    """R: Lock file next to a data file, acquired by exclusive create."""

    def __init__(
        self,
        lock_path: Path,
        *,
        retries: int = DEFAULT_LOCK_RETRIES,
        retry_delay: float = DEFAULT_LOCK_RETRY_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.lock_path = Path(lock_path)
        self.retries = retries
        self.retry_delay = retry_delay
        self._sleep = sleep

    def acquire(self) -> None:
        """
        R: Poll until the lock file can be created exclusively.

        Raises:
            LockTimeoutError: All attempts found the lock held
            OSError: Any failure other than "already exists"
        """
        for _ in range(self.retries):
            try:
                fd = os.open(
                    self.lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644
                )
            except FileExistsError:
                self._sleep(self.retry_delay)
                continue
            os.close(fd)
            return

        logger.warning(
            "Lock acquisition timed out",
            extra={"lock_path": str(self.lock_path), "attempts": self.retries},
        )
        raise LockTimeoutError(f"Lock timeout for {self.lock_path}")

    def release(self) -> None:
        try:
            self.lock_path.unlink()
        except FileNotFoundError:
            pass

    def __enter__(self) -> "FileLock":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
