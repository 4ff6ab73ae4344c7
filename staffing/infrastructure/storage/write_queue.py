"""
Name: In-Process Write Serializer

Responsibilities:
  - Run mutations of the same key (data file) strictly one at a time
  - Preserve submission order (FIFO) per key
  - Keep unrelated keys independent

Collaborators:
  - infrastructure.storage.json_table: submits every file mutation here

Constraints:
  - A failed operation releases its slot like a successful one, so later
    operations are never stalled by an earlier error
  - Not reentrant: an operation must not submit to its own key

Notes:
  - One KeyQueue (ticket queue) per key; idle queues are dropped
  - Process-wide instance via get_write_serializer()
"""

from __future__ import annotations

import threading
from functools import lru_cache
from typing import Callable, Dict, TypeVar

R = TypeVar("R")


class KeyQueue:
    """
    R: FIFO ticket queue for a single key.

    Each caller draws a ticket on submission and runs when its ticket
    is served. Serving advances in a finally block, whatever the outcome.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._next_ticket = 0
        self._now_serving = 0

    def run(self, action: Callable[[], R]) -> R:
        with self._cond:
            ticket = self._next_ticket
            self._next_ticket += 1
            while ticket != self._now_serving:
                self._cond.wait()
        try:
            return action()
        finally:
            with self._cond:
                self._now_serving += 1
                self._cond.notify_all()


class WriteSerializer:
    """R: Registry of per-key FIFO queues."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._queues: Dict[str, KeyQueue] = {}
        self._users: Dict[str, int] = {}

    def submit(self, key: str, action: Callable[[], R]) -> R:
        """
        R: Run action after every previously submitted action for key.

        Returns:
            The action's result (exceptions propagate to this caller only)
        """
        with self._lock:
            queue = self._queues.get(key)
            if queue is None:
                queue = self._queues[key] = KeyQueue()
            self._users[key] = self._users.get(key, 0) + 1

        try:
            return queue.run(action)
        finally:
            with self._lock:
                self._users[key] -= 1
                if self._users[key] == 0:
                    del self._users[key]
                    del self._queues[key]

    def active_keys(self) -> list[str]:
        with self._lock:
            return sorted(self._queues)


@lru_cache
def get_write_serializer() -> WriteSerializer:
    """R: Process-wide serializer shared by every JSON table."""
    return WriteSerializer()
