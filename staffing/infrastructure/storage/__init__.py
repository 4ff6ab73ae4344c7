"""Infra storage: JSON table files, lock file, per-file write queue."""

from .file_lock import FileLock
from .json_table import JsonTableFile, dump_rows
from .write_queue import KeyQueue, WriteSerializer, get_write_serializer

__all__ = [
    "FileLock",
    "JsonTableFile",
    "dump_rows",
    "KeyQueue",
    "WriteSerializer",
    "get_write_serializer",
]
