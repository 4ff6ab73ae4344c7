"""Infrastructure record stores"""

from .json_record_store import JsonRecordStore
from .postgres_record_store import PostgresRecordStore

__all__ = [
    "JsonRecordStore",
    "PostgresRecordStore",
]
