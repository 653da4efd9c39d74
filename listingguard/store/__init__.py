"""Record store collaborators for the listing review workflow."""

from .record_store import RecordStore
from .postgres_client import PostgresRecordStore

__all__ = [
    "RecordStore",
    "PostgresRecordStore",
]
