"""Repository implementations for infrastructure layer."""

from .activity_log_repository import ActivityLogRepository
from .key_value_repository import InMemoryKeyValueStore, KeyValueStore, SqlKeyValueStore
from .snapshot_repository import SnapshotRepository

__all__ = [
    "ActivityLogRepository",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "SnapshotRepository",
    "SqlKeyValueStore",
]
