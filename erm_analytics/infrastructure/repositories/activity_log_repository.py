"""Read access to the append-only activity log."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from erm_analytics.config import get_settings
from erm_analytics.domain.entities import ActivityRecord

from .key_value_repository import KeyValueStore

logger = logging.getLogger(__name__)

ACTIVITIES_KEY = "activities"


class ActivityLogRepository:
    """Load activity records stored as a JSON array.

    The log is never written from here; producers append to it elsewhere.
    """

    def __init__(self, store: KeyValueStore, *, prefix: str | None = None) -> None:
        self.store = store
        self.prefix = get_settings().storage_prefix if prefix is None else prefix

    @property
    def key(self) -> str:
        return f"{self.prefix}{ACTIVITIES_KEY}"

    def list_payloads(self) -> list[Mapping[str, Any]]:
        raw = self.store.get(self.key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("Activity log under '%s' is not a list; ignoring it", self.key)
            return []
        payloads = [item for item in raw if isinstance(item, Mapping)]
        skipped = len(raw) - len(payloads)
        if skipped:
            logger.debug("Skipped %s non-object entries in the activity log", skipped)
        return payloads

    def list_records(self) -> list[ActivityRecord]:
        """Return every record in log order."""

        return [ActivityRecord.from_payload(payload) for payload in self.list_payloads()]


__all__ = ["ACTIVITIES_KEY", "ActivityLogRepository"]
