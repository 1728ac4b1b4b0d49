"""Persistence of the daily snapshot history."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from erm_analytics.config import get_settings
from erm_analytics.domain.entities import Snapshot

from .key_value_repository import KeyValueStore

logger = logging.getLogger(__name__)

SNAPSHOTS_KEY = "platformAnalytics"


class SnapshotRepository:
    """Read and write the date-keyed snapshot mapping.

    Nothing is cached between calls: every ``load`` goes to the store.
    """

    def __init__(self, store: KeyValueStore, *, prefix: str | None = None) -> None:
        self.store = store
        self.prefix = get_settings().storage_prefix if prefix is None else prefix

    @property
    def key(self) -> str:
        return f"{self.prefix}{SNAPSHOTS_KEY}"

    def load(self) -> dict[str, Snapshot]:
        """Return the history ordered by ascending date."""

        raw = self.store.get(self.key)
        if raw is None:
            return {}
        if not isinstance(raw, Mapping):
            logger.warning("Snapshot history under '%s' is not an object; ignoring it", self.key)
            return {}

        history: dict[str, Snapshot] = {}
        for date_key in sorted(raw):
            payload = raw[date_key]
            if not isinstance(payload, Mapping):
                logger.debug("Skipping malformed snapshot for %s", date_key)
                continue
            history[date_key] = Snapshot.from_payload(date_key, payload)
        return history

    def save(self, history: Mapping[str, Snapshot]) -> None:
        payload = {date_key: history[date_key].to_payload() for date_key in sorted(history)}
        self.store.set(self.key, payload)


__all__ = ["SNAPSHOTS_KEY", "SnapshotRepository"]
