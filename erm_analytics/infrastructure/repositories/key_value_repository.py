"""Key-value stores holding JSON documents under string keys."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from erm_analytics.infrastructure.models import KeyValueEntryModel

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Minimal persistence contract used by the analytics engine."""

    def get(self, key: str) -> Any | None:  # pragma: no cover - protocol definition
        ...

    def set(self, key: str, value: Any) -> None:  # pragma: no cover - protocol definition
        ...


class InMemoryKeyValueStore:
    """Process-local store; values are JSON round-tripped on every access."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def keys(self) -> list[str]:
        return sorted(self._data)


class SqlKeyValueStore:
    """Store documents in the ``key_value_entry`` table."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, key: str) -> Any | None:
        model = self.session.get(KeyValueEntryModel, key)
        if model is None:
            return None
        return model.value

    def set(self, key: str, value: Any) -> None:
        model = self.session.get(KeyValueEntryModel, key)
        if model is None:
            model = KeyValueEntryModel(key=key)
        model.value = value
        try:
            self.session.add(model)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Failed to write key '%s'", key)
            raise

    def delete(self, key: str) -> bool:
        """Remove ``key``; returns ``False`` when it was not present."""

        model = self.session.get(KeyValueEntryModel, key)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True


__all__ = ["InMemoryKeyValueStore", "KeyValueStore", "SqlKeyValueStore"]
