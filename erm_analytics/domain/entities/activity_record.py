"""Domain entity describing one entry of the platform activity log."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from erm_analytics.utils import parse_timestamp

logger = logging.getLogger(__name__)

UNKNOWN_USER = "Unknown"

_KNOWN_FIELDS = frozenset(
    {"id", "type", "action", "verb", "user", "userName", "userId", "timestamp", "workspaceId"}
)


class ActivityType(str, Enum):
    """Closed vocabulary of activity ``type`` tags.

    Tags outside the vocabulary map to ``UNRECOGNIZED``; the raw tag stays on
    the record so nothing is lost.
    """

    RISK = "risk"
    CONTROL = "control"
    REPORT = "report"
    USER = "user"
    AI = "ai"
    AUTH = "auth"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def from_tag(cls, tag: str | None) -> "ActivityType":
        try:
            return cls(tag)
        except ValueError:
            return cls.UNRECOGNIZED


@dataclass(frozen=True)
class ActivityRecord:
    """Immutable fact describing one user action.

    ``user`` is a display name and is used as the grouping key unless the
    upstream payload carries a ``userId``. Two people sharing a display name
    and lacking ids are indistinguishable.
    """

    type: str
    action: str
    timestamp: datetime | None
    user: str | None = None
    id: str | None = None
    user_id: str | None = None
    workspace_id: str | None = None
    raw_timestamp: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ActivityRecord":
        """Build a record from a JSON object read from the activity log."""

        raw_timestamp = payload.get("timestamp")
        user = payload.get("user") or payload.get("userName") or None
        user_id = payload.get("userId")
        record_id = payload.get("id")
        workspace_id = payload.get("workspaceId")
        return cls(
            id=str(record_id) if record_id is not None else None,
            type=str(payload.get("type") or ""),
            action=str(payload.get("action") or payload.get("verb") or ""),
            user=str(user) if user is not None else None,
            user_id=str(user_id) if user_id not in (None, "") else None,
            timestamp=parse_timestamp(raw_timestamp),
            raw_timestamp=raw_timestamp if isinstance(raw_timestamp, str) else None,
            workspace_id=str(workspace_id) if workspace_id not in (None, "") else None,
            extra={key: value for key, value in payload.items() if key not in _KNOWN_FIELDS},
        )

    @property
    def category(self) -> ActivityType:
        return ActivityType.from_tag(self.type)

    @property
    def user_key(self) -> str | None:
        """Identity used to group activities by person."""

        return self.user_id or self.user

    @property
    def display_user(self) -> str:
        return self.user or UNKNOWN_USER


def iter_records(items: Iterable[Any]) -> Iterator[ActivityRecord]:
    """Yield ``items`` as :class:`ActivityRecord` instances.

    Entries that are neither records nor mappings are skipped.
    """

    for item in items:
        if isinstance(item, ActivityRecord):
            yield item
        elif isinstance(item, Mapping):
            yield ActivityRecord.from_payload(item)
        else:
            logger.debug("Skipping activity entry of type %s", type(item).__name__)


__all__ = ["ActivityRecord", "ActivityType", "UNKNOWN_USER", "iter_records"]
