"""SQLAlchemy model backing the JSON key-value store."""

from sqlalchemy import Column, DateTime, String
from sqlalchemy.types import JSON

from erm_analytics.infrastructure.database import Base
from erm_analytics.utils import now_in_app_timezone


class KeyValueEntryModel(Base):
    """One JSON document stored under a string key."""

    __tablename__ = "key_value_entry"

    key = Column(String(255), primary_key=True)
    value = Column(JSON, nullable=True)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=now_in_app_timezone,
        onupdate=now_in_app_timezone,
    )


__all__ = ["KeyValueEntryModel"]
