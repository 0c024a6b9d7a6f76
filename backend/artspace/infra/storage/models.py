"""Key-value storage model."""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from artspace.infra.storage.base import Base


def _now() -> datetime:
    return datetime.now(timezone.utc)


class KeyValueModel(Base):
    """One stored key: a whole JSON-serialized collection or the session record."""

    __tablename__ = "kv_entries"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_now, onupdate=_now, nullable=False)

    @property
    def size(self) -> int:
        return len(self.key) + len(self.value)
