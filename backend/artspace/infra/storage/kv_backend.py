"""Key-value backend over a single SQLAlchemy table."""
import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

from artspace.domain.common.errors import StorageQuotaError
from artspace.infra.storage.base import Base
from artspace.infra.storage.models import KeyValueModel

logger = logging.getLogger(__name__)


class KeyValueBackend:
    """Durable string-to-string map with an optional size quota.

    Size is counted like browser local storage: characters of key plus value,
    summed across all entries.
    """

    def __init__(self, engine: Engine, quota_bytes: Optional[int] = None):
        self.engine = engine
        self.quota_bytes = quota_bytes
        self._session_factory = sessionmaker(engine, expire_on_commit=False, autoflush=False)

    def create_schema(self) -> None:
        Base.metadata.create_all(self.engine)

    def get(self, key: str) -> Optional[str]:
        with self._session_factory() as session:
            model = session.get(KeyValueModel, key)
            return model.value if model else None

    def keys(self) -> list[str]:
        with self._session_factory() as session:
            return list(session.scalars(select(KeyValueModel.key).order_by(KeyValueModel.key)))

    def usage_bytes(self) -> int:
        with self._session_factory() as session:
            return self._usage(session)

    def set(self, key: str, value: str) -> None:
        self.write({key: value})

    def write(self, items: dict[str, Optional[str]]) -> None:
        """Apply all items in one transaction. A None value deletes the key.

        Raises StorageQuotaError (and writes nothing) when the result would exceed the quota.
        """
        if not items:
            return
        with self._session_factory() as session:
            try:
                with session.begin():
                    existing = {key: session.get(KeyValueModel, key) for key in items}
                    self._check_quota(session, items, existing)
                    for key, value in items.items():
                        model = existing[key]
                        if value is None:
                            if model is not None:
                                session.delete(model)
                        elif model is None:
                            session.add(KeyValueModel(key=key, value=value))
                        else:
                            model.value = value
            except OperationalError as e:
                # SQLITE_FULL surfaces as "database or disk is full"
                if "full" not in str(e).lower():
                    raise
                logger.warning("Storage write failed, disk full: %s", e)
                raise StorageQuotaError(",".join(items), -1, self.quota_bytes or -1) from e

    def _usage(self, session: Session) -> int:
        total = session.scalar(
            select(func.coalesce(func.sum(func.length(KeyValueModel.key) + func.length(KeyValueModel.value)), 0))
        )
        return int(total or 0)

    def _check_quota(
        self,
        session: Session,
        items: dict[str, Optional[str]],
        existing: dict[str, Optional[KeyValueModel]],
    ) -> None:
        if self.quota_bytes is None:
            return
        projected = self._usage(session)
        for key, value in items.items():
            if existing[key] is not None:
                projected -= existing[key].size
            if value is not None:
                projected += len(key) + len(value)
        if projected > self.quota_bytes:
            logger.warning(
                "Storage limit exceeded writing %s: %d > %d", ",".join(items), projected, self.quota_bytes
            )
            raise StorageQuotaError(",".join(items), projected, self.quota_bytes)
