"""Database base configuration."""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool


def _is_sqlite_memory(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


def create_storage_engine(url: str, echo: bool = False) -> Engine:
    """Create the synchronous engine backing the store.

    In-memory SQLite needs a single shared connection (StaticPool), otherwise every
    checkout would see a fresh, empty database.
    """
    kwargs: dict = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if _is_sqlite_memory(url):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, echo=echo, future=True, **kwargs)


class Base(DeclarativeBase):
    """Base class for all models."""
    pass
