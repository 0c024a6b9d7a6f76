"""Market store: the three collections plus the session slot, persisted as JSON values."""
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from artspace.domain.accounts.models import User
from artspace.domain.catalog.models import Artwork
from artspace.domain.common.errors import DataIntegrityError
from artspace.domain.orders.models import Order
from artspace.domain.seed_examples import seed_artworks, seed_users
from artspace.infra.storage.base import create_storage_engine
from artspace.infra.storage.kv_backend import KeyValueBackend

logger = logging.getLogger(__name__)

USERS_KEY = "as_users"
ARTWORKS_KEY = "as_artworks"
ORDERS_KEY = "as_orders"
SESSION_KEY = "as_current_user"

_users_adapter = TypeAdapter(list[User])
_artworks_adapter = TypeAdapter(list[Artwork])
_orders_adapter = TypeAdapter(list[Order])
_session_adapter = TypeAdapter(Optional[User])


def _dump(adapter: TypeAdapter, value) -> str:
    return adapter.dump_json(value, by_alias=True).decode("utf-8")


@dataclass
class StoreSnapshot:
    """Everything in the store at one point in time."""
    users: list[User]
    artworks: list[Artwork]
    orders: list[Order]
    current_user: Optional[User]


class StoreTransaction:
    """Writes staged inside MarketStore.transact(); committed together or not at all."""

    def __init__(self) -> None:
        self.staged: dict[str, Optional[str]] = {}

    def write_users(self, users: list[User]) -> None:
        self.staged[USERS_KEY] = _dump(_users_adapter, users)

    def write_artworks(self, artworks: list[Artwork]) -> None:
        self.staged[ARTWORKS_KEY] = _dump(_artworks_adapter, artworks)

    def write_orders(self, orders: list[Order]) -> None:
        self.staged[ORDERS_KEY] = _dump(_orders_adapter, orders)

    def set_session(self, user: Optional[User]) -> None:
        self.staged[SESSION_KEY] = _dump(_session_adapter, user) if user is not None else None


class MarketStore:
    """Sole gateway to persisted marketplace state.

    Every write replaces a whole collection (last write wins); there is no
    row-level update. Create one store per process and pass it to services.
    """

    def __init__(self, backend: KeyValueBackend):
        self.backend = backend

    def initialize(self, seed_demo_data: bool = True) -> None:
        """Create the schema and fill absent keys. Existing data is never overwritten."""
        self.backend.create_schema()
        defaults = {
            USERS_KEY: lambda: _dump(_users_adapter, seed_users() if seed_demo_data else []),
            ARTWORKS_KEY: lambda: _dump(_artworks_adapter, seed_artworks() if seed_demo_data else []),
            ORDERS_KEY: lambda: _dump(_orders_adapter, []),
        }
        missing = {key: build() for key, build in defaults.items() if self.backend.get(key) is None}
        if missing:
            self.backend.write(missing)
            logger.info("Initialized store keys: %s", ", ".join(sorted(missing)))

    # Reads

    def _read(self, key: str, adapter: TypeAdapter, strict: bool):
        raw = self.backend.get(key)
        if raw is None:
            return None
        try:
            return adapter.validate_json(raw)
        except PydanticValidationError as e:
            if strict:
                raise DataIntegrityError(key, str(e)) from e
            logger.error("Database read error for %s, treating as empty: %s", key, e)
            return None

    def read_users(self, strict: bool = False) -> list[User]:
        return self._read(USERS_KEY, _users_adapter, strict) or []

    def read_artworks(self, strict: bool = False) -> list[Artwork]:
        return self._read(ARTWORKS_KEY, _artworks_adapter, strict) or []

    def read_orders(self, strict: bool = False) -> list[Order]:
        return self._read(ORDERS_KEY, _orders_adapter, strict) or []

    def read_session(self, strict: bool = False) -> Optional[User]:
        return self._read(SESSION_KEY, _session_adapter, strict)

    def read_all(self, strict: bool = False) -> StoreSnapshot:
        """Return all collections and the session. Corrupt collections read as empty unless strict."""
        return StoreSnapshot(
            users=self.read_users(strict),
            artworks=self.read_artworks(strict),
            orders=self.read_orders(strict),
            current_user=self.read_session(strict),
        )

    # Writes

    @contextmanager
    def transact(self) -> Iterator[StoreTransaction]:
        """Stage writes to several keys and commit them in one backend transaction.

        An exception inside the block discards everything staged.
        """
        tx = StoreTransaction()
        yield tx
        self.backend.write(tx.staged)

    def write_users(self, users: list[User]) -> None:
        with self.transact() as tx:
            tx.write_users(users)

    def write_artworks(self, artworks: list[Artwork]) -> None:
        with self.transact() as tx:
            tx.write_artworks(artworks)

    def write_orders(self, orders: list[Order]) -> None:
        with self.transact() as tx:
            tx.write_orders(orders)

    def set_session(self, user: Optional[User]) -> None:
        with self.transact() as tx:
            tx.set_session(user)


def create_market_store(database_url: str, quota_bytes: Optional[int] = None, echo: bool = False) -> MarketStore:
    """Build a store on a fresh engine. Call initialize() before use."""
    engine = create_storage_engine(database_url, echo=echo)
    return MarketStore(KeyValueBackend(engine, quota_bytes=quota_bytes))
