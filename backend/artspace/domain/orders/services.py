"""Order domain services."""
import asyncio
import logging
from typing import Optional

from artspace.domain.accounts.models import PaymentMethod, User
from artspace.domain.catalog.models import Artwork, ArtworkStatus
from artspace.domain.common.errors import AuthenticationRequiredError, ConflictError, NotFoundError
from artspace.domain.orders.models import Order, OrderStatus
from artspace.infra.storage.store import MarketStore

logger = logging.getLogger(__name__)


def _available_artwork(artworks: list[Artwork], artwork_id: str) -> Artwork:
    artwork = next((a for a in artworks if a.id == artwork_id), None)
    if artwork is None:
        raise NotFoundError("Artwork", artwork_id)
    if artwork.status != ArtworkStatus.AVAILABLE:
        raise ConflictError(f"Artwork is not available ({artwork.status.value})")
    return artwork


class OrderService:
    """Checkout simulation and order administration."""

    def __init__(
        self,
        store: MarketStore,
        processing_delay_s: float = 0.0,
        reopen_artwork_on_cancel: bool = True,
    ):
        self.store = store
        self.processing_delay_s = processing_delay_s
        self.reopen_artwork_on_cancel = reopen_artwork_on_cancel

    async def purchase(
        self,
        artwork_id: str,
        buyer: Optional[User],
        payment_method: PaymentMethod,
    ) -> Order:
        """Buy an available artwork: mark it sold and record a completed order, atomically."""
        if buyer is None:
            raise AuthenticationRequiredError("Sign in to complete the purchase")
        _available_artwork(self.store.read_artworks(strict=True), artwork_id)

        if self.processing_delay_s > 0:
            await asyncio.sleep(self.processing_delay_s)  # simulated gateway round trip

        # preconditions again: the artwork may have sold during the delay
        artworks = self.store.read_artworks(strict=True)
        artwork = _available_artwork(artworks, artwork_id)
        orders = self.store.read_orders(strict=True)

        order = Order.for_purchase(buyer, artwork, payment_method)
        sold = artwork.model_copy(update={"status": ArtworkStatus.SOLD})
        with self.store.transact() as tx:
            tx.write_artworks([sold if a.id == artwork_id else a for a in artworks])
            tx.write_orders([*orders, order])
        logger.info(
            "Artwork %s sold to %s for %d via %s (order %s)",
            artwork_id, buyer.id, order.amount, payment_method.value, order.id,
        )
        return order

    def cancel_order(self, order_id: str) -> Order:
        """Force-cancel an order. The sold artwork is put back on sale when configured to."""
        orders = self.store.read_orders(strict=True)
        order = next((o for o in orders if o.id == order_id), None)
        if order is None:
            raise NotFoundError("Order", order_id)
        if order.status == OrderStatus.CANCELED:
            return order

        canceled = order.model_copy(update={"status": OrderStatus.CANCELED})
        artworks = self.store.read_artworks(strict=True)
        with self.store.transact() as tx:
            tx.write_orders([canceled if o.id == order_id else o for o in orders])
            if self.reopen_artwork_on_cancel:
                reopened = [
                    a.model_copy(update={"status": ArtworkStatus.AVAILABLE})
                    if a.id == order.artwork_id and a.status == ArtworkStatus.SOLD
                    else a
                    for a in artworks
                ]
                if reopened != artworks:
                    tx.write_artworks(reopened)
        logger.info("Order %s canceled", order_id)
        return canceled

    def list_orders(self) -> list[Order]:
        return self.store.read_orders()

    def orders_for_artist(self, artist_id: str) -> list[Order]:
        return [o for o in self.store.read_orders() if o.artist_id == artist_id]

    def orders_for_buyer(self, buyer_id: str) -> list[Order]:
        return [o for o in self.store.read_orders() if o.buyer_id == buyer_id]

    def find_unrecorded_sales(self) -> list[Artwork]:
        """Sold artworks without a completed order (left behind by non-atomic writers)."""
        recorded = {o.artwork_id for o in self.store.read_orders() if o.status == OrderStatus.COMPLETED}
        return [
            a for a in self.store.read_artworks()
            if a.status == ArtworkStatus.SOLD and a.id not in recorded
        ]
