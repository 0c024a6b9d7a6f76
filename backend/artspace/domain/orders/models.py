"""Order domain models."""
from datetime import datetime
from enum import Enum

from artspace.domain.accounts.models import PaymentMethod, User
from artspace.domain.catalog.models import Artwork
from artspace.domain.common.types import Record, generate_id, utcnow


class OrderStatus(str, Enum):
    """Order status enum."""
    COMPLETED = "Completed"
    PENDING = "Pending"
    CANCELED = "Canceled"


class Order(Record):
    """Order domain model. Buyer and artwork fields are snapshots taken at purchase time."""

    id: str
    buyer_id: str
    buyer_name: str
    buyer_email: str
    artist_id: str
    artwork_id: str
    artwork_title: str
    amount: int
    payment_method: PaymentMethod
    status: OrderStatus
    created_at: datetime

    @classmethod
    def for_purchase(cls, buyer: User, artwork: Artwork, payment_method: PaymentMethod) -> "Order":
        """Create the completed order recording buyer's purchase of artwork at its current price."""
        return cls(
            id=generate_id("ord-"),
            buyer_id=buyer.id,
            buyer_name=buyer.name,
            buyer_email=buyer.email,
            artist_id=artwork.artist_id,
            artwork_id=artwork.id,
            artwork_title=artwork.title,
            amount=artwork.price,
            payment_method=payment_method,
            status=OrderStatus.COMPLETED,
            created_at=utcnow(),
        )
