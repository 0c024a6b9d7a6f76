"""Account domain models."""
from datetime import datetime
from enum import Enum
from typing import Optional

from artspace.domain.common.types import Record, generate_id, utcnow


class UserRole(str, Enum):
    """User role enum. Chosen at signup, never changed."""
    ARTIST = "ARTIST"
    BUYER = "BUYER"
    ADMIN = "ADMIN"


class PaymentMethod(str, Enum):
    """Payout / payment provider."""
    PAYPAL = "PayPal"
    REVOLUT = "Revolut"


class PaymentAccount(Record):
    """Connected payment account. identifier is an email for PayPal, a tag for Revolut."""

    type: PaymentMethod
    identifier: str
    connected_at: datetime


class User(Record):
    """User domain model."""

    id: str
    name: str
    email: str
    role: UserRole
    avatar: Optional[str] = None
    bio: Optional[str] = None
    joined_at: datetime
    payment_account: Optional[PaymentAccount] = None  # mandatory for artists before publishing

    @classmethod
    def create(
        cls,
        name: str,
        email: str,
        role: UserRole,
        payment_account: Optional[PaymentAccount] = None,
    ) -> "User":
        """Create a new user."""
        return cls(
            id=generate_id("u"),
            name=name,
            email=email,
            role=role,
            joined_at=utcnow(),
            payment_account=payment_account,
        )

    @property
    def can_publish(self) -> bool:
        return self.role == UserRole.ARTIST and self.payment_account is not None
