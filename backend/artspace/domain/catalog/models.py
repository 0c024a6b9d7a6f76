"""Catalog domain models."""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from artspace.domain.accounts.models import User
from artspace.domain.common.types import Record, generate_id, utcnow


class Category(str, Enum):
    """Artwork category enum."""
    PAINTINGS = "Paintings"
    SCULPTURES = "Sculptures"
    INDOOR_ART = "Indoor Art"
    MIXED_MEDIA = "Other / Mixed Media"


class ArtworkStatus(str, Enum):
    """Artwork status enum."""
    AVAILABLE = "Available"
    SOLD = "Sold"          # set by purchase
    RESERVED = "Reserved"  # set by the owning artist


class Artwork(Record):
    """Artwork domain model. artist_name is a snapshot taken at publish time."""

    id: str
    artist_id: str
    artist_name: str
    title: str
    description: str
    category: Category
    tags: list[str] = Field(default_factory=list)
    price: int
    image_url: str = ""
    status: ArtworkStatus = ArtworkStatus.AVAILABLE
    created_at: datetime

    @classmethod
    def create(
        cls,
        artist: User,
        title: str,
        description: str,
        category: Category,
        tags: list[str],
        price: int,
        image_url: str,
    ) -> "Artwork":
        """Create a new available artwork owned by artist."""
        return cls(
            id=generate_id("w"),
            artist_id=artist.id,
            artist_name=artist.name,
            title=title,
            description=description,
            category=category,
            tags=tags,
            price=price,
            image_url=image_url,
            status=ArtworkStatus.AVAILABLE,
            created_at=utcnow(),
        )


class ArtworkDraft(Record):
    """Studio form input for publishing. tags is the raw comma-separated string."""

    title: str = ""
    description: str = ""
    category: Optional[Category] = None
    tags: str = ""
    price: int = 0
    image_url: str = ""


class ArtworkUpdate(Record):
    """Editable artwork fields. None leaves a field unchanged."""

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[Category] = None
    tags: Optional[str] = None
    price: Optional[int] = None
    image_url: Optional[str] = None
