"""Demo dataset written to an empty store on first start."""
from artspace.domain.accounts.models import User, UserRole
from artspace.domain.catalog.models import Artwork, ArtworkStatus, Category
from artspace.domain.common.types import utcnow

# Raw records use the persisted (camelCase) layout; joinedAt/createdAt are stamped at seed time.
SEED_ARTISTS = [
    {
        "id": "a1",
        "name": "Elena Vance",
        "email": "elena@art.com",
        "role": UserRole.ARTIST,
        "bio": "Contemporary abstract painter exploring the intersection of light and emotion.",
        "avatar": "https://picsum.photos/seed/elena/200",
    },
    {
        "id": "a2",
        "name": "Julian Thorne",
        "email": "julian@art.com",
        "role": UserRole.ARTIST,
        "bio": "Sculptor specializing in sustainable materials and organic forms.",
        "avatar": "https://picsum.photos/seed/julian/200",
    },
]

SEED_ARTWORKS = [
    {
        "id": "w1",
        "artistId": "a1",
        "artistName": "Elena Vance",
        "title": "Ethereal Dawn",
        "description": "A study of morning light using heavy impasto techniques.",
        "category": Category.PAINTINGS,
        "tags": ["abstract", "light", "impasto"],
        "price": 1200,
        "imageUrl": "https://picsum.photos/seed/ethereal/800/1000",
        "status": ArtworkStatus.AVAILABLE,
    },
    {
        "id": "w2",
        "artistId": "a1",
        "artistName": "Elena Vance",
        "title": "Midnight Echo",
        "description": "Deep blues and charcoal textures exploring silence.",
        "category": Category.PAINTINGS,
        "tags": ["blue", "moody", "modern"],
        "price": 950,
        "imageUrl": "https://picsum.photos/seed/midnight/800/1000",
        "status": ArtworkStatus.AVAILABLE,
    },
]


def seed_users() -> list[User]:
    now = utcnow()
    return [User.model_validate({**raw, "joinedAt": now}) for raw in SEED_ARTISTS]


def seed_artworks() -> list[Artwork]:
    now = utcnow()
    return [Artwork.model_validate({**raw, "createdAt": now}) for raw in SEED_ARTWORKS]
