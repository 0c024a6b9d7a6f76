"""Read-only views over an artwork snapshot."""
from typing import Iterable, Optional, Union

from pydantic import BaseModel

from artspace.domain.catalog.models import Artwork, Category

ALL_CATEGORIES = "All"


class ArtworkFilter(BaseModel):
    """Gallery filter. Unset fields (and category "All") do not constrain the result."""

    category: Optional[Union[Category, str]] = None
    tag: Optional[str] = None
    max_price: Optional[int] = None
    search: Optional[str] = None

    def matches(self, art: Artwork) -> bool:
        if self.category not in (None, ALL_CATEGORIES) and art.category != self.category:
            return False
        if self.tag and self.tag not in art.tags:
            return False
        if self.max_price is not None and art.price > self.max_price:
            return False
        if self.search:
            term = self.search.lower()
            haystack = [art.title.lower(), art.artist_name.lower(), *(t.lower() for t in art.tags)]
            if not any(term in text for text in haystack):
                return False
        return True


def filter_artworks(artworks: Iterable[Artwork], criteria: ArtworkFilter) -> list[Artwork]:
    """All artworks satisfying every active predicate, in source order."""
    return [art for art in artworks if criteria.matches(art)]


def distinct_tags(artworks: Iterable[Artwork]) -> list[str]:
    return sorted({tag for art in artworks for tag in art.tags})


def featured(artworks: Iterable[Artwork], limit: int = 4) -> list[Artwork]:
    """Home page highlights: the newest artworks."""
    return list(artworks)[:limit]


def artworks_by_artist(artworks: Iterable[Artwork], artist_id: str) -> list[Artwork]:
    return [art for art in artworks if art.artist_id == artist_id]
