"""Gallery API routes: catalog browsing, artwork detail and artist profiles."""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from artspace.api.deps import get_account_service, get_artwork_service, require_user
from artspace.domain.accounts.models import User
from artspace.domain.accounts.services import AccountService
from artspace.domain.catalog.filters import ArtworkFilter, distinct_tags, featured, filter_artworks
from artspace.domain.catalog.models import Artwork
from artspace.domain.catalog.services import ArtworkService
from artspace.domain.common.types import Record

router = APIRouter()


class ArtistResponse(Record):
    """Public artist profile (no email or payment details)."""
    id: str
    name: str
    avatar: Optional[str]
    bio: Optional[str]
    joined_at: datetime


class ArtistProfileResponse(Record):
    """Artist profile with their artworks."""
    artist: ArtistResponse
    artworks: List[Artwork]


@router.get("/artworks", response_model=List[Artwork])
async def list_artworks(
    category: Optional[str] = Query(None, description='Category name or "All"'),
    tag: Optional[str] = None,
    max_price: Optional[int] = Query(None, ge=0),
    q: Optional[str] = Query(None, description="Matches title, artist name or tags"),
    service: ArtworkService = Depends(get_artwork_service),
):
    """Filtered catalog, newest first."""
    criteria = ArtworkFilter(category=category, tag=tag, max_price=max_price, search=q)
    return filter_artworks(service.list_artworks(), criteria)


@router.get("/tags", response_model=List[str])
async def list_tags(service: ArtworkService = Depends(get_artwork_service)):
    """Every tag in use, sorted."""
    return distinct_tags(service.list_artworks())


@router.get("/featured", response_model=List[Artwork])
async def list_featured(
    limit: int = Query(4, ge=1, le=24),
    service: ArtworkService = Depends(get_artwork_service),
):
    return featured(service.list_artworks(), limit)


@router.get("/artworks/{artwork_id}", response_model=Artwork)
async def get_artwork(artwork_id: str, service: ArtworkService = Depends(get_artwork_service)):
    return service.get_artwork(artwork_id)


@router.post("/artworks/{artwork_id}/restore-image", response_model=Artwork)
async def restore_image(
    artwork_id: str,
    user: User = Depends(require_user),
    service: ArtworkService = Depends(get_artwork_service),
):
    """Regenerate the image of an artwork stored without one. Requires a signed-in user."""
    return await service.restore_missing_image(artwork_id)


@router.get("/artists/{artist_id}", response_model=ArtistProfileResponse)
async def get_artist(
    artist_id: str,
    accounts: AccountService = Depends(get_account_service),
    service: ArtworkService = Depends(get_artwork_service),
):
    artist = accounts.get_user(artist_id)
    return ArtistProfileResponse(
        artist=ArtistResponse(
            id=artist.id,
            name=artist.name,
            avatar=artist.avatar,
            bio=artist.bio,
            joined_at=artist.joined_at,
        ),
        artworks=service.artworks_by_artist(artist_id),
    )
