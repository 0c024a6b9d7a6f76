"""Artist studio routes: publishing, portfolio, sales and profile."""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Response, UploadFile, status
from pydantic import BaseModel

from artspace.api.deps import (
    get_account_service,
    get_artwork_service,
    get_order_service,
    require_artist,
    require_user,
)
from artspace.domain.accounts.models import PaymentMethod, User
from artspace.domain.accounts.services import AccountService
from artspace.domain.catalog.models import Artwork, ArtworkDraft, ArtworkUpdate, Category
from artspace.domain.catalog.services import ArtworkService
from artspace.domain.common.types import Record
from artspace.domain.common.errors import AuthorizationError
from artspace.domain.orders.models import Order
from artspace.domain.orders.services import OrderService
from artspace.services.image_processing import validate_upload

router = APIRouter()


class ProfileUpdateRequest(BaseModel):
    """Profile update request. An empty payment_identifier disconnects the payment account."""
    name: str
    bio: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None
    payment_identifier: Optional[str] = None


class DescriptionRequest(BaseModel):
    title: str
    category: Category


class DescriptionResponse(BaseModel):
    description: str


class ImageRequest(BaseModel):
    title: str
    category: Category
    tags: str = ""


class ImageResponse(Record):
    """image_url is null when nothing could be generated."""
    image_url: Optional[str]


@router.get("/artworks", response_model=List[Artwork])
async def my_artworks(
    artist: User = Depends(require_artist),
    service: ArtworkService = Depends(get_artwork_service),
):
    return service.artworks_by_artist(artist.id)


@router.post("/artworks", response_model=Artwork, status_code=status.HTTP_201_CREATED)
async def publish_artwork(
    draft: ArtworkDraft,
    generate_missing_image: bool = True,
    artist: User = Depends(require_artist),
    service: ArtworkService = Depends(get_artwork_service),
):
    """Publish a new artwork. With no image, one is generated unless generate_missing_image is false."""
    return await service.publish_artwork(artist, draft, generate_missing_image=generate_missing_image)


@router.put("/artworks/{artwork_id}", response_model=Artwork)
async def edit_artwork(
    artwork_id: str,
    update: ArtworkUpdate,
    artist: User = Depends(require_artist),
    service: ArtworkService = Depends(get_artwork_service),
):
    return service.edit_artwork(artist, artwork_id, update)


@router.delete("/artworks/{artwork_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_artwork(
    artwork_id: str,
    artist: User = Depends(require_artist),
    service: ArtworkService = Depends(get_artwork_service),
):
    artwork = service.get_artwork(artwork_id)
    if artwork.artist_id != artist.id:
        raise AuthorizationError("Only the owning artist can remove this artwork")
    service.remove_artwork(artwork_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/artworks/{artwork_id}/reserve", response_model=Artwork)
async def reserve_artwork(
    artwork_id: str,
    artist: User = Depends(require_artist),
    service: ArtworkService = Depends(get_artwork_service),
):
    return service.reserve_artwork(artist, artwork_id)


@router.post("/artworks/{artwork_id}/release", response_model=Artwork)
async def release_artwork(
    artwork_id: str,
    artist: User = Depends(require_artist),
    service: ArtworkService = Depends(get_artwork_service),
):
    return service.release_artwork(artist, artwork_id)


@router.get("/sales", response_model=List[Order])
async def my_sales(
    artist: User = Depends(require_artist),
    service: OrderService = Depends(get_order_service),
):
    return service.orders_for_artist(artist.id)


@router.put("/profile", response_model=User)
async def update_profile(
    request: ProfileUpdateRequest,
    user: User = Depends(require_user),
    accounts: AccountService = Depends(get_account_service),
):
    return accounts.update_profile(
        user.id,
        name=request.name,
        bio=request.bio,
        payment_method=request.payment_method,
        payment_identifier=request.payment_identifier,
    )


@router.post("/ai/description", response_model=DescriptionResponse)
async def suggest_description(
    request: DescriptionRequest,
    artist: User = Depends(require_artist),
    service: ArtworkService = Depends(get_artwork_service),
):
    description = await service.suggest_description(request.title, request.category)
    return DescriptionResponse(description=description)


@router.post("/ai/image", response_model=ImageResponse)
async def generate_image(
    request: ImageRequest,
    artist: User = Depends(require_artist),
    service: ArtworkService = Depends(get_artwork_service),
):
    image_url = await service.generate_image(request.title, request.category, request.tags)
    return ImageResponse(image_url=image_url)


@router.post("/images", response_model=ImageResponse)
async def upload_image(
    file: UploadFile = File(...),
    artist: User = Depends(require_artist),
    service: ArtworkService = Depends(get_artwork_service),
):
    """Accept a PNG/JPEG upload and return it optimized, as a data URL for the publish form."""
    data_url = validate_upload(file.content_type, await file.read())
    return ImageResponse(image_url=service.optimize_image(data_url))
