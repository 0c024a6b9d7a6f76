"""Catalog domain services."""
import logging
from typing import Iterable, Optional, Union

from artspace.domain.accounts.models import User, UserRole
from artspace.domain.catalog.filters import artworks_by_artist
from artspace.domain.catalog.models import Artwork, ArtworkDraft, ArtworkStatus, ArtworkUpdate, Category
from artspace.domain.common.errors import (
    AuthenticationRequiredError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from artspace.infra.storage.store import MarketStore
from artspace.services import image_processing
from artspace.services.generation_service import FALLBACK_DESCRIPTION, GenerationService

logger = logging.getLogger(__name__)


def normalize_tags(raw: Union[str, Iterable[str]]) -> list[str]:
    """Split on commas, trim, lowercase, drop empties and repeated tags (first one wins).

    " Abstract, , blue ,Blue" -> ["abstract", "blue"]
    """
    parts = raw.split(",") if isinstance(raw, str) else list(raw)
    tags: list[str] = []
    for part in parts:
        tag = part.strip().lower()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def _validate_fields(title: str, description: str, category: Optional[Category], price) -> None:
    if not title.strip():
        raise ValidationError("Title is required")
    if not description.strip():
        raise ValidationError("Description is required")
    if category is None:
        raise ValidationError("Category is required")
    if isinstance(price, bool) or not isinstance(price, int) or price <= 0:
        raise ValidationError("Price must be a positive whole number")


class ArtworkService:
    """Publishing studio and catalog maintenance."""

    def __init__(
        self,
        store: MarketStore,
        generation: Optional[GenerationService] = None,
        image_max_width: int = 800,
        image_quality: int = 70,
    ):
        self.store = store
        self.generation = generation
        self.image_max_width = image_max_width
        self.image_quality = image_quality

    def optimize_image(self, image_url: str) -> str:
        return image_processing.optimize_image(image_url, max_width=self.image_max_width, quality=self.image_quality)

    def _find(self, artworks: list[Artwork], artwork_id: str) -> Artwork:
        artwork = next((a for a in artworks if a.id == artwork_id), None)
        if artwork is None:
            raise NotFoundError("Artwork", artwork_id)
        return artwork

    def _replace(self, artworks: list[Artwork], updated: Artwork) -> list[Artwork]:
        return [updated if a.id == updated.id else a for a in artworks]

    # Queries

    def list_artworks(self) -> list[Artwork]:
        return self.store.read_artworks()

    def get_artwork(self, artwork_id: str) -> Artwork:
        return self._find(self.store.read_artworks(), artwork_id)

    def artworks_by_artist(self, artist_id: str) -> list[Artwork]:
        return artworks_by_artist(self.store.read_artworks(), artist_id)

    # Mutations

    async def publish_artwork(
        self,
        actor: Optional[User],
        draft: ArtworkDraft,
        generate_missing_image: bool = True,
    ) -> Artwork:
        """Validate the draft and prepend a new available artwork.

        Without an image the generation service is asked for one; if that is not
        allowed or yields nothing the publish is rejected. Nothing is written on failure.
        """
        if actor is None:
            raise AuthenticationRequiredError()
        if actor.role != UserRole.ARTIST:
            raise ValidationError("Only artists can publish artworks")
        if actor.payment_account is None:
            raise ValidationError("A connected payment account is mandatory for publication.")
        _validate_fields(draft.title, draft.description, draft.category, draft.price)
        tags = normalize_tags(draft.tags)

        image_url = draft.image_url.strip()
        if not image_url:
            if not generate_missing_image or self.generation is None:
                raise ValidationError("Gallery visuals are mandatory for publication.")
            generated = await self.generation.illustrate(draft.title, draft.category, tags)
            if not generated:
                raise ValidationError("No image supplied and image generation failed.")
            image_url = generated

        artwork = Artwork.create(
            artist=actor,
            title=draft.title.strip(),
            description=draft.description.strip(),
            category=draft.category,
            tags=tags,
            price=draft.price,
            image_url=self.optimize_image(image_url),
        )
        artworks = self.store.read_artworks(strict=True)
        self.store.write_artworks([artwork, *artworks])
        logger.info("Artwork published: id=%s artist=%s", artwork.id, actor.id)
        return artwork

    def edit_artwork(self, actor: User, artwork_id: str, update: ArtworkUpdate) -> Artwork:
        """Change the editable fields of the actor's own artwork."""
        if actor.payment_account is None:
            raise ValidationError("A connected payment account is mandatory for publication.")
        artworks = self.store.read_artworks(strict=True)
        artwork = self._find(artworks, artwork_id)
        if artwork.artist_id != actor.id:
            raise AuthorizationError("Only the owning artist can edit this artwork")

        title = artwork.title if update.title is None else update.title.strip()
        description = artwork.description if update.description is None else update.description.strip()
        category = update.category or artwork.category
        price = artwork.price if update.price is None else update.price
        _validate_fields(title, description, category, price)

        image_url = artwork.image_url
        if update.image_url is not None:
            if not update.image_url.strip():
                raise ValidationError("Gallery visuals are mandatory for publication.")
            image_url = self.optimize_image(update.image_url.strip())

        updated = artwork.model_copy(
            update={
                "title": title,
                "description": description,
                "category": category,
                "tags": artwork.tags if update.tags is None else normalize_tags(update.tags),
                "price": price,
                "image_url": image_url,
            }
        )
        self.store.write_artworks(self._replace(artworks, updated))
        return updated

    def remove_artwork(self, artwork_id: str) -> None:
        artworks = self.store.read_artworks(strict=True)
        remaining = [a for a in artworks if a.id != artwork_id]
        if len(remaining) == len(artworks):
            raise NotFoundError("Artwork", artwork_id)
        self.store.write_artworks(remaining)
        logger.info("Artwork removed: id=%s", artwork_id)

    def _transition(
        self, actor: User, artwork_id: str, source: ArtworkStatus, target: ArtworkStatus
    ) -> Artwork:
        artworks = self.store.read_artworks(strict=True)
        artwork = self._find(artworks, artwork_id)
        if artwork.artist_id != actor.id:
            raise AuthorizationError("Only the owning artist can change this artwork")
        if artwork.status != source:
            raise ConflictError(f"Artwork is {artwork.status.value}, expected {source.value}")
        updated = artwork.model_copy(update={"status": target})
        self.store.write_artworks(self._replace(artworks, updated))
        return updated

    def reserve_artwork(self, actor: User, artwork_id: str) -> Artwork:
        return self._transition(actor, artwork_id, ArtworkStatus.AVAILABLE, ArtworkStatus.RESERVED)

    def release_artwork(self, actor: User, artwork_id: str) -> Artwork:
        return self._transition(actor, artwork_id, ArtworkStatus.RESERVED, ArtworkStatus.AVAILABLE)

    # Generation

    async def restore_missing_image(self, artwork_id: str) -> Artwork:
        """Generate an image for an artwork stored without one. Unchanged if generation fails."""
        artwork = self.get_artwork(artwork_id)
        if artwork.image_url or self.generation is None:
            return artwork
        generated = await self.generation.illustrate(artwork.title, artwork.category, artwork.tags)
        if not generated:
            logger.warning("Could not restore image for artwork %s", artwork_id)
            return artwork
        # re-read: the collection may have changed while generating
        artworks = self.store.read_artworks(strict=True)
        current = self._find(artworks, artwork_id)
        updated = current.model_copy(update={"image_url": self.optimize_image(generated)})
        self.store.write_artworks(self._replace(artworks, updated))
        return updated

    async def suggest_description(self, title: str, category: Category) -> str:
        if not (title or "").strip():
            raise ValidationError("Define a title first.")
        if self.generation is None:
            return FALLBACK_DESCRIPTION
        return await self.generation.describe(title.strip(), category)

    async def generate_image(self, title: str, category: Category, tags: Union[str, Iterable[str]] = "") -> Optional[str]:
        """Studio helper: a generated, optimized image for the form, or None."""
        if not (title or "").strip():
            raise ValidationError("AI requires a title for contextual generation.")
        if self.generation is None:
            return None
        generated = await self.generation.illustrate(title.strip(), category, normalize_tags(tags))
        return self.optimize_image(generated) if generated else None
