"""API dependencies."""
from typing import Optional

from fastapi import Depends, Request

from artspace.domain.accounts.models import User, UserRole
from artspace.domain.accounts.services import AccountService
from artspace.domain.catalog.services import ArtworkService
from artspace.domain.common.errors import AuthenticationRequiredError, AuthorizationError
from artspace.domain.orders.services import OrderService
from artspace.infra.storage.store import MarketStore
from artspace.services.generation_service import GenerationService
from artspace.settings import settings


def get_store(request: Request) -> MarketStore:
    """The process-wide store created by the application lifespan."""
    return request.app.state.store


def get_generation_service() -> GenerationService:
    """Build generation service from settings."""
    return GenerationService(
        gemini_api_key=settings.gemini_api_key or None,
        default_text_model=settings.llm_default_text_model or None,
        backup_text_model=settings.llm_backup_text_model or None,
        default_image_model=settings.llm_default_image_model or None,
        timeout_s=settings.generation_timeout_s,
    )


def get_account_service(store: MarketStore = Depends(get_store)) -> AccountService:
    return AccountService(store)


def get_artwork_service(
    store: MarketStore = Depends(get_store),
    generation: GenerationService = Depends(get_generation_service),
) -> ArtworkService:
    return ArtworkService(
        store,
        generation=generation,
        image_max_width=settings.image_max_width,
        image_quality=settings.image_jpeg_quality,
    )


def get_order_service(store: MarketStore = Depends(get_store)) -> OrderService:
    return OrderService(
        store,
        processing_delay_s=settings.checkout_processing_delay_s,
        reopen_artwork_on_cancel=settings.reopen_artwork_on_cancel,
    )


def get_current_user(accounts: AccountService = Depends(get_account_service)) -> Optional[User]:
    """Session user or None (no credentials: the session slot is the login)."""
    return accounts.current_user()


def require_user(user: Optional[User] = Depends(get_current_user)) -> User:
    if user is None:
        raise AuthenticationRequiredError()
    return user


def require_artist(user: User = Depends(require_user)) -> User:
    if user.role != UserRole.ARTIST:
        raise AuthorizationError("Artist account required")
    return user


def require_admin(user: User = Depends(require_user)) -> User:
    if user.role != UserRole.ADMIN:
        raise AuthorizationError("Admin account required")
    return user
