"""Admin console routes: moderation of users, artworks and orders."""
from typing import List

from fastapi import APIRouter, Depends, Response, status

from artspace.api.deps import get_account_service, get_artwork_service, get_order_service, require_admin
from artspace.domain.accounts.models import User
from artspace.domain.accounts.services import AccountService
from artspace.domain.catalog.models import Artwork
from artspace.domain.catalog.services import ArtworkService
from artspace.domain.orders.models import Order
from artspace.domain.orders.services import OrderService

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/users", response_model=List[User])
async def list_users(accounts: AccountService = Depends(get_account_service)):
    return accounts.list_users()


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def suspend_user(user_id: str, accounts: AccountService = Depends(get_account_service)):
    """Suspend (remove) a user account."""
    accounts.remove_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/artworks", response_model=List[Artwork])
async def list_artworks(service: ArtworkService = Depends(get_artwork_service)):
    return service.list_artworks()


@router.delete("/artworks/{artwork_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_artwork(artwork_id: str, service: ArtworkService = Depends(get_artwork_service)):
    """Take down inappropriate content."""
    service.remove_artwork(artwork_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/orders", response_model=List[Order])
async def list_orders(service: OrderService = Depends(get_order_service)):
    return service.list_orders()


@router.get("/orders/unrecorded-sales", response_model=List[Artwork])
async def unrecorded_sales(service: OrderService = Depends(get_order_service)):
    """Sold artworks with no completed order, for manual reconciliation."""
    return service.find_unrecorded_sales()


@router.post("/orders/{order_id}/cancel", response_model=Order)
async def cancel_order(order_id: str, service: OrderService = Depends(get_order_service)):
    """Force-cancel an order."""
    return service.cancel_order(order_id)
