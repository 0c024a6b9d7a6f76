"""Checkout API routes."""
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from artspace.api.deps import get_current_user, get_order_service
from artspace.domain.accounts.models import PaymentMethod, User
from artspace.domain.orders.models import Order
from artspace.domain.orders.services import OrderService

router = APIRouter()


class PurchaseRequest(BaseModel):
    """Purchase request."""
    payment_method: PaymentMethod


@router.post("/{artwork_id}", response_model=Order, status_code=status.HTTP_201_CREATED)
async def purchase(
    artwork_id: str,
    request: PurchaseRequest,
    current_user: Optional[User] = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    """Buy an artwork. Anonymous callers get 401 and should sign in first."""
    return await service.purchase(artwork_id, current_user, request.payment_method)
