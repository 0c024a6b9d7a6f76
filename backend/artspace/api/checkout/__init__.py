"""Checkout API routes."""
from fastapi import APIRouter

from artspace.api.checkout import routes_checkout

router = APIRouter()

router.include_router(routes_checkout.router, prefix="/checkout", tags=["checkout"])
