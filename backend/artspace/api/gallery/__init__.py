"""Gallery API routes."""
from fastapi import APIRouter

from artspace.api.gallery import routes_gallery

router = APIRouter()

router.include_router(routes_gallery.router, prefix="/gallery", tags=["gallery"])
