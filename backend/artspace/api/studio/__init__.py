"""Studio API routes."""
from fastapi import APIRouter

from artspace.api.studio import routes_studio

router = APIRouter()

router.include_router(routes_studio.router, prefix="/studio", tags=["studio"])
