"""Main FastAPI application."""
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from artspace.api.admin import router as admin_router
from artspace.api.auth import router as auth_router
from artspace.api.checkout import router as checkout_router
from artspace.api.gallery import router as gallery_router
from artspace.api.studio import router as studio_router
from artspace.domain.common.errors import (
    AuthenticationRequiredError,
    AuthorizationError,
    ConflictError,
    DataIntegrityError,
    DomainError,
    NotFoundError,
    StorageQuotaError,
    ValidationError,
)
from artspace.infra.storage.store import MarketStore, create_market_store
from artspace.settings import settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

_ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AuthenticationRequiredError: status.HTTP_401_UNAUTHORIZED,
    AuthorizationError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    StorageQuotaError: status.HTTP_507_INSUFFICIENT_STORAGE,
    DataIntegrityError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: DomainError) -> int:
    for error_type, code in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    owns_store = getattr(app.state, "store", None) is None
    if owns_store:
        store = create_market_store(
            settings.database_url,
            quota_bytes=settings.storage_quota_bytes,
            echo=settings.database_echo,
        )
        store.initialize(seed_demo_data=settings.seed_demo_data)
        app.state.store = store
        logger.info("Store ready at %s", settings.database_url)

    yield

    if owns_store:
        app.state.store.backend.engine.dispose()
        app.state.store = None


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all requests and responses."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        logger.info("[REQUEST] %s %s", request.method, request.url.path)
        logger.debug("   Query params: %s", dict(request.query_params))
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.info(
            "[RESPONSE] %s %s - %s (%.3fs)",
            request.method, request.url.path, response.status_code, process_time,
        )
        return response


def create_app(store: Optional[MarketStore] = None) -> FastAPI:
    """Build the application. A given store is used as-is and left open on shutdown."""
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=r".*",
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
        allow_headers=["*"],
        max_age=3600,
    )
    # Add logging middleware AFTER CORS (CORS must be first)
    app.add_middleware(LoggingMiddleware)

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError):
        code = status_for(exc)
        log = logger.error if code >= 500 else logger.warning
        log("[%s] %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
        return JSONResponse(status_code=code, content={"detail": str(exc)})

    prefix = settings.api_v1_prefix
    app.include_router(gallery_router, prefix=prefix)
    app.include_router(auth_router, prefix=prefix)
    app.include_router(checkout_router, prefix=prefix)
    app.include_router(studio_router, prefix=prefix)
    app.include_router(admin_router, prefix=prefix)

    @app.get("/health")
    async def health():
        return {"status": "ok", "version": settings.app_version}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("artspace.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
