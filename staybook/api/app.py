"""
FastAPI application for the Staybook rental marketplace.

Build with ``create_app()``; ``uvicorn --factory staybook.api.app:create_app``
serves it.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from staybook import __version__
from staybook.api.dependencies import (
    get_booking_service,
    get_photo_service,
    get_place_service,
)
from staybook.auth.routes import router as auth_router
from staybook.auth.session import Identity, require_identity
from staybook.config import Settings, get_settings
from staybook.core.models import (
    Booking,
    BookingCreate,
    BookingView,
    Place,
    PlaceInput,
    PlaceUpdate,
)
from staybook.errors import StaybookError, ValidationFailure
from staybook.integrations.sentry import init_sentry
from staybook.services import BookingService, PhotoService, PlaceService, UserService
from staybook.storage import StorageProvider, StoreGateway, create_local_storage

logger = logging.getLogger(__name__)

MAX_UPLOAD_FILES = 100


# =============================================================================
# Request Models
# =============================================================================


class UploadByLinkRequest(BaseModel):
    link: str


# =============================================================================
# Error Rendering
# =============================================================================


async def staybook_error_handler(request: Request, exc: StaybookError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.kind}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Field locations and messages only; submitted values (passwords) are dropped
    errors = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    body = ValidationFailure().to_dict()
    body["errors"] = errors
    return JSONResponse(status_code=ValidationFailure.status_code, content=body)


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start optional integrations and log lifecycle."""
    settings: Settings = app.state.settings

    if init_sentry(settings):
        logger.info("Sentry error tracking enabled")

    logger.info(f"Staybook API starting in {settings.environment} mode")

    yield

    logger.info("Staybook API shutting down")


# =============================================================================
# App Factory
# =============================================================================


def create_app(
    settings: Settings | None = None,
    storage: StorageProvider | None = None,
) -> FastAPI:
    """
    Build the application.

    Settings are read once here; services and the signing secret are fixed
    for the lifetime of the app.
    """
    settings = settings or get_settings()
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    storage = storage or create_local_storage(settings.upload_dir)

    app = FastAPI(
        title="Staybook API",
        description="Short-term rental marketplace: places, bookings, sessions",
        version=__version__,
        lifespan=lifespan,
    )

    store = StoreGateway(storage.metadata, timeout=settings.store_timeout_seconds)
    places = PlaceService(store)

    app.state.settings = settings
    app.state.storage = storage
    app.state.users = UserService(store, hash_iterations=settings.password_hash_iterations)
    app.state.places = places
    app.state.bookings = BookingService(
        store, places, reject_overlapping=settings.reject_overlapping_bookings
    )
    app.state.photos = PhotoService(
        storage.content,
        max_bytes=settings.upload_max_bytes,
        download_timeout=settings.download_timeout_seconds,
    )

    # Every get_settings dependency sees this app's settings
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StaybookError, staybook_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(auth_router)
    _register_routes(app)

    app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")

    return app


# =============================================================================
# Routes
# =============================================================================


def _register_routes(app: FastAPI) -> None:

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "staybook-api"}

    @app.get("/api/test")
    async def test():
        return "Test OK"

    # -------------------------------------------------------------------------
    # Uploads
    # -------------------------------------------------------------------------

    @app.post("/api/upload-by-link")
    async def upload_by_link(
        data: UploadByLinkRequest,
        identity: Identity = Depends(require_identity),
        photo_service: PhotoService = Depends(get_photo_service),
    ) -> str:
        """Download an image from a URL; returns its /uploads path."""
        return await photo_service.upload_by_link(data.link)

    @app.post("/api/upload")
    async def upload(
        photos: list[UploadFile] = File(...),
        identity: Identity = Depends(require_identity),
        photo_service: PhotoService = Depends(get_photo_service),
    ) -> list[str]:
        """Store uploaded images; returns their /uploads paths in order."""
        if len(photos) > MAX_UPLOAD_FILES:
            raise ValidationFailure(f"At most {MAX_UPLOAD_FILES} photos per upload")
        payload = [(f.filename or "photo", await f.read(), f.content_type) for f in photos]
        return await photo_service.upload_files(payload)

    # -------------------------------------------------------------------------
    # Places
    # -------------------------------------------------------------------------

    @app.get("/api/user-places", response_model=list[Place])
    async def list_user_places(
        identity: Identity = Depends(require_identity),
        places: PlaceService = Depends(get_place_service),
    ):
        """Places owned by the caller."""
        return await places.list_owned(identity)

    @app.get("/api/places", response_model=list[Place])
    async def list_places(places: PlaceService = Depends(get_place_service)):
        """All places. Public."""
        return await places.list_all()

    @app.get("/api/places/{place_id}", response_model=Place)
    async def get_place(place_id: str, places: PlaceService = Depends(get_place_service)):
        """A single place. Public."""
        return await places.get(place_id)

    @app.post("/api/places", response_model=Place)
    async def create_place(
        data: PlaceInput,
        identity: Identity = Depends(require_identity),
        places: PlaceService = Depends(get_place_service),
    ):
        """Create a place owned by the caller."""
        return await places.create(identity, data)

    @app.put("/api/places")
    async def update_place(
        data: PlaceUpdate,
        identity: Identity = Depends(require_identity),
        places: PlaceService = Depends(get_place_service),
    ):
        """Update a place. Owner only."""
        await places.update(identity, data)
        return "ok"

    # -------------------------------------------------------------------------
    # Bookings
    # -------------------------------------------------------------------------

    @app.post("/api/bookings", response_model=Booking)
    async def create_booking(
        data: BookingCreate,
        identity: Identity = Depends(require_identity),
        bookings: BookingService = Depends(get_booking_service),
    ):
        """Book a place as the caller."""
        return await bookings.create(identity, data)

    @app.get("/api/bookings", response_model=list[BookingView])
    async def list_bookings(
        identity: Identity = Depends(require_identity),
        bookings: BookingService = Depends(get_booking_service),
    ):
        """The caller's bookings with places embedded."""
        return await bookings.list_for_user(identity)
