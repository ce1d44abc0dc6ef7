"""
Shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from staybook.api.app import create_app
from staybook.config import Settings
from staybook.services import BookingService, PlaceService, UserService
from staybook.storage import InMemoryMetadataStorage, StoreGateway

SECRET = "test-signing-secret-0123456789abcdef"
FAST_ITERATIONS = 1_000


@pytest.fixture
def settings(tmp_path):
    """Settings isolated from the environment, with cheap hashing."""
    return Settings(
        _env_file=None,
        jwt_secret_key=SECRET,
        upload_dir=str(tmp_path / "uploads"),
        password_hash_iterations=FAST_ITERATIONS,
    )


@pytest.fixture
def store():
    return StoreGateway(InMemoryMetadataStorage(), timeout=1.0)


@pytest.fixture
def user_service(store):
    return UserService(store, hash_iterations=FAST_ITERATIONS)


@pytest.fixture
def place_service(store):
    return PlaceService(store)


@pytest.fixture
def booking_service(store, place_service):
    return BookingService(store, place_service)


@pytest.fixture
def app(settings):
    return create_app(settings=settings)


@pytest.fixture
def client(app):
    """One browser: keeps its own cookie jar."""
    return TestClient(app)


@pytest.fixture
def other_client(app):
    """A second, independent browser against the same app."""
    return TestClient(app)
