"""
Core module - data models and shared helpers.
"""

from staybook.core.models import (
    UserCreate,
    UserInDB,
    UserResponse,
    LoginRequest,
    Place,
    PlaceInput,
    PlaceUpdate,
    Booking,
    BookingCreate,
    BookingView,
)
from staybook.core.utils import generate_id, utc_now, epoch_millis

__all__ = [
    # Users
    "UserCreate",
    "UserInDB",
    "UserResponse",
    "LoginRequest",
    # Places
    "Place",
    "PlaceInput",
    "PlaceUpdate",
    # Bookings
    "Booking",
    "BookingCreate",
    "BookingView",
    # Utils
    "generate_id",
    "utc_now",
    "epoch_millis",
]
