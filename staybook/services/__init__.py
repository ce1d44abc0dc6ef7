"""
Services - the operations behind each endpoint.

Services take an already-resolved Identity; they never read cookies.
"""

from staybook.services.users import UserService
from staybook.services.places import PlaceService
from staybook.services.bookings import BookingService
from staybook.services.photos import PhotoService, safe_filename

__all__ = [
    "UserService",
    "PlaceService",
    "BookingService",
    "PhotoService",
    "safe_filename",
]
