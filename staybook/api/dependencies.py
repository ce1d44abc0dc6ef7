"""
FastAPI dependencies for the services built at app startup.
"""

from __future__ import annotations

from fastapi import Request

from staybook.services import BookingService, PhotoService, PlaceService, UserService


def get_user_service(request: Request) -> UserService:
    return request.app.state.users


def get_place_service(request: Request) -> PlaceService:
    return request.app.state.places


def get_booking_service(request: Request) -> BookingService:
    return request.app.state.bookings


def get_photo_service(request: Request) -> PhotoService:
    return request.app.state.photos
