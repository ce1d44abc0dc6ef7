"""
Booking service.

Any authenticated user may book any place, including their own. The
booker is always the session identity, never a field from the body.
"""

from __future__ import annotations

import logging

from staybook.auth.session import Identity
from staybook.core.models import Booking, BookingCreate, BookingView
from staybook.errors import Conflict, NotFound
from staybook.services.places import PlaceService
from staybook.storage import Collections, StoreGateway

logger = logging.getLogger(__name__)


class BookingService:

    def __init__(
        self,
        store: StoreGateway,
        places: PlaceService,
        reject_overlapping: bool = False,
    ):
        self.store = store
        self.places = places
        self.reject_overlapping = reject_overlapping

    async def create(self, identity: Identity, data: BookingCreate) -> Booking:
        """Record a booking for the caller against an existing place."""
        await self.places.get(data.place)

        if self.reject_overlapping:
            await self._check_overlap(data)

        booking = Booking(
            place=data.place,
            user=identity.user_id,
            check_in=data.check_in,
            check_out=data.check_out,
            number_of_guests=data.number_of_guests,
            name=data.name,
            phone=data.phone,
            price=data.price,
        )
        await self.store.save(Collections.BOOKINGS, booking.id, booking.model_dump())

        logger.info(f"User {identity.user_id} booked place {booking.place} ({booking.id})")
        return booking

    async def _check_overlap(self, data: BookingCreate) -> None:
        docs = await self.store.query(Collections.BOOKINGS, {"place": data.place})
        for doc in docs:
            existing = Booking.model_validate(doc)
            if existing.overlaps(data.check_in, data.check_out):
                raise Conflict("Place is already booked for these dates")

    async def list_for_user(self, identity: Identity) -> list[BookingView]:
        """The caller's bookings, each with its place embedded when it still exists."""
        docs = await self.store.query(Collections.BOOKINGS, {"user": identity.user_id})
        views = []
        for doc in docs:
            booking = Booking.model_validate(doc)
            try:
                place = await self.places.get(booking.place)
            except NotFound:
                place = booking.place
            views.append(BookingView(**{**booking.model_dump(), "place": place}))
        return views
