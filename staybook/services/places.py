"""
Place service - listing and owner-only editing of properties.
"""

from __future__ import annotations

import logging

from staybook.auth.guard import ensure_owner
from staybook.auth.session import Identity
from staybook.core.models import Place, PlaceInput, PlaceUpdate
from staybook.errors import NotFound
from staybook.storage import Collections, StoreGateway

logger = logging.getLogger(__name__)


class PlaceService:

    def __init__(self, store: StoreGateway):
        self.store = store

    async def create(self, identity: Identity, data: PlaceInput) -> Place:
        """Create a place owned by the caller."""
        place = Place.create(owner=identity.user_id, data=data)
        await self.store.save(Collections.PLACES, place.id, place.model_dump())
        logger.info(f"User {identity.user_id} created place {place.id}")
        return place

    async def get(self, place_id: str) -> Place:
        doc = await self.store.get(Collections.PLACES, place_id)
        if not doc:
            raise NotFound("Place not found")
        return Place.model_validate(doc)

    async def list_all(self) -> list[Place]:
        docs = await self.store.query(Collections.PLACES)
        return [Place.model_validate(d) for d in docs]

    async def list_owned(self, identity: Identity) -> list[Place]:
        docs = await self.store.query(Collections.PLACES, {"owner": identity.user_id})
        return [Place.model_validate(d) for d in docs]

    async def update(self, identity: Identity, data: PlaceUpdate) -> Place:
        """
        Replace a place's descriptive fields.

        Order matters: load, authorize, then write. Nothing is written
        unless the caller owns the place.
        """
        place = await self.get(data.id)
        ensure_owner(place.owner, identity, resource="place")

        updates = data.model_dump(exclude={"id"})
        updated = place.model_copy(update=updates)
        await self.store.update(Collections.PLACES, place.id, updated.descriptive_fields())

        logger.info(f"User {identity.user_id} updated place {place.id}")
        return updated
