"""
Storage abstractions.

- MetadataStorage -> documents (users, places, bookings)
- ContentStorage  -> photo files
- StoreGateway    -> timeout-bounded access used by the services
"""

from staybook.storage.base import (
    ContentStorage,
    MetadataStorage,
    StorageProvider,
    Collections,
)
from staybook.storage.local import (
    InMemoryMetadataStorage,
    LocalContentStorage,
    create_local_storage,
)
from staybook.storage.gateway import StoreGateway

__all__ = [
    "ContentStorage",
    "MetadataStorage",
    "StorageProvider",
    "Collections",
    "InMemoryMetadataStorage",
    "LocalContentStorage",
    "create_local_storage",
    "StoreGateway",
]
