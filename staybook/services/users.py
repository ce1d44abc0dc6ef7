"""
User service - registration, login, profile lookup.
"""

from __future__ import annotations

import asyncio
import logging

from staybook.auth.passwords import hash_password, verify_password
from staybook.core.models import UserCreate, UserInDB
from staybook.errors import Conflict, NotFound, Unauthorized
from staybook.storage import Collections, StoreGateway

logger = logging.getLogger(__name__)

LOGIN_FAILED = "Invalid email or password"


class UserService:
    """Credential store operations on top of the metadata store."""

    def __init__(self, store: StoreGateway, hash_iterations: int = 100_000):
        self.store = store
        self.hash_iterations = hash_iterations
        # Compared against when the email is unknown so both failure paths cost the same
        self._dummy_hash = hash_password("", salt="0" * 64, iterations=hash_iterations)

    async def get_by_email(self, email: str) -> UserInDB | None:
        docs = await self.store.query(Collections.USERS, {"email": email.strip().lower()}, limit=1)
        return UserInDB.model_validate(docs[0]) if docs else None

    async def get(self, user_id: str) -> UserInDB:
        doc = await self.store.get(Collections.USERS, user_id)
        if not doc:
            raise NotFound("User not found")
        return UserInDB.model_validate(doc)

    async def register(self, data: UserCreate) -> UserInDB:
        """Create a user. Raises Conflict if the email is taken."""
        email = str(data.email).strip().lower()
        if await self.get_by_email(email):
            raise Conflict("Email already registered")

        password_hash = await asyncio.to_thread(
            hash_password, data.password, iterations=self.hash_iterations
        )
        user = UserInDB(name=data.name, email=email, password_hash=password_hash)
        await self.store.save(Collections.USERS, user.id, user.model_dump())

        logger.info(f"Registered user {user.id}")
        return user

    async def authenticate(self, email: str, password: str) -> UserInDB:
        """
        Check credentials.

        Unknown email and wrong password raise the same Unauthorized, so
        callers cannot tell which accounts exist.
        """
        user = await self.get_by_email(email)
        stored_hash = user.password_hash if user else self._dummy_hash

        ok = await asyncio.to_thread(
            verify_password, password, stored_hash, iterations=self.hash_iterations
        )
        if not user or not ok:
            logger.info("Login failed")
            raise Unauthorized(LOGIN_FAILED)

        logger.info(f"User {user.id} logged in")
        return user
