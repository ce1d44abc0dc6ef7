"""
Core data models for the rental marketplace.

Users own places, users book places. All links are plain ids; nothing
cascades. Records are stored under their snake_case field names and sent to
clients in the front end's camelCase (``maxGuests``, ``checkIn``).
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator
from pydantic.alias_generators import to_camel

from staybook.core.utils import generate_id, utc_now


# =============================================================================
# Users
# =============================================================================


class UserCreate(BaseModel):
    """User registration data."""
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6, max_length=256)


class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserInDB(BaseModel):
    """User stored in the credential store."""
    id: str = Field(default_factory=lambda: generate_id("user"))
    name: str
    email: str
    password_hash: str
    created_at: datetime = Field(default_factory=utc_now)


class UserResponse(BaseModel):
    """User data returned to clients. Has no password field by construction."""
    id: str
    name: str
    email: str

    @classmethod
    def from_user(cls, user: UserInDB) -> UserResponse:
        return cls(id=user.id, name=user.name, email=user.email)


# =============================================================================
# Places
# =============================================================================


class PlaceInput(BaseModel):
    """Descriptive place fields as sent by the client."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    address: str = ""
    photos: list[str] = Field(default_factory=list, alias="addedPhotos")
    description: str = ""
    perks: list[str] = Field(default_factory=list)
    extra_info: str = Field(default="", alias="extraInfo")
    check_in: int | str | None = Field(default=None, alias="checkIn")
    check_out: int | str | None = Field(default=None, alias="checkOut")
    max_guests: int | None = Field(default=None, alias="maxGuests", ge=1)
    price: float | None = Field(default=None, ge=0)


class PlaceUpdate(PlaceInput):
    """Place update; the owner is never part of the payload."""
    id: str


class Place(BaseModel):
    """A listed property."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=lambda: generate_id("place"))
    owner: str
    title: str = ""
    address: str = ""
    photos: list[str] = Field(default_factory=list)
    description: str = ""
    perks: list[str] = Field(default_factory=list)
    extra_info: str = ""
    check_in: int | str | None = None
    check_out: int | str | None = None
    max_guests: int | None = None
    price: float | None = None

    @classmethod
    def create(cls, owner: str, data: PlaceInput) -> Place:
        return cls(owner=owner, **data.model_dump())

    def descriptive_fields(self) -> dict:
        """Everything except the identity and ownership fields."""
        return self.model_dump(exclude={"id", "owner"})


# =============================================================================
# Bookings
# =============================================================================


class BookingCreate(BaseModel):
    """Booking request. The booker comes from the session, not the body."""

    model_config = ConfigDict(populate_by_name=True)

    place: str
    check_in: date = Field(alias="checkIn")
    check_out: date = Field(alias="checkOut")
    number_of_guests: int = Field(default=1, alias="numberOfGuests", ge=1)
    name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    price: float | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _check_dates(self) -> BookingCreate:
        if self.check_out <= self.check_in:
            raise ValueError("checkOut must be after checkIn")
        return self


class Booking(BaseModel):
    """A recorded stay."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=lambda: generate_id("booking"))
    place: str
    user: str
    check_in: date
    check_out: date
    number_of_guests: int = 1
    name: str
    phone: str
    price: float | None = None
    created_at: datetime = Field(default_factory=utc_now)

    def overlaps(self, check_in: date, check_out: date) -> bool:
        """Half-open [check_in, check_out) intersection."""
        return self.check_in < check_out and check_in < self.check_out


class BookingView(Booking):
    """Booking with its place embedded, for the booker's listing."""
    place: Place | str
