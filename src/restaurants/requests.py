"""Pydantic request models accepted by the restaurant and review services.

These are the caller-facing contract; the services translate them into
Protean commands (internal domain concepts).
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class User(BaseModel):
    """The authenticated caller. Only ``id`` takes part in authorization."""

    id: str = Field(min_length=1)
    username: str | None = None


class AddressData(BaseModel):
    street_number: str = Field(min_length=1, max_length=20)
    street_name: str = Field(min_length=1, max_length=255)
    unit: str | None = Field(default=None, max_length=50)
    city: str = Field(min_length=1, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    postal_code: str = Field(min_length=1, max_length=20)
    country: str = Field(min_length=1, max_length=100)


class OperatingHoursData(BaseModel):
    """Time range per weekday, ``"HH:MM-HH:MM"``; omitted days are closed."""

    monday: str | None = None
    tuesday: str | None = None
    wednesday: str | None = None
    thursday: str | None = None
    friday: str | None = None
    saturday: str | None = None
    sunday: str | None = None


class RestaurantRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    cuisine_type: str = Field(min_length=1, max_length=100)
    contact_information: str = Field(min_length=1, max_length=255)
    address: AddressData
    operating_hours: OperatingHoursData | None = None
    photo_ids: list[str] = Field(default_factory=list)


class ReviewRequest(BaseModel):
    content: str = Field(min_length=1)
    rating: int = Field(ge=1, le=5)
    photo_ids: list[str] = Field(default_factory=list)
