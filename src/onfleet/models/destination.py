"""Destination models."""

from pydantic import Field

from onfleet.models.base import Metadata, OnfleetModel


class Address(OnfleetModel):
    apartment: str | None = None
    city: str | None = None
    country: str | None = None
    name: str | None = None
    number: str | None = None
    postal_code: str | None = None
    state: str | None = None
    street: str | None = None
    unparsed: str | None = None


class Destination(OnfleetModel):
    """A delivery or pickup location."""

    id: str = Field(..., description="Destination ID")
    time_created: int | None = None
    time_last_modified: int | None = None
    address: Address | None = None
    location: list[float] = Field(default_factory=list, description="[longitude, latitude]")
    notes: str | None = None
    metadata: list[Metadata] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class DestinationCreateParams(OnfleetModel):
    address: Address
    location: list[float] | None = None
    notes: str | None = None
    metadata: list[Metadata] | None = None
