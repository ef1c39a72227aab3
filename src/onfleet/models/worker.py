"""Worker (driver) models."""

from typing import Any

from pydantic import Field

from onfleet.models.base import Metadata, OnfleetModel


class Vehicle(OnfleetModel):
    type: str = Field(..., description="CAR, MOTORCYCLE, BICYCLE or TRUCK")
    description: str | None = None
    license_plate: str | None = None
    color: str | None = None


class Worker(OnfleetModel):
    """A driver able to complete tasks."""

    id: str = Field(..., description="Worker ID")
    organization: str | None = None
    time_created: int | None = None
    time_last_modified: int | None = None
    time_last_seen: int | None = None
    name: str = ""
    phone: str = ""
    on_duty: bool = False
    active_task: str | None = None
    tasks: list[str] = Field(default_factory=list)
    teams: list[str] = Field(default_factory=list)
    capacity: float | None = None
    display_name: str | None = None
    account_status: str | None = None
    location: list[float] | None = None
    vehicle: Vehicle | None = None
    metadata: list[Metadata] = Field(default_factory=list)


class WorkerCreateParams(OnfleetModel):
    name: str
    phone: str
    teams: list[str]
    vehicle: Vehicle | None = None
    capacity: float | None = None
    display_name: str | None = None
    metadata: list[Metadata] | None = None


class WorkerUpdateParams(OnfleetModel):
    name: str | None = None
    teams: list[str] | None = None
    vehicle: Vehicle | None = None
    capacity: float | None = None
    display_name: str | None = None
    metadata: list[Metadata] | None = None


class WorkerListQueryParams(OnfleetModel):
    filter: str | None = Field(None, description="Comma-separated fields to return")
    teams: str | None = Field(None, description="Comma-separated team IDs")
    states: str | None = Field(None, description="Comma-separated worker states")
    phones: str | None = Field(None, description="Comma-separated phone numbers")

    def to_query(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
