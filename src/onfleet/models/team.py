"""Team models."""

from pydantic import Field

from onfleet.models.base import OnfleetModel


class Team(OnfleetModel):
    """A group of workers managed together."""

    id: str = Field(..., description="Team ID")
    name: str = ""
    time_created: int | None = None
    time_last_modified: int | None = None
    workers: list[str] = Field(default_factory=list)
    managers: list[str] = Field(default_factory=list)
    hub: str | None = None
    enable_self_assignment: bool | None = None


class TeamCreateParams(OnfleetModel):
    name: str
    workers: list[str] = Field(default_factory=list)
    managers: list[str] = Field(default_factory=list)
    hub: str | None = None
    enable_self_assignment: bool | None = None


class TeamUpdateParams(OnfleetModel):
    name: str | None = None
    workers: list[str] | None = None
    managers: list[str] | None = None
    hub: str | None = None
    enable_self_assignment: bool | None = None
