"""Administrator models."""

from pydantic import Field

from onfleet.models.base import Metadata, OnfleetModel


class Admin(OnfleetModel):
    """An organization administrator or dispatcher."""

    id: str = Field(..., description="Admin ID")
    organization: str | None = None
    time_created: int | None = None
    time_last_modified: int | None = None
    email: str = ""
    name: str = ""
    phone: str | None = None
    type: str = Field("standard", description="'super' or 'standard'")
    is_account_owner: bool = False
    is_active: bool = False
    is_read_only: bool = False
    teams: list[str] = Field(default_factory=list)
    metadata: list[Metadata] = Field(default_factory=list)


class AdminCreateParams(OnfleetModel):
    email: str
    name: str
    phone: str | None = None
    is_read_only: bool | None = None
    type: str | None = None
    metadata: list[Metadata] | None = None


class AdminUpdateParams(OnfleetModel):
    email: str | None = None
    name: str | None = None
    phone: str | None = None
    is_read_only: bool | None = None
    metadata: list[Metadata] | None = None
