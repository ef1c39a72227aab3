"""Recipient models."""

from enum import Enum

from pydantic import Field

from onfleet.models.base import Metadata, OnfleetModel


class RecipientQueryKey(str, Enum):
    """Field used to look a recipient up by value."""

    NAME = "name"
    PHONE = "phone"


class Recipient(OnfleetModel):
    """A person receiving a delivery."""

    id: str = Field(..., description="Recipient ID")
    organization: str | None = None
    time_created: int | None = None
    time_last_modified: int | None = None
    name: str = ""
    phone: str = ""
    notes: str | None = None
    skip_sms_notifications: bool = Field(False, alias="skipSMSNotifications")
    metadata: list[Metadata] = Field(default_factory=list)


class RecipientCreateParams(OnfleetModel):
    name: str
    phone: str
    notes: str | None = None
    skip_sms_notifications: bool | None = Field(None, alias="skipSMSNotifications")
    skip_phone_number_validation: bool | None = None
    metadata: list[Metadata] | None = None


class RecipientUpdateParams(OnfleetModel):
    name: str | None = None
    notes: str | None = None
    skip_sms_notifications: bool | None = Field(None, alias="skipSMSNotifications")
    metadata: list[Metadata] | None = None
