"""Base pydantic model and shared types for Onfleet resources.

The API uses camelCase field names; models expose snake_case attributes and
accept either form on input. Unknown fields are kept, so newer API fields
survive a decode/re-encode round trip.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class OnfleetModel(BaseModel):
    """Base class for all Onfleet resource and params models."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class MetadataType(str, Enum):
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"


class Metadata(OnfleetModel):
    """A single named metadata entry attached to a resource."""

    name: str = Field(..., description="Entry name, unique per resource")
    type: MetadataType | str = Field(..., description="Value type")
    value: Any = Field(None, description="Entry value")
    sub_type: str | None = Field(None, description="Element type for arrays")
    visibility: list[str] | None = Field(None, description="Who can see the entry")
