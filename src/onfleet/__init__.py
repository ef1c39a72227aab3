"""Python SDK for the Onfleet delivery-logistics API."""

from onfleet.api.errors import APIError, ConfigError, ErrorKind
from onfleet.client import InitParams, Onfleet
from onfleet.models.base import Metadata

__version__ = "0.1.0"

__all__ = [
    "Onfleet",
    "InitParams",
    "APIError",
    "ConfigError",
    "ErrorKind",
    "Metadata",
]
