"""Resource facades for the Onfleet API."""

from onfleet.resources.admins import AdminsClient
from onfleet.resources.base import (
    MetadataResourceClient,
    ResourceClient,
    metadata_pop_payload,
    metadata_set_payload,
)
from onfleet.resources.destinations import DestinationsClient
from onfleet.resources.recipients import RecipientsClient
from onfleet.resources.tasks import TasksClient
from onfleet.resources.teams import TeamsClient
from onfleet.resources.workers import WorkersClient

__all__ = [
    "ResourceClient",
    "MetadataResourceClient",
    "metadata_set_payload",
    "metadata_pop_payload",
    "TasksClient",
    "WorkersClient",
    "TeamsClient",
    "AdminsClient",
    "RecipientsClient",
    "DestinationsClient",
]
