"""Destinations resource."""

from onfleet.models.destination import Destination, DestinationCreateParams
from onfleet.resources.base import MetadataResourceClient


class DestinationsClient(MetadataResourceClient[Destination]):
    """Client for /destinations."""

    resource_model = Destination

    def get(self, destination_id: str) -> Destination:
        return self._call("GET", self._url(destination_id), response_model=Destination)

    def create(self, params: DestinationCreateParams) -> Destination:
        return self._call("POST", self._url(), params, Destination)
