"""Recipients resource."""

from onfleet.models.recipient import (
    Recipient,
    RecipientCreateParams,
    RecipientQueryKey,
    RecipientUpdateParams,
)
from onfleet.resources.base import MetadataResourceClient


class RecipientsClient(MetadataResourceClient[Recipient]):
    """Client for /recipients."""

    resource_model = Recipient

    def get(self, recipient_id: str) -> Recipient:
        return self._call("GET", self._url(recipient_id), response_model=Recipient)

    def find(self, value: str, key: RecipientQueryKey | str = RecipientQueryKey.NAME) -> Recipient:
        """Look a recipient up by exact name or phone number.

        The value is path-escaped; a leading ``+`` on phone numbers is kept.
        """
        key = RecipientQueryKey(key)
        return self._call("GET", self._url(key.value, value), response_model=Recipient)

    def create(self, params: RecipientCreateParams) -> Recipient:
        return self._call("POST", self._url(), params, Recipient)

    def update(self, recipient_id: str, params: RecipientUpdateParams) -> Recipient:
        return self._call("PUT", self._url(recipient_id), params, Recipient)
