"""Unit tests for the administrators resource."""

import pytest

from onfleet.api.rate_limiter import TokenBucket
from onfleet.api.retry import RetryPolicy
from onfleet.models import AdminCreateParams, AdminUpdateParams, Metadata
from onfleet.resources import AdminsClient
from onfleet.testing import MockResponse, MockTransport
from tests.fixtures.constants import ADMINS_URL, TEST_API_KEY
from tests.fixtures.samples import sample_admin


@pytest.fixture
def admins(mock_transport: MockTransport, limiter: TokenBucket, no_retry: RetryPolicy) -> AdminsClient:
    return AdminsClient.plug(TEST_API_KEY, limiter, ADMINS_URL, mock_transport, retry_policy=no_retry)


class TestAdminsClient:
    """Test suite for AdminsClient."""

    def test_list(self, admins: AdminsClient, mock_transport: MockTransport) -> None:
        """Test listing administrators."""
        mock_transport.add_response("/admins", MockResponse(200, [sample_admin()]))

        result = admins.list()

        assert len(result) == 1
        assert result[0].email == "admin@example.com"
        assert result[0].is_active is True
        mock_transport.assert_basic_auth(TEST_API_KEY)

    def test_create(self, admins: AdminsClient, mock_transport: MockTransport) -> None:
        """Test creating an administrator."""
        mock_transport.add_response("/admins", MockResponse(200, sample_admin()), method="POST")

        admin = admins.create(AdminCreateParams(email="admin@example.com", name="John Admin", is_read_only=False))

        assert admin.id == "admin_123"
        request = mock_transport.assert_request_made("POST", "/admins")
        assert request.json() == {"email": "admin@example.com", "name": "John Admin", "isReadOnly": False}

    def test_update(self, admins: AdminsClient, mock_transport: MockTransport) -> None:
        """Test updating an administrator."""
        mock_transport.add_response("/admins/admin_123", MockResponse(200, sample_admin(name="Jane Admin")))

        admin = admins.update("admin_123", AdminUpdateParams(name="Jane Admin"))

        assert admin.name == "Jane Admin"
        mock_transport.assert_request_made("PUT", "/admins/admin_123")

    def test_delete(self, admins: AdminsClient, mock_transport: MockTransport) -> None:
        """Test deleting an administrator."""
        mock_transport.add_response("/admins/admin_123", MockResponse(200))

        admins.delete("admin_123")

        mock_transport.assert_request_made("DELETE", "/admins/admin_123")

    def test_metadata_pop(self, admins: AdminsClient, mock_transport: MockTransport) -> None:
        """Test removing an administrator's metadata entry."""
        mock_transport.add_response("/admins/admin_123", MockResponse(200, sample_admin()))

        admin = admins.metadata_pop("admin_123", "department")

        assert admin.metadata == []
        request = mock_transport.assert_request_made("PUT", "/admins/admin_123")
        assert request.json() == {"metadata": {"$pop": [{"name": "department"}]}}

    def test_metadata_set(self, admins: AdminsClient, mock_transport: MockTransport) -> None:
        """Test setting an administrator's metadata entry."""
        stored = [{"name": "department", "type": "string", "value": "ops"}]
        mock_transport.add_response("/admins/admin_123", MockResponse(200, sample_admin(metadata=stored)))

        admin = admins.metadata_set("admin_123", Metadata(name="department", type="string", value="ops"))

        assert admin.metadata[0].value == "ops"
