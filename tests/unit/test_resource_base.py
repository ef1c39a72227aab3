"""Unit tests for the resource facade base classes."""

import pytest

from onfleet.api.errors import APIError, ConfigError, ErrorKind
from onfleet.api.rate_limiter import TokenBucket
from onfleet.api.retry import RetryPolicy
from onfleet.models import Metadata, Worker
from onfleet.resources import WorkersClient, metadata_pop_payload, metadata_set_payload
from onfleet.testing import MockResponse, MockTransport
from tests.fixtures.constants import TEST_API_KEY, WORKERS_URL
from tests.fixtures.samples import sample_error_response, sample_worker


@pytest.fixture
def workers(mock_transport: MockTransport, limiter: TokenBucket, no_retry: RetryPolicy) -> WorkersClient:
    return WorkersClient.plug(TEST_API_KEY, limiter, WORKERS_URL, mock_transport, retry_policy=no_retry)


class TestPlug:
    """Test suite for facade construction."""

    def test_plug_binds_dependencies(self, mock_transport: MockTransport, limiter: TokenBucket) -> None:
        """Test plug wires key, limiter, URL and transport into the facade."""
        client = WorkersClient.plug(TEST_API_KEY, limiter, WORKERS_URL + "/", mock_transport, timeout=5.0)

        assert isinstance(client, WorkersClient)
        assert client.api_key == TEST_API_KEY
        assert client.limiter is limiter
        assert client.transport is mock_transport
        assert client.url == WORKERS_URL
        assert client.timeout == 5.0

    def test_plug_without_limiter_creates_private_one(self, mock_transport: MockTransport) -> None:
        """Test standalone facades get their own limiter."""
        client = WorkersClient.plug(TEST_API_KEY, None, WORKERS_URL, mock_transport)

        assert isinstance(client.limiter, TokenBucket)
        assert client.limiter.capacity == 20

    def test_empty_api_key_rejected(self, mock_transport: MockTransport) -> None:
        """Test a facade cannot be built without credentials."""
        with pytest.raises(ConfigError, match="API key"):
            WorkersClient.plug("", None, WORKERS_URL, mock_transport)

    def test_empty_url_rejected(self, mock_transport: MockTransport) -> None:
        """Test a facade cannot be built without a URL."""
        with pytest.raises(ConfigError, match="URL"):
            WorkersClient.plug(TEST_API_KEY, None, "", mock_transport)

    def test_url_segments_are_escaped(self, workers: WorkersClient) -> None:
        """Test path segments are escaped but '+' is kept."""
        assert workers._url("a b", "+1555") == f"{WORKERS_URL}/a%20b/+1555"
        assert workers._url() == WORKERS_URL


class TestMetadataPayloads:
    """Test suite for metadata delta payloads."""

    def test_set_payload_contains_only_given_entries(self) -> None:
        """Test the set delta names exactly the entries passed."""
        entry = {"name": "shift", "type": "string", "value": "am"}

        assert metadata_set_payload([entry]) == {"metadata": {"$set": [entry]}}

    def test_pop_payload_names_one_entry(self) -> None:
        """Test the pop delta removes exactly one entry by name."""
        assert metadata_pop_payload("shift") == {"metadata": {"$pop": [{"name": "shift"}]}}


class TestMetadataOperations:
    """Test suite for metadata set/pop on a facade."""

    def test_metadata_set_sends_minimal_delta(self, workers: WorkersClient, mock_transport: MockTransport) -> None:
        """Test set sends only the new entry, never the full collection."""
        mock_transport.add_response("/workers/worker_123", MockResponse(200, sample_worker()), method="PUT")

        worker = workers.metadata_set("worker_123", Metadata(name="shift", type="string", value="am"))

        assert isinstance(worker, Worker)
        request = mock_transport.assert_request_made("PUT", "/workers/worker_123")
        assert request.json() == {
            "metadata": {"$set": [{"name": "shift", "type": "string", "value": "am"}]}
        }
        mock_transport.assert_basic_auth(TEST_API_KEY)

    def test_metadata_set_sends_explicit_null_value(
        self, workers: WorkersClient, mock_transport: MockTransport
    ) -> None:
        """Test an entry set to None is sent with a null value."""
        mock_transport.add_response("/workers/worker_123", MockResponse(200, sample_worker()), method="PUT")

        workers.metadata_set("worker_123", Metadata(name="shift", type="string", value=None))

        request = mock_transport.assert_request_made("PUT", "/workers/worker_123")
        assert request.json() == {
            "metadata": {"$set": [{"name": "shift", "type": "string", "value": None}]}
        }

    def test_metadata_set_multiple_entries(self, workers: WorkersClient, mock_transport: MockTransport) -> None:
        """Test several entries can be set in one delta."""
        mock_transport.add_response("/workers/worker_123", MockResponse(200, sample_worker()))

        workers.metadata_set(
            "worker_123",
            Metadata(name="shift", type="string", value="am"),
            {"name": "rating", "type": "number", "value": 4.5},
        )

        assert mock_transport.last_request is not None
        entries = mock_transport.last_request.json()["metadata"]["$set"]
        assert [e["name"] for e in entries] == ["shift", "rating"]

    def test_metadata_set_requires_entries(self, workers: WorkersClient, mock_transport: MockTransport) -> None:
        """Test an empty set is rejected before any request."""
        with pytest.raises(ValueError, match="metadata entry"):
            workers.metadata_set("worker_123")

        assert mock_transport.call_count() == 0

    def test_metadata_pop_sends_name_only(self, workers: WorkersClient, mock_transport: MockTransport) -> None:
        """Test pop sends a delta naming only the removed entry."""
        mock_transport.add_response("/workers/worker_123", MockResponse(200, sample_worker()))

        workers.metadata_pop("worker_123", "shift")

        request = mock_transport.assert_request_made("PUT", "/workers/worker_123")
        assert request.json() == {"metadata": {"$pop": [{"name": "shift"}]}}

    def test_metadata_pop_requires_name(self, workers: WorkersClient) -> None:
        """Test pop needs an entry name."""
        with pytest.raises(ValueError, match="name"):
            workers.metadata_pop("worker_123", "")

    def test_list_with_metadata_query(self, workers: WorkersClient, mock_transport: MockTransport) -> None:
        """Test metadata queries POST the entries and decode the matches."""
        mock_transport.add_response("/workers/metadata", MockResponse(200, [sample_worker()]))

        result = workers.list_with_metadata_query([Metadata(name="shift", type="string", value="am")])

        assert [w.id for w in result] == ["worker_123"]
        request = mock_transport.assert_request_made("POST", "/workers/metadata")
        assert request.json() == [{"name": "shift", "type": "string", "value": "am"}]

    def test_metadata_set_error_propagates(self, workers: WorkersClient, mock_transport: MockTransport) -> None:
        """Test API errors surface from metadata operations."""
        mock_transport.add_response("/workers/missing", MockResponse(404, sample_error_response()))

        with pytest.raises(APIError) as exc_info:
            workers.metadata_set("missing", Metadata(name="shift", type="string", value="am"))

        assert exc_info.value.kind is ErrorKind.NOT_FOUND
