"""Base class for resource facades.

A facade binds an API key, the root client's rate limiter, the resource's
base URL and a transport, and forwards every operation to the shared
dispatcher. ``plug`` is the explicit construction entry point; tests pass a
``MockTransport`` there instead of the production transport.
"""

from typing import Any, Generic, Iterable, Mapping, TypeVar
from urllib.parse import quote

from onfleet.api.dispatcher import DEFAULT_TIMEOUT_SECONDS, call
from onfleet.api.errors import ConfigError
from onfleet.api.rate_limiter import TokenBucket
from onfleet.api.retry import RetryPolicy
from onfleet.api.transport import Transport
from onfleet.config.logging import get_logger
from onfleet.models.base import Metadata

logger = get_logger(__name__)

R = TypeVar("R", bound="ResourceClient")
M = TypeVar("M")


def metadata_set_payload(entries: Iterable[Metadata | Mapping[str, Any]]) -> dict[str, Any]:
    """Build a delta that sets only the given metadata entries.

    Entries already stored on the resource but not named here are left
    untouched by the server.
    """
    return {"metadata": {"$set": list(entries)}}


def metadata_pop_payload(name: str) -> dict[str, Any]:
    """Build a delta that removes exactly the named metadata entry."""
    return {"metadata": {"$pop": [{"name": name}]}}


class ResourceClient:
    """Facade for one REST resource path."""

    def __init__(
        self,
        api_key: str,
        limiter: TokenBucket | None,
        url: str,
        transport: Transport,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        """Initialize the facade.

        Args:
            api_key: Onfleet API key
            limiter: Rate limiter shared with the root client. None creates a
                private one, which is only appropriate for standalone use.
            url: Resource base URL, e.g. https://onfleet.com/api/v2/tasks
            transport: Transport used to send requests
            timeout: Overall deadline per call in seconds
            retry_policy: Retry policy for calls

        Raises:
            ConfigError: If the API key or URL is empty
        """
        if not api_key:
            raise ConfigError("Onfleet API key not found")
        if not url:
            raise ConfigError("Resource URL is required")

        self.api_key = api_key
        self.limiter = limiter if limiter is not None else TokenBucket(name=type(self).__name__)
        self.url = url.rstrip("/")
        self.transport = transport
        self.timeout = timeout
        self.retry_policy = retry_policy or RetryPolicy()

    @classmethod
    def plug(
        cls: type[R],
        api_key: str,
        limiter: TokenBucket | None,
        url: str,
        transport: Transport,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        retry_policy: RetryPolicy | None = None,
    ) -> R:
        """Bind a facade to a key, limiter, URL and transport."""
        return cls(
            api_key,
            limiter,
            url,
            transport,
            timeout=timeout,
            retry_policy=retry_policy,
        )

    def _url(self, *segments: str) -> str:
        """Resource URL with path-escaped segments appended."""
        if not segments:
            return self.url
        escaped = "/".join(quote(str(segment), safe="+") for segment in segments)
        return f"{self.url}/{escaped}"

    def _call(
        self,
        method: str,
        url: str,
        body: Any = None,
        response_model: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        return call(
            self.api_key,
            self.limiter,
            self.transport,
            method,
            url,
            body,
            response_model,
            params=params,
            timeout=self.timeout,
            retry_policy=self.retry_policy,
        )


class MetadataResourceClient(ResourceClient, Generic[M]):
    """Facade for resources carrying a metadata collection.

    Subclasses set ``resource_model`` to the resource's pydantic model.
    """

    resource_model: type[M]

    def list_with_metadata_query(self, metadata: Iterable[Metadata | Mapping[str, Any]]) -> list[M]:
        """List resources whose metadata matches every given entry."""
        return self._call("POST", self._url("metadata"), list(metadata), list[self.resource_model])  # type: ignore[name-defined]

    def metadata_set(self, resource_id: str, *entries: Metadata | Mapping[str, Any]) -> M:
        """Set metadata entries without touching the others.

        Returns:
            The full resource as returned by the server
        """
        if not entries:
            raise ValueError("At least one metadata entry is required")
        logger.debug("metadata_set", resource_id=resource_id, names=_entry_names(entries))
        return self._call("PUT", self._url(resource_id), metadata_set_payload(entries), self.resource_model)

    def metadata_pop(self, resource_id: str, name: str) -> M:
        """Remove one metadata entry by name.

        Returns:
            The full resource as returned by the server
        """
        if not name:
            raise ValueError("Metadata entry name is required")
        logger.debug("metadata_pop", resource_id=resource_id, name=name)
        return self._call("PUT", self._url(resource_id), metadata_pop_payload(name), self.resource_model)


def _entry_names(entries: Iterable[Metadata | Mapping[str, Any]]) -> list[str]:
    return [e.name if isinstance(e, Metadata) else str(e.get("name")) for e in entries]
