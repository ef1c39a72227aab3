"""HTTP transport abstraction.

A transport sends one fully prepared request and returns one response. The
dispatcher only talks to this interface, so production code uses
``RequestsTransport`` while tests substitute ``onfleet.testing.MockTransport``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Mapping

import requests
from requests.adapters import HTTPAdapter

from onfleet.api.errors import TransportError
from onfleet.config.logging import get_logger
from onfleet.constants import DEFAULT_USER_TIMEOUT_MS

logger = get_logger(__name__)


@dataclass(frozen=True)
class RequestSpec:
    """A fully prepared HTTP request."""

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes | None = None


@dataclass(frozen=True)
class TransportResponse:
    """Status, headers and raw body of an HTTP response."""

    status_code: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(ABC):
    """Sends one HTTP request and returns one response."""

    @abstractmethod
    def send(self, request: RequestSpec, timeout: float | None = None) -> TransportResponse:
        """Send a request.

        Args:
            request: Prepared request
            timeout: Per-attempt timeout in seconds, or None for the
                transport's default

        Returns:
            The response, whatever its status code

        Raises:
            TransportError: If no complete response was received
        """

    def close(self) -> None:
        """Release any underlying resources."""


class RequestsTransport(Transport):
    """Transport backed by a ``requests.Session``.

    The session performs no retries of its own; retry policy belongs to the
    dispatcher.
    """

    def __init__(
        self,
        timeout_ms: int = DEFAULT_USER_TIMEOUT_MS,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            timeout_ms: Default per-request timeout in milliseconds
            session: Session to reuse; a new one is created if omitted
        """
        self.timeout = timeout_ms / 1000.0
        self.session = session or requests.Session()
        if session is None:
            adapter = HTTPAdapter(max_retries=0)
            self.session.mount("https://", adapter)
            self.session.mount("http://", adapter)

    def send(self, request: RequestSpec, timeout: float | None = None) -> TransportResponse:
        effective_timeout = self.timeout if timeout is None else min(timeout, self.timeout)
        try:
            response = self.session.request(
                method=request.method,
                url=request.url,
                headers=dict(request.headers),
                data=request.body,
                timeout=effective_timeout,
                allow_redirects=False,
            )
        except requests.ConnectTimeout as e:
            raise TransportError(f"Connection timed out: {e}", sent=False) from e
        except requests.ConnectionError as e:
            # Resets after the request was written also land here, but
            # requests reports those as ProtocolError "Connection aborted".
            sent = "Connection aborted" in str(e)
            raise TransportError(f"Connection failed: {e}", sent=sent) from e
        except requests.Timeout as e:
            raise TransportError(f"Timed out waiting for response: {e}", sent=True) from e
        except requests.RequestException as e:
            raise TransportError(f"Request failed: {e}", sent=True) from e

        return TransportResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        self.session.close()
