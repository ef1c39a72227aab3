"""In-memory transport for testing code that uses the Onfleet client.

``MockTransport`` records every request exactly as the production transport
would send it and replies with pre-programmed responses keyed by URL path
(and optionally method).

Example:
    >>> transport = MockTransport()
    >>> transport.add_response("/tasks/task_123", MockResponse(200, {"id": "task_123"}))
    >>> client = TasksClient.plug("test_api_key", None, "https://api.example.com/tasks", transport)
    >>> client.get("task_123").id
    'task_123'
    >>> transport.assert_request_made("GET", "/tasks/task_123")
    >>> transport.assert_basic_auth("test_api_key")
"""

import json
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Mapping
from urllib.parse import unquote, urlsplit

import pydantic_core

from onfleet.api.dispatcher import basic_auth_header
from onfleet.api.errors import TransportError
from onfleet.api.transport import RequestSpec, Transport, TransportResponse


@dataclass
class MockResponse:
    """A canned response; non-bytes bodies are serialized to JSON."""

    status_code: int = 200
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)

    def to_transport_response(self) -> TransportResponse:
        if self.body is None:
            raw = b""
        elif isinstance(self.body, bytes):
            raw = self.body
        elif isinstance(self.body, str):
            raw = self.body.encode("utf-8")
        else:
            raw = pydantic_core.to_json(self.body, by_alias=True)
        return TransportResponse(status_code=self.status_code, body=raw, headers=dict(self.headers))


@dataclass(frozen=True)
class RecordedRequest:
    method: str
    url: str
    headers: Mapping[str, str]
    body: bytes | None
    timeout: float | None

    @property
    def path(self) -> str:
        return unquote(urlsplit(self.url).path)

    @property
    def query(self) -> str:
        return urlsplit(self.url).query

    def json(self) -> Any:
        """Decoded JSON body, or None for requests without a body."""
        return json.loads(self.body) if self.body else None


class MockTransport(Transport):
    """Recording transport with programmable responses.

    Responses registered for the same route are served in order; the last
    one keeps being served once the queue is down to it. A route matches a
    request when the request's path ends with the route path, and the method
    matches if one was given.
    """

    def __init__(self) -> None:
        self._routes: list[tuple[str | None, str, deque[MockResponse | TransportError]]] = []
        self._requests: list[RecordedRequest] = []
        self._lock = threading.Lock()

    def add_response(self, path: str, response: MockResponse, method: str | None = None) -> None:
        self._queue_for(path, method).append(response)

    def add_responses(self, path: str, responses: list[MockResponse], method: str | None = None) -> None:
        self._queue_for(path, method).extend(responses)

    def add_error(self, path: str, error: TransportError, method: str | None = None) -> None:
        """Make requests to ``path`` fail at the transport level."""
        self._queue_for(path, method).append(error)

    def _queue_for(self, path: str, method: str | None) -> deque[MockResponse | TransportError]:
        method = method.upper() if method else None
        path = "/" + path.strip("/") if path.strip("/") else "/"
        with self._lock:
            for route_method, route_path, queue in self._routes:
                if route_method == method and route_path == path:
                    return queue
            new_queue: deque[MockResponse | TransportError] = deque()
            self._routes.append((method, path, new_queue))
            return new_queue

    def send(self, request: RequestSpec, timeout: float | None = None) -> TransportResponse:
        recorded = RecordedRequest(
            method=request.method,
            url=request.url,
            headers=dict(request.headers),
            body=request.body,
            timeout=timeout,
        )
        with self._lock:
            self._requests.append(recorded)
            reply = self._match(recorded)

        if reply is None:
            missing = {"message": {"message": f"No mock response for {recorded.path}"}}
            return MockResponse(404, missing).to_transport_response()
        if isinstance(reply, TransportError):
            raise reply
        return reply.to_transport_response()

    def _match(self, request: RecordedRequest) -> MockResponse | TransportError | None:
        # Longest route wins so "/tasks/batch" beats "/tasks"
        candidates = [
            (route_path, queue)
            for route_method, route_path, queue in self._routes
            if (route_method is None or route_method == request.method)
            and _path_matches(request.path, route_path)
            and queue
        ]
        if not candidates:
            return None
        _, queue = max(candidates, key=lambda c: len(c[0]))
        return queue.popleft() if len(queue) > 1 else queue[0]

    @property
    def requests(self) -> list[RecordedRequest]:
        with self._lock:
            return list(self._requests)

    @property
    def last_request(self) -> RecordedRequest | None:
        with self._lock:
            return self._requests[-1] if self._requests else None

    def call_count(self, method: str | None = None, path: str | None = None) -> int:
        return sum(
            1
            for r in self.requests
            if (method is None or r.method == method.upper())
            and (path is None or _path_matches(r.path, path))
        )

    def assert_request_made(self, method: str, path: str) -> RecordedRequest:
        """Assert a request with this method was sent to a URL ending in ``path``."""
        for r in self.requests:
            if r.method == method.upper() and _path_matches(r.path, path):
                return r
        made = [f"{r.method} {r.path}" for r in self.requests]
        raise AssertionError(f"Expected {method.upper()} {path}, requests made: {made}")

    def assert_basic_auth(self, api_key: str) -> None:
        """Assert every recorded request carried Basic auth for ``api_key``."""
        expected = basic_auth_header(api_key)
        if not self._requests:
            raise AssertionError("No requests were made")
        for r in self.requests:
            actual = r.headers.get("Authorization")
            if actual != expected:
                raise AssertionError(
                    f"{r.method} {r.path}: expected Authorization {expected!r}, got {actual!r}"
                )

    def reset(self) -> None:
        with self._lock:
            self._routes.clear()
            self._requests.clear()


def _path_matches(request_path: str, route_path: str) -> bool:
    route_path = "/" + route_path.strip("/")
    request_path = request_path.rstrip("/") or "/"
    return request_path == route_path or request_path.endswith(route_path)
