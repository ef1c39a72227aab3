"""Authenticated, rate-limited, retrying dispatcher shared by all resources.

``call`` executes one logical API operation: it builds the request once,
then for each attempt takes a rate-limit permit, sends the request through the
transport, classifies the response and either decodes it, retries, or raises
an ``APIError``. The whole call, including waits for permits and backoff
sleeps, is bounded by one deadline.
"""

import base64
import time
from functools import lru_cache
from typing import Any, Callable, Mapping
from urllib.parse import urlencode

import pydantic_core
from pydantic import BaseModel, TypeAdapter, ValidationError

from onfleet.api.errors import (
    APIError,
    ErrorKind,
    TransportError,
    classify_response,
    classify_transport_error,
    decode_error,
    timeout_error,
)
from onfleet.api.rate_limiter import TokenBucket
from onfleet.api.retry import CallAttempt, RetryOutcome, RetryPolicy, decide_retry
from onfleet.api.transport import RequestSpec, Transport, TransportResponse
from onfleet.config.logging import get_logger
from onfleet.constants import DEFAULT_USER_TIMEOUT_MS, USER_AGENT

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = DEFAULT_USER_TIMEOUT_MS / 1000.0

# Client errors logged at warning level; everything else is an error
_EXPECTED_KINDS = frozenset({ErrorKind.NOT_FOUND, ErrorKind.VALIDATION, ErrorKind.CONFLICT})


def basic_auth_header(api_key: str) -> str:
    """Build the Basic auth header value: the key as username, empty password."""
    token = base64.b64encode(f"{api_key}:".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def serialize_body(body: Any) -> bytes:
    """Serialize a request body to JSON.

    pydantic models are dumped by alias with only the fields the caller set,
    so partial params stay partial while an explicit None is sent as null.
    Mappings and lists are sent as given.
    """
    return pydantic_core.to_json(_jsonable(body))


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_unset=True)
    if isinstance(value, Mapping):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


def build_url(url: str, params: Mapping[str, Any] | None = None) -> str:
    """Append query parameters to a URL, skipping None values."""
    if not params:
        return url
    query = urlencode(
        {key: value for key, value in params.items() if value is not None},
        doseq=True,
    )
    if not query:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"


def build_request(
    api_key: str,
    method: str,
    url: str,
    body: Any = None,
    params: Mapping[str, Any] | None = None,
) -> RequestSpec:
    """Prepare the authenticated request for a call."""
    headers = {
        "Authorization": basic_auth_header(api_key),
        "Accept": "application/json",
        "User-Agent": USER_AGENT,
    }
    payload = None
    if body is not None:
        payload = serialize_body(body)
        headers["Content-Type"] = "application/json"

    return RequestSpec(
        method=method.upper(),
        url=build_url(url, params),
        headers=headers,
        body=payload,
    )


@lru_cache(maxsize=256)
def _adapter(response_model: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_model)


def decode_response(response: TransportResponse, response_model: Any, attempts: int) -> Any:
    """Decode a success response into ``response_model``.

    Raises:
        APIError: With kind DECODE if the body is not valid for the model
    """
    if response_model is None:
        return None
    if not response.body:
        raise decode_error("Empty response body", response.status_code, response.body, attempts)
    try:
        return _adapter(response_model).validate_json(response.body)
    except ValidationError as e:
        raise decode_error(
            f"Malformed response body: {e.error_count()} validation error(s)",
            response.status_code,
            response.body,
            attempts,
        ) from e


def call(
    api_key: str,
    limiter: TokenBucket,
    transport: Transport,
    method: str,
    url: str,
    body: Any = None,
    response_model: Any = None,
    *,
    params: Mapping[str, Any] | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    retry_policy: RetryPolicy | None = None,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> Any:
    """Execute one API operation with rate limiting and retries.

    Args:
        api_key: Onfleet API key
        limiter: Token bucket shared by the root client
        transport: Transport used to send the request
        method: HTTP method
        url: Fully qualified URL
        body: Request body; anything pydantic can serialize to JSON
        response_model: Type to decode a success body into, e.g. ``Task`` or
            ``list[Worker]``. None discards the body.
        params: Query parameters
        timeout: Overall deadline for the call in seconds
        retry_policy: Retry policy; defaults to ``RetryPolicy()``
        clock: Monotonic clock, shared with ``limiter``
        sleep: Sleep function used for backoff

    Returns:
        The decoded response, or None when no ``response_model`` was given

    Raises:
        APIError: On any failure. ``kind`` is TIMEOUT when the deadline ended
            the call; ``last_error`` then holds the failure seen before it.
    """
    policy = retry_policy or RetryPolicy()
    deadline = clock() + timeout
    request = build_request(api_key, method, url, body, params)
    state = CallAttempt()

    while True:
        try:
            limiter.acquire(deadline)
        except APIError:
            if state.last_error is None:
                raise
            raise timeout_error(
                "Deadline exceeded while waiting for a rate-limit permit to retry",
                attempts=state.attempt,
                last_error=state.last_error,
            ) from state.last_error

        remaining = deadline - clock()
        if remaining <= 0:
            raise timeout_error(
                "Deadline exceeded before the request was sent",
                attempts=state.attempt,
                last_error=state.last_error,
            )

        state.attempt += 1
        logger.debug(
            "onfleet_request",
            method=request.method,
            url=request.url,
            attempt=state.attempt,
        )

        try:
            response = transport.send(request, timeout=remaining)
        except TransportError as e:
            error = classify_transport_error(e, attempts=state.attempt)
        else:
            error = classify_response(
                response.status_code,
                response.body,
                response.headers,
                attempts=state.attempt,
            )
            if error is None:
                logger.debug(
                    "onfleet_request_success",
                    url=request.url,
                    status=response.status_code,
                    attempts=state.attempt,
                )
                return decode_response(response, response_model, state.attempt)

        state.last_error = error
        decision = decide_retry(policy, state, error, deadline - clock())

        if decision.outcome is RetryOutcome.RETRY:
            logger.warning(
                "onfleet_request_retry",
                url=request.url,
                kind=error.kind.value,
                status=error.status_code,
                attempt=state.attempt,
                backoff_seconds=decision.delay,
            )
            state.elapsed_backoff += decision.delay
            sleep(decision.delay)
            continue

        if decision.outcome is RetryOutcome.DEADLINE:
            logger.error(
                "onfleet_request_deadline",
                url=request.url,
                kind=error.kind.value,
                attempt=state.attempt,
                backoff_needed=decision.delay,
                elapsed_backoff=state.elapsed_backoff,
            )
            raise timeout_error(
                f"Deadline would be exceeded before retrying ({error.kind.value})",
                attempts=state.attempt,
                last_error=error,
            ) from error

        log = logger.warning if error.kind in _EXPECTED_KINDS else logger.error
        log(
            "onfleet_request_failed",
            url=request.url,
            kind=error.kind.value,
            status=error.status_code,
            attempts=state.attempt,
            outcome=decision.outcome.value,
            elapsed_backoff=state.elapsed_backoff,
            message=error.message,
        )
        raise error
