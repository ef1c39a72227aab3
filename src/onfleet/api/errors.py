"""Centralized error handling for the Onfleet API.

Every failed call surfaces as a single ``APIError`` exception whose ``kind``
discriminant names the failure class, so callers can match on
``error.kind`` exhaustively instead of inspecting exception types. The
classifier functions here are pure: they map an HTTP status and body, or a
transport failure, to an ``APIError`` without side effects.
"""

import json
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from enum import Enum
from http import HTTPStatus
from typing import Any, Mapping


class ErrorKind(Enum):
    """Closed set of failure kinds for API calls."""

    VALIDATION = "validation"
    AUTH = "auth"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    RATE_LIMITED = "rate_limited"
    SERVER = "server"
    NETWORK = "network"
    TIMEOUT = "timeout"
    DECODE = "decode"
    UNEXPECTED_STATUS = "unexpected_status"

    @property
    def retryable(self) -> bool:
        """Whether the dispatcher may retry an error of this kind."""
        return self in _RETRYABLE_KINDS


_RETRYABLE_KINDS = frozenset({ErrorKind.NETWORK, ErrorKind.RATE_LIMITED, ErrorKind.SERVER})


class ConfigError(ValueError):
    """Raised when a client is constructed with invalid configuration."""


class APIError(Exception):
    """Error returned by an Onfleet API call.

    Attributes:
        kind: Failure class
        status_code: HTTP status, or None when no response was received
        message: Human-readable message (vendor message when available)
        cause: Machine-readable cause from the vendor envelope
        raw: Full raw response body, or None
        attempts: Number of transport attempts made for the call
        retry_after: Server-provided delay hint in seconds
        last_error: For deadline give-ups, the error observed before giving up
        retryable: Whether this occurrence may be retried
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        status_code: int | None = None,
        cause: Any = None,
        raw: str | None = None,
        attempts: int = 1,
        retry_after: float | None = None,
        last_error: "APIError | None" = None,
        retryable: bool | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.cause = cause
        self.raw = raw
        self.attempts = attempts
        self.retry_after = retry_after
        self.last_error = last_error
        self.retryable = kind.retryable if retryable is None else retryable
        self.timestamp = datetime.now(timezone.utc)

    def __str__(self) -> str:
        status = f" {self.status_code}" if self.status_code is not None else ""
        return f"[{self.kind.value}{status}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"APIError(kind={self.kind.name}, status_code={self.status_code}, "
            f"message={self.message!r}, attempts={self.attempts})"
        )

    @property
    def deadline_exceeded(self) -> bool:
        """True when the call gave up because its deadline expired."""
        return self.kind is ErrorKind.TIMEOUT

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for serialization.

        Returns:
            Dictionary representation of error
        """
        return {
            "kind": self.kind.value,
            "status_code": self.status_code,
            "message": self.message,
            "cause": self.cause,
            "retryable": self.retryable,
            "attempts": self.attempts,
            "retry_after": self.retry_after,
            "last_error": self.last_error.to_dict() if self.last_error else None,
            "timestamp": self.timestamp.isoformat(),
        }


class TransportError(Exception):
    """Transport-level failure before a complete response was received.

    Attributes:
        sent: False when the request definitely never reached the server
            (DNS failure, refused connection, connect timeout). True when it
            may have been delivered, e.g. a read timeout.
    """

    def __init__(self, message: str, sent: bool = True) -> None:
        super().__init__(message)
        self.message = message
        self.sent = sent


_STATUS_KINDS: dict[int, ErrorKind] = {
    400: ErrorKind.VALIDATION,
    401: ErrorKind.AUTH,
    403: ErrorKind.AUTH,
    404: ErrorKind.NOT_FOUND,
    409: ErrorKind.CONFLICT,
    429: ErrorKind.RATE_LIMITED,
}


def kind_for_status(status_code: int) -> ErrorKind | None:
    """Map an HTTP status code to an error kind.

    Returns:
        The error kind, or None for 2xx statuses
    """
    if 200 <= status_code < 300:
        return None
    if status_code in _STATUS_KINDS:
        return _STATUS_KINDS[status_code]
    if 500 <= status_code < 600:
        return ErrorKind.SERVER
    return ErrorKind.UNEXPECTED_STATUS


def parse_error_envelope(body: bytes | str | None) -> tuple[str | None, Any]:
    """Extract message and cause from the vendor error envelope.

    Onfleet wraps errors as ``{"code": ..., "message": {"message": ...,
    "cause": ...}}``; a flat ``{"message": ..., "cause": ...}`` is accepted
    too. Nothing beyond those two fields is assumed.

    Returns:
        Tuple of (message, cause); either may be None
    """
    if not body:
        return None, None
    try:
        data = json.loads(body)
    except (TypeError, ValueError):
        return None, None
    if not isinstance(data, dict):
        return None, None

    inner = data.get("message")
    if isinstance(inner, dict):
        return _as_text(inner.get("message")), inner.get("cause")
    return _as_text(inner), data.get("cause")


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else json.dumps(value)


def parse_retry_after(value: str | None, now: datetime | None = None) -> float | None:
    """Parse a Retry-After header as delta-seconds or an HTTP-date.

    Returns:
        Non-negative delay in seconds, or None when absent or unparseable
    """
    if not value:
        return None
    value = value.strip()
    try:
        return max(0.0, float(value))
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    return max(0.0, (when - now).total_seconds())


def _decode_raw(body: bytes | str | None) -> str | None:
    if body is None:
        return None
    return body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body


def _header(headers: Mapping[str, str] | None, name: str) -> str | None:
    if not headers:
        return None
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


def classify_response(
    status_code: int,
    body: bytes | str | None,
    headers: Mapping[str, str] | None = None,
    attempts: int = 1,
) -> APIError | None:
    """Classify an HTTP response into an APIError.

    Args:
        status_code: HTTP status code
        body: Raw response body
        headers: Response headers (used for Retry-After)
        attempts: Attempt count to record on the error

    Returns:
        None for 2xx responses, otherwise the classified APIError
    """
    kind = kind_for_status(status_code)
    if kind is None:
        return None

    message, cause = parse_error_envelope(body)
    if message is None:
        try:
            message = HTTPStatus(status_code).phrase
        except ValueError:
            message = f"HTTP {status_code}"

    retry_after = None
    if kind is ErrorKind.RATE_LIMITED:
        retry_after = parse_retry_after(_header(headers, "Retry-After"))

    return APIError(
        kind=kind,
        message=message,
        status_code=status_code,
        cause=cause,
        raw=_decode_raw(body),
        attempts=attempts,
        retry_after=retry_after,
    )


def classify_transport_error(error: TransportError, attempts: int = 1) -> APIError:
    """Classify a transport failure as a network error.

    Failures where the request may already have reached the server are not
    retryable, since no operation is assumed to be idempotent.
    """
    return APIError(
        kind=ErrorKind.NETWORK,
        message=error.message,
        cause="request_may_have_been_sent" if error.sent else "request_not_sent",
        attempts=attempts,
        retryable=not error.sent,
    )


def decode_error(message: str, status_code: int, body: bytes | str | None, attempts: int = 1) -> APIError:
    """Build the error raised for a malformed success response."""
    return APIError(
        kind=ErrorKind.DECODE,
        message=message,
        status_code=status_code,
        raw=_decode_raw(body),
        attempts=attempts,
    )


def timeout_error(
    message: str,
    attempts: int = 0,
    last_error: APIError | None = None,
) -> APIError:
    """Build the error raised when a call's deadline is exceeded."""
    return APIError(
        kind=ErrorKind.TIMEOUT,
        message=message,
        status_code=last_error.status_code if last_error else None,
        attempts=attempts,
        last_error=last_error,
    )
