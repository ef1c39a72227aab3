"""Shared call machinery: dispatcher, rate limiting, retries, transport."""

from onfleet.api.dispatcher import basic_auth_header, call
from onfleet.api.errors import (
    APIError,
    ConfigError,
    ErrorKind,
    TransportError,
    classify_response,
    classify_transport_error,
)
from onfleet.api.rate_limiter import RateLimitMetrics, TokenBucket
from onfleet.api.retry import CallAttempt, RetryDecision, RetryOutcome, RetryPolicy, decide_retry
from onfleet.api.transport import RequestSpec, RequestsTransport, Transport, TransportResponse

__all__ = [
    "call",
    "basic_auth_header",
    "APIError",
    "ConfigError",
    "ErrorKind",
    "TransportError",
    "classify_response",
    "classify_transport_error",
    "TokenBucket",
    "RateLimitMetrics",
    "RetryPolicy",
    "CallAttempt",
    "RetryDecision",
    "RetryOutcome",
    "decide_retry",
    "Transport",
    "RequestsTransport",
    "RequestSpec",
    "TransportResponse",
]
