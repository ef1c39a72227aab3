"""Core constants for the Onfleet SDK.

This module defines the default endpoints, timeouts, rate limits and retry
parameters used when no override is configured.
"""

from typing import Final

# Endpoint defaults
DEFAULT_BASE_URL: Final[str] = "https://onfleet.com"
DEFAULT_API_PATH: Final[str] = "/api"
DEFAULT_API_VERSION: Final[str] = "/v2"

# Timeouts (milliseconds); user overrides above the default are ignored
DEFAULT_USER_TIMEOUT_MS: Final[int] = 70000

# API rate limits
ONFLEET_RATE_LIMIT_CAPACITY: Final[int] = 20  # Requests per refill period
ONFLEET_RATE_LIMIT_PERIOD_SECONDS: Final[float] = 1.0

# Retry policy
DEFAULT_MAX_ATTEMPTS: Final[int] = 4
DEFAULT_BACKOFF_BASE_SECONDS: Final[float] = 0.5
DEFAULT_BACKOFF_MAX_SECONDS: Final[float] = 8.0
DEFAULT_BACKOFF_JITTER_SECONDS: Final[float] = 0.25

# Resource paths
TASKS_PATH: Final[str] = "/tasks"
WORKERS_PATH: Final[str] = "/workers"
TEAMS_PATH: Final[str] = "/teams"
ADMINS_PATH: Final[str] = "/admins"
RECIPIENTS_PATH: Final[str] = "/recipients"
DESTINATIONS_PATH: Final[str] = "/destinations"

USER_AGENT: Final[str] = "onfleet-python/0.1.0"
