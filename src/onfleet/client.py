"""Root Onfleet client.

Validates the API key, resolves endpoint and timeout overrides, creates the
single rate limiter and transport shared by every resource facade, and plugs
the facades in.
"""

from dataclasses import dataclass
from typing import TypeVar

from onfleet.api.errors import ConfigError
from onfleet.api.rate_limiter import TokenBucket
from onfleet.api.retry import RetryPolicy
from onfleet.api.transport import RequestsTransport, Transport
from onfleet.config.logging import get_logger
from onfleet.config.settings import Settings
from onfleet.constants import (
    ADMINS_PATH,
    DEFAULT_API_PATH,
    DEFAULT_API_VERSION,
    DEFAULT_BASE_URL,
    DEFAULT_USER_TIMEOUT_MS,
    DESTINATIONS_PATH,
    ONFLEET_RATE_LIMIT_CAPACITY,
    ONFLEET_RATE_LIMIT_PERIOD_SECONDS,
    RECIPIENTS_PATH,
    TASKS_PATH,
    TEAMS_PATH,
    WORKERS_PATH,
)
from onfleet.resources import (
    AdminsClient,
    DestinationsClient,
    RecipientsClient,
    TasksClient,
    TeamsClient,
    WorkersClient,
)
from onfleet.resources.base import ResourceClient

logger = get_logger(__name__)

R = TypeVar("R", bound=ResourceClient)


@dataclass
class InitParams:
    """User overrides for client defaults.

    Empty or zero values keep the default. ``user_timeout`` is in
    milliseconds and is only honored within (0, 70000].
    """

    user_timeout: int = 0
    base_url: str = ""
    path: str = ""
    api_version: str = ""


def resolve_timeout_ms(user_timeout: int) -> int:
    if 0 < user_timeout <= DEFAULT_USER_TIMEOUT_MS:
        return user_timeout
    return DEFAULT_USER_TIMEOUT_MS


class Onfleet:
    """Client for the Onfleet API.

    Every resource facade shares this client's rate limiter, so concurrent
    use from many threads stays within the configured request rate.

    Example:
        >>> client = Onfleet("my_api_key")
        >>> task = client.tasks.get("task_123")
        >>> client.workers.metadata_set("worker_1", Metadata(name="shift", type="string", value="am"))
    """

    def __init__(
        self,
        api_key: str | None,
        params: InitParams | None = None,
        *,
        transport: Transport | None = None,
        limiter: TokenBucket | None = None,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Onfleet API key
            params: Endpoint and timeout overrides
            transport: Transport to use; defaults to a requests-backed one
            limiter: Rate limiter; defaults to the Onfleet API limit
            retry_policy: Retry policy for all calls

        Raises:
            ConfigError: If the API key is empty
        """
        if not api_key:
            raise ConfigError("Onfleet API key not found")

        params = params or InitParams()
        base_url = (params.base_url or DEFAULT_BASE_URL).rstrip("/")
        path = params.path or DEFAULT_API_PATH
        api_version = params.api_version or DEFAULT_API_VERSION

        self.timeout_ms = resolve_timeout_ms(params.user_timeout)
        self.base_url = f"{base_url}{path}{api_version}"
        self.limiter = limiter or TokenBucket(
            capacity=ONFLEET_RATE_LIMIT_CAPACITY,
            refill_period=ONFLEET_RATE_LIMIT_PERIOD_SECONDS,
        )
        self.transport = transport or RequestsTransport(timeout_ms=self.timeout_ms)
        self.retry_policy = retry_policy or RetryPolicy()

        self.tasks = self._plug(TasksClient, api_key, TASKS_PATH)
        self.workers = self._plug(WorkersClient, api_key, WORKERS_PATH)
        self.teams = self._plug(TeamsClient, api_key, TEAMS_PATH)
        self.admins = self._plug(AdminsClient, api_key, ADMINS_PATH)
        self.recipients = self._plug(RecipientsClient, api_key, RECIPIENTS_PATH)
        self.destinations = self._plug(DestinationsClient, api_key, DESTINATIONS_PATH)

        logger.info(
            "onfleet_client_initialized",
            base_url=self.base_url,
            timeout_ms=self.timeout_ms,
            rate_limit=self.limiter.capacity,
        )

    def _plug(self, client_cls: type[R], api_key: str, resource_path: str) -> R:
        return client_cls.plug(
            api_key,
            self.limiter,
            self.base_url + resource_path,
            self.transport,
            timeout=self.timeout_ms / 1000.0,
            retry_policy=self.retry_policy,
        )

    @classmethod
    def from_settings(cls, settings: Settings, transport: Transport | None = None) -> "Onfleet":
        """Build a client from pydantic settings (``ONFLEET_*`` env vars)."""
        params = InitParams(
            user_timeout=settings.user_timeout_ms,
            base_url=settings.base_url,
            path=settings.api_path,
            api_version=settings.api_version,
        )
        limiter = TokenBucket(
            capacity=settings.rate_limit_capacity,
            refill_period=settings.rate_limit_period_seconds,
        )
        retry_policy = RetryPolicy(
            max_attempts=settings.max_attempts,
            base_delay=settings.backoff_base_seconds,
            max_delay=settings.backoff_max_seconds,
            jitter=settings.backoff_jitter_seconds,
        )
        return cls(
            settings.api_key,
            params,
            transport=transport,
            limiter=limiter,
            retry_policy=retry_policy,
        )

    def close(self) -> None:
        """Release the transport's connections."""
        self.transport.close()

    def __enter__(self) -> "Onfleet":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
