"""Pytest configuration and shared fixtures."""

import os

import pytest

from onfleet.api.rate_limiter import TokenBucket
from onfleet.api.retry import RetryPolicy
from onfleet.testing import MockTransport


@pytest.fixture(autouse=True)
def reset_settings_env() -> None:
    """Clear ONFLEET_* environment variables for each test."""
    original_env = os.environ.copy()

    for key in list(os.environ.keys()):
        if key.startswith("ONFLEET_"):
            del os.environ[key]

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def reset_settings_singleton() -> None:
    """Reset the settings singleton between tests."""
    from onfleet.config import settings as settings_module

    settings_module._settings = None

    yield

    settings_module._settings = None


@pytest.fixture
def mock_transport() -> MockTransport:
    """Recording transport with no responses programmed."""
    return MockTransport()


@pytest.fixture
def limiter() -> TokenBucket:
    """Limiter large enough never to throttle a unit test."""
    return TokenBucket(capacity=1000, refill_period=1.0, name="test")


@pytest.fixture
def no_retry() -> RetryPolicy:
    """Single-attempt policy so facade tests never back off."""
    return RetryPolicy(max_attempts=1)
