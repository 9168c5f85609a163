"""Root conftest for pytest configuration and shared fixtures.

Loaded before both testpaths (tests/ and kepixel/), so its fixtures are
available to centralized tests and to colocated adapter tests.
"""

import os

import pytest

# Register pytest-asyncio plugin at the root level
pytest_plugins = ("pytest_asyncio",)

# ---------------------------------------------------------------------------
# Environment variables: must be set before any kepixel module import
# ---------------------------------------------------------------------------
os.environ.setdefault("KEPIXEL_TRACKER_URL", "https://collector.test")
os.environ.setdefault("KEPIXEL_LOG_LEVEL", "DEBUG")


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ---------------------------------------------------------------------------
# Shared fake fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_transport():
    """Fake Transport that records every request."""
    from kepixel.adapters.transport.fake import FakeTransport

    return FakeTransport()


@pytest.fixture
def fake_environment():
    """Fake EnvironmentObserver on a visible page at example.com."""
    from kepixel.adapters.environment.fake import FakeEnvironment

    return FakeEnvironment(page_host="example.com")


@pytest.fixture
def fake_clock():
    """Clock the test advances by hand."""
    return FakeClock()


@pytest.fixture
def test_settings():
    """Settings isolated from the developer's environment and .env file."""
    from kepixel.core.config import Settings

    return Settings(
        _env_file=None,
        TRACKER_URL="https://collector.test",
        APP_ID=None,
        USER_ID=None,
        LOG=False,
        DISABLED=False,
    )
