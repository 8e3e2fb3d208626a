"""
kvconnector - Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
"""

import os
import socket
from collections.abc import Generator
from urllib.parse import urlparse

import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "DEBUG"

DEFAULT_TEST_REDIS_URL = "redis://localhost:6379/15"


def get_test_redis_url() -> str:
    return os.environ.get("TEST_REDIS_URL", DEFAULT_TEST_REDIS_URL)


# Redis availability checker
def is_redis_available(url: str | None = None) -> bool:
    """Check if the Redis server behind url (default: TEST_REDIS_URL) accepts connections."""
    parsed = urlparse(url or get_test_redis_url())
    try:
        if parsed.scheme == "unix":
            sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
            target: str | tuple[str, int] = parsed.path
        else:
            sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
            target = (parsed.hostname or "localhost", parsed.port or 6379)
        sock.settimeout(1)
        result = sock.connect_ex(target)
        sock.close()
        return result == 0
    except (OSError, ValueError):
        return False


# Skip marker for Redis tests
redis_available = pytest.mark.skipif(not is_redis_available(), reason="Redis server not available")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip tests marked integration when the test Redis server is unreachable."""
    for item in items:
        if item.get_closest_marker("integration") is not None:
            item.add_marker(redis_available)


@pytest.fixture
def test_redis_url() -> str:
    """Get Redis URL for testing (database 15 for isolation)."""
    return get_test_redis_url()


@pytest.fixture
def mock_env_memory(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set environment variables for memory cache backend."""
    monkeypatch.setenv("CACHE_BACKEND", "memory")
    monkeypatch.setenv("CACHE_ADDRESS", "memory-test")
    monkeypatch.setenv("CACHE_NAMESPACE", "test")


@pytest.fixture
def decoded_calls() -> list[bytes]:
    """Records every payload handed to the recording decoder."""
    return []


@pytest.fixture
def recording_decoder(decoded_calls: list[bytes]):
    """Decoder that records its input and returns it as text."""

    def decode(raw: bytes) -> str:
        decoded_calls.append(raw)
        return raw.decode("utf-8")

    return decode


@pytest.fixture(autouse=True)
def reset_global_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Reset loaded config and the shared client around each test to prevent state leakage."""
    from kvconnector.cache.factory import reset_shared_instance
    from kvconnector.config import loader

    monkeypatch.chdir(os.path.dirname(__file__))
    monkeypatch.setattr(loader, "_config_instance", None)
    reset_shared_instance()
    yield
    reset_shared_instance()
