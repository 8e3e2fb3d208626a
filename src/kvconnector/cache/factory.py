"""
kvconnector - Cache Factory

Canonical factory for obtaining cache clients. Two policies:

- new_instance(): a fresh, independently-owned client per call.
- shared_instance(): one process-wide client, initialized exactly once even
  when first requested from several threads at the same time. The owning
  process tears it down with close_shared_instance().

The backend is chosen from CacheConfig (CACHE_BACKEND=redis|memory).

Examples:
    from kvconnector.cache import new_instance, shared_instance

    client = new_instance("localhost:6379")
    client.create_object("greeting", b"hello", ttl=60)

    # Explicit config (e.g. for tests)
    from kvconnector.config import CacheBackend, CacheConfig
    mem = new_instance(config=CacheConfig(backend=CacheBackend.MEMORY))
"""

from __future__ import annotations

import logging
import threading

from ..config import CacheBackend, CacheConfig, get_config
from ..errors import ConfigurationError
from .backends.memory import MemoryCacheClient
from .interface import CacheClient

logger = logging.getLogger(__name__)

_shared_client: CacheClient | None = None
_shared_lock = threading.Lock()


def _create_redis_client(address: str, config: CacheConfig) -> CacheClient:
    """Internal helper to construct a redis client with lazy import."""
    try:
        from .backends.redis import RedisCacheClient
    except ImportError as e:
        raise ConfigurationError(
            "Redis backend selected but redis client is unavailable. Install with: pip install 'redis>=5.0.0'",
            details={"package": "redis>=5.0.0", "error": str(e), "backend": "redis"},
        ) from e

    try:
        return RedisCacheClient(
            address=address,
            namespace=config.namespace,
            socket_timeout=config.socket_timeout,
            max_connections=config.max_connections,
        )
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid Redis address: {e}",
            details={"backend": "redis", "error": str(e)},
        ) from e


def _create_client(address: str | None, config: CacheConfig | None) -> CacheClient:
    if config is None:
        config = get_config().cache
    if address is None:
        address = config.address

    if config.backend == CacheBackend.REDIS:
        return _create_redis_client(address, config)
    if config.backend == CacheBackend.MEMORY:
        return MemoryCacheClient(address=address, namespace=config.namespace)

    raise ConfigurationError(
        f"Unknown cache backend: {config.backend}",
        details={"backend": str(config.backend), "supported": [b.value for b in CacheBackend]},
    )


def new_instance(address: str | None = None, config: CacheConfig | None = None) -> CacheClient:
    """
    Create a fresh cache client owned by the caller.

    Args:
        address: Store address (defaults to the configured address)
        config: Cache configuration (uses global config if not provided)

    Returns:
        A new client; nothing is shared with other calls

    Raises:
        ConfigurationError: If the backend is unknown or unavailable
    """
    return _create_client(address, config)


def shared_instance(address: str | None = None, config: CacheConfig | None = None) -> CacheClient:
    """
    Get the process-wide cache client, creating it on first call.

    Once initialized, the same client is returned no matter which address or
    config later callers pass. Concurrent first calls block on a lock and
    exactly one of them builds the client.

    Args:
        address: Store address used only for the first initialization
        config: Cache configuration used only for the first initialization

    Returns:
        The shared client
    """
    global _shared_client

    client = _shared_client
    if client is not None:
        return client

    with _shared_lock:
        if _shared_client is None:
            _shared_client = _create_client(address, config)
            logger.info(
                "Initialized shared cache client",
                extra={"client": type(_shared_client).__name__},
            )
        return _shared_client


def has_shared_instance() -> bool:
    """Whether the shared client is currently initialized."""
    return _shared_client is not None


def close_shared_instance() -> None:
    """
    Close and drop the shared client.

    The next shared_instance() call initializes a new one. The reference is
    dropped even if close() raises.

    Raises:
        CacheConnectionError: If closing the underlying connection fails
    """
    global _shared_client

    with _shared_lock:
        client = _shared_client
        _shared_client = None

    if client is None:
        logger.debug("No shared cache client to close")
        return

    client.close()
    logger.info("Closed shared cache client")


def reset_shared_instance() -> None:
    """
    Drop the shared client reference without closing it.

    Warning: Only use this in testing contexts.
    """
    global _shared_client

    with _shared_lock:
        _shared_client = None
    logger.debug("Reset shared cache client")
