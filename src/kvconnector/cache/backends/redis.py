"""
kvconnector - Redis Cache Backend

Synchronous Redis client wrapper with:
- Raw bytes values (no serialization of its own)
- Relative TTL on write (SET ... PX)
- Absolute deadline on expiration refresh (PEXPIREAT, local clock)
- Optional namespace prefixing

Requires: redis>=5.0

Example:
    client = RedisCacheClient("localhost:6379")
    client.create_object("session:42", b"alice", ttl=60)
    name = client.get_object("session:42", bytes.decode)
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlparse

from ...errors import CacheConnectionError, DecodeError, NotFoundError
from ..interface import TTL, CacheClient, Decoder, T, expiration_deadline, to_milliseconds

logger = logging.getLogger(__name__)

try:
    from redis import Redis
    from redis.exceptions import RedisError
except ImportError as e:  # pragma: no cover
    raise ImportError(
        "Redis client is required but not installed. "
        "Install with: pip install 'redis>=5.0.0' or add 'redis' to your dependencies."
    ) from e


def to_redis_url(address: str) -> str:
    """Turn a bare host:port into a redis:// URL; full URLs pass through."""
    if "://" in address:
        return address
    return f"redis://{address}"


def redact_address(address: str) -> str:
    """Strip credentials from an address for logs and error messages."""
    parsed = urlparse(to_redis_url(address))
    if parsed.scheme == "unix":
        return f"unix://{parsed.path}"
    host = parsed.hostname or "localhost"
    try:
        port = parsed.port or 6379
    except ValueError:
        return host
    return f"{host}:{port}"


class RedisCacheClient(CacheClient):
    """
    Cache client owning one redis-py connection handle.

    Notes:
    - The underlying client is lazy; the first command opens the connection.
    - redis-py clients are thread-safe through their connection pool, so one
      instance may be shared across threads.
    - Transport failures surface as CacheConnectionError with the RedisError
      chained.
    - Once closed, every operation raises CacheConnectionError; redis-py
      would otherwise reconnect silently on the next command.
    """

    def __init__(
        self,
        address: str,
        namespace: str = "",
        socket_timeout: float = 5.0,
        max_connections: int = 10,
        client: Any | None = None,
    ) -> None:
        """
        Initialize Redis cache client.

        Args:
            address: host:port, or a redis:// / rediss:// / unix:// URL
            namespace: Prefix for all keys (empty = no prefix)
            socket_timeout: Socket timeout in seconds
            max_connections: Connection pool size
            client: Pre-built redis-py client (skips construction)
        """
        if not address:
            raise ValueError("address is required")

        super().__init__(address, namespace)
        self._safe_address = redact_address(address)
        self._closed = False

        if client is not None:
            self._client = client
        else:
            self._client = Redis.from_url(
                to_redis_url(address),
                decode_responses=False,
                socket_timeout=socket_timeout,
                max_connections=max_connections,
            )

        logger.info(
            f"Created Redis cache client for {self._safe_address}",
            extra={"address": self._safe_address, "namespace": self.namespace},
        )

    def _connection_error(self, operation: str, error: Exception, key: str | None = None) -> CacheConnectionError:
        details: dict[str, Any] = {"error": str(error)}
        if key is not None:
            details["key"] = key
        logger.debug(
            f"Redis {operation} failed: {error}",
            extra={"address": self._safe_address, "operation": operation, **details},
        )
        return CacheConnectionError(operation, self._safe_address, details)

    def _ensure_open(self, operation: str) -> None:
        if self._closed:
            raise CacheConnectionError(operation, self._safe_address, {"error": "client is closed"})

    def ping(self) -> None:
        self._ensure_open("ping")
        try:
            self._client.ping()
        except RedisError as e:
            raise self._connection_error("ping", e) from e

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._client.close()
        except RedisError as e:
            raise self._connection_error("close", e) from e
        logger.info(f"Closed Redis cache client for {self._safe_address}")

    def get_object(self, key: str, decode: Decoder[T]) -> T:
        self._ensure_open("get")
        try:
            raw = self._client.get(self._make_key(key))
        except RedisError as e:
            raise self._connection_error("get", e, key) from e

        if raw is None:
            logger.debug(f"Cache miss for key '{key}'", extra={"key": key, "namespace": self.namespace})
            raise NotFoundError(key)

        try:
            return decode(raw)
        except Exception as e:
            raise DecodeError(key, e) from e

    def remove_object(self, key: str) -> None:
        self._ensure_open("delete")
        try:
            self._client.delete(self._make_key(key))
        except RedisError as e:
            raise self._connection_error("delete", e, key) from e

    def create_object(self, key: str, data: bytes, ttl: TTL) -> None:
        self._ensure_open("set")
        px = to_milliseconds(ttl)
        try:
            self._client.set(self._make_key(key), data, px=px)
        except RedisError as e:
            raise self._connection_error("set", e, key) from e

    def set_expiration(self, key: str, ttl: TTL) -> None:
        self._ensure_open("expireat")
        deadline = expiration_deadline(ttl)
        try:
            updated = self._client.pexpireat(self._make_key(key), deadline)
        except RedisError as e:
            raise self._connection_error("expireat", e, key) from e

        if not updated:
            raise NotFoundError(key, {"operation": "expireat"})
