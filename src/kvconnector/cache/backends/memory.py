"""
kvconnector - Memory Cache Backend

In-process cache implementation honoring the same contract as the Redis
backend. Thread-safe and suitable for single-process deployments and tests.
"""

import logging
import threading
import time

from ...errors import CacheConnectionError, DecodeError, NotFoundError
from ..interface import TTL, CacheClient, Decoder, T, expiration_deadline, to_milliseconds

logger = logging.getLogger(__name__)


class MemoryCacheClient(CacheClient):
    """
    In-memory cache client.

    Features:
    - Per-key expiration checked lazily on access
    - Thread-safe operations
    - Behaves like a disconnected store once closed
    """

    def __init__(self, address: str = "memory", namespace: str = ""):
        super().__init__(address, namespace)

        # Storage: key -> (value, expiry_time)
        self._store: dict[str, tuple[bytes, float | None]] = {}
        self._closed = False

        self._lock = threading.Lock()

        logger.info(
            f"Created memory cache client '{self.address}'",
            extra={"address": self.address, "namespace": self.namespace},
        )

    def _ensure_open(self, operation: str) -> None:
        if self._closed:
            raise CacheConnectionError(operation, self.address, {"error": "client is closed"})

    @staticmethod
    def _is_expired(expiry: float | None) -> bool:
        if expiry is None:
            return False
        return time.time() >= expiry

    def _lookup(self, cache_key: str) -> bytes | None:
        """Return the live value for cache_key, dropping it if expired. Caller holds the lock."""
        entry = self._store.get(cache_key)
        if entry is None:
            return None
        value, expiry = entry
        if self._is_expired(expiry):
            del self._store[cache_key]
            return None
        return value

    def ping(self) -> None:
        self._ensure_open("ping")

    def close(self) -> None:
        with self._lock:
            self._store.clear()
            self._closed = True
        logger.info(f"Closed memory cache client '{self.address}'")

    def get_object(self, key: str, decode: Decoder[T]) -> T:
        with self._lock:
            self._ensure_open("get")
            raw = self._lookup(self._make_key(key))

        if raw is None:
            logger.debug(f"Cache miss for key '{key}'", extra={"key": key, "namespace": self.namespace})
            raise NotFoundError(key)

        try:
            return decode(raw)
        except Exception as e:
            raise DecodeError(key, e) from e

    def remove_object(self, key: str) -> None:
        with self._lock:
            self._ensure_open("delete")
            self._store.pop(self._make_key(key), None)

    def create_object(self, key: str, data: bytes, ttl: TTL) -> None:
        px = to_milliseconds(ttl)
        expiry = time.time() + px / 1000 if px is not None else None
        with self._lock:
            self._ensure_open("set")
            self._store[self._make_key(key)] = (bytes(data), expiry)

    def set_expiration(self, key: str, ttl: TTL) -> None:
        deadline = expiration_deadline(ttl).timestamp()
        cache_key = self._make_key(key)
        with self._lock:
            self._ensure_open("expireat")
            value = self._lookup(cache_key)
            if value is None:
                raise NotFoundError(key, {"operation": "expireat"})
            if self._is_expired(deadline):
                del self._store[cache_key]
            else:
                self._store[cache_key] = (value, deadline)

    def __len__(self) -> int:
        """Number of live entries."""
        with self._lock:
            for cache_key in [k for k, (_, exp) in self._store.items() if self._is_expired(exp)]:
                del self._store[cache_key]
            return len(self._store)
