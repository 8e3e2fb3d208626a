"""
kvconnector - Cache Interface

Defines the abstract capability set that all cache backends must implement,
plus the TTL and key helpers shared by the backends.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import TypeVar

T = TypeVar("T")

# Caller-supplied decoder: raw stored bytes in, decoded value out.
# Failure is reported by raising.
Decoder = Callable[[bytes], T]

TTL = timedelta | int | float


def to_timedelta(ttl: TTL) -> timedelta:
    """
    Normalize a TTL given as timedelta or seconds.

    Raises:
        TypeError: If ttl is neither a timedelta nor a number
        ValueError: If ttl is NaN or too large for a timedelta
    """
    if isinstance(ttl, timedelta):
        return ttl
    if isinstance(ttl, bool) or not isinstance(ttl, int | float):
        raise TypeError(f"ttl must be a timedelta or a number of seconds, got {type(ttl).__name__}")
    try:
        return timedelta(seconds=ttl)
    except OverflowError as e:
        raise ValueError(f"ttl out of range: {ttl}") from e


def to_milliseconds(ttl: TTL) -> int | None:
    """
    Convert a relative TTL to whole milliseconds.

    Returns None when the TTL is zero or negative (no expiration).
    Positive sub-millisecond TTLs round up to 1ms.
    """
    delta = to_timedelta(ttl)
    if delta <= timedelta(0):
        return None
    return max(1, int(delta / timedelta(milliseconds=1)))


def expiration_deadline(ttl: TTL) -> datetime:
    """
    Absolute local-clock deadline for a TTL measured from now.

    Raises:
        ValueError: If the deadline falls outside the datetime range
    """
    delta = to_timedelta(ttl)
    try:
        return datetime.now() + delta
    except OverflowError as e:
        raise ValueError(f"ttl out of range: {ttl}") from e


class CacheClient(ABC):
    """
    Abstract base class for cache clients.

    A client owns one connection handle to a key-value store. All operations
    are synchronous. Values are opaque bytes; interpreting them is left to the
    decode function passed to get_object().
    """

    def __init__(self, address: str, namespace: str = ""):
        self.address = address
        self.namespace = namespace.strip()

    def _make_key(self, key: str) -> str:
        """Create namespaced key."""
        if not self.namespace:
            return key
        return f"{self.namespace}:{key}"

    @abstractmethod
    def ping(self) -> None:
        """
        Check that the store is reachable.

        Raises:
            CacheConnectionError: If the store cannot be reached
        """

    @abstractmethod
    def close(self) -> None:
        """
        Release the connection.

        Raises:
            CacheConnectionError: If the transport fails while closing
        """

    @abstractmethod
    def get_object(self, key: str, decode: Decoder[T]) -> T:
        """
        Fetch the bytes stored under key and pass them to decode.

        decode is called at most once, and only when bytes were retrieved.

        Args:
            key: Cache key
            decode: Callable turning raw bytes into a value; raises on failure

        Returns:
            Whatever decode returns

        Raises:
            NotFoundError: If key is absent
            DecodeError: If decode raised (original exception chained)
            CacheConnectionError: On transport failure
        """

    @abstractmethod
    def remove_object(self, key: str) -> None:
        """
        Delete key from the store. Deleting an absent key is a no-op.

        Raises:
            CacheConnectionError: On transport failure
        """

    @abstractmethod
    def create_object(self, key: str, data: bytes, ttl: TTL) -> None:
        """
        Store data under key, overwriting any existing value.

        Args:
            key: Cache key
            data: Raw bytes to store
            ttl: Time until expiry, relative to now (0 = no expiry)

        Raises:
            CacheConnectionError: On transport failure
        """

    @abstractmethod
    def set_expiration(self, key: str, ttl: TTL) -> None:
        """
        Set key to expire at the absolute deadline now + ttl (local clock).

        Replaces any expiration the key had before.

        Raises:
            NotFoundError: If key is absent
            CacheConnectionError: On transport failure
        """
