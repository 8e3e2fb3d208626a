"""
kvconnector - Key-value cache connector

A thin synchronous client over a key-value store (Redis) with caller-supplied
decoding, relative TTL writes and absolute-deadline expiration refresh.
"""

from .cache import (
    CacheClient,
    close_shared_instance,
    new_instance,
    shared_instance,
)
from .errors import (
    CacheConnectionError,
    CacheError,
    ConfigurationError,
    DecodeError,
    KVConnectorError,
    NotFoundError,
)

__version__ = "0.1.0"

__all__ = [
    "CacheClient",
    "new_instance",
    "shared_instance",
    "close_shared_instance",
    "KVConnectorError",
    "ConfigurationError",
    "CacheError",
    "NotFoundError",
    "DecodeError",
    "CacheConnectionError",
]
