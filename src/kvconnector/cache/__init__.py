"""
kvconnector - Cache Module

Key-value cache clients with pluggable backends.

- factory.py: new_instance() / shared_instance() and shared-instance teardown
- interface.py: Abstract CacheClient all backends implement
- backends/: Redis and in-memory implementations

Usage:
    from kvconnector.cache import shared_instance

    cache = shared_instance("localhost:6379")
    cache.create_object("session:42", b"alice", ttl=60)
    user = cache.get_object("session:42", bytes.decode)
"""

from .factory import (
    close_shared_instance,
    has_shared_instance,
    new_instance,
    reset_shared_instance,
    shared_instance,
)
from .interface import TTL, CacheClient, Decoder

__all__ = [
    # Factory functions
    "new_instance",
    "shared_instance",
    "has_shared_instance",
    "close_shared_instance",
    "reset_shared_instance",
    # Interface
    "CacheClient",
    "Decoder",
    "TTL",
]
