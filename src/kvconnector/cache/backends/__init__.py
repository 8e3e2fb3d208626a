"""
kvconnector - Cache Backends

Redis backend is lazy-loaded via factory.py so the memory backend works
without importing the redis client.
"""

from .memory import MemoryCacheClient

__all__ = [
    "MemoryCacheClient",
]
