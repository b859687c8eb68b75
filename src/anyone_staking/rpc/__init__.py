"""RPC layer with the chain query interfaces, retry logic, and metadata caching.

The Ape-backed provider lives in ``anyone_staking.rpc.provider`` and is
imported explicitly so adapters can run against any ChainQuery without Ape.
"""

from anyone_staking.rpc.cache import CacheEntry, MetadataCache
from anyone_staking.rpc.interfaces import CacheKey, ChainQuery, MetadataStore
from anyone_staking.rpc.retry import RetryConfig, retry_call

__all__ = [
    "CacheEntry",
    "CacheKey",
    "ChainQuery",
    "MetadataCache",
    "MetadataStore",
    "RetryConfig",
    "retry_call",
]
