"""Read cache and the policy that keeps it consistent with the restaurant store."""

from restaurants.caching.cache import ReadCache, get_read_cache, reset_read_cache
from restaurants.caching.policy import (
    INVALIDATION_POLICY,
    READ_POLICY,
    CacheInvalidationCoordinator,
    Eviction,
    Mutation,
    Read,
    Region,
    Scope,
    key_for,
)

__all__ = [
    "ReadCache",
    "get_read_cache",
    "reset_read_cache",
    "INVALIDATION_POLICY",
    "READ_POLICY",
    "CacheInvalidationCoordinator",
    "Eviction",
    "Mutation",
    "Read",
    "Region",
    "Scope",
    "key_for",
]
