"""Cache invalidation policy — which reads populate which region, and which
mutations evict what.

The tables below are the whole contract. Review mutations clear every region
outright: a rating change moves the restaurant's average rating, which feeds
every rating-filtered search page, so no narrower eviction is safe.
"""

from enum import Enum
from types import MappingProxyType
from typing import NamedTuple

import structlog

from restaurants.caching.cache import get_read_cache

logger = structlog.get_logger(__name__)

_MISS = object()


class Region(Enum):
    RESTAURANT = "restaurant"
    RESTAURANTS = "restaurants"
    REVIEW = "review"
    REVIEWS = "reviews"


class Scope(Enum):
    ENTRY = "entry"  # only the restaurant's own key
    REGION = "region"  # every entry in the region


class Mutation(Enum):
    CREATE_RESTAURANT = "create_restaurant"
    UPDATE_RESTAURANT = "update_restaurant"
    DELETE_RESTAURANT = "delete_restaurant"
    CREATE_REVIEW = "create_review"
    UPDATE_REVIEW = "update_review"
    DELETE_REVIEW = "delete_review"


class Read(Enum):
    GET_RESTAURANT = "get_restaurant"
    SEARCH_RESTAURANTS = "search_restaurants"
    GET_REVIEW = "get_review"
    LIST_REVIEWS = "list_reviews"


class Eviction(NamedTuple):
    region: Region
    scope: Scope


class ReadRule(NamedTuple):
    region: Region
    key_fields: tuple


_ALL_REGIONS = tuple(Eviction(region, Scope.REGION) for region in Region)

INVALIDATION_POLICY = MappingProxyType(
    {
        Mutation.CREATE_RESTAURANT: (Eviction(Region.RESTAURANTS, Scope.REGION),),
        Mutation.UPDATE_RESTAURANT: (
            Eviction(Region.RESTAURANT, Scope.ENTRY),
            Eviction(Region.RESTAURANTS, Scope.REGION),
        ),
        Mutation.DELETE_RESTAURANT: (
            Eviction(Region.RESTAURANT, Scope.ENTRY),
            Eviction(Region.RESTAURANTS, Scope.REGION),
        ),
        Mutation.CREATE_REVIEW: _ALL_REGIONS,
        Mutation.UPDATE_REVIEW: _ALL_REGIONS,
        Mutation.DELETE_REVIEW: _ALL_REGIONS,
    }
)

READ_POLICY = MappingProxyType(
    {
        Read.GET_RESTAURANT: ReadRule(Region.RESTAURANT, ("restaurant_id",)),
        Read.SEARCH_RESTAURANTS: ReadRule(
            Region.RESTAURANTS,
            ("query", "min_rating", "latitude", "longitude", "radius", "page", "size"),
        ),
        Read.GET_REVIEW: ReadRule(Region.REVIEW, ("review_id",)),
        Read.LIST_REVIEWS: ReadRule(
            Region.REVIEWS,
            ("restaurant_id", "page", "size", "sort_field", "ascending"),
        ),
    }
)


def key_for(read, **params):
    """Cache key of a read: its parameters, in the order the rule declares."""
    rule = READ_POLICY[read]
    missing = [name for name in rule.key_fields if name not in params]
    if missing:
        raise ValueError(f"{read.value} key is missing {', '.join(missing)}")
    return tuple(params[name] for name in rule.key_fields)


class CacheInvalidationCoordinator:
    """Applies the policy tables to a ReadCache."""

    def __init__(self, cache=None, policy=INVALIDATION_POLICY):
        self.cache = cache if cache is not None else get_read_cache()
        self.policy = policy

    def evictions_for(self, mutation):
        return self.policy[mutation]

    def cached(self, read, loader, **params):
        """Read-through: return the cached value, or load, store and return it.

        ``None`` results are returned but never stored.
        """
        region = READ_POLICY[read].region.value
        key = key_for(read, **params)

        value = self.cache.get(region, key, _MISS)
        if value is not _MISS:
            logger.debug("Cache hit", region=region, key=key)
            return value

        logger.debug("Cache miss", region=region, key=key)
        epoch = self.cache.epoch(region)
        value = loader()
        if value is not None:
            self.cache.put(region, key, value, epoch=epoch)
        return value

    def invalidate(self, mutation, restaurant_id=None):
        """Evict everything ``mutation`` may have made stale.

        Call only after the mutation has been persisted. Entry-scoped
        evictions address the restaurant's own key and need ``restaurant_id``.
        """
        evictions = self.evictions_for(mutation)
        for eviction in evictions:
            region = eviction.region.value
            if eviction.scope is Scope.ENTRY:
                if restaurant_id is None:
                    raise ValueError(f"{mutation.value} evicts a single {region} entry and needs a restaurant id")
                self.cache.evict(region, (str(restaurant_id),))
            else:
                self.cache.clear(region)

        logger.info(
            "Cache invalidated",
            mutation=mutation.value,
            restaurant_id=str(restaurant_id) if restaurant_id is not None else None,
            regions=[f"{e.region.value}:{e.scope.value}" for e in evictions],
        )
        return evictions

