"""Restaurant repository — the only path between the domain and the document store.

Loads and saves whole Restaurant aggregates and runs the store-side search
queries (rating filter, text query, geo radius, plain listing). No business
rules live here.
"""

import math
from dataclasses import dataclass, field

from protean.exceptions import ObjectNotFoundError
from protean.utils.query import Q

from restaurants.domain import restaurants
from restaurants.restaurant.restaurant import Restaurant, Review

DEFAULT_PAGE_SIZE = 20

_EARTH_RADIUS_KM = 6371.0088

# Batch size used when a filter has to be evaluated in process (geo radius)
_SCAN_BATCH = 100


@dataclass(frozen=True)
class Page:
    """One page of a larger result: ``items`` plus the ``total`` across all pages."""

    items: list = field(default_factory=list)
    total: int = 0
    page: int = 0
    size: int = DEFAULT_PAGE_SIZE

    @property
    def has_next(self):
        return (self.page + 1) * self.size < self.total


def distance_km(lat1, lon1, lat2, lon2):
    """Great-circle distance between two points (haversine)."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * _EARTH_RADIUS_KM * math.asin(math.sqrt(a))


@restaurants.repository(part_of=Restaurant)
class RestaurantRepository:
    # -------------------------------------------------------------------
    # Aggregate access
    # -------------------------------------------------------------------
    def find_by_id(self, restaurant_id):
        try:
            return self.get(restaurant_id)
        except ObjectNotFoundError:
            return None

    def save(self, restaurant):
        self.add(restaurant)
        return restaurant

    def delete_by_id(self, restaurant_id):
        """Delete the restaurant together with its stored reviews. No-op when absent."""
        restaurant = self.find_by_id(restaurant_id)
        if restaurant is None:
            return

        # Reviews are stored as their own records; the root delete does not reach them
        review_dao = self._domain.repository_for(Review)._dao
        for review in restaurant.reviews:
            review_dao.delete(review)
        self._dao.delete(restaurant)

    # -------------------------------------------------------------------
    # Search queries
    # -------------------------------------------------------------------
    def find_by_min_rating(self, min_rating, page=0, size=DEFAULT_PAGE_SIZE, sort=None):
        queryset = self._dao.query.filter(average_rating__gte=min_rating)
        return self._page(queryset, page, size, sort)

    def find_by_query(self, query, min_rating=0.0, page=0, size=DEFAULT_PAGE_SIZE, sort=None):
        text = query.strip()
        queryset = self._dao.query.filter(
            Q(name__icontains=text) | Q(cuisine_type__icontains=text),
            average_rating__gte=min_rating,
        )
        return self._page(queryset, page, size, sort)

    def find_by_geo_radius(self, latitude, longitude, radius_km, page=0, size=DEFAULT_PAGE_SIZE, sort=None):
        """Restaurants within ``radius_km`` of the point, nearest first unless ``sort`` is given.

        ``sort`` names a restaurant field, prefixed with ``-`` for descending.
        """
        nearby = []
        for restaurant in self._scan():
            location = restaurant.geo_location
            if location is None:
                continue
            distance = distance_km(latitude, longitude, location.latitude, location.longitude)
            if distance <= radius_km:
                nearby.append((distance, restaurant))

        if sort:
            attribute = sort.lstrip("-")
            nearby.sort(key=lambda pair: getattr(pair[1], attribute), reverse=sort.startswith("-"))
        else:
            nearby.sort(key=lambda pair: pair[0])
        offset = page * size
        items = [restaurant for _, restaurant in nearby[offset : offset + size]]
        return Page(items=items, total=len(nearby), page=page, size=size)

    def find_all(self, page=0, size=DEFAULT_PAGE_SIZE, sort=None):
        return self._page(self._dao.query, page, size, sort)

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def _page(self, queryset, page, size, sort):
        if sort:
            queryset = queryset.order_by(sort)
        result = queryset.offset(page * size).limit(size).all()
        return Page(items=list(result.items), total=result.total, page=page, size=size)

    def _scan(self):
        offset = 0
        while True:
            result = self._dao.query.offset(offset).limit(_SCAN_BATCH).all()
            yield from result.items
            offset += _SCAN_BATCH
            if offset >= result.total:
                break
