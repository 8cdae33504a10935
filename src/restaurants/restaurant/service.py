"""Restaurant service — entry point for restaurant reads and writes.

Writes are dispatched as commands and only invalidate the cache once the
command has returned, i.e. after its unit of work committed. A command that
raises leaves the cache untouched. Reads are served read-through from the
cache.
"""

import json

from protean.utils.globals import current_domain

from restaurants.caching.policy import CacheInvalidationCoordinator, Mutation, Read
from restaurants.restaurant.creation import CreateRestaurant
from restaurants.restaurant.management import DeleteRestaurant, UpdateRestaurant
from restaurants.restaurant.repository import DEFAULT_PAGE_SIZE
from restaurants.restaurant.restaurant import Restaurant


def _detail_fields(request):
    return {
        "name": request.name,
        "cuisine_type": request.cuisine_type,
        "contact_information": request.contact_information,
        "address": json.dumps(request.address.model_dump()),
        "operating_hours": (
            json.dumps(request.operating_hours.model_dump()) if request.operating_hours else None
        ),
        "photo_ids": json.dumps(request.photo_ids),
    }


class RestaurantService:
    def __init__(self, coordinator=None):
        self.coordinator = coordinator or CacheInvalidationCoordinator()

    # -------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------
    def create_restaurant(self, request):
        restaurant = current_domain.process(CreateRestaurant(**_detail_fields(request)), asynchronous=False)
        self.coordinator.invalidate(Mutation.CREATE_RESTAURANT, restaurant_id=restaurant.id)
        return restaurant

    def update_restaurant(self, restaurant_id, request):
        restaurant = current_domain.process(
            UpdateRestaurant(restaurant_id=restaurant_id, **_detail_fields(request)),
            asynchronous=False,
        )
        self.coordinator.invalidate(Mutation.UPDATE_RESTAURANT, restaurant_id=restaurant_id)
        return restaurant

    def delete_restaurant(self, restaurant_id):
        current_domain.process(DeleteRestaurant(restaurant_id=restaurant_id), asynchronous=False)
        self.coordinator.invalidate(Mutation.DELETE_RESTAURANT, restaurant_id=restaurant_id)

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def get_restaurant(self, restaurant_id):
        """The restaurant, or None when it does not exist."""
        return self.coordinator.cached(
            Read.GET_RESTAURANT,
            lambda: _repository().find_by_id(restaurant_id),
            restaurant_id=str(restaurant_id),
        )

    def search_restaurants(
        self,
        query=None,
        min_rating=None,
        latitude=None,
        longitude=None,
        radius=None,
        page=0,
        size=DEFAULT_PAGE_SIZE,
    ):
        """One page of restaurants, filtered by the first applicable criterion.

        Precedence: rating filter (min_rating without a query), text query
        (with min_rating defaulting to 0), geo radius (all three of latitude,
        longitude and radius), then the unfiltered listing.
        """
        return self.coordinator.cached(
            Read.SEARCH_RESTAURANTS,
            lambda: self._search(query, min_rating, latitude, longitude, radius, page, size),
            query=query,
            min_rating=min_rating,
            latitude=latitude,
            longitude=longitude,
            radius=radius,
            page=page,
            size=size,
        )

    def _search(self, query, min_rating, latitude, longitude, radius, page, size):
        repo = _repository()

        if min_rating is not None and not query:
            return repo.find_by_min_rating(min_rating, page=page, size=size)

        if query is not None and query.strip():
            return repo.find_by_query(query, min_rating=min_rating or 0.0, page=page, size=size)

        if latitude is not None and longitude is not None and radius is not None:
            return repo.find_by_geo_radius(latitude, longitude, radius, page=page, size=size)

        return repo.find_all(page=page, size=size)


def _repository():
    return current_domain.repository_for(Restaurant)
