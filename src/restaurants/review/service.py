"""Review service — entry point for review reads and writes.

Every review mutation changes the owning restaurant's average rating, so
after a successful write the service clears all four cache regions.
"""

import json

from protean.utils.globals import current_domain

from restaurants.caching.policy import CacheInvalidationCoordinator, Mutation, Read
from restaurants.errors import RestaurantNotFound
from restaurants.restaurant.repository import DEFAULT_PAGE_SIZE
from restaurants.restaurant.restaurant import Restaurant
from restaurants.review.deletion import DeleteReview
from restaurants.review.editing import EditReview
from restaurants.review.listing import paginate, sort_reviews
from restaurants.review.posting import PostReview


class ReviewService:
    def __init__(self, coordinator=None):
        self.coordinator = coordinator or CacheInvalidationCoordinator()

    # -------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------
    def create_review(self, author, restaurant_id, request):
        review = current_domain.process(
            PostReview(
                restaurant_id=restaurant_id,
                author_id=author.id,
                content=request.content,
                rating=request.rating,
                photo_ids=json.dumps(request.photo_ids),
            ),
            asynchronous=False,
        )
        self.coordinator.invalidate(Mutation.CREATE_REVIEW, restaurant_id=restaurant_id)
        return review

    def update_review(self, author, restaurant_id, review_id, request):
        review = current_domain.process(
            EditReview(
                restaurant_id=restaurant_id,
                review_id=review_id,
                author_id=author.id,
                content=request.content,
                rating=request.rating,
                photo_ids=json.dumps(request.photo_ids),
            ),
            asynchronous=False,
        )
        self.coordinator.invalidate(Mutation.UPDATE_REVIEW, restaurant_id=restaurant_id)
        return review

    def delete_review(self, restaurant_id, review_id):
        current_domain.process(
            DeleteReview(restaurant_id=restaurant_id, review_id=review_id),
            asynchronous=False,
        )
        self.coordinator.invalidate(Mutation.DELETE_REVIEW, restaurant_id=restaurant_id)

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def list_reviews(self, restaurant_id, page=0, size=DEFAULT_PAGE_SIZE, sort_field=None, ascending=False):
        """A page of the restaurant's reviews, newest first unless told otherwise."""

        def load():
            restaurant = _load_restaurant(restaurant_id)
            ordered = sort_reviews(restaurant.reviews, sort_field=sort_field, ascending=ascending)
            return paginate(ordered, page, size)

        return self.coordinator.cached(
            Read.LIST_REVIEWS,
            load,
            restaurant_id=str(restaurant_id),
            page=page,
            size=size,
            sort_field=sort_field,
            ascending=ascending,
        )

    def get_review(self, restaurant_id, review_id):
        """The review, or None if the restaurant has no review with that id."""
        return self.coordinator.cached(
            Read.GET_REVIEW,
            lambda: _load_restaurant(restaurant_id).find_review(review_id),
            review_id=str(review_id),
        )


def _load_restaurant(restaurant_id):
    restaurant = current_domain.repository_for(Restaurant).find_by_id(restaurant_id)
    if restaurant is None:
        raise RestaurantNotFound(restaurant_id)
    return restaurant
