"""PostReview — an author reviews a restaurant.

One review per author per restaurant. The created review is read back from
the saved aggregate rather than returned from the in-memory draft.
"""

import json

import structlog
from protean import handle
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain

from restaurants.domain import restaurants
from restaurants.errors import RestaurantNotFound, ReviewPersistenceError
from restaurants.restaurant.restaurant import Restaurant

logger = structlog.get_logger(__name__)


@restaurants.command(part_of="Restaurant")
class PostReview:
    restaurant_id = Identifier(required=True)
    author_id = Identifier(required=True)
    content = Text(required=True)
    rating = Integer(required=True)
    photo_ids = Text()  # JSON array of photo URLs


@restaurants.command_handler(part_of=Restaurant)
class PostReviewHandler:
    @handle(PostReview)
    def post_review(self, command):
        repo = current_domain.repository_for(Restaurant)
        restaurant = repo.find_by_id(command.restaurant_id)
        if restaurant is None:
            raise RestaurantNotFound(command.restaurant_id)

        review = restaurant.post_review(
            author_id=command.author_id,
            content=command.content,
            rating=command.rating,
            photo_ids=json.loads(command.photo_ids) if command.photo_ids else [],
        )
        saved = repo.save(restaurant)

        created = saved.find_review(review.id)
        if created is None:
            raise ReviewPersistenceError(f"Error retrieving created review {review.id}")

        logger.info(
            "Review posted",
            restaurant_id=str(saved.id),
            review_id=str(created.id),
            average_rating=saved.average_rating,
        )
        return created
