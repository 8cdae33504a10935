"""EditReview — the author revises their review.

Only the original author may edit, and only within 48 hours of the review's
posting date. Content, rating and photos are replaced, not merged.
"""

import json

import structlog
from protean import handle
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain

from restaurants.domain import restaurants
from restaurants.errors import RestaurantNotFound, ReviewNotAllowed
from restaurants.restaurant.restaurant import Restaurant

logger = structlog.get_logger(__name__)


@restaurants.command(part_of="Restaurant")
class EditReview:
    restaurant_id = Identifier(required=True)
    review_id = Identifier(required=True)
    author_id = Identifier(required=True)  # Must match original author
    content = Text(required=True)
    rating = Integer(required=True)
    photo_ids = Text()  # JSON array of photo URLs


@restaurants.command_handler(part_of=Restaurant)
class EditReviewHandler:
    @handle(EditReview)
    def edit_review(self, command):
        repo = current_domain.repository_for(Restaurant)
        restaurant = repo.find_by_id(command.restaurant_id)
        if restaurant is None:
            raise RestaurantNotFound(command.restaurant_id)

        try:
            review = restaurant.edit_review(
                author_id=command.author_id,
                review_id=command.review_id,
                content=command.content,
                rating=command.rating,
                photo_ids=json.loads(command.photo_ids) if command.photo_ids else [],
            )
        except ReviewNotAllowed as exc:
            logger.info(
                "Review edit rejected",
                restaurant_id=str(command.restaurant_id),
                review_id=str(command.review_id),
                author_id=str(command.author_id),
                reason=exc.reason,
            )
            raise

        repo.save(restaurant)
        return review
