"""DeleteReview — remove a review from its restaurant. Idempotent."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from restaurants.domain import restaurants
from restaurants.errors import RestaurantNotFound
from restaurants.restaurant.restaurant import Restaurant

logger = structlog.get_logger(__name__)


@restaurants.command(part_of="Restaurant")
class DeleteReview:
    restaurant_id = Identifier(required=True)
    review_id = Identifier(required=True)


@restaurants.command_handler(part_of=Restaurant)
class DeleteReviewHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        repo = current_domain.repository_for(Restaurant)
        restaurant = repo.find_by_id(command.restaurant_id)
        if restaurant is None:
            raise RestaurantNotFound(command.restaurant_id)

        if not restaurant.delete_review(command.review_id):
            logger.info(
                "Review already absent",
                restaurant_id=str(command.restaurant_id),
                review_id=str(command.review_id),
            )

        repo.save(restaurant)
