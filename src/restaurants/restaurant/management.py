"""UpdateRestaurant / DeleteRestaurant — change or remove an existing restaurant."""

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from restaurants.domain import restaurants
from restaurants.errors import RestaurantNotFound
from restaurants.restaurant.creation import restaurant_details
from restaurants.restaurant.restaurant import Restaurant

logger = structlog.get_logger(__name__)


@restaurants.command(part_of="Restaurant")
class UpdateRestaurant:
    """Replace every mutable detail; reviews and rating stay as they are."""

    restaurant_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    cuisine_type = String(required=True, max_length=100)
    contact_information = String(required=True, max_length=255)
    address = Text(required=True)  # JSON object of Address fields
    operating_hours = Text()  # JSON object keyed by weekday
    photo_ids = Text()  # JSON array of photo URLs


@restaurants.command(part_of="Restaurant")
class DeleteRestaurant:
    restaurant_id = Identifier(required=True)


@restaurants.command_handler(part_of=Restaurant)
class ManageRestaurantHandler:
    @handle(UpdateRestaurant)
    def update_restaurant(self, command):
        repo = current_domain.repository_for(Restaurant)
        restaurant = repo.find_by_id(command.restaurant_id)
        if restaurant is None:
            raise RestaurantNotFound(command.restaurant_id)

        restaurant.update_details(**restaurant_details(command))
        repo.save(restaurant)
        return restaurant

    @handle(DeleteRestaurant)
    def delete_restaurant(self, command):
        current_domain.repository_for(Restaurant).delete_by_id(command.restaurant_id)
        logger.info("Restaurant deleted", restaurant_id=str(command.restaurant_id))
