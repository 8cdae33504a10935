"""CreateRestaurant — list a new restaurant.

Geolocates the address through the configured geolocation adapter before
anything is written; a geolocation failure aborts the command.
"""

import json

import structlog
from protean import handle
from protean.fields import String, Text
from protean.utils.globals import current_domain

from restaurants.domain import restaurants
from restaurants.geolocation import get_geolocator
from restaurants.restaurant.restaurant import Address, OperatingHours, Restaurant

logger = structlog.get_logger(__name__)


@restaurants.command(part_of="Restaurant")
class CreateRestaurant:
    name = String(required=True, max_length=255)
    cuisine_type = String(required=True, max_length=100)
    contact_information = String(required=True, max_length=255)
    address = Text(required=True)  # JSON object of Address fields
    operating_hours = Text()  # JSON object keyed by weekday
    photo_ids = Text()  # JSON array of photo URLs


def restaurant_details(command):
    """Domain values shared by create and update: address, location, hours, photos."""
    address = Address(**json.loads(command.address))
    operating_hours = OperatingHours(**json.loads(command.operating_hours)) if command.operating_hours else None
    photo_ids = json.loads(command.photo_ids) if command.photo_ids else []

    return {
        "name": command.name,
        "cuisine_type": command.cuisine_type,
        "contact_information": command.contact_information,
        "address": address,
        "geo_location": get_geolocator().resolve(address),
        "operating_hours": operating_hours,
        "photo_ids": photo_ids,
    }


@restaurants.command_handler(part_of=Restaurant)
class CreateRestaurantHandler:
    @handle(CreateRestaurant)
    def create_restaurant(self, command):
        restaurant = Restaurant.register(**restaurant_details(command))
        current_domain.repository_for(Restaurant).save(restaurant)

        logger.info(
            "Restaurant created",
            restaurant_id=str(restaurant.id),
            name=restaurant.name,
        )
        return restaurant
