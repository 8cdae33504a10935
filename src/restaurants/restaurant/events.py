"""Domain events for the Restaurant aggregate.

Raised by the aggregate on every state change that reaches the store.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String

from restaurants.domain import restaurants


@restaurants.event(part_of="Restaurant")
class RestaurantCreated:
    """A new restaurant was listed."""

    __version__ = 1

    restaurant_id = Identifier(required=True)
    name = String(required=True)
    cuisine_type = String(required=True)
    latitude = Float()
    longitude = Float()
    photo_count = Integer(default=0)
    created_at = DateTime(required=True)


@restaurants.event(part_of="Restaurant")
class RestaurantUpdated:
    """A restaurant's details, location, or photos were replaced."""

    __version__ = 1

    restaurant_id = Identifier(required=True)
    name = String(required=True)
    cuisine_type = String(required=True)
    latitude = Float()
    longitude = Float()
    photo_count = Integer(default=0)
    updated_at = DateTime(required=True)


@restaurants.event(part_of="Restaurant")
class ReviewPosted:
    """An author posted their review of the restaurant."""

    __version__ = 1

    restaurant_id = Identifier(required=True)
    review_id = Identifier(required=True)
    author_id = Identifier(required=True)
    rating = Integer(required=True)
    average_rating = Float(required=True)
    posted_at = DateTime(required=True)


@restaurants.event(part_of="Restaurant")
class ReviewEdited:
    """An author edited their review within the edit window."""

    __version__ = 1

    restaurant_id = Identifier(required=True)
    review_id = Identifier(required=True)
    author_id = Identifier(required=True)
    rating = Integer(required=True)
    average_rating = Float(required=True)
    edited_at = DateTime(required=True)


@restaurants.event(part_of="Restaurant")
class ReviewDeleted:
    """A review was removed from the restaurant."""

    __version__ = 1

    restaurant_id = Identifier(required=True)
    review_id = Identifier(required=True)
    average_rating = Float(required=True)
    deleted_at = DateTime(required=True)
