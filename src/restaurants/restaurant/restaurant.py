"""Restaurant aggregate — a listed restaurant with its embedded reviews and photos.

The restaurant is the only storage and consistency unit: reviews and photos
have no identity of their own outside it and are saved only as part of a
restaurant save.

Review rules (per restaurant, per author):
    absent  → present   post_review
    present → present   edit_review   (author only, within 48h of posting)
    present → absent    delete_review

``average_rating`` is derived from the reviews and recomputed on every
review change; the aggregate rejects any state where the two disagree.
"""

import json
import math
import re
from datetime import UTC, datetime, timedelta

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from restaurants.domain import restaurants
from restaurants.errors import ReviewNotAllowed
from restaurants.restaurant.events import (
    RestaurantCreated,
    RestaurantUpdated,
    ReviewDeleted,
    ReviewEdited,
    ReviewPosted,
)
from restaurants.restaurant.rating import mean_rating, recompute_average_rating

REVIEW_EDIT_WINDOW = timedelta(hours=48)

_TIME_RANGE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d-([01]\d|2[0-3]):[0-5]\d$")

_WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@restaurants.value_object(part_of="Restaurant")
class Address:
    """Postal address of a restaurant; the input to geolocation."""

    street_number = String(required=True, max_length=20)
    street_name = String(required=True, max_length=255)
    unit = String(max_length=50)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)

    def one_line(self):
        street = f"{self.street_number} {self.street_name}"
        if self.unit:
            street = f"{street}, {self.unit}"
        parts = [street, self.city, self.state, self.postal_code, self.country]
        return ", ".join(part for part in parts if part)


@restaurants.value_object(part_of="Restaurant")
class GeoLocation:
    """Resolved latitude/longitude of a restaurant's address.

    Replaced wholesale whenever the restaurant is updated.
    """

    latitude = Float(min_value=-90.0, max_value=90.0)
    longitude = Float(min_value=-180.0, max_value=180.0)

    @invariant.post
    def both_coordinates_required(self):
        if self.latitude is None or self.longitude is None:
            raise ValidationError({"geo_location": ["Both latitude and longitude are required"]})


@restaurants.value_object(part_of="Restaurant")
class OperatingHours:
    """Opening time range per weekday, e.g. ``"09:00-17:00"``; unset means closed."""

    monday = String(max_length=11)
    tuesday = String(max_length=11)
    wednesday = String(max_length=11)
    thursday = String(max_length=11)
    friday = String(max_length=11)
    saturday = String(max_length=11)
    sunday = String(max_length=11)

    @invariant.post
    def time_ranges_are_well_formed(self):
        for day in _WEEKDAYS:
            value = getattr(self, day)
            if value and not _TIME_RANGE.match(value):
                raise ValidationError({day: [f"Invalid time range: {value!r}, expected HH:MM-HH:MM"]})


@restaurants.value_object
class Photo:
    """An uploaded photo. Identified only by its position in the owner's list."""

    url = String(required=True, max_length=500)
    upload_date = DateTime(required=True)


def photos_to_json(photo_ids, uploaded_at):
    """Build a fresh photo list from photo URLs, all stamped ``uploaded_at``."""
    return json.dumps([{"url": url, "upload_date": uploaded_at.isoformat()} for url in (photo_ids or [])])


def photos_from_json(raw):
    if not raw:
        return []
    return [
        Photo(url=item["url"], upload_date=datetime.fromisoformat(item["upload_date"]))
        for item in json.loads(raw)
    ]


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@restaurants.entity(part_of="Restaurant")
class Review:
    """An author's review of the restaurant. At most one per author."""

    content = Text(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    photos = Text()  # JSON array of {url, upload_date}
    date_posted = DateTime(required=True)
    last_edited = DateTime(required=True)
    written_by = Identifier(required=True)

    @invariant.post
    def last_edited_not_before_date_posted(self):
        if self.date_posted and self.last_edited and self.last_edited < self.date_posted:
            raise ValidationError({"last_edited": ["Review cannot be edited before it was posted"]})

    def photo_values(self):
        return photos_from_json(self.photos)

    def is_editable(self, now):
        """Edits are allowed until 48h after posting; later edits do not extend the window."""
        return now <= self.date_posted + REVIEW_EDIT_WINDOW


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@restaurants.aggregate
class Restaurant:
    """A listed restaurant together with its reviews and photos."""

    name = String(required=True, max_length=255)
    cuisine_type = String(required=True, max_length=100)
    contact_information = String(required=True, max_length=255)
    address = ValueObject(Address, required=True)
    geo_location = ValueObject(GeoLocation)
    operating_hours = ValueObject(OperatingHours)
    average_rating = Float(default=0.0)
    photos = Text()  # JSON array of {url, upload_date}
    reviews = HasMany(Review)

    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def average_rating_matches_reviews(self):
        expected = mean_rating(self.reviews)
        if not math.isclose(self.average_rating or 0.0, expected, abs_tol=1e-9):
            raise ValidationError(
                {"average_rating": [f"Average rating {self.average_rating} does not match reviews ({expected})"]}
            )

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def register(
        cls,
        name,
        cuisine_type,
        contact_information,
        address,
        geo_location,
        operating_hours=None,
        photo_ids=None,
    ):
        """List a new restaurant with no reviews."""
        now = datetime.now(UTC)

        restaurant = cls(
            name=name,
            cuisine_type=cuisine_type,
            contact_information=contact_information,
            address=address,
            geo_location=geo_location,
            operating_hours=operating_hours,
            average_rating=0.0,
            photos=photos_to_json(photo_ids, now),
            created_at=now,
            updated_at=now,
        )

        restaurant.raise_(
            RestaurantCreated(
                restaurant_id=str(restaurant.id),
                name=name,
                cuisine_type=cuisine_type,
                latitude=geo_location.latitude if geo_location else None,
                longitude=geo_location.longitude if geo_location else None,
                photo_count=len(photo_ids or []),
                created_at=now,
            )
        )

        return restaurant

    # -------------------------------------------------------------------
    # Details
    # -------------------------------------------------------------------
    def update_details(
        self,
        name,
        cuisine_type,
        contact_information,
        address,
        geo_location,
        operating_hours=None,
        photo_ids=None,
    ):
        """Overwrite every mutable detail. Reviews and the average rating are untouched."""
        now = datetime.now(UTC)

        with atomic_change(self):
            self.name = name
            self.cuisine_type = cuisine_type
            self.contact_information = contact_information
            self.address = address
            self.geo_location = geo_location
            self.operating_hours = operating_hours
            self.photos = photos_to_json(photo_ids, now)
            self.updated_at = now

        self.raise_(
            RestaurantUpdated(
                restaurant_id=str(self.id),
                name=name,
                cuisine_type=cuisine_type,
                latitude=geo_location.latitude if geo_location else None,
                longitude=geo_location.longitude if geo_location else None,
                photo_count=len(photo_ids or []),
                updated_at=now,
            )
        )

    def photo_values(self):
        return photos_from_json(self.photos)

    def total_reviews(self):
        return len(self.reviews)

    # -------------------------------------------------------------------
    # Reviews
    # -------------------------------------------------------------------
    def find_review(self, review_id):
        return next((r for r in self.reviews if str(r.id) == str(review_id)), None)

    def review_by(self, author_id):
        return next((r for r in self.reviews if str(r.written_by) == str(author_id)), None)

    def post_review(self, author_id, content, rating, photo_ids=None):
        """Add the author's review. Each author may review a restaurant once."""
        if self.review_by(author_id) is not None:
            raise ReviewNotAllowed("User has already reviewed this restaurant")

        now = datetime.now(UTC)

        review = Review(
            content=content,
            rating=rating,
            photos=photos_to_json(photo_ids, now),
            date_posted=now,
            last_edited=now,
            written_by=author_id,
        )

        with atomic_change(self):
            self.add_reviews(review)
            recompute_average_rating(self)
            self.updated_at = now

        self.raise_(
            ReviewPosted(
                restaurant_id=str(self.id),
                review_id=str(review.id),
                author_id=str(author_id),
                rating=rating,
                average_rating=self.average_rating,
                posted_at=now,
            )
        )

        return review

    def edit_review(self, author_id, review_id, content, rating, photo_ids=None):
        """Replace content, rating and photos of the author's own review."""
        review = self.find_review(review_id)
        if review is None:
            raise ReviewNotAllowed("Review does not exist")

        if str(review.written_by) != str(author_id):
            raise ReviewNotAllowed("Cannot update another user's review")

        now = datetime.now(UTC)
        if not review.is_editable(now):
            raise ReviewNotAllowed("Review can no longer be edited")

        with atomic_change(self):
            review.content = content
            review.rating = rating
            review.photos = photos_to_json(photo_ids, now)
            review.last_edited = now
            recompute_average_rating(self)
            self.updated_at = now

        self.raise_(
            ReviewEdited(
                restaurant_id=str(self.id),
                review_id=str(review.id),
                author_id=str(author_id),
                rating=rating,
                average_rating=self.average_rating,
                edited_at=now,
            )
        )

        return review

    def delete_review(self, review_id):
        """Remove the review if present. Returns False when there was nothing to remove."""
        review = self.find_review(review_id)
        if review is None:
            return False

        now = datetime.now(UTC)

        with atomic_change(self):
            self.remove_reviews(review)
            recompute_average_rating(self)
            self.updated_at = now

        self.raise_(
            ReviewDeleted(
                restaurant_id=str(self.id),
                review_id=str(review_id),
                average_rating=self.average_rating,
                deleted_at=now,
            )
        )

        return True
