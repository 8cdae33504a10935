"""Shared BDD fixtures and step definitions for restaurant reviews."""

import pytest
from pytest_bdd import given, parsers, then
from restaurants.errors import ReviewNotAllowed
from restaurants.restaurant.events import ReviewDeleted, ReviewEdited, ReviewPosted
from restaurants.restaurant.restaurant import Address, GeoLocation, Restaurant

_REVIEW_EVENT_CLASSES = {
    "ReviewPosted": ReviewPosted,
    "ReviewEdited": ReviewEdited,
    "ReviewDeleted": ReviewDeleted,
}


def _new_restaurant():
    restaurant = Restaurant.register(
        name="Le Petit Bistro",
        cuisine_type="French",
        contact_information="bistro@example.com",
        address=Address(
            street_number="18",
            street_name="Charlotte Street",
            city="London",
            postal_code="W1T 2LZ",
            country="United Kingdom",
        ),
        geo_location=GeoLocation(latitude=51.5194, longitude=-0.1353),
    )
    restaurant._events.clear()
    return restaurant


@pytest.fixture()
def error():
    """Container for captured review rejections."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a restaurant with no reviews", target_fixture="restaurant")
def restaurant_without_reviews():
    return _new_restaurant()


@given(
    parsers.cfparse('a restaurant reviewed by "{author}" with rating {rating:d}'),
    target_fixture="restaurant",
)
def restaurant_with_review(author, rating):
    restaurant = _new_restaurant()
    restaurant.post_review(author_id=author, content="First visit", rating=rating)
    restaurant._events.clear()
    return restaurant


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the average rating is {rating:f}"))
def average_rating_is(restaurant, rating):
    assert restaurant.average_rating == pytest.approx(rating)


@then(parsers.cfparse("the restaurant has {count:d} reviews"))
def restaurant_has_n_reviews(restaurant, count):
    assert restaurant.total_reviews() == count


@then(parsers.cfparse('the review is rejected with "{reason}"'))
def review_rejected(error, reason):
    assert error["exc"] is not None, "Expected the review to be rejected"
    assert isinstance(error["exc"], ReviewNotAllowed)
    assert error["exc"].reason == reason


@then(parsers.cfparse("a {event_type} event is raised"))
def review_event_raised(restaurant, event_type):
    event_cls = _REVIEW_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in restaurant._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in restaurant._events]}"
