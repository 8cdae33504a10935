"""Average rating aggregation for a restaurant's review list."""


def mean_rating(reviews) -> float:
    """Arithmetic mean of the review ratings, 0.0 when there are none."""
    ratings = [review.rating for review in (reviews or [])]
    if not ratings:
        return 0.0
    return sum(ratings) / len(ratings)


def recompute_average_rating(restaurant) -> None:
    """Refresh ``restaurant.average_rating`` from its current reviews.

    Must run after every change to the review list and before the aggregate
    is saved.
    """
    restaurant.average_rating = mean_rating(restaurant.reviews)
