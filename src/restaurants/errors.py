"""Error kinds surfaced by the restaurants domain.

All of them extend Protean's exception hierarchy so callers that already
handle ``ObjectNotFoundError`` / ``ValidationError`` keep working.
"""

from protean.exceptions import ObjectNotFoundError, ProteanException, ValidationError


class RestaurantNotFound(ObjectNotFoundError):
    """The restaurant id does not exist."""

    def __init__(self, restaurant_id):
        super().__init__(f"Restaurant with id not found: {restaurant_id}")
        self.restaurant_id = restaurant_id


class ReviewNotAllowed(ValidationError):
    """A review business rule rejected the request. Caller-correctable."""

    def __init__(self, reason):
        super().__init__({"review": [reason]})
        self.reason = reason


class UpstreamFailure(ProteanException):
    """A collaborator (geolocation, document store) failed. Never retried here."""


class ReviewPersistenceError(ProteanException):
    """A review written to the aggregate could not be read back after the save."""
