"""Restaurants bounded context — restaurants, embedded reviews, and cached reads.

A Restaurant aggregate owns its Reviews and Photos; the average rating is
derived from the review list and kept consistent on every review mutation.
Reads go through a process-wide cache that mutations invalidate explicitly.
"""

from protean.domain import Domain

from restaurants.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
restaurants = Domain(name="restaurants")
