"""In-process geocoder that needs no network, for tests and local runs.

Every address maps to a stable point inside the Greater London bounding box,
derived from the address text. Tests can pin a postal code to exact
coordinates or make the adapter fail.
"""

import random

from restaurants.errors import UpstreamFailure
from restaurants.geolocation.port import GeoLocator
from restaurants.restaurant.restaurant import Address, GeoLocation

LONDON_BOUNDS = {
    "min_latitude": 51.28,
    "max_latitude": 51.686,
    "min_longitude": -0.489,
    "max_longitude": 0.236,
}


class FakeGeoLocator(GeoLocator):
    """Fake geolocator that always succeeds by default."""

    def __init__(self):
        self.should_succeed = True
        self.failure_reason = "Geolocation service unavailable"
        self._pins = {}

    def configure(self, should_succeed: bool = True, failure_reason: str = "Geolocation service unavailable"):
        """Configure the fake geolocator behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def pin(self, postal_code: str, latitude: float, longitude: float):
        """Resolve every address with ``postal_code`` to exactly this point."""
        self._pins[postal_code] = (latitude, longitude)

    def resolve(self, address: Address) -> GeoLocation:
        if not self.should_succeed:
            raise UpstreamFailure(self.failure_reason)

        if address.postal_code in self._pins:
            latitude, longitude = self._pins[address.postal_code]
            return GeoLocation(latitude=latitude, longitude=longitude)

        rng = random.Random(address.one_line())
        return GeoLocation(
            latitude=rng.uniform(LONDON_BOUNDS["min_latitude"], LONDON_BOUNDS["max_latitude"]),
            longitude=rng.uniform(LONDON_BOUNDS["min_longitude"], LONDON_BOUNDS["max_longitude"]),
        )
