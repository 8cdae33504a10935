"""What a geocoder must do for the restaurant services.

A locator turns an Address into a GeoLocation or raises UpstreamFailure.
Callers make one attempt per write.
"""

from abc import ABC, abstractmethod

from restaurants.restaurant.restaurant import Address, GeoLocation


class GeoLocator(ABC):
    """Resolves postal addresses to coordinates."""

    @abstractmethod
    def resolve(self, address: Address) -> GeoLocation:
        """Resolve a postal address to a latitude/longitude pair.

        Raises:
            UpstreamFailure: when the geocoding service cannot answer.
        """
        ...
