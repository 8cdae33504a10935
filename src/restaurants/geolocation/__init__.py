"""Address-to-coordinates lookup used when a restaurant is created or updated.

``GEOLOCATION_ADAPTER`` names the backend; only ``fake`` ships here. The
chosen locator is built on first use and kept for the life of the process.
"""

import os

_geolocator_instance = None


def _build(adapter):
    if adapter == "fake":
        from restaurants.geolocation.fake_adapter import FakeGeoLocator

        return FakeGeoLocator()
    raise ValueError(f"Unknown geolocation adapter: {adapter}")


def get_geolocator():
    """The process-wide locator, built from ``GEOLOCATION_ADAPTER`` on first call."""
    global _geolocator_instance
    if _geolocator_instance is None:
        _geolocator_instance = _build(os.environ.get("GEOLOCATION_ADAPTER", "fake"))
    return _geolocator_instance


def reset_geolocator():
    global _geolocator_instance
    _geolocator_instance = None
