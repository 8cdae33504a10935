import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def restaurants_bed():
    from restaurants.domain import restaurants

    bed = DomainFixture(restaurants)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(restaurants_bed):
    with restaurants_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def run_around_tests(_ctx):
    """Start every test with an empty cache and a well-behaved geolocator; clear the store after it."""
    from restaurants.caching.cache import reset_read_cache
    from restaurants.geolocation import reset_geolocator

    reset_read_cache()
    reset_geolocator()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    reset_read_cache()
    reset_geolocator()


@pytest.fixture
def address_data():
    from restaurants.requests import AddressData

    return AddressData(
        street_number="221",
        street_name="Baker Street",
        city="London",
        postal_code="NW1 6XE",
        country="United Kingdom",
    )


@pytest.fixture
def restaurant_request(address_data):
    from restaurants.requests import OperatingHoursData, RestaurantRequest

    return RestaurantRequest(
        name="The Golden Spoon",
        cuisine_type="Italian",
        contact_information="+44 20 7946 0000",
        address=address_data,
        operating_hours=OperatingHoursData(monday="11:00-22:00", saturday="10:00-23:00"),
        photo_ids=["https://photos.example.com/spoon-1.jpg"],
    )
