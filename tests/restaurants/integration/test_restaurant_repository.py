"""Tests for the restaurant repository against the configured store."""

import pytest
from protean import current_domain
from restaurants.restaurant.restaurant import Address, GeoLocation, Restaurant, Review


def _address():
    return Address(
        street_number="1",
        street_name="High Street",
        city="London",
        postal_code="E1 6AN",
        country="United Kingdom",
    )


def _store(name, cuisine="Thai", latitude=51.5074, longitude=-0.1278, ratings=()):
    restaurant = Restaurant.register(
        name=name,
        cuisine_type=cuisine,
        contact_information=f"{name.lower().replace(' ', '.')}@example.com",
        address=_address(),
        geo_location=GeoLocation(latitude=latitude, longitude=longitude),
    )
    for index, rating in enumerate(ratings):
        restaurant.post_review(author_id=f"author-{index}", content="Visit", rating=rating)
    return current_domain.repository_for(Restaurant).save(restaurant)


@pytest.fixture
def repo():
    return current_domain.repository_for(Restaurant)


class TestAggregateAccess:
    def test_find_by_id(self, repo):
        stored = _store("Thai Orchid", ratings=(4, 5))
        found = repo.find_by_id(stored.id)
        assert found.name == "Thai Orchid"
        assert found.total_reviews() == 2
        assert found.average_rating == 4.5

    def test_find_missing_returns_none(self, repo):
        assert repo.find_by_id("missing-id") is None

    def test_delete_by_id(self, repo):
        stored = _store("Thai Orchid")
        repo.delete_by_id(stored.id)
        assert repo.find_by_id(stored.id) is None

    def test_delete_removes_stored_reviews(self, repo):
        stored = _store("Thai Orchid", ratings=(4, 5))
        kept = _store("Lotus Garden", ratings=(3,))

        repo.delete_by_id(stored.id)

        remaining = current_domain.repository_for(Review)._dao.query.all()
        assert remaining.total == 1
        assert repo.find_by_id(kept.id).total_reviews() == 1

    def test_delete_missing_is_noop(self, repo):
        _store("Thai Orchid")
        repo.delete_by_id("missing-id")
        assert repo.find_all().total == 1


class TestSearchQueries:
    def test_min_rating_sorted_descending(self, repo):
        _store("Three", ratings=(3,))
        _store("Five", ratings=(5,))
        _store("Four", ratings=(4,))

        page = repo.find_by_min_rating(3.5, sort="-average_rating")

        assert [r.name for r in page.items] == ["Five", "Four"]
        assert page.total == 2

    def test_query_respects_min_rating(self, repo):
        _store("Noodle Bar", ratings=(2,))
        _store("Noodle House", ratings=(5,))

        page = repo.find_by_query("noodle", min_rating=3.0)

        assert [r.name for r in page.items] == ["Noodle House"]

    def test_find_all_pages(self, repo):
        for index in range(5):
            _store(f"Restaurant {index}")

        page = repo.find_all(page=1, size=2, sort="name")

        assert [r.name for r in page.items] == ["Restaurant 2", "Restaurant 3"]
        assert page.total == 5

    def test_geo_radius_nearest_first(self, repo):
        _store("Far", latitude=51.60, longitude=-0.12)
        _store("Near", latitude=51.501, longitude=-0.12)
        _store("Elsewhere", latitude=53.48, longitude=-2.24)

        page = repo.find_by_geo_radius(51.5, -0.12, 20)

        assert [r.name for r in page.items] == ["Near", "Far"]
        assert page.total == 2

    def test_geo_radius_with_explicit_sort(self, repo):
        _store("Beta", latitude=51.501, longitude=-0.12)
        _store("Alpha", latitude=51.60, longitude=-0.12)

        page = repo.find_by_geo_radius(51.5, -0.12, 20, sort="name")

        assert [r.name for r in page.items] == ["Alpha", "Beta"]

    def test_geo_radius_pages(self, repo):
        for index in range(3):
            _store(f"Spot {index}", latitude=51.5 + index * 0.01, longitude=-0.12)

        page = repo.find_by_geo_radius(51.5, -0.12, 20, page=1, size=2)

        assert [r.name for r in page.items] == ["Spot 2"]
        assert page.total == 3
