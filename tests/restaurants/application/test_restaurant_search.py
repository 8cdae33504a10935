"""Application tests for restaurant search and its filter precedence."""

import pytest
from protean import current_domain
from restaurants.geolocation import get_geolocator
from restaurants.requests import ReviewRequest, User
from restaurants.restaurant.restaurant import Restaurant
from restaurants.restaurant.service import RestaurantService
from restaurants.review.service import ReviewService

CENTRAL_LONDON = (51.5074, -0.1278)
MANCHESTER = (53.4808, -2.2426)


def _create(restaurant_request, address_data, name, cuisine, postal_code, rating=None):
    service = RestaurantService()
    request = restaurant_request.model_copy(
        update={
            "name": name,
            "cuisine_type": cuisine,
            "address": address_data.model_copy(update={"postal_code": postal_code}),
        }
    )
    restaurant = service.create_restaurant(request)
    if rating is not None:
        ReviewService().create_review(User(id="critic"), restaurant.id, ReviewRequest(content="Visit", rating=rating))
    return restaurant


@pytest.fixture
def catalogue(restaurant_request, address_data):
    geolocator = get_geolocator()
    geolocator.pin("WC2N 5DU", *CENTRAL_LONDON)
    geolocator.pin("M1 1AE", *MANCHESTER)

    return {
        "napoli": _create(restaurant_request, address_data, "Bella Napoli", "Italian", "WC2N 5DU", rating=5),
        "dragon": _create(restaurant_request, address_data, "Dragon Palace", "Chinese", "WC2N 5DU", rating=3),
        "curry": _create(restaurant_request, address_data, "Curry Mile Kitchen", "Indian", "M1 1AE", rating=4),
    }


class _Spy:
    """Records which repository search ran."""

    def __init__(self, monkeypatch):
        self.calls = []
        repo_cls = type(current_domain.repository_for(Restaurant))
        for name in ("find_by_min_rating", "find_by_query", "find_by_geo_radius", "find_all"):
            original = getattr(repo_cls, name)
            monkeypatch.setattr(repo_cls, name, self._wrap(name, original))

    def _wrap(self, name, original):
        def recorder(repo, *args, **kwargs):
            self.calls.append(name)
            return original(repo, *args, **kwargs)

        return recorder


def _names(page):
    return sorted(r.name for r in page.items)


class TestSearchFilters:
    def test_unfiltered_lists_everything(self, catalogue):
        page = RestaurantService().search_restaurants()
        assert page.total == 3

    def test_min_rating_filter(self, catalogue):
        page = RestaurantService().search_restaurants(min_rating=4.0)
        assert _names(page) == ["Bella Napoli", "Curry Mile Kitchen"]

    def test_text_query_matches_name_case_insensitively(self, catalogue):
        page = RestaurantService().search_restaurants(query="dragon")
        assert _names(page) == ["Dragon Palace"]

    def test_text_query_matches_cuisine(self, catalogue):
        page = RestaurantService().search_restaurants(query="ital")
        assert _names(page) == ["Bella Napoli"]

    def test_text_query_with_min_rating(self, catalogue):
        service = RestaurantService()
        assert service.search_restaurants(query="a", min_rating=4.5).total == 1
        assert _names(service.search_restaurants(query="a", min_rating=4.5)) == ["Bella Napoli"]

    def test_geo_radius_nearest_first(self, catalogue):
        page = RestaurantService().search_restaurants(latitude=51.5, longitude=-0.12, radius=10)
        assert _names(page) == ["Bella Napoli", "Dragon Palace"]

    def test_geo_radius_wide_enough_for_everything(self, catalogue):
        page = RestaurantService().search_restaurants(latitude=51.5, longitude=-0.12, radius=500)
        assert page.total == 3
        assert page.items[-1].name == "Curry Mile Kitchen"

    def test_paging(self, catalogue):
        service = RestaurantService()
        first = service.search_restaurants(page=0, size=2)
        second = service.search_restaurants(page=1, size=2)

        assert len(first.items) == 2
        assert first.has_next is True
        assert len(second.items) == 1
        assert {r.id for r in first.items}.isdisjoint({r.id for r in second.items})


class TestSearchPrecedence:
    def test_blank_query_with_min_rating_uses_rating_filter(self, catalogue, monkeypatch):
        spy = _Spy(monkeypatch)
        RestaurantService().search_restaurants(query="", min_rating=4.0)
        assert spy.calls == ["find_by_min_rating"]

    def test_query_wins_over_geo(self, catalogue, monkeypatch):
        spy = _Spy(monkeypatch)
        RestaurantService().search_restaurants(query="curry", latitude=51.5, longitude=-0.12, radius=1)
        assert spy.calls == ["find_by_query"]

    def test_rating_wins_over_geo(self, catalogue, monkeypatch):
        spy = _Spy(monkeypatch)
        page = RestaurantService().search_restaurants(min_rating=4.0, latitude=51.5, longitude=-0.12, radius=1)
        assert spy.calls == ["find_by_min_rating"]
        assert page.total == 2

    def test_partial_geo_falls_back_to_listing(self, catalogue, monkeypatch):
        spy = _Spy(monkeypatch)
        RestaurantService().search_restaurants(latitude=51.5, longitude=-0.12)
        assert spy.calls == ["find_all"]

    def test_whitespace_query_is_ignored(self, catalogue, monkeypatch):
        spy = _Spy(monkeypatch)
        page = RestaurantService().search_restaurants(query="   ")
        assert spy.calls == ["find_all"]
        assert page.total == 3

    def test_whitespace_query_also_skips_rating_filter(self, catalogue, monkeypatch):
        spy = _Spy(monkeypatch)
        page = RestaurantService().search_restaurants(query="   ", min_rating=4.0)
        assert spy.calls == ["find_all"]
        assert page.total == 3
