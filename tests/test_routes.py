"""Tests for the HTTP layer."""

import pytest
from fastapi.testclient import TestClient

from royalshelf import create_app
from royalshelf.config import get_catalog
from royalshelf.errors import FetchFailure, StoreUnavailable
from royalshelf.models import Book


@pytest.fixture
def client(catalog):
    app = create_app(warm_up=False)
    app.dependency_overrides[get_catalog] = lambda: catalog
    return TestClient(app)


def test_root_and_health(client):
    assert client.get("/").json()["endpoints"]["popular"] == "/popular"
    assert client.get("/health").json()["status"] == "healthy"


def test_popular_listing(client):
    response = client.get("/popular")

    assert response.status_code == 200
    assert response.json() == {
        "total": 2,
        "books": [
            {"title": "Title 1", "link": "link1"},
            {"title": "Title 2", "link": "link2"},
        ],
    }


def test_popular_fetch_failure_is_bad_gateway(client, source):
    source.popular_error = FetchFailure("site down")

    response = client.get("/popular")

    assert response.status_code == 502
    assert response.json() == {"detail": "site down", "error_type": "FetchFailure"}


def test_failed_refresh_keeps_listing(client, source):
    client.get("/popular")
    source.popular_error = FetchFailure("site down")

    assert client.post("/popular/refresh").status_code == 502
    assert client.get("/popular").json()["total"] == 2


def test_refresh_replaces_listing(client, source):
    client.get("/popular")
    source.popular = source.popular[:1]

    assert client.post("/popular/refresh").json()["total"] == 1


def test_filter_popular(client):
    client.get("/popular")

    body = client.get("/popular/search", params={"q": "title 2"}).json()

    assert body["total_results"] == 1
    assert body["results"] == [{"title": "Title 2", "link": "link2"}]
    assert client.get("/popular/search").json()["total_results"] == 2


def test_site_search(client, source):
    source.search = [Book("Worm", "https://www.royalroad.com/fiction/7")]

    body = client.get("/search", params={"query": "worm"}).json()

    assert body["query"] == "worm"
    assert body["results"] == [{"title": "Worm", "link": "https://www.royalroad.com/fiction/7"}]


def test_blank_site_search_returns_nothing(client, source):
    body = client.get("/search", params={"query": " "}).json()

    assert body["total_results"] == 0
    assert source.search_queries == []


def test_memorize_flow(client):
    created = client.post("/memorized", json={"title": "Worm", "link": "w"})
    assert created.status_code == 201

    client.post("/memorized", json={"title": "Ward", "link": "x"})
    listing = client.get("/memorized").json()
    assert [b["title"] for b in listing["books"]] == ["Ward", "Worm"]

    duplicate = client.post("/memorized", json={"title": "Worm", "link": "w"})
    assert duplicate.status_code == 409
    assert duplicate.json()["error_type"] == "DuplicateTitle"

    assert client.delete("/memorized", params={"title": "Worm"}).status_code == 200
    assert client.delete("/memorized", params={"title": "Worm"}).status_code == 404
    assert [b["title"] for b in client.get("/memorized").json()["books"]] == ["Ward"]


def test_memorize_empty_fields_is_bad_request(client):
    response = client.post("/memorized", json={"title": "", "link": "w"})

    assert response.status_code == 400
    assert response.json()["error_type"] == "InvalidInput"


def test_store_unavailable_is_service_unavailable(client, medium):
    medium.available = False

    response = client.get("/memorized")

    assert response.status_code == 503
    assert response.json()["error_type"] == StoreUnavailable.__name__


def test_startup_warms_the_cache(catalog, source):
    app = create_app(warm_up=True)
    app.dependency_overrides[get_catalog] = lambda: catalog

    with TestClient(app) as client:
        assert source.popular_calls == 1
        client.get("/popular")

    assert source.popular_calls == 1


def test_startup_survives_fetch_failure(catalog, source):
    source.popular_error = FetchFailure("offline")
    app = create_app(warm_up=True)
    app.dependency_overrides[get_catalog] = lambda: catalog

    with TestClient(app) as client:
        assert client.get("/health").status_code == 200
