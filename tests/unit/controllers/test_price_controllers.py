"""Test the price search HTTP endpoints."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from priceright.app import app
from priceright.services.price_search.models import NormalizedPriceRecord, Provenance
from priceright.services.price_search.platforms import PlatformRegistry
from priceright.services.price_search.service import (
    PriceSearchService,
    get_price_search_service,
)

RECORD = NormalizedPriceRecord(
    id="crawled_1",
    platform="eBay",
    price=1559.92,
    currency="HKD",
    shipping=78.0,
    ships_to_target=True,
    url="https://www.ebay.com/itm/1",
    image="",
    title="Nike Air Jordan - Used",
    availability="Available",
    provenance=Provenance.LIVE,
)


@pytest.fixture()
def fake_service():
    service = MagicMock(spec=PriceSearchService)
    service.registry = PlatformRegistry()
    service.search_all.return_value = [RECORD]
    service.search_specific.return_value = [RECORD]
    app.dependency_overrides[get_price_search_service] = lambda: service
    yield service
    app.dependency_overrides.clear()


@pytest.fixture()
def client():
    return TestClient(app)


def test_healthcheck(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_search_all_platforms(client, fake_service):
    response = client.get("/prices/search", params={"q": "Nike Air Jordan"})

    assert response.status_code == 200
    body = response.json()
    assert body == [
        {
            "id": "crawled_1",
            "platform": "eBay",
            "price": 1559.92,
            "currency": "HKD",
            "shipping": 78.0,
            "shipsToTarget": True,
            "url": "https://www.ebay.com/itm/1",
            "image": "",
            "title": "Nike Air Jordan - Used",
            "availability": "Available",
            "provenance": "live",
        }
    ]
    fake_service.search_all.assert_called_once_with("Nike Air Jordan")
    fake_service.search_specific.assert_not_called()


def test_search_specific_platforms(client, fake_service):
    response = client.get(
        "/prices/search",
        params=[("q", "Nike Air Jordan"), ("platforms", "eBay"), ("platforms", "Target")],
    )

    assert response.status_code == 200
    fake_service.search_specific.assert_called_once_with(
        "Nike Air Jordan", ["eBay", "Target"]
    )


@pytest.mark.parametrize("params", [{}, {"q": ""}, {"q": "   "}])
def test_search_rejects_missing_query(client, fake_service, params):
    response = client.get("/prices/search", params=params)

    assert response.status_code == 422
    fake_service.search_all.assert_not_called()


def test_list_platforms(client, fake_service):
    response = client.get("/prices/platforms")

    assert response.status_code == 200
    assert response.json() == ["eBay", "Amazon US", "Target", "StockX", "Farfetch"]
