import json
from unittest.mock import MagicMock, patch

from priceright import cli
from priceright.services.price_search.models import NormalizedPriceRecord, Provenance

RECORD = NormalizedPriceRecord(
    id="stockx_1",
    platform="StockX",
    price=3900.0,
    currency="HKD",
    shipping=234.0,
    ships_to_target=True,
    url="https://stockx.com/search?s=Yeezy",
    image="",
    title="Yeezy - StockX Authenticated | StockX",
    availability="Available",
    provenance=Provenance.SYNTHETIC,
)


def make_service():
    service = MagicMock()
    service.search_all.return_value = [RECORD]
    service.search_specific.return_value = [RECORD]
    service.render_summary.return_value = "summary text"
    return service


def test_cli_prints_summary(capsys):
    service = make_service()
    with patch.object(cli, "PriceSearchService", return_value=service):
        assert cli.main(["Yeezy"]) == 0

    assert capsys.readouterr().out.strip() == "summary text"
    service.search_all.assert_called_once_with("Yeezy")


def test_cli_json_with_platform_filter(capsys):
    service = make_service()
    with patch.object(cli, "PriceSearchService", return_value=service):
        cli.main(["Yeezy", "--platform", "StockX", "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert payload[0]["shipsToTarget"] is True
    assert payload[0]["provenance"] == "synthetic"
    service.search_specific.assert_called_once_with("Yeezy", ["StockX"])
