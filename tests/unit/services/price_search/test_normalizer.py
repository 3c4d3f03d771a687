"""Test price parsing and currency conversion."""

from decimal import Decimal

import pytest

from priceright.services.price_search.models import CurrencyConversionError
from priceright.services.price_search.normalizer import PriceNormalizer


@pytest.mark.parametrize(
    "text, expected",
    [
        ("$1,234.56", Decimal("1234.56")),
        ("", Decimal("0")),
        (None, Decimal("0")),
        ("N/A", Decimal("0")),
        ("€45", Decimal("45")),
        ("US $199.99", Decimal("199.99")),
        ("HK$ 12,000", Decimal("12000")),
        ("1.2.3", Decimal("1.2")),
        ("...", Decimal("0")),
    ],
)
def test_parse(text, expected):
    assert PriceNormalizer.parse(text) == expected


def test_parse_never_negative():
    assert PriceNormalizer.parse("-$5.00") == Decimal("5.00")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("HK$100", "HKD"),
        ("£10", "GBP"),
        ("€45", "EUR"),
        ("$19.99", "USD"),
        ("100", "USD"),
        (None, "USD"),
    ],
)
def test_detect_currency(text, expected):
    assert PriceNormalizer.detect_currency(text, "USD") == expected


class TestConvert:
    """Test cases for PriceNormalizer.convert."""

    def setup_method(self) -> None:
        self.normalizer = PriceNormalizer(
            rates={"USD": 7.8, "EUR": 8.5}, canonical_currency="HKD"
        )

    def test_usd_to_hkd(self) -> None:
        assert self.normalizer.convert(Decimal("199.99"), "USD") == Decimal("1559.92")

    def test_accepts_floats(self) -> None:
        assert self.normalizer.convert(100.0, "usd") == Decimal("780.00")

    def test_canonical_currency_is_passthrough(self) -> None:
        assert self.normalizer.convert(Decimal("12.5"), "HKD") == Decimal("12.50")

    def test_rounds_half_away_from_zero(self) -> None:
        assert self.normalizer.convert(Decimal("0.125"), "HKD") == Decimal("0.13")
        assert self.normalizer.convert(Decimal("0.005"), "HKD") == Decimal("0.01")

    def test_unknown_currency_raises(self) -> None:
        with pytest.raises(CurrencyConversionError) as excinfo:
            self.normalizer.convert(Decimal("10"), "JPY")
        assert excinfo.value.site == "JPY"

    def test_conversion_is_monotonic(self) -> None:
        amounts = [Decimal(cents) / 100 for cents in range(0, 5000, 7)]
        converted = [self.normalizer.convert(amount, "USD") for amount in amounts]
        assert converted == sorted(converted)
        assert all(value >= 0 for value in converted)
