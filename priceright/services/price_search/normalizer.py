"""Price text parsing and currency conversion."""

from __future__ import annotations

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Dict, Mapping, Optional

from priceright.configs import settings

from .models import CurrencyConversionError
from .utils import round_money

logger = logging.getLogger("price_search.normalizer")

# Checked in order, so multi-character symbols must precede "$".
CURRENCY_SYMBOLS = (
    ("HK$", "HKD"),
    ("US$", "USD"),
    ("€", "EUR"),
    ("£", "GBP"),
    ("$", "USD"),
)


class PriceNormalizer:
    """Turn scraped price strings into canonical-currency amounts."""

    def __init__(
        self,
        rates: Optional[Mapping[str, float]] = None,
        canonical_currency: Optional[str] = None,
    ) -> None:
        raw_rates = rates if rates is not None else settings.EXCHANGE_RATES
        self.rates: Dict[str, Decimal] = {
            code.upper(): Decimal(str(rate)) for code, rate in raw_rates.items()
        }
        self.canonical_currency = canonical_currency or settings.CANONICAL_CURRENCY

    @staticmethod
    def parse(text: str | None) -> Decimal:
        """Best effort conversion of a price string to Decimal.

        Everything but digits, dots and commas is dropped and commas are read
        as thousands separators. Returns ``0`` when nothing parses.
        """
        if not text:
            return Decimal(0)

        cleaned = re.sub(r"[^\d,\.]", "", text).replace(",", "")
        if not cleaned:
            return Decimal(0)

        try:
            return Decimal(cleaned)
        except (InvalidOperation, ValueError):
            # "1.2.3" and friends: keep the leading well-formed number.
            match = re.match(r"\d*\.?\d+", cleaned)
            if not match:
                return Decimal(0)
            return Decimal(match.group(0))

    @staticmethod
    def detect_currency(text: str | None, default: str) -> str:
        """Guess the currency code from the symbol in a price string."""
        if not text:
            return default
        upper = text.upper()
        for symbol, code in CURRENCY_SYMBOLS:
            if symbol in upper:
                return code
        return default

    def rate_for(self, source_currency: str) -> Decimal:
        code = source_currency.upper()
        if code == self.canonical_currency.upper():
            return Decimal(1)
        try:
            return self.rates[code]
        except KeyError as exc:
            raise CurrencyConversionError(
                code, f"No exchange rate configured for {code}."
            ) from exc

    def convert(self, amount: Decimal | float, source_currency: str) -> Decimal:
        """Convert ``amount`` into the canonical currency, rounded to cents."""
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
        converted = round_money(value * self.rate_for(source_currency))
        logger.debug(
            "Converted %s %s to %s %s",
            value,
            source_currency,
            converted,
            self.canonical_currency,
        )
        return converted
