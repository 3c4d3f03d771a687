"""Parse fetched product pages into extraction records."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from .models import ExtractionRecord, InvalidExtractionError
from .normalizer import PriceNormalizer
from .platforms import PlatformRegistry, default_registry
from .rules import GENERIC_RULES, RuleSet, first_value

logger = logging.getLogger("price_search.extractor")


class FieldExtractor:
    """Apply a platform's rule-set (or the generic one) to a page."""

    def __init__(self, registry: Optional[PlatformRegistry] = None) -> None:
        self.registry = registry or default_registry

    def rules_for(self, platform_name: str) -> RuleSet:
        profile = self.registry.profile_for(platform_name)
        if profile is None or profile.rules is None:
            return GENERIC_RULES
        return profile.rules

    def extract(self, html: str, platform_name: str, url: str = "") -> ExtractionRecord:
        """Return the page's fields or raise :class:`InvalidExtractionError`.

        Title and a non-zero price are mandatory; image and availability fall
        back to defaults.
        """
        rules = self.rules_for(platform_name)
        soup = BeautifulSoup(html, "html.parser")

        title = first_value(soup, rules.title)
        price_text = first_value(soup, rules.price)
        price = PriceNormalizer.parse(price_text)

        if not title or price == 0:
            logger.info(
                "Discarding %s page %s (title=%r, price_text=%r).",
                platform_name,
                url,
                title,
                price_text,
            )
            raise InvalidExtractionError(
                platform_name,
                "Missing title." if not title else f"Unusable price {price_text!r}.",
            )

        image = first_value(soup, rules.image)
        if image and url:
            image = urljoin(url, image)

        profile = self.registry.profile_for(platform_name)
        default_currency = profile.source_currency if profile else "USD"

        return ExtractionRecord(
            title=title,
            price=price,
            source_currency=PriceNormalizer.detect_currency(price_text, default_currency),
            image=image,
            availability=first_value(soup, rules.availability)
            or rules.default_availability,
            source_url=url,
            platform=platform_name,
        )
