"""Locator rules used to pull fields out of product pages.

A rule is an ordered tuple of locators. The extractor walks the locators in
order and keeps the first non-empty value, so the most specific selector for a
platform goes first and broad fallbacks go last.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from bs4 import BeautifulSoup

from .utils import normalize_whitespace


@dataclass(frozen=True, slots=True)
class Locator:
    """CSS selector plus the way a value is read from the first match.

    ``attr`` reads an attribute instead of the text. ``contains`` restricts the
    matches to elements whose text contains the given substring.
    """

    selector: str
    attr: Optional[str] = None
    contains: Optional[str] = None

    def read(self, soup: BeautifulSoup) -> str:
        for tag in soup.select(self.selector):
            if self.attr:
                value = tag.get(self.attr)
                if isinstance(value, list):
                    value = " ".join(value)
                value = (value or "").strip()
                if not value:
                    continue
            else:
                value = normalize_whitespace(tag.get_text(" ", strip=True))
                if self.contains and self.contains not in value:
                    continue
            return value
        return ""


@dataclass(frozen=True, slots=True)
class JoinedLocator:
    """Concatenate the text of several selectors, all of which must match."""

    selectors: Tuple[str, ...]
    separator: str = ""

    def read(self, soup: BeautifulSoup) -> str:
        parts = []
        for selector in self.selectors:
            tag = soup.select_one(selector)
            text = tag.get_text(strip=True).strip(self.separator) if tag else ""
            if not text:
                return ""
            parts.append(text)
        return self.separator.join(parts)


@dataclass(frozen=True, slots=True)
class RuleSet:
    """Ordered locators for each field extracted from a product page."""

    title: Tuple[Locator, ...]
    price: Tuple[Locator | JoinedLocator, ...]
    image: Tuple[Locator, ...]
    availability: Tuple[Locator, ...]
    default_availability: str = "In Stock"


def first_value(soup: BeautifulSoup, locators) -> str:
    """Return the first non-empty value produced by ``locators``."""
    for locator in locators:
        value = locator.read(soup)
        if value:
            return value
    return ""


EBAY_RULES = RuleSet(
    title=(
        Locator("#itm-details-header h1"),
        Locator(".x-item-title-label"),
        Locator("h1.x-item-title__mainTitle"),
        Locator('h1[data-testid="product-details-name"]'),
    ),
    price=(
        Locator(".x-price-primary .ux-textspans"),
        Locator(".price .notranslate"),
        Locator('[data-testid="price"] .currency'),
        Locator("#prcIsum"),
    ),
    image=(
        Locator("#icImg", attr="src"),
        Locator(".ux-image-magnify img", attr="src"),
        Locator('[data-testid="image"]', attr="src"),
        Locator(".zoom img", attr="src"),
    ),
    availability=(
        Locator(".u-flL.condText"),
        Locator(".avail-qty"),
        Locator("#qtySubTxt"),
    ),
    default_availability="Available",
)

AMAZON_RULES = RuleSet(
    title=(
        Locator("#productTitle"),
        Locator(".product-title"),
    ),
    price=(
        Locator(".a-price .a-offscreen"),
        JoinedLocator((".a-price-whole", ".a-price-fraction"), separator="."),
        Locator("#price_inside_buybox"),
        Locator("#priceblock_ourprice"),
    ),
    image=(
        Locator("#landingImage", attr="src"),
        Locator(".a-dynamic-image", attr="src"),
        Locator(".imgTagWrapper img", attr="src"),
    ),
    availability=(
        Locator("#availability span"),
        Locator("#availability"),
    ),
)

TARGET_RULES = RuleSet(
    title=(
        Locator('[data-test="product-title"]'),
        Locator("h1"),
    ),
    price=(
        Locator('[data-test="product-price"]'),
        Locator(".price"),
        Locator(".sr-only", contains="$"),
    ),
    image=(
        Locator('[data-test="product-image"] img', attr="src"),
        Locator(".product-image img", attr="src"),
    ),
    availability=(
        Locator('[data-test="fulfillment-shipping"]'),
        Locator(".availability"),
    ),
)

STOCKX_RULES = RuleSet(
    title=(
        Locator('h1[data-component="primary-product-title"]'),
        Locator("h1"),
        Locator(".product-title"),
    ),
    price=(
        Locator('[data-testid="trade-box-buy-amount"]'),
        Locator(".product-price"),
        Locator('[data-testid="product-price"]'),
        Locator(".price"),
    ),
    image=(
        Locator('[data-testid="product-detail-image"]', attr="src"),
        Locator(".product-media img", attr="src"),
        Locator(".product-image img", attr="src"),
    ),
    availability=(
        Locator(".availability"),
        Locator(".stock-status"),
    ),
    default_availability="Available",
)

FARFETCH_RULES = RuleSet(
    title=(
        Locator('[data-testid="product-name"]'),
        Locator('[data-component="ProductDescription"]'),
        Locator("h1"),
    ),
    price=(
        Locator('[data-component="PriceFinalLarge"]'),
        Locator('[data-testid="product-price"]'),
        Locator(".price"),
    ),
    image=(
        Locator('[data-testid="product-image"] img', attr="src"),
        Locator(".product-image img", attr="src"),
    ),
    availability=(
        Locator('[data-testid="availability"]'),
        Locator(".availability"),
    ),
)

# Used for any platform without a dedicated rule-set.
GENERIC_RULES = RuleSet(
    title=(
        Locator("h1"),
        Locator('[class*="title"]'),
        Locator('[class*="product-name"]'),
        Locator('meta[property="og:title"]', attr="content"),
    ),
    price=(
        Locator('[itemprop="price"]', attr="content"),
        Locator('meta[property="product:price:amount"]', attr="content"),
        Locator('[class*="price"]'),
        Locator('[class*="cost"]'),
        Locator('[data-testid*="price"]'),
    ),
    image=(
        Locator('img[class*="product"]', attr="src"),
        Locator('img[class*="main"]', attr="src"),
        Locator('meta[property="og:image"]', attr="content"),
    ),
    availability=(
        Locator('[class*="stock"]'),
        Locator('[class*="availability"]'),
    ),
    default_availability="Available",
)
