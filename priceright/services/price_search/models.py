"""Domain models for price search results."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from .rules import RuleSet


@dataclass(frozen=True, slots=True)
class PlatformProfile:
    """Static description of one retailer.

    Ranges are expressed in the platform's source currency.
    """

    name: str
    short_name: str
    search_domain: str
    direct_search_url: str
    rules: Optional["RuleSet"]
    ships_to_target: bool
    shipping_range: Tuple[float, float]
    price_range: Tuple[float, float]
    source_currency: str = "USD"
    free_shipping_chance: float = 0.0
    title_suffixes: Tuple[Tuple[str, float], ...] = (("", 1.0),)
    availability_weights: Tuple[Tuple[str, float], ...] = (("In Stock", 1.0),)


@dataclass(frozen=True, slots=True)
class SearchQuery:
    """What the caller is looking for and where it should be priced."""

    query_text: str
    target_region: str = "HK"
    canonical_currency: str = "HKD"


@dataclass(slots=True)
class SearchResult:
    """Candidate product page found during discovery."""

    title: str
    url: str
    snippet: Optional[str] = None


@dataclass(slots=True)
class ExtractionRecord:
    """Raw fields parsed out of a product page."""

    title: str
    price: Decimal
    source_currency: str
    image: str
    availability: str
    source_url: str
    platform: str


class Provenance(str, Enum):
    """Whether a record was scraped or produced by the fallback generator."""

    LIVE = "live"
    SYNTHETIC = "synthetic"


class NormalizedPriceRecord(BaseModel):
    """Canonical price record returned to callers."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    id: str = Field(..., description="Identifier unique within one search call.")
    platform: str = Field(..., description="Registry name of the platform.")
    price: float = Field(..., ge=0, description="Price in the canonical currency.")
    currency: str = Field(..., description="Canonical currency code.")
    shipping: float = Field(
        ..., ge=0, description="Estimated shipping in the canonical currency."
    )
    ships_to_target: bool = Field(
        ..., description="Whether the platform ships to the target region."
    )
    url: str
    image: str = ""
    title: str
    availability: str
    provenance: Provenance = Provenance.LIVE


class PriceSearchError(RuntimeError):
    """Raised when a stage of the price search cannot complete."""

    def __init__(self, site: str, message: str) -> None:
        super().__init__(message)
        self.site = site
        self.message = message


class FetchError(PriceSearchError):
    """Network, timeout or non-2xx status while retrieving a page."""

    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    NETWORK = "network"

    def __init__(
        self,
        site: str,
        message: str,
        kind: str = NETWORK,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(site, message)
        self.kind = kind
        self.status_code = status_code


class EmptyResultError(PriceSearchError):
    """Search or extraction produced nothing usable."""


class InvalidExtractionError(PriceSearchError):
    """Mandatory field (title or price) missing from an extracted page."""


class CurrencyConversionError(PriceSearchError):
    """No exchange rate configured for a source currency."""
