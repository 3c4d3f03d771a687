"""Static catalog of supported retail platforms."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional

from .models import PlatformProfile
from .rules import (
    AMAZON_RULES,
    EBAY_RULES,
    FARFETCH_RULES,
    STOCKX_RULES,
    TARGET_RULES,
)


class Platform(str, Enum):
    """Closed set of supported platforms, valued by display name."""

    EBAY = "eBay"
    AMAZON_US = "Amazon US"
    TARGET = "Target"
    STOCKX = "StockX"
    FARFETCH = "Farfetch"


PROFILES: Dict[Platform, PlatformProfile] = {
    Platform.EBAY: PlatformProfile(
        name=Platform.EBAY.value,
        short_name="eBay",
        search_domain="ebay.com",
        direct_search_url="https://www.ebay.com/sch/i.html?_nkw={query}",
        rules=EBAY_RULES,
        ships_to_target=True,
        shipping_range=(10.0, 60.0),
        price_range=(100.0, 900.0),
        title_suffixes=((" - New", 0.5), (" - Used", 0.5)),
        availability_weights=(("In Stock", 0.8), ("Limited Stock", 0.2)),
    ),
    Platform.AMAZON_US: PlatformProfile(
        name=Platform.AMAZON_US.value,
        short_name="Amazon",
        search_domain="amazon.com",
        direct_search_url="https://www.amazon.com/s?k={query}",
        rules=AMAZON_RULES,
        ships_to_target=True,
        shipping_range=(15.0, 45.0),
        price_range=(200.0, 1000.0),
        free_shipping_chance=0.4,
        title_suffixes=((" - Prime", 0.6), ("", 0.4)),
    ),
    Platform.TARGET: PlatformProfile(
        name=Platform.TARGET.value,
        short_name="Target",
        search_domain="target.com",
        direct_search_url="https://www.target.com/s?searchTerm={query}",
        rules=TARGET_RULES,
        ships_to_target=False,
        shipping_range=(0.0, 0.0),
        price_range=(150.0, 750.0),
        title_suffixes=((" - Target Brand", 0.4), ("", 0.6)),
        availability_weights=(("In Stock", 0.7), ("Limited Stock", 0.3)),
    ),
    Platform.STOCKX: PlatformProfile(
        name=Platform.STOCKX.value,
        short_name="StockX",
        search_domain="stockx.com",
        direct_search_url="https://stockx.com/search?s={query}",
        rules=STOCKX_RULES,
        ships_to_target=True,
        shipping_range=(20.0, 60.0),
        price_range=(300.0, 1500.0),
        title_suffixes=((" - StockX Authenticated", 0.9), ("", 0.1)),
        availability_weights=(("Available", 1.0),),
    ),
    Platform.FARFETCH: PlatformProfile(
        name=Platform.FARFETCH.value,
        short_name="Farfetch",
        search_domain="farfetch.com",
        direct_search_url="https://www.farfetch.com/shopping/search/items.aspx?q={query}",
        rules=FARFETCH_RULES,
        ships_to_target=True,
        shipping_range=(30.0, 90.0),
        price_range=(500.0, 2500.0),
        title_suffixes=((" - Designer Collection", 0.7), ("", 0.3)),
    ),
}

_missing = set(Platform) - set(PROFILES)
if _missing:
    raise RuntimeError(f"Platforms without a profile: {sorted(p.value for p in _missing)}")


class PlatformRegistry:
    """Read-only lookup over platform profiles."""

    def __init__(self, profiles: Optional[Mapping[Platform, PlatformProfile]] = None) -> None:
        source = profiles if profiles is not None else PROFILES
        self._by_name: Dict[str, PlatformProfile] = {
            profile.name: profile for profile in source.values()
        }

    def profile_for(self, name: str | Platform) -> Optional[PlatformProfile]:
        key = name.value if isinstance(name, Platform) else name
        return self._by_name.get(key)

    def profiles(self) -> List[PlatformProfile]:
        return list(self._by_name.values())

    def names(self) -> List[str]:
        return list(self._by_name)

    def resolve_names(self, names: Iterable[str]) -> List[PlatformProfile]:
        """Profiles for the known names, in request order, without repeats."""
        selected: Dict[str, PlatformProfile] = {}
        for name in names:
            profile = self.profile_for(name)
            if profile is not None and profile.name not in selected:
                selected[profile.name] = profile
        return list(selected.values())


default_registry = PlatformRegistry()
