"""Placeholder records used when live extraction fails."""

from __future__ import annotations

import logging
import random
import threading
import uuid
from decimal import Decimal
from typing import Optional
from urllib.parse import quote

from .images import product_image
from .models import NormalizedPriceRecord, PlatformProfile, Provenance
from .normalizer import PriceNormalizer

logger = logging.getLogger("price_search.synthetic")


def direct_search_url(query: str, profile: PlatformProfile) -> str:
    """Platform search page URL for ``query``."""
    return profile.direct_search_url.format(query=quote(query, safe=""))


class SyntheticDataGenerator:
    """Build bounded, randomly parameterized records for a platform.

    The random source is injectable so fallback output can be reproduced in
    tests. Calls may come from several worker threads at once, so draws are
    serialized on a lock.
    """

    def __init__(
        self,
        normalizer: Optional[PriceNormalizer] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.normalizer = normalizer or PriceNormalizer()
        self.rng = rng or random.Random()
        self._lock = threading.Lock()

    def new_id(self, prefix: str) -> str:
        with self._lock:
            token = uuid.UUID(int=self.rng.getrandbits(128), version=4)
        return f"{prefix}_{token.hex[:16]}"

    def estimate_shipping(self, profile: PlatformProfile) -> Decimal:
        """Shipping cost in the canonical currency, 0 for non-shipping platforms."""
        if not profile.ships_to_target:
            return Decimal("0.00")

        low, high = profile.shipping_range
        with self._lock:
            free = self.rng.random() < profile.free_shipping_chance
            amount = self.rng.uniform(low, high)
        if free:
            return Decimal("0.00")
        return self.normalizer.convert(amount, profile.source_currency)

    def generate(self, query: str, profile: PlatformProfile) -> NormalizedPriceRecord:
        low, high = profile.price_range
        with self._lock:
            base_price = self.rng.uniform(low, high)
            suffixes = [suffix for suffix, _ in profile.title_suffixes]
            suffix_weights = [weight for _, weight in profile.title_suffixes]
            suffix = self.rng.choices(suffixes, weights=suffix_weights)[0]
            labels = [label for label, _ in profile.availability_weights]
            weights = [weight for _, weight in profile.availability_weights]
            availability = self.rng.choices(labels, weights=weights)[0]

        price = self.normalizer.convert(base_price, profile.source_currency)
        shipping = self.estimate_shipping(profile)
        logger.info(
            "Using synthetic %s record for '%s' (%s %s).",
            profile.name,
            query,
            price,
            self.normalizer.canonical_currency,
        )
        return NormalizedPriceRecord(
            id=self.new_id(profile.short_name.lower()),
            platform=profile.name,
            price=float(price),
            currency=self.normalizer.canonical_currency,
            shipping=float(shipping),
            ships_to_target=profile.ships_to_target,
            url=direct_search_url(query, profile),
            image=product_image(query, profile.name),
            title=f"{query}{suffix} | {profile.short_name}",
            availability=availability,
            provenance=Provenance.SYNTHETIC,
        )
