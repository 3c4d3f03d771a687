"""High-level service that orchestrates price lookups."""

from __future__ import annotations

import logging
import random
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Sequence

import requests

from priceright.configs import settings

from .discovery import DiscoveryResolver
from .extractor import FieldExtractor
from .fetcher import PageFetcher
from .images import platform_fallback_image
from .models import (
    NormalizedPriceRecord,
    PlatformProfile,
    PriceSearchError,
    Provenance,
    SearchQuery,
)
from .normalizer import PriceNormalizer
from .platforms import PlatformRegistry, default_registry
from .synthetic import SyntheticDataGenerator
from .utils import format_money

logger = logging.getLogger("price_search.service")


class PriceSearchService:
    """Coordinate price lookups across platforms.

    Every requested platform contributes exactly one record: the scraped one
    when the whole cascade succeeds, a synthetic one otherwise.
    """

    def __init__(
        self,
        registry: Optional[PlatformRegistry] = None,
        session: Optional[requests.Session] = None,
        rng: Optional[random.Random] = None,
        fetcher: Optional[PageFetcher] = None,
        resolver: Optional[DiscoveryResolver] = None,
        extractor: Optional[FieldExtractor] = None,
        normalizer: Optional[PriceNormalizer] = None,
        generator: Optional[SyntheticDataGenerator] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        self.registry = registry or default_registry
        self.fetcher = fetcher or PageFetcher(session=session)
        self.resolver = resolver or DiscoveryResolver(self.fetcher, self.registry)
        self.extractor = extractor or FieldExtractor(self.registry)
        self.normalizer = normalizer or PriceNormalizer()
        self.generator = generator or SyntheticDataGenerator(self.normalizer, rng)
        self.max_workers = max_workers or settings.MAX_WORKERS

    def build_query(self, query: str) -> SearchQuery:
        return SearchQuery(
            query_text=query.strip(),
            target_region=settings.TARGET_REGION,
            canonical_currency=self.normalizer.canonical_currency,
        )

    def search_all(self, query: str) -> List[NormalizedPriceRecord]:
        """Search every registered platform."""
        return self._run(self.build_query(query), self.registry.profiles())

    def search_specific(
        self, query: str, platform_names: Iterable[str]
    ) -> List[NormalizedPriceRecord]:
        """Search the named platforms, ignoring unknown names."""
        profiles = self.registry.resolve_names(platform_names)
        return self._run(self.build_query(query), profiles)

    def search_platform(
        self, query: SearchQuery, profile: PlatformProfile
    ) -> NormalizedPriceRecord:
        """Run the cascade for one platform, falling back to synthetic data."""
        try:
            return self._live_record(query, profile)
        except PriceSearchError as exc:
            logger.warning(
                "Falling back to synthetic data for %s: %s", profile.name, exc.message
            )
        except Exception:  # pragma: no cover
            logger.exception("Unexpected error searching prices on %s", profile.name)
        return self.generator.generate(query.query_text, profile)

    def _live_record(
        self, query: SearchQuery, profile: PlatformProfile
    ) -> NormalizedPriceRecord:
        candidate = self.resolver.resolve(query.query_text, profile)
        html = self.fetcher.fetch(candidate.url)
        record = self.extractor.extract(html, profile.name, candidate.url)
        price = self.normalizer.convert(record.price, record.source_currency)

        return NormalizedPriceRecord(
            id=self.generator.new_id("crawled"),
            platform=profile.name,
            price=float(price),
            currency=query.canonical_currency,
            shipping=float(self.generator.estimate_shipping(profile)),
            ships_to_target=profile.ships_to_target,
            url=record.source_url,
            image=record.image or platform_fallback_image(profile.name),
            title=record.title,
            availability=record.availability,
            provenance=Provenance.LIVE,
        )

    def _run(
        self, query: SearchQuery, profiles: Sequence[PlatformProfile]
    ) -> List[NormalizedPriceRecord]:
        if not profiles:
            return []

        logger.info(
            "Searching '%s' on %d platform(s).", query.query_text, len(profiles)
        )
        records: List[NormalizedPriceRecord] = []
        workers = min(self.max_workers, len(profiles))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            tasks: Dict[Future[NormalizedPriceRecord], PlatformProfile] = {
                pool.submit(self.search_platform, query, profile): profile
                for profile in profiles
            }
            for future in as_completed(tasks):
                profile = tasks[future]
                try:
                    records.append(future.result())
                except Exception:  # pragma: no cover
                    logger.exception("Price task for %s crashed", profile.name)
                    records.append(self.generator.generate(query.query_text, profile))
        return records

    def render_summary(
        self,
        query: str,
        records: Iterable[NormalizedPriceRecord],
    ) -> str:
        """Plain text listing of the records, cheapest landed cost first."""
        ordered = sorted(records, key=lambda record: record.price + record.shipping)
        lines: List[str] = [f'Prices found for "{query}":', ""]

        for record in ordered:
            shipping = (
                format_money(record.shipping, record.currency)
                if record.ships_to_target
                else f"does not ship to {settings.TARGET_REGION}"
            )
            marker = " (estimate)" if record.provenance == Provenance.SYNTHETIC else ""
            lines.append(f"{record.platform}{marker}")
            lines.append(
                f"- {record.title} ({format_money(record.price, record.currency)}, "
                f"shipping {shipping}) - {record.availability}"
            )
            lines.append(f"  {record.url}")
            lines.append("")

        message = "\n".join(lines).strip()
        logger.debug("Price summary rendered: %s", message)
        return message


@lru_cache(maxsize=1)
def get_price_search_service() -> PriceSearchService:
    """Shared service instance, overridable as a FastAPI dependency."""
    return PriceSearchService()


def search_all_platforms(query: str) -> List[NormalizedPriceRecord]:
    return get_price_search_service().search_all(query)


def search_specific_platforms(
    query: str, platform_names: Iterable[str]
) -> List[NormalizedPriceRecord]:
    return get_price_search_service().search_specific(query, platform_names)
