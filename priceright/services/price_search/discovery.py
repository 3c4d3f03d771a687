"""Resolve a query to a candidate product page on each platform."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional
from urllib.parse import parse_qs, urlparse

from bs4 import BeautifulSoup

from priceright.configs import settings

from .fetcher import PageFetcher
from .models import EmptyResultError, PlatformProfile, PriceSearchError, SearchResult
from .platforms import PlatformRegistry, default_registry
from .synthetic import direct_search_url
from .utils import normalize_whitespace

logger = logging.getLogger("price_search.discovery")

BLOCKED_MARKERS = ("unusual traffic", "/sorry/index", "captcha-form")


def unwrap_redirect(href: str) -> Optional[str]:
    """Return the real destination of a search-engine result link."""
    if href.startswith("/url?") or "/url?" in href:
        query = parse_qs(urlparse(href).query)
        for key in ("q", "url"):
            values = query.get(key)
            if values and values[0].startswith(("http://", "https://")):
                return values[0]
        return None
    if href.startswith(("http://", "https://")):
        return href
    return None


def on_domain(url: str, domain: str) -> bool:
    """True when ``url`` is hosted on ``domain`` or one of its subdomains."""
    host = (urlparse(url).hostname or "").lower()
    domain = domain.lower()
    return host == domain or host.endswith("." + domain)


class DiscoveryResolver:
    """Search-engine scraping with a direct search-page fallback."""

    def __init__(
        self,
        fetcher: Optional[PageFetcher] = None,
        registry: Optional[PlatformRegistry] = None,
        search_url: Optional[str] = None,
        max_results: Optional[int] = None,
    ) -> None:
        self.fetcher = fetcher or PageFetcher()
        self.registry = registry or default_registry
        self.search_url = search_url or settings.SEARCH_ENGINE_URL
        self.max_results = max_results or settings.SEARCH_RESULTS_LIMIT

    def search(self, query: str, domain: Optional[str] = None) -> List[SearchResult]:
        """Organic results for ``query``, scoped to ``domain`` when given.

        Raises :class:`PriceSearchError` subclasses on fetch failure or when
        the engine serves a block page.
        """
        search_query = f"site:{domain} {query}" if domain else query
        html = self.fetcher.fetch(
            self.search_url,
            params={"q": search_query, "num": 10, "hl": "en", "safe": "active"},
            timeout=settings.SEARCH_TIMEOUT_SECONDS,
        )
        lowered = html.lower()
        if any(marker in lowered for marker in BLOCKED_MARKERS):
            raise EmptyResultError(
                domain or "search", "Search engine blocked the automated request."
            )
        return self.parse_results(html, domain)

    def parse_results(self, html: str, domain: Optional[str] = None) -> List[SearchResult]:
        soup = BeautifulSoup(html, "html.parser")
        results: List[SearchResult] = []
        seen = set()

        for block in soup.select("div[data-ved], div.g"):
            title_tag = block.find("h3")
            if not title_tag:
                continue
            link_tag = title_tag.find_parent("a") or block.find("a", href=True)
            if not link_tag or not link_tag.has_attr("href"):
                continue

            url = unwrap_redirect(link_tag["href"])
            if not url or url in seen:
                continue
            if domain and not on_domain(url, domain):
                continue

            snippet = None
            for span in block.find_all("span"):
                text = normalize_whitespace(span.get_text(" ", strip=True))
                if len(text) > 50 and not span.find(True):
                    snippet = text
                    break

            seen.add(url)
            results.append(
                SearchResult(
                    title=normalize_whitespace(title_tag.get_text(" ", strip=True)),
                    url=url,
                    snippet=snippet,
                )
            )
            if len(results) >= self.max_results:
                break

        return results

    def direct_result(self, query: str, profile: PlatformProfile) -> SearchResult:
        """Synthesized result pointing at the platform's own search page."""
        return SearchResult(
            title=f"{query} | {profile.name}",
            url=direct_search_url(query, profile),
            snippet=f'Direct search for "{query}" on {profile.name}',
        )

    def candidates(self, query: str, profile: PlatformProfile) -> List[SearchResult]:
        """Ranked candidates, never empty."""
        try:
            results = self.search(query, profile.search_domain)
        except PriceSearchError as exc:
            logger.warning(
                "Search failed for %s, using direct URL: %s", profile.name, exc.message
            )
            results = []
        except Exception:  # pragma: no cover
            logger.exception("Unexpected error searching %s", profile.name)
            results = []

        if not results:
            logger.info("No search results for '%s' on %s.", query, profile.name)
            return [self.direct_result(query, profile)]
        return results

    def resolve(self, query: str, profile: PlatformProfile) -> SearchResult:
        return self.candidates(query, profile)[0]

    def resolve_all(self, query: str) -> Dict[str, List[SearchResult]]:
        """Run the domain-scoped lookups for every platform concurrently."""
        profiles = self.registry.profiles()
        with ThreadPoolExecutor(max_workers=max(len(profiles), 1)) as pool:
            futures = {
                profile.name: pool.submit(self.candidates, query, profile)
                for profile in profiles
            }
            return {name: future.result() for name, future in futures.items()}
