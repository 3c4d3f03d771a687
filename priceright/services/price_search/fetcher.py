"""Single-shot HTTP retrieval of product and search pages."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

import requests

from priceright.configs import settings

from .models import FetchError
from .utils import DEFAULT_HEADERS

logger = logging.getLogger("price_search.fetcher")


class PageFetcher:
    """Fetch a page once with browser-like headers.

    There is no retry: a transient and a permanent failure look the same to
    the caller.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        max_redirects: Optional[int] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.session = session or requests.Session()
        self.session.max_redirects = (
            max_redirects if max_redirects is not None else settings.MAX_REDIRECTS
        )
        self.timeout = timeout if timeout is not None else settings.FETCH_TIMEOUT_SECONDS
        self.headers: Dict[str, str] = dict(headers or DEFAULT_HEADERS)

    def fetch(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> str:
        """Return the body of ``url`` or raise :class:`FetchError`."""
        site = urlparse(url).netloc or url
        try:
            response = self.session.get(
                url,
                params=params,
                headers=self.headers,
                timeout=timeout or self.timeout,
                allow_redirects=True,
            )
        except requests.exceptions.Timeout as exc:
            logger.warning("Timeout fetching %s: %s", url, exc)
            raise FetchError(
                site, f"Timed out fetching {url}.", kind=FetchError.TIMEOUT
            ) from exc
        except requests.exceptions.TooManyRedirects as exc:
            logger.warning("Too many redirects for %s.", url)
            raise FetchError(
                site, f"Too many redirects fetching {url}.", kind=FetchError.NETWORK
            ) from exc
        except requests.exceptions.RequestException as exc:
            logger.warning("Network error fetching %s: %s", url, exc)
            raise FetchError(
                site, f"Network error fetching {url}: {exc}", kind=FetchError.NETWORK
            ) from exc

        if not 200 <= response.status_code < 300:
            raise FetchError(
                site,
                f"HTTP {response.status_code} fetching {url}.",
                kind=FetchError.HTTP_STATUS,
                status_code=response.status_code,
            )

        logger.debug("Fetched %s (%d bytes).", url, len(response.text))
        return response.text
