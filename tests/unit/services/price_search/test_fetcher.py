"""Test PageFetcher."""

from unittest.mock import MagicMock

import pytest
import requests

from priceright.services.price_search.fetcher import PageFetcher
from priceright.services.price_search.models import FetchError
from priceright.services.price_search.utils import DEFAULT_HEADERS


class TestPageFetcher:
    """Test cases for PageFetcher.fetch."""

    def setup_method(self) -> None:
        """Set up a fetcher around a mocked session."""
        self.session = MagicMock(spec=requests.Session)
        self.fetcher = PageFetcher(session=self.session, timeout=12, max_redirects=5)

    def test_init_caps_redirects(self) -> None:
        assert self.session.max_redirects == 5
        assert self.fetcher.timeout == 12

    def test_fetch_returns_body(self) -> None:
        # Arrange
        self.session.get.return_value = MagicMock(status_code=200, text="<html></html>")

        # Act
        body = self.fetcher.fetch("https://www.ebay.com/itm/1")

        # Assert
        assert body == "<html></html>"
        self.session.get.assert_called_once_with(
            "https://www.ebay.com/itm/1",
            params=None,
            headers=DEFAULT_HEADERS,
            timeout=12,
            allow_redirects=True,
        )

    def test_fetch_passes_params_and_timeout_override(self) -> None:
        self.session.get.return_value = MagicMock(status_code=200, text="ok")

        self.fetcher.fetch("https://search.test/", params={"q": "x"}, timeout=3)

        _, kwargs = self.session.get.call_args
        assert kwargs["params"] == {"q": "x"}
        assert kwargs["timeout"] == 3

    def test_non_2xx_raises_http_status(self) -> None:
        self.session.get.return_value = MagicMock(status_code=503, text="busy")

        with pytest.raises(FetchError) as excinfo:
            self.fetcher.fetch("https://www.target.com/p/1")

        assert excinfo.value.kind == FetchError.HTTP_STATUS
        assert excinfo.value.status_code == 503
        assert excinfo.value.site == "www.target.com"

    @pytest.mark.parametrize(
        "error, kind",
        [
            (requests.exceptions.ReadTimeout("slow"), FetchError.TIMEOUT),
            (requests.exceptions.ConnectTimeout("slow"), FetchError.TIMEOUT),
            (requests.exceptions.TooManyRedirects("loop"), FetchError.NETWORK),
            (requests.exceptions.ConnectionError("down"), FetchError.NETWORK),
        ],
    )
    def test_request_errors_are_translated(self, error, kind) -> None:
        self.session.get.side_effect = error

        with pytest.raises(FetchError) as excinfo:
            self.fetcher.fetch("https://stockx.com/p/1")

        assert excinfo.value.kind == kind
        assert excinfo.value.status_code is None
        assert excinfo.value.__cause__ is error
