"""Exchange-rate API client with mock support."""

import logging
from abc import ABC, abstractmethod

import requests

from cotacao.errors import FetchFailure
from cotacao.http_client import get_json

logger = logging.getLogger(__name__)

AWESOMEAPI_BASE_URL = "https://economia.awesomeapi.com.br"
DEFAULT_PAIR = "USD-BRL"
DEFAULT_TIMEOUT = 0.2


class QuoteFetcher(ABC):
    """Abstract interface for fetching the current bid of a currency pair."""

    @abstractmethod
    def fetch_quote(self) -> str:
        """Fetch the latest bid.

        Returns:
            The bid exactly as the provider formats it, e.g. "5.4321".
        """


class AwesomeAPIFetcher(QuoteFetcher):
    """AwesomeAPI client: one GET per call, no retry, no caching."""

    def __init__(
        self,
        base_url: str = AWESOMEAPI_BASE_URL,
        pair: str = DEFAULT_PAIR,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._url = f"{base_url.rstrip('/')}/json/last/{pair}"
        # Response is keyed by the pair without the dash: USD-BRL -> USDBRL
        self._key = pair.replace("-", "")
        self._timeout = timeout

    @property
    def url(self) -> str:
        return self._url

    def fetch_quote(self) -> str:
        try:
            data = get_json(self._url, self._timeout)
            bid = data[self._key]["bid"]
        except (requests.RequestException, ValueError, KeyError, TypeError) as e:
            raise FetchFailure(f"GET {self._url} failed: {e}") from e

        if not isinstance(bid, str):
            raise FetchFailure(f"{self._key}.bid is not a string: {bid!r}")
        logger.info("Fetched %s bid: %s", self._key, bid)
        return bid


class MockQuoteFetcher(QuoteFetcher):
    """Mock fetcher returning a fixed bid for testing."""

    MOCK_BID = "5.4321"

    def __init__(self, bid: str = MOCK_BID):
        self._bid = bid

    def fetch_quote(self) -> str:
        return self._bid
