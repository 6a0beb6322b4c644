"""
TzktQuotes: reads the last tez quote from the TzKT API.

API: https://api.tzkt.io/v1/quotes/last
"""

from __future__ import annotations

import httpx

from tez_market.core.config import TZKT_API
from tez_market.core.models import ReferenceQuote
from tez_market.feeds.base import FeedClient


class TzktQuotes(FeedClient):
    """
    Reference quote service for the native asset.

    Usage:
        with TzktQuotes() as tzkt:
            quote = tzkt.get_last_quote()
            print(quote.usd if quote else "unavailable")
    """

    name = "tzkt quotes"

    def __init__(
        self,
        api_url: str = TZKT_API,
        timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(api_url, timeout=timeout, transport=transport)

    def get_last_quote(self) -> ReferenceQuote | None:
        """Return the latest tez quote, or None if the service is unavailable."""
        return self._get_record("/v1/quotes/last", ReferenceQuote)
