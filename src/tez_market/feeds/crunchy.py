"""
CrunchyAPI: pool listings and live spot quotes from the Crunchy network API.

API: https://api.crunchy.network/v1/pools
     https://api.crunchy.network/v1/tokens/quotes/spot
"""

from __future__ import annotations

import httpx

from tez_market.core.config import CRUNCHY_API
from tez_market.core.models import Exchange, TokenQuote
from tez_market.feeds.base import FeedClient


class CrunchyAPI(FeedClient):
    """
    Pool listing and spot quote services.

    Usage:
        with CrunchyAPI() as crunchy:
            pools = crunchy.get_pools()
            tokens = crunchy.get_spot_quotes()
    """

    name = "crunchy"

    def __init__(
        self,
        api_url: str = CRUNCHY_API,
        timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(api_url, timeout=timeout, transport=transport)

    def get_pools(self) -> list[Exchange]:
        """
        Fetch every liquidity pool with its legs and raw reserves.

        Returns:
            list[Exchange]: empty if the service is unavailable
        """
        return self._get_records("/v1/pools", Exchange)

    def get_spot_quotes(self) -> list[TokenQuote]:
        """
        Fetch token metadata with live peer quotes.

        Returns:
            list[TokenQuote]: empty if the service is unavailable
        """
        return self._get_records("/v1/tokens/quotes/spot", TokenQuote)
