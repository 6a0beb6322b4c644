"""
DexIndexer: historical token quotes bucketed over a lookback window.

API: https://dex-indexer-api.onrender.com/v1/tokens/quotes/last/{window}
"""

from __future__ import annotations

import re

import httpx

from tez_market.core.config import INDEXER_API
from tez_market.core.models import TokenHistory
from tez_market.feeds.base import FeedClient

_WINDOW_RE = re.compile(r"^\d+[hdw]$")


class DexIndexer(FeedClient):
    """Historical quote service."""

    name = "dex indexer"

    def __init__(
        self,
        api_url: str = INDEXER_API,
        timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(api_url, timeout=timeout, transport=transport)

    def get_quotes(self, window: str = "1d") -> list[TokenHistory]:
        """
        Fetch each token's close rates over the lookback window.

        Args:
            window: lookback window such as "1d", "7d" or "12h"

        Returns:
            list[TokenHistory]: empty if the service is unavailable
        """
        if not _WINDOW_RE.match(window):
            raise ValueError(f"Invalid lookback window: {window!r}. Use e.g. '1d' or '12h'.")
        return self._get_records(f"/v1/tokens/quotes/last/{window}", TokenHistory)
