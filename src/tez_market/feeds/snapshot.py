"""
MarketFeeds: fetches a point-in-time snapshot of all upstream feeds.

The four feeds are independent, so they are fetched concurrently. Each one
degrades to an empty result on its own.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import httpx

from tez_market.core.config import FeedConfig
from tez_market.core.models import MarketSnapshot
from tez_market.feeds.crunchy import CrunchyAPI
from tez_market.feeds.indexer import DexIndexer
from tez_market.feeds.tzkt import TzktQuotes
from tez_market.market.reference import resolve_reference_price

logger = logging.getLogger("tez_market.feeds")


class MarketFeeds:
    """
    Bundle of the upstream feed clients.

    Usage:
        with MarketFeeds.from_config(FeedConfig.from_env()) as feeds:
            snapshot = feeds.snapshot()
    """

    def __init__(
        self,
        tzkt: TzktQuotes,
        crunchy: CrunchyAPI,
        indexer: DexIndexer,
        history_window: str = "1d",
    ) -> None:
        self.tzkt = tzkt
        self.crunchy = crunchy
        self.indexer = indexer
        self.history_window = history_window

    @classmethod
    def from_config(
        cls,
        config: FeedConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> MarketFeeds:
        return cls(
            tzkt=TzktQuotes(config.tzkt_url, timeout=config.timeout, transport=transport),
            crunchy=CrunchyAPI(config.crunchy_url, timeout=config.timeout, transport=transport),
            indexer=DexIndexer(config.indexer_url, timeout=config.timeout, transport=transport),
            history_window=config.history_window,
        )

    def snapshot(self) -> MarketSnapshot:
        """
        Fetch all four feeds concurrently.

        Raises:
            FeedFormatError: if any feed returns a malformed payload
        """
        with ThreadPoolExecutor(max_workers=4, thread_name_prefix="tez-feed") as pool:
            reference = pool.submit(resolve_reference_price, self.tzkt)
            pools = pool.submit(self.crunchy.get_pools)
            spot = pool.submit(self.crunchy.get_spot_quotes)
            history = pool.submit(self.indexer.get_quotes, self.history_window)

            snapshot = MarketSnapshot(
                reference_usd=reference.result(),
                pools=pools.result(),
                spot=spot.result(),
                history=history.result(),
            )

        logger.info(
            f"Snapshot: reference_usd={snapshot.reference_usd}, {len(snapshot.pools)} pools, "
            f"{len(snapshot.spot)} spot tokens, {len(snapshot.history)} historical tokens"
        )
        return snapshot

    def close(self) -> None:
        self.tzkt.close()
        self.crunchy.close()
        self.indexer.close()

    def __enter__(self) -> MarketFeeds:
        return self

    def __exit__(self, *_: Any) -> None:
        self.close()
