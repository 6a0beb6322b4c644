"""
tez-market: ranked market overview for tokens traded on Tezos DEXes.

Usage:
    from tez_market import MarketFeeds, FeedConfig, build_overview

    with MarketFeeds.from_config(FeedConfig.from_env()) as feeds:
        report = build_overview(feeds.snapshot())
    print(report.render())
"""

from tez_market.core.config import FeedConfig, ValuationConfig
from tez_market.core.models import MarketSnapshot, TokenIdentity, ValuedToken
from tez_market.feeds.snapshot import MarketFeeds
from tez_market.market.pipeline import build_overview
from tez_market.market.report import MarketReport

__version__ = "0.1.0"
__all__ = [
    "FeedConfig",
    "MarketFeeds",
    "MarketReport",
    "MarketSnapshot",
    "TokenIdentity",
    "ValuationConfig",
    "ValuedToken",
    "build_overview",
]
