"""
Upstream feed clients for the tez market overview.
"""
from .base import FeedClient, FeedError, FeedFormatError, FeedUnavailable
from .crunchy import CrunchyAPI
from .indexer import DexIndexer
from .snapshot import MarketFeeds
from .tzkt import TzktQuotes

__all__ = [
    "CrunchyAPI",
    "DexIndexer",
    "FeedClient",
    "FeedError",
    "FeedFormatError",
    "FeedUnavailable",
    "MarketFeeds",
    "TzktQuotes",
]
