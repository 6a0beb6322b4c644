"""core module init"""
from tez_market.core.blocklist import BlocklistError, load_blocklist
from tez_market.core.config import (
    ALIEN_FEE_DENOMINATOR,
    LIQUIDITY_FLOOR,
    TEZ_AND_WRAPPED_TEZ_ADDRESSES,
    FeedConfig,
    ValuationConfig,
)
from tez_market.core.models import (
    Dex,
    EnrichedToken,
    Exchange,
    HistoricalPrice,
    LegToken,
    MarketSnapshot,
    PeerQuote,
    PoolLeg,
    PricedExchange,
    RateBucket,
    ReferenceQuote,
    TokenHistory,
    TokenIdentity,
    TokenQuote,
    TokenRef,
    ValuedToken,
)

__all__ = [
    "ALIEN_FEE_DENOMINATOR",
    "BlocklistError",
    "Dex",
    "EnrichedToken",
    "Exchange",
    "FeedConfig",
    "HistoricalPrice",
    "LIQUIDITY_FLOOR",
    "LegToken",
    "MarketSnapshot",
    "PeerQuote",
    "PoolLeg",
    "PricedExchange",
    "RateBucket",
    "ReferenceQuote",
    "TEZ_AND_WRAPPED_TEZ_ADDRESSES",
    "TokenHistory",
    "TokenIdentity",
    "TokenQuote",
    "TokenRef",
    "ValuationConfig",
    "ValuedToken",
    "load_blocklist",
]
