"""
build_overview: the valuation pipeline from a feed snapshot to a ranked report.

    spot + pools -> join -> value (price, TVL, market cap)
    history      -> historical prices
    both         -> price change -> rank -> report
"""

from __future__ import annotations

import logging

from tez_market.core.config import ValuationConfig
from tez_market.core.models import MarketSnapshot, ValuedToken
from tez_market.market.change import apply_price_change
from tez_market.market.history import HistoricalComparator
from tez_market.market.joiner import join_pools
from tez_market.market.ranking import rank_tokens
from tez_market.market.report import MarketReport
from tez_market.market.valuation import ValuationEngine

logger = logging.getLogger("tez_market.pipeline")


def value_snapshot(snapshot: MarketSnapshot, config: ValuationConfig | None = None) -> list[ValuedToken]:
    """Every spot token of the snapshot, valued and with its price change."""
    config = config or ValuationConfig()
    if snapshot.reference_usd is None:
        logger.warning("No reference USD price; USD values will be undefined")

    joined = join_pools(snapshot.spot, snapshot.pools)
    valued = ValuationEngine(config).value_all(joined, snapshot.reference_usd)
    previous = HistoricalComparator(config).price_all(snapshot.history, snapshot.reference_usd)
    return apply_price_change(valued, previous)


def build_overview(snapshot: MarketSnapshot, config: ValuationConfig | None = None) -> MarketReport:
    """
    Run the whole pipeline on ``snapshot``.

    Args:
        snapshot: feed data for one run
        config:   pricing constants (defaults to ValuationConfig())

    Returns:
        MarketReport: top ``config.top_n`` tokens by market cap
    """
    config = config or ValuationConfig()
    tokens = value_snapshot(snapshot, config)
    ranked = rank_tokens(tokens, limit=config.top_n)
    with_market_cap = sum(1 for token in tokens if token.market_cap)

    logger.info(
        f"Valued {len(tokens)} tokens, {with_market_cap} with a market cap, "
        f"reporting top {len(ranked)}"
    )
    return MarketReport.from_ranked(
        ranked,
        reference_usd=snapshot.reference_usd,
        tokens_considered=len(tokens),
        tokens_with_market_cap=with_market_cap,
    )
