"""
Market valuation pipeline.
"""
from .change import apply_price_change, percent_change
from .history import HistoricalComparator
from .joiner import join_pools
from .pipeline import build_overview, value_snapshot
from .ranking import rank_tokens
from .reference import resolve_reference_price
from .report import MarketReport, RankedToken
from .valuation import ValuationEngine

__all__ = [
    "HistoricalComparator",
    "MarketReport",
    "RankedToken",
    "ValuationEngine",
    "apply_price_change",
    "build_overview",
    "join_pools",
    "percent_change",
    "rank_tokens",
    "resolve_reference_price",
    "value_snapshot",
]
