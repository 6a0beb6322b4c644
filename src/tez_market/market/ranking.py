"""
Ranking by market cap.
"""

from __future__ import annotations

from typing import Iterable

from tez_market.core.config import TOP_N
from tez_market.core.models import ValuedToken


def rank_tokens(tokens: Iterable[ValuedToken], limit: int = TOP_N) -> list[ValuedToken]:
    """
    Top ``limit`` tokens by market cap, largest first.

    Tokens with a zero market cap are dropped. Equal market caps keep their
    input order.
    """
    capped = [token for token in tokens if token.market_cap]
    return sorted(capped, key=lambda token: token.market_cap, reverse=True)[:limit]
