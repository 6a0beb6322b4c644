"""
Pool joining: attach to every spot token the pools it trades in.
"""

from __future__ import annotations

from typing import Iterable

from tez_market.core.models import EnrichedToken, Exchange, TokenQuote


def pools_for(token: TokenQuote, pools: Iterable[Exchange]) -> list[Exchange]:
    """Return every pool with a leg whose (tokenAddress, tokenId) equals the token's."""
    return [pool for pool in pools if pool.leg_for(token) is not None]


def join_pools(tokens: Iterable[TokenQuote], pools: Iterable[Exchange]) -> list[EnrichedToken]:
    """
    Join spot tokens with the pool listing.

    Token order and pool order are preserved. A token with no pool gets an
    empty ``exchanges`` list.
    """
    pools = list(pools)
    joined = []
    for token in tokens:
        fields = {name: value for name, value in token if name != "exchanges"}
        joined.append(EnrichedToken(**fields, exchanges=pools_for(token, pools)))
    return joined
