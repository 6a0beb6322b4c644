"""
ValuationEngine: per-token price, per-pool and aggregate TVL, market cap.

Prices are denominated in tez. A token with no tez quote has an undefined
price (None); its USD price is undefined too and its TVL and market cap
are 0.

Reserve formulas by pool type:
- standard:     leg.reserves / 10**leg.decimals
- fee-bearing:  token.reserves / (fee_denominator * 10**leg.decimals)

The fee-bearing branch reads the token record's own ``reserves``, not the
matched leg's.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable

from tez_market.core.config import ValuationConfig
from tez_market.core.models import (
    EnrichedToken,
    Exchange,
    PeerQuote,
    PricedExchange,
    TokenQuote,
    ValuedToken,
)

logger = logging.getLogger("tez_market.valuation")

ZERO = Decimal(0)
ONE = Decimal(1)


def is_positive(value: Decimal | None) -> bool:
    """True for a finite number greater than zero."""
    return value is not None and value.is_finite() and value > 0


def finite_or_none(value: Decimal | None) -> Decimal | None:
    if value is None or not value.is_finite():
        return None
    return value


def find_reference_quote(quotes: Iterable[PeerQuote], config: ValuationConfig) -> PeerQuote | None:
    """First peer quote whose counter token is tez or wrapped tez."""
    for quote in quotes:
        if config.is_reference_asset(quote.token.token_address):
            return quote
    return None


def to_usd(price: Decimal | None, reference_usd: Decimal | None) -> Decimal | None:
    if price is None or reference_usd is None:
        return None
    return price * reference_usd


class ValuationEngine:
    """
    Values spot tokens that have been joined with their pools.

    Usage:
        engine = ValuationEngine(ValuationConfig(blocklist=load_blocklist()))
        valued = engine.value_all(join_pools(spot, pools), reference_usd)
    """

    def __init__(self, config: ValuationConfig | None = None) -> None:
        self.config = config or ValuationConfig()

    def price_of(self, token: TokenQuote) -> Decimal | None:
        """
        Price of ``token`` in tez.

        Precedence: blocklisted -> 0, tez or wrapped tez -> 1, otherwise the
        first tez-denominated peer quote. None when there is no such quote.
        """
        if self.config.is_blocked(token.key):
            return ZERO
        if self.config.is_reference_asset(token.token_address):
            return ONE
        quote = find_reference_quote(token.quotes, self.config)
        if quote is None:
            logger.debug(f"No tez quote for {token.symbol} ({token.key})")
            return None
        return finite_or_none(quote.quote)

    def pool_tvl(self, token: TokenQuote, pool: Exchange, price: Decimal | None) -> Decimal:
        """Value of ``token``'s reserve in ``pool``, in tez. Undefined results are 0."""
        leg = pool.leg_for(token)
        if leg is None or price is None:
            return ZERO

        scale = Decimal(10) ** leg.token.decimals
        if pool.dex_type in self.config.fee_bearing_types:
            if token.reserves is None:
                return ZERO
            reserve = token.reserves / (self.config.fee_denominator * scale)
        else:
            reserve = leg.reserves / scale

        if not reserve.is_finite():
            return ZERO
        tvl = reserve * price
        return tvl if tvl.is_finite() else ZERO

    def market_cap(self, token: TokenQuote, price: Decimal | None, tvl: Decimal) -> Decimal:
        """
        Circulating value of ``token`` in tez.

        0 unless the price and total supply are positive and the aggregate
        TVL reaches the liquidity floor.
        """
        if not is_positive(price) or not is_positive(token.total_supply):
            return ZERO
        if tvl < self.config.liquidity_floor:
            return ZERO
        supply = token.total_supply / Decimal(10) ** token.decimals
        return supply * price

    def value(self, token: EnrichedToken, reference_usd: Decimal | None) -> ValuedToken:
        """Return a new ValuedToken; ``token`` and its pools are left untouched."""
        price = self.price_of(token)
        priced = [
            PricedExchange(dex=pool.dex, tokens=pool.tokens, token_tvl=self.pool_tvl(token, pool, price))
            for pool in token.exchanges
        ]
        tvl = sum((pool.token_tvl for pool in priced), ZERO)

        fields = {name: value for name, value in token if name != "exchanges"}
        return ValuedToken(
            **fields,
            exchanges=priced,
            current_price=price,
            current_price_usd=to_usd(price, reference_usd),
            token_tvl=tvl,
            market_cap=self.market_cap(token, price, tvl),
        )

    def value_all(
        self,
        tokens: Iterable[EnrichedToken],
        reference_usd: Decimal | None,
    ) -> list[ValuedToken]:
        valued = [self.value(token, reference_usd) for token in tokens]
        unpriced = sum(1 for t in valued if t.current_price is None)
        if unpriced:
            logger.info(f"{unpriced} of {len(valued)} tokens have no tez quote")
        return valued
