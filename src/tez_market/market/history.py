"""
Historical prices: what each token was worth one lookback window ago.

Uses the same tez quote rules as the live valuation, but reads the most
recent bucket close of the historical feed instead of a live quote, and
checks tez/wrapped tez before the blocklist. A blocklisted token is worth 0
tez and has no USD price. No pools, TVL or market cap.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from tez_market.core.config import ValuationConfig
from tez_market.core.models import HistoricalPrice, TokenHistory
from tez_market.market.valuation import ONE, ZERO, find_reference_quote, finite_or_none, to_usd


class HistoricalComparator:

    def __init__(self, config: ValuationConfig | None = None) -> None:
        self.config = config or ValuationConfig()

    def price_of(self, token: TokenHistory) -> Decimal | None:
        if self.config.is_reference_asset(token.token_address):
            return ONE
        if self.config.is_blocked(token.key):
            return ZERO
        quote = find_reference_quote(token.quotes, self.config)
        if quote is None:
            return None
        return finite_or_none(quote.latest_close)

    def price(self, token: TokenHistory, reference_usd: Decimal | None) -> HistoricalPrice:
        price = self.price_of(token)
        if self.config.is_reference_asset(token.token_address):
            usd = reference_usd
        elif self.config.is_blocked(token.key):
            usd = None
        else:
            usd = to_usd(price, reference_usd)
        return HistoricalPrice(
            token_address=token.token_address,
            token_id=token.token_id,
            symbol=token.symbol,
            current_price=price,
            current_price_usd=usd,
        )

    def price_all(
        self,
        tokens: Iterable[TokenHistory],
        reference_usd: Decimal | None,
    ) -> list[HistoricalPrice]:
        """One HistoricalPrice per input token, in input order."""
        return [self.price(token, reference_usd) for token in tokens]
