"""
MarketReport: the ranked market overview and its text rendering.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, Field

from tez_market.core.models import ValuedToken


class RankedToken(BaseModel):
    """One row of the market overview."""
    rank: int
    symbol: str | None = None
    token_key: str
    current_price: Decimal | None = None
    current_price_usd: Decimal | None = None
    token_tvl: Decimal
    price_change: float | None = None
    has_history: bool = False
    market_cap: Decimal

    @classmethod
    def from_valued(cls, rank: int, token: ValuedToken) -> RankedToken:
        return cls(
            rank=rank,
            symbol=token.symbol,
            token_key=token.key,
            current_price=token.current_price,
            current_price_usd=token.current_price_usd,
            token_tvl=token.token_tvl,
            price_change=token.price_change,
            has_history=token.has_history,
            market_cap=token.market_cap,
        )

    def to_line(self) -> str:
        return (
            f"{self.rank}. Symbol: {self.symbol}, "
            f"Current Price: {_fmt(self.current_price)}, "
            f"Current Price USD: {_fmt(self.current_price_usd)}, "
            f"TokenTVL: {_fmt(self.token_tvl)}, "
            f"priceChange: {_fmt(self.price_change)}, "
            f"Marketcap: {_fmt(self.market_cap)}"
        )


class MarketReport(BaseModel):
    """Top tokens by market cap for one snapshot."""
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    reference_usd: Decimal | None = None
    tokens_considered: int = 0
    tokens_with_market_cap: int = 0
    tokens: list[RankedToken] = Field(default_factory=list)

    @classmethod
    def from_ranked(
        cls,
        ranked: list[ValuedToken],
        reference_usd: Decimal | None,
        tokens_considered: int,
        tokens_with_market_cap: int,
    ) -> MarketReport:
        return cls(
            reference_usd=reference_usd,
            tokens_considered=tokens_considered,
            tokens_with_market_cap=tokens_with_market_cap,
            tokens=[RankedToken.from_valued(rank, token) for rank, token in enumerate(ranked, start=1)],
        )

    def lines(self) -> list[str]:
        return [token.to_line() for token in self.tokens]

    def render(self) -> str:
        """Human-readable report, one line per ranked token."""
        return "\n".join(["Tokens With Marketcap:", *self.lines()])


def _fmt(value: Decimal | float | None) -> str:
    if value is None:
        return "n/a"
    if isinstance(value, Decimal):
        return f"{value.normalize():f}" if value else "0"
    return f"{value:.2f}"
