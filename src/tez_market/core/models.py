"""
Core data models for Tezos DEX market data.

Feed records accept the upstream camelCase keys (``tokenAddress``,
``totalSupply``...) and can also be built by field name. Every reserve,
supply, price and TVL amount is a ``Decimal``; an undefined price is ``None``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FeedRecord(BaseModel):
    """Base for immutable records parsed from upstream feeds."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class TokenIdentity(FeedRecord):
    """A (contract address, token id) pair. Native tez has no token id."""
    token_address: str = Field(alias="tokenAddress")
    token_id: str | None = Field(default=None, alias="tokenId")

    @field_validator("token_id", mode="before")
    @classmethod
    def _coerce_token_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def key(self) -> str:
        """Composite identity string, e.g. ``KT1...xyz_0``."""
        if self.token_id is None:
            return self.token_address
        return f"{self.token_address}_{self.token_id}"

    def same_token(self, other: TokenIdentity) -> bool:
        return (
            self.token_address == other.token_address
            and self.token_id == other.token_id
        )


class TokenRef(TokenIdentity):
    """Counter token of a peer quote. Only its address and id are read."""
    decimals: int = 0


class LegToken(TokenIdentity):
    """Token of a pool leg. Reserves are raw units, so decimals must be known."""
    decimals: int


class RateBucket(FeedRecord):
    """One time bucket of a historical rate series."""
    close: Decimal | None = None
    bucket: str | None = None


class PeerQuote(FeedRecord):
    """Exchange rate of a token against a counter token."""
    token: TokenRef
    quote: Decimal | None = None
    buckets: list[RateBucket] = Field(default_factory=list)

    @property
    def latest_close(self) -> Decimal | None:
        """Close rate of the most recent bucket (buckets are newest first)."""
        return self.buckets[0].close if self.buckets else None


class TokenQuote(TokenIdentity):
    """A token from the spot quote feed."""
    symbol: str | None = None
    name: str | None = None
    decimals: int
    total_supply: Decimal | None = Field(default=None, alias="totalSupply")
    reserves: Decimal | None = None  # token-level raw reserve
    quotes: list[PeerQuote] = Field(default_factory=list)


class TokenHistory(TokenIdentity):
    """A token from the historical quote feed (bucketed close rates, no pools)."""
    symbol: str | None = None
    quotes: list[PeerQuote] = Field(default_factory=list)


class PoolLeg(FeedRecord):
    """One side of a liquidity pool."""
    token: LegToken
    reserves: Decimal


class Dex(FeedRecord):
    type: str
    name: str | None = None
    address: str | None = None


class Exchange(FeedRecord):
    """A liquidity pool from the pool listing feed."""
    dex: Dex
    tokens: list[PoolLeg] = Field(min_length=1)

    @property
    def dex_type(self) -> str:
        return self.dex.type

    def leg_for(self, token: TokenIdentity) -> PoolLeg | None:
        """Return the leg holding ``token``, or None."""
        for leg in self.tokens:
            if leg.token.same_token(token):
                return leg
        return None

    def __repr__(self) -> str:
        pair = "/".join(leg.token.key for leg in self.tokens)
        return f"Exchange({self.dex.type}, {pair})"


class PricedExchange(Exchange):
    """A pool as attached to one token, carrying that token's TVL in it."""
    token_tvl: Decimal = Decimal(0)


class EnrichedToken(TokenQuote):
    """A spot token joined with the pools it trades in."""
    exchanges: list[Exchange] = Field(default_factory=list)


class ValuedToken(TokenQuote):
    """A spot token after valuation (price, TVL, market cap, 24h change)."""
    exchanges: list[PricedExchange] = Field(default_factory=list)
    current_price: Decimal | None = None
    current_price_usd: Decimal | None = None
    token_tvl: Decimal = Decimal(0)
    market_cap: Decimal = Decimal(0)
    price_change: float | None = 0.0
    has_history: bool = False


class HistoricalPrice(TokenIdentity):
    """A token's price one period ago."""
    symbol: str | None = None
    current_price: Decimal | None = None
    current_price_usd: Decimal | None = None


class ReferenceQuote(FeedRecord):
    """Last quote of the native asset. Only ``usd`` is used."""
    usd: Decimal | None = None


class MarketSnapshot(BaseModel):
    """Everything one valuation run consumes, fetched at one point in time."""
    reference_usd: Decimal | None = None
    pools: list[Exchange] = Field(default_factory=list)
    spot: list[TokenQuote] = Field(default_factory=list)
    history: list[TokenHistory] = Field(default_factory=list)
    taken_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
