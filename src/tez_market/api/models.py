from decimal import Decimal

from pydantic import BaseModel, Field


class TokenValuationResponse(BaseModel):
    """Valuation of one spot token."""

    symbol: str | None = Field(None, description="Token symbol")
    token_key: str = Field(..., description="Composite identity <tokenAddress>_<tokenId>")
    current_price: Decimal | None = Field(
        None, description="Price in tez. Null when the token has no tez quote."
    )
    current_price_usd: Decimal | None = Field(
        None, description="Price in USD. Null when the tez/USD rate or the price is unavailable."
    )
    token_tvl: Decimal = Field(..., description="Value locked across the token's pools, in tez")
    price_change: float | None = Field(
        None, description="24h price change in percent. Null when undefined."
    )
    has_history: bool = Field(
        ..., description="False when the token was missing from the historical feed"
    )
    market_cap: Decimal = Field(..., description="Market cap in tez, 0 below the liquidity floor")


class RankedTokenResponse(TokenValuationResponse):
    """One token of the market overview."""

    rank: int = Field(..., description="Position by market cap, starting at 1")


class OverviewResponse(BaseModel):
    """Response model for the full market overview."""

    generated_at: str = Field(..., description="ISO-8601 timestamp of the run")
    reference_usd: Decimal | None = Field(None, description="tez/USD rate used for the run")
    tokens_considered: int = Field(..., description="Spot tokens valued in this run")
    tokens_with_market_cap: int = Field(..., description="Tokens passing the market cap gate")
    tokens: list[RankedTokenResponse]
