from fastapi import APIRouter, HTTPException, Query, Request

from tez_market.api.models import OverviewResponse, RankedTokenResponse, TokenValuationResponse
from tez_market.core.config import ValuationConfig
from tez_market.core.models import MarketSnapshot
from tez_market.market.pipeline import build_overview, value_snapshot
from tez_market.market.report import MarketReport

router = APIRouter(tags=["Market"])


def _take_snapshot(request: Request) -> tuple[MarketSnapshot, ValuationConfig]:
    feeds = getattr(request.app.state, "feeds", None)
    config = getattr(request.app.state, "valuation_config", None)
    if feeds is None or config is None:
        raise HTTPException(status_code=500, detail="market feeds not initialized")
    return feeds.snapshot(), config


def get_overview(request: Request, limit: int | None = None) -> MarketReport:
    """Fetch a fresh snapshot and run the valuation pipeline."""
    snapshot, config = _take_snapshot(request)
    report = build_overview(snapshot, config)
    if limit is not None:
        report = report.model_copy(update={"tokens": report.tokens[:limit]})
    return report


@router.get("/overview", response_model=OverviewResponse)
def overview(request: Request, limit: int | None = Query(None, ge=1)):
    """
    Market overview: top tokens by market cap with run metadata.
    """
    report = get_overview(request, limit)
    return OverviewResponse(
        generated_at=report.generated_at.isoformat(),
        reference_usd=report.reference_usd,
        tokens_considered=report.tokens_considered,
        tokens_with_market_cap=report.tokens_with_market_cap,
        tokens=[RankedTokenResponse.model_validate(t.model_dump()) for t in report.tokens],
    )


@router.get("/tokens/top", response_model=list[RankedTokenResponse])
def top_tokens(request: Request, limit: int | None = Query(None, ge=1)):
    """
    Top tokens by market cap, largest first.
    """
    report = get_overview(request, limit)
    return [RankedTokenResponse.model_validate(t.model_dump()) for t in report.tokens]


@router.get("/tokens", response_model=list[TokenValuationResponse])
def all_tokens(request: Request):
    """
    Every spot token in feed order, including those without a market cap.
    """
    snapshot, config = _take_snapshot(request)
    return [
        TokenValuationResponse(
            symbol=token.symbol,
            token_key=token.key,
            current_price=token.current_price,
            current_price_usd=token.current_price_usd,
            token_tvl=token.token_tvl,
            price_change=token.price_change,
            has_history=token.has_history,
            market_cap=token.market_cap,
        )
        for token in value_snapshot(snapshot, config)
    ]
